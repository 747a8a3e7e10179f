import logging
from datetime import date
from typing import Optional
from pydantic import BaseModel

from checkout_service.domain.models import CardView
from checkout_service.domain.exceptions import DuplicateCardNumberError, ExpirationDateNotInFutureError
from checkout_service.application.get_card import get_active_card
from checkout_service.application.interfaces import TimeProvider

logger = logging.getLogger(__name__)


class UpdateCardDTO(BaseModel):
    card_id: str
    cardholder_name: str
    expiration_date: date
    # None: номер не меняется
    card_number: Optional[str] = None


class UpdateCardUseCase:
    """Обновление имени владельца и срока действия карты.

    Если передан новый номер, он тоже заменяется; проверка на дубликат
    выполняется только когда номер отличается от сохраненного.
    """

    def __init__(self, unit_of_work, time_provider: TimeProvider):
        self._uow = unit_of_work
        self._clock = time_provider

    async def __call__(self, dto: UpdateCardDTO) -> CardView:
        if dto.expiration_date <= self._clock.today():
            raise ExpirationDateNotInFutureError(dto.expiration_date)

        async with self._uow() as uow:
            card = await get_active_card(uow, dto.card_id)

            changes = {
                "cardholder_name": dto.cardholder_name,
                "expiration_date": dto.expiration_date,
            }
            if dto.card_number is not None and dto.card_number != card.card_number:
                if await uow.cards.exists_active_number(card.user_id, dto.card_number):
                    logger.warning(f"Повторный номер карты при обновлении {dto.card_id}")
                    raise DuplicateCardNumberError()
                changes["card_number"] = dto.card_number

            updated = card.model_copy(update=changes)
            await uow.cards.update(updated)
            await uow.commit()

        logger.info(f"Карта {dto.card_id} обновлена")
        return updated.masked()
