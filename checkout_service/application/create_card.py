import logging
from datetime import date
from pydantic import BaseModel
import uuid

from checkout_service.domain.models import Card, CardView
from checkout_service.domain.exceptions import (
    MaxCardsExceededError, DuplicateCardNumberError, ExpirationDateNotInFutureError
)
from checkout_service.application.interfaces import TimeProvider

logger = logging.getLogger(__name__)

DEFAULT_MAX_CARDS = 3


class CreateCardDTO(BaseModel):
    user_id: str
    cardholder_name: str
    card_number: str
    expiration_date: date


class CreateCardUseCase:
    """Создание карты с проверкой лимита и уникальности номера.

    Проверки выполняются чтением перед записью, без блокировок: два
    параллельных запроса одного пользователя могут оба пройти лимит.
    """

    def __init__(self, unit_of_work, time_provider: TimeProvider, max_cards: int = DEFAULT_MAX_CARDS):
        self._uow = unit_of_work
        self._clock = time_provider
        self._max_cards = max_cards

    async def __call__(self, card_data: CreateCardDTO) -> CardView:
        if card_data.expiration_date <= self._clock.today():
            raise ExpirationDateNotInFutureError(card_data.expiration_date)

        async with self._uow() as uow:
            # 1. Лимит активных карт
            active = await uow.cards.count_active_by_user(card_data.user_id)
            if active >= self._max_cards:
                logger.warning(f"Пользователь {card_data.user_id} достиг лимита карт ({self._max_cards})")
                raise MaxCardsExceededError(self._max_cards)

            # 2. Уникальность номера среди активных карт пользователя
            if await uow.cards.exists_active_number(card_data.user_id, card_data.card_number):
                logger.warning(f"Повторный номер карты для пользователя {card_data.user_id}")
                raise DuplicateCardNumberError()

            # 3. Создание
            card = Card(
                id=str(uuid.uuid4()),
                user_id=card_data.user_id,
                cardholder_name=card_data.cardholder_name,
                card_number=card_data.card_number,
                expiration_date=card_data.expiration_date,
                created_at=self._clock.now(),
                is_default=False,
            )
            await uow.cards.create(card)
            await uow.commit()

        logger.info(f"Карта {card.id} создана для пользователя {card.user_id}")
        return card.masked()
