import logging

from checkout_service.domain.models import CardView
from checkout_service.application.get_card import get_active_card

logger = logging.getLogger(__name__)


class SetDefaultCardUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, card_id: str) -> CardView:
        async with self._uow() as uow:
            card = await get_active_card(uow, card_id)

            # Снимаем признак с остальных карт пользователя
            for other in await uow.cards.list_active_by_user(card.user_id):
                if other.id != card.id and other.is_default:
                    await uow.cards.update(other.model_copy(update={"is_default": False}))
                    logger.info(f"Карта {other.id} больше не основная")

            card = card.model_copy(update={"is_default": True})
            await uow.cards.update(card)
            await uow.commit()

        logger.info(f"Карта {card_id} назначена основной для пользователя {card.user_id}")
        return card.masked()
