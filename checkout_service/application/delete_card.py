import logging

from checkout_service.application.get_card import get_active_card
from checkout_service.application.interfaces import TimeProvider

logger = logging.getLogger(__name__)


class DeleteCardUseCase:
    def __init__(self, unit_of_work, time_provider: TimeProvider):
        self._uow = unit_of_work
        self._clock = time_provider

    async def __call__(self, card_id: str) -> None:
        async with self._uow() as uow:
            card = await get_active_card(uow, card_id)
            await uow.cards.update(card.model_copy(update={"deleted_at": self._clock.now()}))
            await uow.commit()

        logger.info(f"Карта {card_id} помечена удаленной")
