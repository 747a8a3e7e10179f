from checkout_service.domain.models import Card, CardView
from checkout_service.domain.exceptions import CardNotFoundError


async def get_active_card(uow, card_id: str) -> Card:
    """Мягко удаленная карта считается отсутствующей"""
    card = await uow.cards.get_by_id(card_id)
    if not card or not card.is_active():
        raise CardNotFoundError(f"Card not found with ID: {card_id}")
    return card


class GetCardUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, card_id: str) -> CardView:
        async with self._uow() as uow:
            card = await get_active_card(uow, card_id)
            return card.masked()


class ListUserCardsUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, user_id: str) -> list[CardView]:
        async with self._uow() as uow:
            cards = await uow.cards.list_active_by_user(user_id)
            return [card.masked() for card in cards]
