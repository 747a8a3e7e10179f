from checkout_service.domain.models import Order
from checkout_service.domain.exceptions import OrderNotFoundError


async def get_active_order(uow, order_id: str) -> Order:
    """Мягко удаленный заказ считается отсутствующим"""
    order = await uow.orders.get_by_id(order_id)
    if not order or not order.is_active():
        raise OrderNotFoundError(f"Order not found with id: {order_id}")
    return order


class GetOrderUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, order_id: str) -> Order:
        async with self._uow() as uow:
            return await get_active_order(uow, order_id)


class ListActiveOrdersUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self) -> list[Order]:
        async with self._uow() as uow:
            return await uow.orders.list_active()
