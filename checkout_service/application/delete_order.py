import logging

from checkout_service.domain.models import Order
from checkout_service.application.get_order import get_active_order
from checkout_service.application.interfaces import TimeProvider

logger = logging.getLogger(__name__)


class SoftDeleteOrderUseCase:
    def __init__(self, unit_of_work, time_provider: TimeProvider):
        self._uow = unit_of_work
        self._clock = time_provider

    async def __call__(self, order_id: str) -> Order:
        async with self._uow() as uow:
            order = await get_active_order(uow, order_id)
            deleted_at = self._clock.now()
            await uow.orders.mark_deleted(order_id, deleted_at)
            await uow.commit()

        logger.info(f"Заказ {order_id} помечен удаленным")
        return order.model_copy(update={"deleted_at": deleted_at, "last_updated_date": deleted_at})
