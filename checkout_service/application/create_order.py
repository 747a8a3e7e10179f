import logging
from decimal import Decimal
from pydantic import BaseModel
import uuid

from checkout_service.domain.models import Order, OrderLineItem, OrderStatus, to_money
from checkout_service.application.interfaces import TimeProvider


logger = logging.getLogger(__name__)


class OrderLineItemDTO(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    price_per_unit: Decimal


class CreateOrderDTO(BaseModel):
    created_by: str
    items: list[OrderLineItemDTO]


class CreateOrderUseCase:
    def __init__(self, unit_of_work, time_provider: TimeProvider):
        self._uow = unit_of_work
        self._clock = time_provider

    async def __call__(self, order_data: CreateOrderDTO) -> Order:
        logger.info(f"Создание заказа для пользователя {order_data.created_by}, позиций: {len(order_data.items)}")

        # Количество и цену проверяет вызывающая сторона
        items = [
            OrderLineItem.priced(
                id=str(uuid.uuid4()),
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity,
                price_per_unit=item.price_per_unit,
            )
            for item in order_data.items
        ]
        total_price = to_money(sum((item.total_price for item in items), Decimal("0")))

        now = self._clock.now()
        order = Order(
            id=str(uuid.uuid4()),
            created_by=order_data.created_by,
            items=items,
            total_price=total_price,
            status=OrderStatus.PENDING,
            order_date=now,
            last_updated_date=now,
        )

        async with self._uow() as uow:
            await uow.orders.create(order)
            await uow.commit()

        logger.info(f"Заказ создан: {order.id}, сумма {order.total_price}")
        return order
