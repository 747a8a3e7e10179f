import logging
from pydantic import BaseModel
import uuid

from checkout_service.domain.models import Payment, PaymentStatus
from checkout_service.domain.exceptions import CardExpiredError
from checkout_service.application.get_order import get_active_order
from checkout_service.application.get_card import get_active_card
from checkout_service.application.interfaces import TimeProvider

logger = logging.getLogger(__name__)


class CreatePaymentDTO(BaseModel):
    created_by: str
    order_id: str
    card_id: str


class CreatePaymentUseCase:
    def __init__(self, unit_of_work, time_provider: TimeProvider):
        self._uow = unit_of_work
        self._clock = time_provider

    async def __call__(self, dto: CreatePaymentDTO) -> Payment:
        logger.info(f"Оплата заказа {dto.order_id} картой {dto.card_id}, пользователь {dto.created_by}")

        async with self._uow() as uow:
            # Удаленные заказ и карта не могут участвовать в оплате
            order = await get_active_order(uow, dto.order_id)
            card = await get_active_card(uow, dto.card_id)

            if card.is_expired(self._clock.today()):
                logger.warning(f"Карта {card.id} просрочена ({card.expiration_date})")
                raise CardExpiredError(card.id)

            payment = Payment(
                id=str(uuid.uuid4()),
                created_by=dto.created_by,
                order_id=order.id,
                card_id=card.id,
                total_price=order.total_price,
                status=PaymentStatus.APPROVED,
                created_at=self._clock.now(),
            )
            await uow.payments.create(payment)
            await uow.commit()

        logger.info(f"Платеж {payment.id} создан ({payment.status.value}) на сумму {payment.total_price}")
        return payment
