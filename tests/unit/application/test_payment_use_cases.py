"""Tests for CreatePaymentUseCase: lookups, expiry boundary, price snapshot."""

from datetime import timedelta
from decimal import Decimal
import uuid

import pytest

from checkout_service.application.create_order import CreateOrderDTO, CreateOrderUseCase, OrderLineItemDTO
from checkout_service.application.create_payment import CreatePaymentDTO, CreatePaymentUseCase
from checkout_service.application.delete_card import DeleteCardUseCase
from checkout_service.application.delete_order import SoftDeleteOrderUseCase
from checkout_service.domain.exceptions import CardExpiredError, CardNotFoundError, OrderNotFoundError
from checkout_service.domain.models import PaymentStatus


@pytest.fixture
def create_payment(uow, time_provider) -> CreatePaymentUseCase:
    return CreatePaymentUseCase(uow, time_provider)


@pytest.fixture
async def order(uow, time_provider, user_id):
    create_order = CreateOrderUseCase(uow, time_provider)
    return await create_order(
        CreateOrderDTO(
            created_by=user_id,
            items=[
                OrderLineItemDTO(
                    product_id=str(uuid.uuid4()), product_name="Headphones", quantity=2,
                    price_per_unit=Decimal("10.00"),
                ),
                OrderLineItemDTO(
                    product_id=str(uuid.uuid4()), product_name="Case", quantity=1,
                    price_per_unit=Decimal("50.00"),
                ),
            ],
        )
    )


class TestCreatePayment:
    async def test_approved_payment_copies_order_total(self, create_payment, store_card, order, user_id, now, uow) -> None:
        card = await store_card(user_id)

        payment = await create_payment(CreatePaymentDTO(created_by=user_id, order_id=order.id, card_id=card.id))

        assert payment.status == PaymentStatus.APPROVED
        assert payment.total_price == Decimal("70.00")
        assert payment.order_id == order.id
        assert payment.card_id == card.id
        assert payment.created_by == user_id
        assert payment.created_at == now

        async with uow() as tx:
            stored = await tx.payments.get_by_id(payment.id)
        assert stored.total_price == Decimal("70.00")
        assert stored.status == PaymentStatus.APPROVED

    async def test_card_expiring_today_is_accepted(self, create_payment, store_card, order, user_id, today) -> None:
        card = await store_card(user_id, expiration_date=today)

        payment = await create_payment(CreatePaymentDTO(created_by=user_id, order_id=order.id, card_id=card.id))

        assert payment.status == PaymentStatus.APPROVED

    async def test_card_expired_yesterday_is_rejected(
        self, create_payment, store_card, order, user_id, today, uow
    ) -> None:
        card = await store_card(user_id, expiration_date=today - timedelta(days=1))

        with pytest.raises(CardExpiredError):
            await create_payment(CreatePaymentDTO(created_by=user_id, order_id=order.id, card_id=card.id))

    async def test_unknown_order(self, create_payment, store_card, user_id) -> None:
        card = await store_card(user_id)

        with pytest.raises(OrderNotFoundError):
            await create_payment(CreatePaymentDTO(created_by=user_id, order_id=str(uuid.uuid4()), card_id=card.id))

    async def test_unknown_card(self, create_payment, order, user_id) -> None:
        with pytest.raises(CardNotFoundError):
            await create_payment(CreatePaymentDTO(created_by=user_id, order_id=order.id, card_id=str(uuid.uuid4())))

    async def test_order_is_checked_before_card(self, create_payment, user_id) -> None:
        with pytest.raises(OrderNotFoundError):
            await create_payment(
                CreatePaymentDTO(created_by=user_id, order_id=str(uuid.uuid4()), card_id=str(uuid.uuid4()))
            )


class TestSoftDeletedTargets:
    """Soft-deleted orders and cards are never valid payment targets."""

    async def test_deleted_order(self, create_payment, store_card, order, user_id, uow, time_provider) -> None:
        card = await store_card(user_id)
        await SoftDeleteOrderUseCase(uow, time_provider)(order.id)

        with pytest.raises(OrderNotFoundError):
            await create_payment(CreatePaymentDTO(created_by=user_id, order_id=order.id, card_id=card.id))

    async def test_deleted_card(self, create_payment, store_card, order, user_id, uow, time_provider) -> None:
        card = await store_card(user_id)
        await DeleteCardUseCase(uow, time_provider)(card.id)

        with pytest.raises(CardNotFoundError):
            await create_payment(CreatePaymentDTO(created_by=user_id, order_id=order.id, card_id=card.id))
