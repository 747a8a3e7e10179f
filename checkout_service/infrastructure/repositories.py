from collections import defaultdict
from typing import Optional, List
from datetime import datetime
from sqlalchemy import select, insert, update, func
from sqlalchemy.ext.asyncio import AsyncSession

from checkout_service.domain.models import (
    Order, OrderLineItem, OrderStatus, Card, Payment, PaymentStatus
)
from checkout_service.infrastructure.db_schema import (
    orders_tbl, order_line_items_tbl, cards_tbl, payments_tbl
)
from checkout_service.application.interfaces import OrderRepository, CardRepository, PaymentRepository


def _active(table):
    """Фильтр активных (не удаленных) записей"""
    return table.c.deleted_at.is_(None)


class SQLAlchemyOrderRepository(OrderRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        result = await self._session.execute(
            select(orders_tbl).where(orders_tbl.c.id == order_id)
        )
        row = result.fetchone()
        if not row:
            return None
        items = await self._load_items([row.id])
        return self._to_domain(row, items[row.id])

    async def list_active(self) -> List[Order]:
        result = await self._session.execute(
            select(orders_tbl).where(_active(orders_tbl))
        )
        rows = result.fetchall()
        items = await self._load_items([row.id for row in rows])
        return [self._to_domain(row, items[row.id]) for row in rows]

    async def create(self, order: Order) -> None:
        await self._session.execute(
            insert(orders_tbl).values(
                id=order.id,
                created_by=order.created_by,
                total_price=order.total_price,
                status=order.status,
                deleted_at=order.deleted_at,
                order_date=order.order_date,
                last_updated_date=order.last_updated_date
            )
        )
        if order.items:
            await self._session.execute(
                insert(order_line_items_tbl),
                [
                    {
                        "id": item.id,
                        "order_id": order.id,
                        "position": position,
                        "product_id": item.product_id,
                        "product_name": item.product_name,
                        "quantity": item.quantity,
                        "price_per_unit": item.price_per_unit,
                        "total_price": item.total_price
                    }
                    for position, item in enumerate(order.items)
                ]
            )

    async def mark_deleted(self, order_id: str, deleted_at: datetime) -> None:
        stmt = (
            update(orders_tbl)
            .where(orders_tbl.c.id == order_id)
            .values(deleted_at=deleted_at, last_updated_date=deleted_at)
        )
        await self._session.execute(stmt)

    async def _load_items(self, order_ids: List[str]) -> dict:
        items = defaultdict(list)
        if not order_ids:
            return items
        result = await self._session.execute(
            select(order_line_items_tbl)
            .where(order_line_items_tbl.c.order_id.in_(order_ids))
            .order_by(order_line_items_tbl.c.order_id, order_line_items_tbl.c.position)
        )
        for row in result.fetchall():
            items[row.order_id].append(
                OrderLineItem(
                    id=row.id,
                    product_id=row.product_id,
                    product_name=row.product_name,
                    quantity=row.quantity,
                    price_per_unit=row.price_per_unit,
                    total_price=row.total_price
                )
            )
        return items

    def _to_domain(self, row, items: List[OrderLineItem]) -> Order:
        """Трансформация DB → Domain"""
        return Order(
            id=row.id,
            created_by=row.created_by,
            items=items,
            total_price=row.total_price,
            status=OrderStatus(row.status),
            deleted_at=row.deleted_at,
            order_date=row.order_date,
            last_updated_date=row.last_updated_date
        )


class SQLAlchemyCardRepository(CardRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, card_id: str) -> Optional[Card]:
        result = await self._session.execute(
            select(cards_tbl).where(cards_tbl.c.id == card_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def list_active_by_user(self, user_id: str) -> List[Card]:
        result = await self._session.execute(
            select(cards_tbl)
            .where(cards_tbl.c.user_id == user_id, _active(cards_tbl))
            .order_by(cards_tbl.c.created_at.asc())
        )
        return [self._to_domain(row) for row in result.fetchall()]

    async def count_active_by_user(self, user_id: str) -> int:
        result = await self._session.execute(
            select(func.count())
            .select_from(cards_tbl)
            .where(cards_tbl.c.user_id == user_id, _active(cards_tbl))
        )
        return result.scalar_one()

    async def exists_active_number(self, user_id: str, card_number: str) -> bool:
        result = await self._session.execute(
            select(cards_tbl.c.id)
            .where(
                cards_tbl.c.user_id == user_id,
                cards_tbl.c.card_number == card_number,
                _active(cards_tbl)
            )
            .limit(1)
        )
        return result.fetchone() is not None

    async def create(self, card: Card) -> None:
        stmt = insert(cards_tbl).values(
            id=card.id,
            user_id=card.user_id,
            cardholder_name=card.cardholder_name,
            card_number=card.card_number,
            expiration_date=card.expiration_date,
            created_at=card.created_at,
            is_default=card.is_default,
            deleted_at=card.deleted_at
        )
        await self._session.execute(stmt)

    async def update(self, card: Card) -> None:
        """Сохраняет изменяемые поля; user_id и created_at не трогаются"""
        stmt = (
            update(cards_tbl)
            .where(cards_tbl.c.id == card.id)
            .values(
                cardholder_name=card.cardholder_name,
                card_number=card.card_number,
                expiration_date=card.expiration_date,
                is_default=card.is_default,
                deleted_at=card.deleted_at
            )
        )
        await self._session.execute(stmt)

    def _to_domain(self, row) -> Card:
        return Card(
            id=row.id,
            user_id=row.user_id,
            cardholder_name=row.cardholder_name,
            card_number=row.card_number,
            expiration_date=row.expiration_date,
            created_at=row.created_at,
            is_default=row.is_default,
            deleted_at=row.deleted_at
        )


class SQLAlchemyPaymentRepository(PaymentRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, payment_id: str) -> Optional[Payment]:
        result = await self._session.execute(
            select(payments_tbl).where(payments_tbl.c.id == payment_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def create(self, payment: Payment) -> None:
        stmt = insert(payments_tbl).values(
            id=payment.id,
            created_by=payment.created_by,
            order_id=payment.order_id,
            card_id=payment.card_id,
            total_price=payment.total_price,
            status=payment.status,
            created_at=payment.created_at
        )
        await self._session.execute(stmt)

    def _to_domain(self, row) -> Payment:
        return Payment(
            id=row.id,
            created_by=row.created_by,
            order_id=row.order_id,
            card_id=row.card_id,
            total_price=row.total_price,
            status=PaymentStatus(row.status),
            created_at=row.created_at
        )
