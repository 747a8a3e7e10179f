from sqlalchemy import (
    Table, Column, String, Integer, Numeric, Boolean, Date, Enum, DateTime, ForeignKey, MetaData
)
from sqlalchemy.sql import func

from checkout_service.domain.models import OrderStatus, PaymentStatus

metadata = MetaData()

MONEY = Numeric(10, 2)


orders_tbl = Table(
    "orders",
    metadata,
    Column("id", String, primary_key=True),
    Column("created_by", String, nullable=False, index=True),
    Column("total_price", MONEY, nullable=False),
    Column("status", Enum(OrderStatus), nullable=False, default=OrderStatus.PENDING),
    Column("deleted_at", DateTime(timezone=True), nullable=True),
    Column("order_date", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("last_updated_date", DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
)


# Позиции живут только внутри заказа
order_line_items_tbl = Table(
    "order_line_items",
    metadata,
    Column("id", String, primary_key=True),
    Column("order_id", String, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("position", Integer, nullable=False),
    Column("product_id", String, nullable=False),
    Column("product_name", String, nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("price_per_unit", MONEY, nullable=False),
    Column("total_price", MONEY, nullable=False)
)


cards_tbl = Table(
    "cards",
    metadata,
    Column("id", String, primary_key=True),
    Column("user_id", String, nullable=False, index=True),
    Column("cardholder_name", String, nullable=False),
    Column("card_number", String, nullable=False),
    Column("expiration_date", Date, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("is_default", Boolean, nullable=False, default=False),
    Column("deleted_at", DateTime(timezone=True), nullable=True)
)


payments_tbl = Table(
    "payments",
    metadata,
    Column("id", String, primary_key=True),
    Column("created_by", String, nullable=False),
    Column("order_id", String, nullable=False, index=True),
    Column("card_id", String, nullable=False),
    Column("total_price", MONEY, nullable=False),
    Column("status", Enum(PaymentStatus), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now())
)
