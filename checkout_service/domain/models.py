from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional
from pydantic import BaseModel

MASK_PREFIX = "*" * 12

# Масштаб денежных колонок в БД: Numeric(10, 2)
CENTS = Decimal("0.01")


def to_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(str, Enum):
    APPROVED = "APPROVED"
    DENIED = "DENIED"


def mask_card_number(card_number: Optional[str]) -> Optional[str]:
    """Оставляет видимыми только последние 4 символа номера карты"""
    if card_number is None:
        return None
    if len(card_number) <= 4:
        return card_number
    return MASK_PREFIX + card_number[-4:]


class OrderLineItem(BaseModel):
    """Value Object — позиция заказа. Ссылки на заказ в памяти нет."""
    id: str
    product_id: str
    product_name: str
    quantity: int
    price_per_unit: Decimal
    total_price: Decimal

    @classmethod
    def priced(cls, id: str, product_id: str, product_name: str, quantity: int, price_per_unit: Decimal):
        """Цена и сумма приводятся к копейкам, чтобы совпадать с сохраненными"""
        price = to_money(price_per_unit)
        return cls(
            id=id,
            product_id=product_id,
            product_name=product_name,
            quantity=quantity,
            price_per_unit=price,
            total_price=price * quantity,
        )


class Order(BaseModel):
    """Domain Entity — заказ (агрегат с позициями)"""
    id: str
    created_by: str
    items: list[OrderLineItem]
    total_price: Decimal
    status: OrderStatus
    deleted_at: datetime | None = None
    order_date: datetime
    last_updated_date: datetime

    def is_active(self) -> bool:
        return self.deleted_at is None


class Card(BaseModel):
    """Domain Entity — сохраненная карта. Полный номер наружу не отдается."""
    id: str
    user_id: str
    cardholder_name: str
    card_number: str
    expiration_date: date
    created_at: datetime
    is_default: bool = False
    deleted_at: datetime | None = None

    def is_active(self) -> bool:
        return self.deleted_at is None

    def is_expired(self, today: date) -> bool:
        """Бизнес-правило: карта просрочена, если срок строго раньше сегодняшней даты"""
        return self.expiration_date < today

    def masked(self) -> "CardView":
        return CardView(
            id=self.id,
            user_id=self.user_id,
            cardholder_name=self.cardholder_name,
            masked_card_number=mask_card_number(self.card_number),
            expiration_date=self.expiration_date,
            is_default=self.is_default,
            created_at=self.created_at,
        )


class CardView(BaseModel):
    """Read Model — карта с замаскированным номером"""
    id: str
    user_id: str
    cardholder_name: str
    masked_card_number: Optional[str]
    expiration_date: date
    is_default: bool
    created_at: datetime


class Payment(BaseModel):
    """Domain Entity — платеж (неизменяем после создания)"""
    id: str
    created_by: str
    order_id: str
    card_id: str
    total_price: Decimal
    status: PaymentStatus
    created_at: datetime
