from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Generic, Optional, TypeVar
from uuid import UUID

from checkout_service.domain.models import OrderStatus, PaymentStatus

T = TypeVar("T")

CARD_NUMBER_PATTERN = r"^[0-9]{16}$"

# Суммы в JSON отдаются числом
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """JSON в camelCase, snake_case тоже принимается"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel, Generic[T]):
    """Единый конверт ответа для успеха и ошибок"""
    success: bool
    message: str
    data: Optional[T] = None

    @classmethod
    def ok(cls, message: str, data=None):
        return cls(success=True, message=message, data=data)


# Orders

class OrderLineItemRequest(CamelModel):
    product_id: UUID
    product_name: str
    quantity: int
    price_per_unit: Decimal = Field(max_digits=10, decimal_places=2)


class CreateOrderRequest(CamelModel):
    created_by: UUID
    items: list[OrderLineItemRequest] = Field(min_length=1)


class OrderLineItemResponse(CamelModel):
    id: str
    product_id: str
    product_name: str
    quantity: int
    price_per_unit: Money
    total_price: Money


class OrderResponse(CamelModel):
    id: str
    created_by: str
    items: list[OrderLineItemResponse]
    total_price: Money
    status: OrderStatus
    deleted_at: Optional[datetime] = None
    order_date: datetime
    last_updated_date: datetime

    @classmethod
    def from_domain(cls, order):
        return cls(
            id=order.id,
            created_by=order.created_by,
            items=[OrderLineItemResponse(**item.model_dump()) for item in order.items],
            total_price=order.total_price,
            status=order.status,
            deleted_at=order.deleted_at,
            order_date=order.order_date,
            last_updated_date=order.last_updated_date
        )


# Cards

class CreateCardRequest(CamelModel):
    cardholder_name: str = Field(min_length=1)
    card_number: str = Field(pattern=CARD_NUMBER_PATTERN)
    expiration_date: date

    @field_validator("cardholder_name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Cardholder name is required")
        return value


class UpdateCardRequest(CamelModel):
    cardholder_name: str = Field(min_length=1)
    expiration_date: date
    card_number: Optional[str] = Field(default=None, pattern=CARD_NUMBER_PATTERN)

    @field_validator("cardholder_name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Cardholder name is required")
        return value


class CardResponse(CamelModel):
    id: str
    user_id: str
    cardholder_name: str
    masked_card_number: Optional[str]
    expiration_date: date
    is_default: bool
    created_at: datetime

    @classmethod
    def from_domain(cls, view):
        return cls(**view.model_dump())


# Payments

class CreatePaymentRequest(CamelModel):
    order_id: UUID
    card_id: UUID


class PaymentResponse(CamelModel):
    id: str
    created_by: str
    order_id: str
    card_id: str
    total_price: Money
    status: PaymentStatus
    created_at: datetime

    @classmethod
    def from_domain(cls, payment):
        return cls(**payment.model_dump())


# Health

class DatabaseStatus(BaseModel):
    connected: bool
    message: str


class HealthResponse(BaseModel):
    status: str
    environment: str
    database: DatabaseStatus
    timestamp: str
    service: str
