from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from checkout_service.database import get_db
from checkout_service.presentation.schemas import (
    ApiResponse, CreateOrderRequest, OrderResponse, CreateCardRequest, UpdateCardRequest,
    CardResponse, CreatePaymentRequest, PaymentResponse
)
from checkout_service.application.create_order import CreateOrderUseCase, CreateOrderDTO, OrderLineItemDTO
from checkout_service.application.get_order import GetOrderUseCase, ListActiveOrdersUseCase
from checkout_service.application.delete_order import SoftDeleteOrderUseCase
from checkout_service.application.create_card import CreateCardUseCase, CreateCardDTO
from checkout_service.application.get_card import ListUserCardsUseCase
from checkout_service.application.update_card import UpdateCardUseCase, UpdateCardDTO
from checkout_service.application.set_default_card import SetDefaultCardUseCase
from checkout_service.application.delete_card import DeleteCardUseCase
from checkout_service.application.create_payment import CreatePaymentUseCase, CreatePaymentDTO
from checkout_service.application.interfaces import TimeProvider
from checkout_service.domain.exceptions import (
    OrderNotFoundError, CardNotFoundError, MaxCardsExceededError, DuplicateCardNumberError, CardExpiredError,
    ExpirationDateNotInFutureError
)
from checkout_service.infrastructure.unit_of_work import UnitOfWork
from checkout_service.infrastructure.time_provider import SystemTimeProvider
from checkout_service.config import settings

router = APIRouter()


def get_time_provider() -> TimeProvider:
    return SystemTimeProvider()


def expiration_date_error(e: ExpirationDateNotInFutureError) -> RequestValidationError:
    """Срок действия сверяется с часами сервиса, ответ как у ошибки валидации"""
    return RequestValidationError([{
        "type": "value_error",
        "loc": ("body", "expirationDate"),
        "msg": str(e),
        "input": e.expiration_date.isoformat(),
    }])


# Фабрики для создания use cases
def get_create_order_use_case(
    db: AsyncSession = Depends(get_db), clock: TimeProvider = Depends(get_time_provider)
):
    return CreateOrderUseCase(UnitOfWork(lambda: db), clock)


def get_list_orders_use_case(db: AsyncSession = Depends(get_db)):
    return ListActiveOrdersUseCase(UnitOfWork(lambda: db))


def get_get_order_use_case(db: AsyncSession = Depends(get_db)):
    return GetOrderUseCase(UnitOfWork(lambda: db))


def get_delete_order_use_case(
    db: AsyncSession = Depends(get_db), clock: TimeProvider = Depends(get_time_provider)
):
    return SoftDeleteOrderUseCase(UnitOfWork(lambda: db), clock)


def get_list_cards_use_case(db: AsyncSession = Depends(get_db)):
    return ListUserCardsUseCase(UnitOfWork(lambda: db))


def get_create_card_use_case(
    db: AsyncSession = Depends(get_db), clock: TimeProvider = Depends(get_time_provider)
):
    return CreateCardUseCase(UnitOfWork(lambda: db), clock, max_cards=settings.MAX_CARDS_PER_USER)


def get_update_card_use_case(
    db: AsyncSession = Depends(get_db), clock: TimeProvider = Depends(get_time_provider)
):
    return UpdateCardUseCase(UnitOfWork(lambda: db), clock)


def get_set_default_card_use_case(db: AsyncSession = Depends(get_db)):
    return SetDefaultCardUseCase(UnitOfWork(lambda: db))


def get_delete_card_use_case(
    db: AsyncSession = Depends(get_db), clock: TimeProvider = Depends(get_time_provider)
):
    return DeleteCardUseCase(UnitOfWork(lambda: db), clock)


def get_create_payment_use_case(
    db: AsyncSession = Depends(get_db), clock: TimeProvider = Depends(get_time_provider)
):
    return CreatePaymentUseCase(UnitOfWork(lambda: db), clock)


# Orders

@router.post(
    "/orders",
    response_model=ApiResponse[OrderResponse],
    status_code=status.HTTP_201_CREATED
)
async def create_order(
    request: CreateOrderRequest,
    use_case: CreateOrderUseCase = Depends(get_create_order_use_case)
):
    """Создать новый заказ"""
    dto = CreateOrderDTO(
        created_by=str(request.created_by),
        items=[
            OrderLineItemDTO(
                product_id=str(item.product_id),
                product_name=item.product_name,
                quantity=item.quantity,
                price_per_unit=item.price_per_unit
            )
            for item in request.items
        ]
    )
    order = await use_case(dto)
    return ApiResponse[OrderResponse].ok("Order created successfully", OrderResponse.from_domain(order))


@router.get("/orders", response_model=ApiResponse[list[OrderResponse]])
async def list_orders(use_case: ListActiveOrdersUseCase = Depends(get_list_orders_use_case)):
    """Все активные заказы"""
    orders = await use_case()
    return ApiResponse[list[OrderResponse]].ok(
        "Orders fetched successfully", [OrderResponse.from_domain(order) for order in orders]
    )


@router.get("/orders/{order_id}", response_model=ApiResponse[OrderResponse])
async def get_order(
    order_id: UUID,
    use_case: GetOrderUseCase = Depends(get_get_order_use_case)
):
    """Получить заказ по ID"""
    try:
        order = await use_case(str(order_id))
        return ApiResponse[OrderResponse].ok("Order found", OrderResponse.from_domain(order))
    except OrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/orders/{order_id}", response_model=ApiResponse[None])
async def delete_order(
    order_id: UUID,
    use_case: SoftDeleteOrderUseCase = Depends(get_delete_order_use_case)
):
    """Мягкое удаление заказа"""
    try:
        await use_case(str(order_id))
        return ApiResponse[None].ok("Order deleted successfully")
    except OrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# Cards

@router.get("/cards/{user_id}", response_model=ApiResponse[list[CardResponse]])
async def list_cards(
    user_id: UUID,
    use_case: ListUserCardsUseCase = Depends(get_list_cards_use_case)
):
    """Активные карты пользователя (номера замаскированы)"""
    cards = await use_case(str(user_id))
    return ApiResponse[list[CardResponse]].ok(
        "Cards fetched successfully", [CardResponse.from_domain(card) for card in cards]
    )


@router.post(
    "/cards/{user_id}",
    response_model=ApiResponse[CardResponse],
    status_code=status.HTTP_201_CREATED
)
async def create_card(
    user_id: UUID,
    request: CreateCardRequest,
    use_case: CreateCardUseCase = Depends(get_create_card_use_case)
):
    """Добавить карту пользователю"""
    try:
        dto = CreateCardDTO(
            user_id=str(user_id),
            cardholder_name=request.cardholder_name,
            card_number=request.card_number,
            expiration_date=request.expiration_date
        )
        card = await use_case(dto)
        return ApiResponse[CardResponse].ok("Card created successfully", CardResponse.from_domain(card))
    except MaxCardsExceededError as e:
        raise HTTPException(status_code=settings.MAX_CARDS_STATUS_CODE, detail=str(e))
    except DuplicateCardNumberError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ExpirationDateNotInFutureError as e:
        raise expiration_date_error(e)


@router.put("/cards/{card_id}", response_model=ApiResponse[CardResponse])
async def update_card(
    card_id: UUID,
    request: UpdateCardRequest,
    use_case: UpdateCardUseCase = Depends(get_update_card_use_case)
):
    """Обновить имя владельца и срок действия (и номер, если передан)"""
    try:
        dto = UpdateCardDTO(
            card_id=str(card_id),
            cardholder_name=request.cardholder_name,
            expiration_date=request.expiration_date,
            card_number=request.card_number
        )
        card = await use_case(dto)
        return ApiResponse[CardResponse].ok("Card updated successfully", CardResponse.from_domain(card))
    except CardNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DuplicateCardNumberError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ExpirationDateNotInFutureError as e:
        raise expiration_date_error(e)


@router.put("/cards/{card_id}/set-default", response_model=ApiResponse[CardResponse])
async def set_default_card(
    card_id: UUID,
    use_case: SetDefaultCardUseCase = Depends(get_set_default_card_use_case)
):
    """Сделать карту основной"""
    try:
        card = await use_case(str(card_id))
        return ApiResponse[CardResponse].ok("Default card updated successfully", CardResponse.from_domain(card))
    except CardNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/cards/{card_id}", response_model=ApiResponse[None])
async def delete_card(
    card_id: UUID,
    use_case: DeleteCardUseCase = Depends(get_delete_card_use_case)
):
    """Мягкое удаление карты"""
    try:
        await use_case(str(card_id))
        return ApiResponse[None].ok("Card deleted successfully")
    except CardNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# Payments

@router.post(
    "/payments/{user_id}",
    response_model=ApiResponse[PaymentResponse],
    status_code=status.HTTP_201_CREATED
)
async def create_payment(
    user_id: UUID,
    request: CreatePaymentRequest,
    use_case: CreatePaymentUseCase = Depends(get_create_payment_use_case)
):
    """Оплатить заказ картой"""
    try:
        dto = CreatePaymentDTO(
            created_by=str(user_id),
            order_id=str(request.order_id),
            card_id=str(request.card_id)
        )
        payment = await use_case(dto)
        return ApiResponse[PaymentResponse].ok("Payment created successfully", PaymentResponse.from_domain(payment))
    except (OrderNotFoundError, CardNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CardExpiredError as e:
        raise HTTPException(status_code=settings.CARD_EXPIRED_STATUS_CODE, detail=str(e))
