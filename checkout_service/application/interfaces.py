from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional, List
from checkout_service.domain.models import Order, Card, Payment


class OrderRepository(ABC):
    @abstractmethod
    async def get_by_id(self, order_id: str) -> Optional[Order]:
        """Возвращает заказ, в том числе мягко удаленный"""
        pass

    @abstractmethod
    async def list_active(self) -> List[Order]:
        pass

    @abstractmethod
    async def create(self, order: Order) -> None:
        pass

    @abstractmethod
    async def mark_deleted(self, order_id: str, deleted_at: datetime) -> None:
        pass


class CardRepository(ABC):
    @abstractmethod
    async def get_by_id(self, card_id: str) -> Optional[Card]:
        """Возвращает карту, в том числе мягко удаленную"""
        pass

    @abstractmethod
    async def list_active_by_user(self, user_id: str) -> List[Card]:
        pass

    @abstractmethod
    async def count_active_by_user(self, user_id: str) -> int:
        pass

    @abstractmethod
    async def exists_active_number(self, user_id: str, card_number: str) -> bool:
        pass

    @abstractmethod
    async def create(self, card: Card) -> None:
        pass

    @abstractmethod
    async def update(self, card: Card) -> None:
        pass


class PaymentRepository(ABC):
    @abstractmethod
    async def get_by_id(self, payment_id: str) -> Optional[Payment]:
        pass

    @abstractmethod
    async def create(self, payment: Payment) -> None:
        pass


class UnitOfWork(ABC):
    """Транзакция: репозитории на одной сессии, фиксация одним commit"""

    @property
    @abstractmethod
    def orders(self) -> OrderRepository:
        pass

    @property
    @abstractmethod
    def cards(self) -> CardRepository:
        pass

    @property
    @abstractmethod
    def payments(self) -> PaymentRepository:
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass


class TimeProvider(ABC):
    """Источник текущего времени (UTC)"""

    @abstractmethod
    def now(self) -> datetime:
        pass

    def today(self) -> date:
        return self.now().date()


class HealthPinger(ABC):
    @abstractmethod
    async def ping(self, url: str) -> bool:
        pass
