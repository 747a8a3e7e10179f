from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable
from sqlalchemy.ext.asyncio import AsyncSession

from checkout_service.application import interfaces
from checkout_service.infrastructure.repositories import (
    SQLAlchemyOrderRepository,
    SQLAlchemyCardRepository,
    SQLAlchemyPaymentRepository
)


class SQLAlchemyUnitOfWork(interfaces.UnitOfWork):
    def __init__(self, session: AsyncSession):
        self._session = session
        self._orders = SQLAlchemyOrderRepository(session)
        self._cards = SQLAlchemyCardRepository(session)
        self._payments = SQLAlchemyPaymentRepository(session)

    @property
    def orders(self) -> SQLAlchemyOrderRepository:
        return self._orders

    @property
    def cards(self) -> SQLAlchemyCardRepository:
        return self._cards

    @property
    def payments(self) -> SQLAlchemyPaymentRepository:
        return self._payments

    async def commit(self):
        await self._session.commit()

    async def rollback(self):
        await self._session.rollback()


class UnitOfWork:
    """Фабрика транзакций: каждый вызов открывает SQLAlchemyUnitOfWork.

    Все, что не зафиксировано через commit к выходу из блока, откатывается.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def __call__(self) -> AsyncIterator[interfaces.UnitOfWork]:
        async with self._session_factory() as session:
            uow = SQLAlchemyUnitOfWork(session)
            try:
                yield uow
            finally:
                await uow.rollback()
