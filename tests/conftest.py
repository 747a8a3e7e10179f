"""Shared pytest fixtures for the test suite."""

from datetime import date, datetime, timezone
import uuid

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from checkout_service.database import get_db
from checkout_service.domain.models import Card
from checkout_service.infrastructure.db_schema import metadata
from checkout_service.infrastructure.time_provider import FixedTimeProvider
from checkout_service.infrastructure.unit_of_work import UnitOfWork
from checkout_service.main import app
from checkout_service.presentation.api import get_time_provider


@pytest.fixture
def now() -> datetime:
    """A fixed timestamp for deterministic testing."""
    return datetime(2026, 3, 10, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def today(now: datetime) -> date:
    return now.date()


@pytest.fixture
def time_provider(now: datetime) -> FixedTimeProvider:
    return FixedTimeProvider(now)


@pytest.fixture
async def engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def uow(session_factory) -> UnitOfWork:
    return UnitOfWork(session_factory)


@pytest.fixture
def user_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def store_card(uow: UnitOfWork, now: datetime):
    """Insert a card straight into storage, bypassing the business rules."""

    async def _store(user_id: str, card_number: str = "4532015112830366", **overrides) -> Card:
        fields = dict(
            id=str(uuid.uuid4()),
            user_id=user_id,
            cardholder_name="John Doe",
            card_number=card_number,
            expiration_date=date(2028, 12, 31),
            created_at=now,
        )
        fields.update(overrides)
        card = Card(**fields)
        async with uow() as tx:
            await tx.cards.create(card)
            await tx.commit()
        return card

    return _store


@pytest.fixture
async def client(session_factory, time_provider: FixedTimeProvider):
    """HTTP client bound to the app with storage and clock overridden."""

    async def override_get_db():
        async with session_factory() as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_time_provider] = lambda: time_provider
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.clear()
