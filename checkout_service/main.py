import asyncio
import logging
import sys
from contextlib import asynccontextmanager, suppress
from fastapi import FastAPI

from checkout_service.config import settings
from checkout_service.database import engine
from checkout_service.infrastructure.db_schema import metadata
from checkout_service.presentation.api import router
from checkout_service.presentation.health import router as health_router
from checkout_service.presentation.errors import register_exception_handlers
from checkout_service.presentation.keep_alive_worker import keep_alive_worker

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    # 1. Создаем таблицы
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("Таблицы созданы")

    # 2. Запускаем keep-alive в фоне
    keep_alive_task = None
    if settings.KEEPALIVE_ENABLED:
        keep_alive_task = asyncio.create_task(keep_alive_worker())
        logger.info("Keep-alive worker запущен")

    yield

    logger.info("Приложение останавливается...")
    if keep_alive_task:
        keep_alive_task.cancel()
        with suppress(asyncio.CancelledError):
            await keep_alive_task
    await engine.dispose()


app = FastAPI(
    title="Checkout Service",
    description="Заказы, карты и платежи",
    version="1.0.0",
    lifespan=lifespan
)

register_exception_handlers(app)
app.include_router(router, prefix="/api/v1")
app.include_router(health_router, prefix="/api/v1")


@app.get("/")
async def root():
    return {"message": "orders api working"}
