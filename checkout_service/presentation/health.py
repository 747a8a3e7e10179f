import logging
from datetime import datetime
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from checkout_service.database import get_db
from checkout_service.presentation.schemas import ApiResponse, DatabaseStatus, HealthResponse
from checkout_service.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


async def check_database(db: AsyncSession) -> DatabaseStatus:
    try:
        await db.execute(text("SELECT 1"))
        return DatabaseStatus(connected=True, message=f"Connected to {db.bind.dialect.name}")
    except Exception as e:
        logger.error(f"Проверка подключения к БД не удалась: {e}")
        return DatabaseStatus(connected=False, message=f"Database connection failed: {e}")


@router.get("/health", response_model=ApiResponse[HealthResponse])
async def health(db: AsyncSession = Depends(get_db)):
    """Состояние сервиса и подключения к БД"""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    database = await check_database(db)
    service_status = "UP" if database.connected else "DOWN"

    if database.connected:
        logger.info(f"Health check: UP, окружение {settings.ENVIRONMENT}")
    else:
        logger.warning(f"Health check: DOWN, окружение {settings.ENVIRONMENT} - {database.message}")

    body = ApiResponse[HealthResponse].ok(
        "Health check completed",
        HealthResponse(
            status=service_status,
            environment=settings.ENVIRONMENT,
            database=database,
            timestamp=timestamp,
            service=settings.SERVICE_NAME
        )
    )
    return JSONResponse(
        status_code=200 if database.connected else 503,
        content=body.model_dump(mode="json", by_alias=True)
    )


@router.get("/ping", response_model=ApiResponse[str])
async def ping():
    return ApiResponse[str].ok("pong", "Service is alive")
