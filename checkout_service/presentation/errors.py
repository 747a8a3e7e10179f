import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def envelope(status_code: int, message: str, data=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "data": data}
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return envelope(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Ошибки валидации: 400 и словарь поле → сообщение"""
    errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = loc[-1] if loc else "body"
        errors[field] = error.get("msg", "Invalid value")
    return envelope(status.HTTP_400_BAD_REQUEST, f"Validation failed: {errors}", errors)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Необработанная ошибка {request.method} {request.url.path}: {exc}", exc_info=True)
    return envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        f"An unexpected error occurred: {exc}"
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
