"""
Обработчики ошибок (Exception Handlers) для API.

Как это работает:
1. Сервис выбрасывает исключение (NotFoundError, SQLAlchemyError, ...)
2. FastAPI ищет подходящий handler для этого типа исключения
3. Handler преобразует исключение в HTTP ответ единого формата
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ..core.exceptions import DataIntegrityError, NotFoundError
from ..core.logging import get_logger
from .schemas import ErrorBody, ErrorDetail, ErrorResponse

logger = get_logger(__name__)


# =============================================================================
# CUSTOM EXCEPTIONS
# =============================================================================


class APIError(Exception):
    """
    Базовый класс для всех API ошибок.

    Использование:
        raise APIError(code="BAD_REQUEST", message="...", status_code=400)
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: list[dict] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class AlreadyExistsError(APIError):
    """
    Ресурс уже существует (400).

    Использование:
        raise AlreadyExistsError("User", "username", "albert")
    """

    def __init__(self, resource: str, field: str, value: str):
        super().__init__(
            code="ALREADY_EXISTS",
            message=f"{resource} with {field}='{value}' already exists",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=[{"field": field, "message": f"Value '{value}' is already taken"}],
        )


def _error_response(
    status_code: int, code: str, message: str, details: list[ErrorDetail] | None = None
) -> JSONResponse:
    error_response = ErrorResponse(error=ErrorBody(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=error_response.model_dump())


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Преобразует APIError в единый формат ErrorResponse."""
    logger.warning("API error", extra={"code": exc.code, "error": exc.message})

    details = None
    if exc.details:
        details = [ErrorDetail(field=d["field"], message=d["message"]) for d in exc.details]

    return _error_response(exc.status_code, exc.code, exc.message, details)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """NotFoundError из сервисов -> 404."""
    logger.warning(
        "Resource not found", extra={"resource": exc.resource, "resource_id": exc.resource_id}
    )
    return _error_response(status.HTTP_404_NOT_FOUND, "NOT_FOUND", str(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Обработчик для ошибок валидации Pydantic (422).

    Ошибки Pydantic вида {"loc": ["body", "title"], "msg": "..."}
    превращаются в {"field": "title", "message": "..."}.
    """
    logger.warning("Validation error", extra={"errors": exc.errors()})

    details = []
    for error in exc.errors():
        field_path = error.get("loc", [])
        field_name = field_path[-1] if field_path else "unknown"

        # Если поле в body, убираем "body" из пути
        if len(field_path) > 1 and field_path[0] == "body":
            field_name = ".".join(str(p) for p in field_path[1:])

        details.append(
            ErrorDetail(field=str(field_name), message=error.get("msg", "Validation error"))
        )

    return _error_response(422, "VALIDATION_ERROR", "Request validation failed", details)


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Ошибки хранилища и целостности данных (500).

    Детали не показываем клиенту, только пишем в лог.
    """
    logger.error(f"Internal error: {type(exc).__name__}: {exc}", exc_info=exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", "Internal server error"
    )


# =============================================================================
# РЕГИСТРАЦИЯ HANDLERS
# =============================================================================


def register_error_handlers(app: FastAPI) -> None:
    """
    Регистрирует все error handlers в приложении FastAPI.

    Вызывается из main.py:
        register_error_handlers(app)
    """
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(DataIntegrityError, internal_error_handler)
    app.add_exception_handler(SQLAlchemyError, internal_error_handler)

    logger.info("Error handlers registered")
