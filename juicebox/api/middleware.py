"""HTTP middleware for request logging and tracing."""

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.logging import generate_request_id, get_logger, request_id_var

logger = get_logger("juicebox.api.requests")

# Не логируем служебные пути
QUIET_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware для логирования HTTP запросов.

    Логирует метод, путь, статус и время выполнения (мс),
    а также проставляет X-Request-ID в ответ.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process the request and log details."""
        request_id = generate_request_id()
        request_id_var.set(request_id)

        start_time = time.perf_counter()
        extra = {
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else "unknown",
        }

        try:
            response = await call_next(request)
        except Exception as e:
            extra["duration_ms"] = int((time.perf_counter() - start_time) * 1000)
            logger.error("Request failed", extra={**extra, "error": str(e)}, exc_info=True)
            raise

        extra["duration_ms"] = int((time.perf_counter() - start_time) * 1000)
        response.headers["X-Request-ID"] = request_id

        if request.url.path not in QUIET_PATHS:
            extra["status"] = response.status_code
            if response.status_code < 400:
                logger.info("Request completed", extra=extra)
            else:
                logger.warning("Request completed", extra=extra)

        return response
