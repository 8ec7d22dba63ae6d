"""
Per-request access logging with a correlation ID.
"""

import time
import uuid
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.config import get_logger

logger = get_logger(__name__)

# Probed by orchestrators every few seconds
HEALTH_PATHS = ("/health", "/api/health")


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one ``request_completed`` event per request.

    The request ID is taken from ``X-Request-ID`` when the caller sends one,
    bound into structlog's context variables for every event logged while the
    request runs, and returned in the response headers.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        emit = logger.debug if request.url.path in HEALTH_PATHS else logger.info
        emit(
            "request_completed",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=elapsed_ms,
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms}ms"
        return response
