# holiday_api/core/request_logging.py
"""
Request logging middleware for tracking all HTTP requests.

Unhandled errors are only logged and re-raised here; Sentry's FastAPI and
Starlette integrations report them.
"""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from holiday_api.core.logging_config import get_logger

logger = get_logger(__name__)

# Paths logged at DEBUG on success (monitoring noise)
QUIET_PATHS = frozenset({"/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs all HTTP requests with timing and status codes.

    Adds a unique request ID to each request for tracing.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.perf_counter()
        status_code = 500
        error = None

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            error = e
            raise
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            _log_request(request, request_id, status_code, duration_ms, error)

        response.headers["X-Request-ID"] = request_id

        return response


def _log_request(
    request: Request,
    request_id: str,
    status_code: int,
    duration_ms: float,
    error: Exception | None,
) -> None:
    extra = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "duration_ms": round(duration_ms, 2),
    }
    message = f"{request.method} {request.url.path} - {status_code} ({duration_ms:.2f}ms)"

    if error is not None:
        logger.error(f"{message} - ERROR: {error}", extra=extra, exc_info=error)
    elif status_code >= 500:
        logger.error(message, extra=extra)
    elif status_code >= 400:
        logger.warning(message, extra=extra)
    elif request.url.path in QUIET_PATHS:
        logger.debug(message, extra=extra)
    else:
        logger.info(message, extra=extra)
