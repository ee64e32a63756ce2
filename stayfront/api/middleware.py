"""
Request middleware for logging, timing, and request ID tracking.
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import structlog

from stayfront.core.config import get_settings
from stayfront.core.logging import get_logger

logger = get_logger(__name__)

QUIET_PATHS = ("/health", "/metrics")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Binds request_id and a short session prefix to structlog, so the
    outbound API calls made while rendering a page can be traced back to
    the page and the browser that asked for it. Probe endpoints are only
    logged at debug level.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        session_id = request.cookies.get(get_settings().SESSION_COOKIE_NAME, "")
        start_time = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            session=session_id[:8] or None,
            page=f"{request.method} {request.url.path}",
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "page_crashed",
                error=str(e),
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        log = logger.debug if request.url.path in QUIET_PATHS else logger.info
        log("page_served", status_code=response.status_code, duration_ms=duration_ms)

        response.headers["X-Request-ID"] = request_id
        return response
