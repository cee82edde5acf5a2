"""Per-request logging with a request id and timing headers."""

import time
import uuid
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from solarbooks.config import get_logger

logger = get_logger(__name__)

# Polled by monitors; logged at debug only
QUIET_PATHS = frozenset({"/", "/api/health"})

# PDF rendering of a long invoice is the slowest normal request
SLOW_REQUEST_MS = 2000.0


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Bind a request id into the structlog context and log each request once.

    Every event logged while the request is handled carries ``request_id``.
    The id is echoed as ``X-Request-ID`` together with ``X-Response-Time``.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            raise
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        duration_ms = (time.perf_counter() - start) * 1000
        if request.url.path in QUIET_PATHS:
            log = logger.debug
        elif duration_ms > SLOW_REQUEST_MS:
            log = logger.warning
        else:
            log = logger.info
        log(
            "request_completed",
            method=request.method,
            path=request.url.path,
            query=str(request.url.query) or None,
            status=response.status_code,
            duration_ms=round(duration_ms, 2),
            client=request.client.host if request.client else None,
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response
