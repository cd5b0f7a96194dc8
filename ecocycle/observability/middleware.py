"""
HTTP middleware for request tracing.

``CorrelationMiddleware`` binds an ID per request (honouring an inbound
``X-Correlation-ID``) and echoes it on the response.
``RequestLoggingMiddleware`` writes one access line per request.

Dependencies: starlette, ecocycle.observability
System role: Request/response observability injection
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ecocycle.observability.correlation import correlation_scope

logger = logging.getLogger("ecocycle.access")

CORRELATION_HEADER = "X-Correlation-ID"

# Probes hit these constantly; they are only logged at DEBUG
QUIET_PATHS = frozenset({"/api/v1/health"})


class CorrelationMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        context = {"method": request.method, "path": request.url.path}

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error",
                extra={**context, "duration_ms": _elapsed_ms(started)},
            )
            raise

        level = logging.DEBUG if request.url.path in QUIET_PATHS else logging.INFO
        if response.status_code >= 500:
            level = logging.ERROR
        logger.log(
            level,
            "%s %s %s",
            request.method,
            request.url.path,
            response.status_code,
            extra={**context, "status_code": response.status_code, "duration_ms": _elapsed_ms(started)},
        )
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
