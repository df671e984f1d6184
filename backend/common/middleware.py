"""HTTP middleware for Jackpot Predictor.

Request ID tracing, access logging, security headers and Prometheus
HTTP metrics. All four classes are registered in backend/main.py.

Usage:
    from backend.common.middleware import request_id_var
    rid = request_id_var.get("")  # current request ID, "" outside a request
"""

from __future__ import annotations

import re
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from backend.common.logging import get_logger
from backend.common.metrics import (
    HTTP_REQUEST_DURATION_SECONDS,
    HTTP_REQUESTS_IN_PROGRESS,
    HTTP_REQUESTS_TOTAL,
)

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

logger = get_logger("API")

# Health and scrape endpoints are excluded from access logs and metrics
_QUIET_PATHS = frozenset({"/health", "/ready", "/metrics"})

# Jackpot and fixture IDs are integers
_NUMERIC_SEGMENT = re.compile(r"/\d+(?=/|$)")


def _normalize_path(path: str) -> str:
    """Collapse numeric path segments so metric labels stay low-cardinality.

    Examples:
        /api/fixtures/12                -> /api/fixtures/{id}
        /api/predictions/jackpot/3      -> /api/predictions/jackpot/{id}
    """
    return _NUMERIC_SEGMENT.sub("/{id}", path)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to every request/response cycle.

    Honors an incoming ``X-Request-ID`` header, otherwise generates one.
    The ID is stored in ``request_id_var`` for the structured logger and
    echoed back in the response headers.
    """

    async def dispatch(self, request: Request, call_next) -> Response:  # noqa: ANN001
        rid = request.headers.get("x-request-id") or uuid.uuid4().hex
        request_id_var.set(rid)

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration for every non-health request."""

    async def dispatch(self, request: Request, call_next) -> Response:  # noqa: ANN001
        if request.url.path in _QUIET_PATHS:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "data": {
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                }
            },
        )
        return response


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Record request count, latency and in-flight gauge per route template."""

    async def dispatch(self, request: Request, call_next) -> Response:  # noqa: ANN001
        path = request.url.path
        if path in _QUIET_PATHS:
            return await call_next(request)

        method = request.method
        path_template = _normalize_path(path)
        status_code = "500"

        HTTP_REQUESTS_IN_PROGRESS.labels(method=method).inc()
        start = time.perf_counter()
        try:
            response = await call_next(request)
            status_code = str(response.status_code)
            return response
        finally:
            HTTP_REQUESTS_IN_PROGRESS.labels(method=method).dec()
            HTTP_REQUESTS_TOTAL.labels(
                method=method,
                path_template=path_template,
                status_code=status_code,
            ).inc()
            HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method,
                path_template=path_template,
            ).observe(time.perf_counter() - start)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add OWASP-recommended security headers to every response."""

    HEADERS: dict[str, str] = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "Cache-Control": "no-store",
    }

    async def dispatch(self, request: Request, call_next) -> Response:  # noqa: ANN001
        response = await call_next(request)
        for header, value in self.HEADERS.items():
            response.headers[header] = value
        return response
