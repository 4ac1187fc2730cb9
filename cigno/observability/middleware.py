"""
FastAPI middleware for observability.

CorrelationMiddleware binds a correlation id for the lifetime of a request
and echoes it in the X-Correlation-ID response header.
RequestLoggingMiddleware writes one line when a request arrives and one
when it completes; health checks are logged at DEBUG so load balancer
polling does not drown the API traffic.

Dependencies: fastapi, starlette, cigno.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from cigno.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
QUIET_PATH_PREFIX = "/api/v1/health"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def _completion_level(path: str, status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    if path.startswith(QUIET_PATH_PREFIX):
        return logging.DEBUG
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each API call with its status and duration."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        method, path = request.method, request.url.path
        arrival_level = logging.DEBUG if path.startswith(QUIET_PATH_PREFIX) else logging.INFO

        logger.log(
            arrival_level,
            f"--> {method} {path}",
            extra={
                "method": method,
                "path": path,
                "query_string": request.url.query or None,
                "client_host": request.client.host if request.client else None,
            },
        )

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"<-- {method} {path} raised {type(e).__name__}",
                extra={"method": method, "path": path, "process_time_ms": _elapsed_ms(started)},
            )
            raise

        logger.log(
            _completion_level(path, response.status_code),
            f"<-- {method} {path} {response.status_code}",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "process_time_ms": _elapsed_ms(started),
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind the caller's X-Correlation-ID, or a fresh one, for the request."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
