"""
Observability module.

Provides structured logging, correlation ID tracking and request logging
middleware.
"""

from cigno.observability.logger import configure_logging
from cigno.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

__all__ = [
    "configure_logging",
    "CorrelationMiddleware",
    "RequestLoggingMiddleware",
]
