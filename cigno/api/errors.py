"""
API error handling utilities.

Provides a decorator that maps domain exceptions to HTTPExceptions and the
application-level handlers that render every error as
{"success": false, "error": ..., "details": ...}.

Dependencies: fastapi, cigno.core.exceptions
System role: Uniform error responses across routers
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cigno.core.exceptions import (
    AgentConfigurationError,
    AgentError,
    CignoException,
    ConfigurationError,
    ConflictError,
    LockedError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from cigno.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Checked in order, subclasses before their bases
STATUS_BY_EXCEPTION: tuple[tuple[type[CignoException], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (LockedError, status.HTTP_423_LOCKED),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (AgentConfigurationError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (AgentError, status.HTTP_502_BAD_GATEWAY),
    (ConfigurationError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(exc: CignoException) -> int:
    """Return the HTTP status code for a domain exception."""
    for exc_type, code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(error: str, details: Any = None) -> dict[str, Any]:
    return {"success": False, "error": error, "details": details or None}


def handle_api_errors(func: F) -> F:
    """
    Decorator to handle domain errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with context
    - Mapping domain exceptions to HTTP status codes
    - Ensuring uniform error response formats
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except CignoException as e:
            code = status_for(e)
            log = logger.error if code >= 500 else logger.warning
            log(
                "Request failed",
                extra={
                    "endpoint": func.__name__,
                    "status_code": code,
                    "error_type": type(e).__name__,
                    "error": e.message,
                },
            )
            raise HTTPException(status_code=code, detail=error_body(e.message, e.details)) from e

        except Exception as e:
            log_exception_with_context(logger, "Unexpected failure in API operation", e, endpoint=func.__name__)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=error_body("Internal server error", {"message": str(e)}),
            ) from e

    return wrapper  # type: ignore


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPException in the API envelope."""
    if isinstance(exc.detail, dict) and "error" in exc.detail:
        body = exc.detail
    else:
        body = error_body(str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


async def domain_exception_handler(request: Request, exc: CignoException) -> JSONResponse:
    """Render domain errors raised outside decorated handlers, e.g. in dependencies."""
    code = status_for(exc)
    logger.warning(
        "Request failed before reaching handler",
        extra={"path": request.url.path, "status_code": code, "error": exc.message},
    )
    return JSONResponse(status_code=code, content=error_body(exc.message, exc.details))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request body/query validation failures as 400."""
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    logger.warning("Request validation failed", extra={"path": request.url.path, "errors": errors})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", errors),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope-rendering handlers on app."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(CignoException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
