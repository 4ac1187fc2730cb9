"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, cigno.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cigno.api.deps.dependencies import get_service_cache
from cigno.api.errors import register_exception_handlers
from cigno.boundary.db import DatabaseHolder
from cigno.configs import get_settings
from cigno.models.common import ErrorResponse
from cigno.observability import CorrelationMiddleware, RequestLoggingMiddleware, configure_logging

from .routers import (
    ai_router,
    clients_router,
    contacts_router,
    deliverables_router,
    health_router,
    organisations_router,
    projects_router,
    seed_router,
    storylines_router,
    users_router,
)


ERROR_RESPONSES = {code: {"model": ErrorResponse} for code in (400, 403, 404, 409, 423, 500, 502, 503)}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    logger = logging.getLogger("uvicorn")
    settings = get_settings()
    logger.info(
        "Starting %s %s (%s)", settings.service_name, settings.version, settings.environment
    )

    yield

    # Shutdown
    await get_service_cache().clear()
    await app.state.database.dispose()
    logger.info("Service cache cleared and database engine released")


def create_app(database: DatabaseHolder | None = None) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        database: Connection holder to use; a fresh one is created when omitted

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Cigno Platform API",
        description="Organisations, clients, projects, deliverables and storylines",
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.database = database or DatabaseHolder()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    for router in (
        organisations_router,
        users_router,
        clients_router,
        contacts_router,
        projects_router,
        deliverables_router,
        storylines_router,
        seed_router,
        ai_router,
    ):
        app.include_router(router, prefix="/api/v1", responses=ERROR_RESPONSES)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "cigno.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
