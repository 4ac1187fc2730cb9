"""
Health check API endpoints.

Routes: GET /health, GET /health/db

Dependencies: cigno.boundary.db, cigno.configs
System role: Health check HTTP API
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from cigno.boundary.db import DatabaseHolder, get_database_holder
from cigno.configs import Settings
from cigno.api.deps.dependencies import get_settings_dependency

logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: datetime
    service: str
    version: str
    environment: str
    database: str
    uptime: float
    error: str | None = None


router = APIRouter(prefix="/health", tags=["health"])


async def _ping_database(holder: DatabaseHolder) -> str | None:
    """Return None when the database answers, else the failure message."""
    try:
        await holder.ping()
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return str(e)
    return None


def _health_payload(settings: Settings, error: str | None) -> HealthResponse:
    return HealthResponse(
        status="healthy" if error is None else "unhealthy",
        timestamp=datetime.now(timezone.utc),
        service=settings.service_name,
        version=settings.version,
        environment=settings.environment,
        database="connected" if error is None else "disconnected",
        uptime=round(time.monotonic() - STARTED_AT, 3),
        error=error,
    )


@router.get("", response_model=HealthResponse, responses={503: {"model": HealthResponse}})
async def health_check(
    holder: DatabaseHolder = Depends(get_database_holder),
    settings: Settings = Depends(get_settings_dependency),
):
    """Service health including database connectivity. Answers 503 when degraded."""
    payload = _health_payload(settings, await _ping_database(holder))
    if payload.error is not None:
        return JSONResponse(status_code=503, content=payload.model_dump(mode="json"))
    return payload


@router.get("/db", response_model=HealthResponse, responses={503: {"model": HealthResponse}})
async def health_check_db(
    holder: DatabaseHolder = Depends(get_database_holder),
    settings: Settings = Depends(get_settings_dependency),
):
    """Database health check."""
    error = await _ping_database(holder)
    payload = _health_payload(settings, error)
    if error is not None:
        return JSONResponse(status_code=503, content=payload.model_dump(mode="json"))
    return payload
