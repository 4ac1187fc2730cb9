"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database session, linked record factories, mock sessions
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import os
from datetime import date, datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

os.environ.setdefault("ENVIRONMENT", "test")


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    import cigno.boundary.db.models  # noqa: F401
    from cigno.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """Session double for services whose guards must fire before any query."""
    from sqlalchemy.ext.asyncio import AsyncSession

    return AsyncMock(spec=AsyncSession)


@pytest.fixture
async def organisation(test_async_db):
    from cigno.boundary.db.CRUD import organisation_crud

    return await organisation_crud.create(test_async_db, name="Northwind Consulting", industry="Consulting")


@pytest.fixture
async def user(test_async_db, organisation):
    from cigno.boundary.db.CRUD import user_crud

    return await user_crud.create(
        test_async_db,
        first_name="Ada",
        last_name="Meier",
        email_address="ada.meier@northwind.example",
        organisation_id=organisation.id,
    )


@pytest.fixture
async def client_record(test_async_db, organisation, user):
    from cigno.boundary.db.CRUD import client_crud

    return await client_crud.create(
        test_async_db,
        name="Acme Retail AG",
        industry="Retail",
        location="Zurich",
        owner_id=user.id,
        organisation_id=organisation.id,
    )


@pytest.fixture
async def project(test_async_db, client_record):
    from cigno.boundary.db.CRUD import project_crud

    today = date.today()
    return await project_crud.create(
        test_async_db,
        name="Market Entry",
        start_date=today,
        end_date=today + timedelta(days=30),
        client_id=client_record.id,
        organisation_id=client_record.organisation_id,
    )


@pytest.fixture
async def deliverable(test_async_db, project):
    from cigno.boundary.db.CRUD import deliverable_crud

    return await deliverable_crud.create(
        test_async_db,
        name="Market Sizing",
        brief="Size the market",
        due_date=datetime.now(timezone.utc) + timedelta(days=7),
        project_id=project.id,
    )


@pytest.fixture
def client():
    """
    Application test client without lifespan.

    Yields:
        TestClient: Client bound to a fresh app; dependency overrides are cleared afterwards
    """
    from fastapi.testclient import TestClient

    from cigno.api.main import create_app

    app = create_app()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def deliverable_payload() -> dict:
    """Serialized deliverable as returned by DeliverableService."""
    now = datetime.now(timezone.utc)
    return {
        "id": "65f1c2a4b9e77a0012345678",
        "name": "Market Sizing",
        "type": "Analysis",
        "format": "PPTX",
        "status": "draft",
        "priority": "medium",
        "brief": "Size the market",
        "notes": None,
        "due_date": now,
        "estimated_hours": 10.0,
        "brief_quality": None,
        "brief_strengths": [],
        "brief_improvements": [],
        "brief_last_evaluated_at": None,
        "project_id": "65f1c2a4b9e77a0012345679",
        "is_active": True,
        "created_by": None,
        "updated_by": None,
        "created_at": now,
        "updated_at": now,
    }
