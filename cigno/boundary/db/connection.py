"""
Database connection management.

DatabaseHolder owns at most one async engine and its session factory.
The engine is created on first access and reused afterwards; every
access re-reads the connection string and fails fast when it is missing.

The application factory creates one holder and stores it on
app.state.database. get_async_db pulls it from there, so request handlers
receive an explicitly owned handle instead of a module global.

Dependencies: sqlalchemy, cigno.configs
System role: Database connection lifecycle management
"""

import logging
from typing import AsyncGenerator, Callable

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from cigno.configs import DatabaseSettings, get_settings
from cigno.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _default_settings() -> DatabaseSettings:
    return get_settings().database


class DatabaseHolder:
    """
    Lazily created async engine plus session factory.

    Concurrent first accesses may race; create_async_engine does not open
    connections, so a lost race only costs an unused engine object.
    """

    def __init__(self, settings_provider: Callable[[], DatabaseSettings] = _default_settings) -> None:
        """
        Args:
            settings_provider: Returns current database settings on each access
        """
        self._settings_provider = settings_provider
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    def _require_settings(self) -> DatabaseSettings:
        settings = self._settings_provider()
        if not settings.is_configured:
            raise ConfigurationError(
                "DATABASE_URL is required",
                {"setting": "DATABASE_URL"},
            )
        return settings

    @property
    def engine(self) -> AsyncEngine:
        """
        Get the shared async engine, creating it on first use.

        Raises:
            ConfigurationError: If DATABASE_URL is not set
        """
        settings = self._require_settings()
        if self._engine is None:
            url = settings.async_database_url
            engine_kwargs: dict = {"echo": settings.echo_sql, "pool_pre_ping": True}
            if not url.startswith("sqlite"):
                engine_kwargs.update(
                    pool_size=settings.pool_size,
                    max_overflow=settings.max_overflow,
                    pool_timeout=settings.pool_timeout,
                )
            self._engine = create_async_engine(url, **engine_kwargs)
            logger.info("Database engine created", extra={"dialect": self._engine.dialect.name})
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """
        Get the async session factory bound to the shared engine.

        Sessions use autoflush=False and expire_on_commit=False for
        explicit transaction control.
        """
        engine = self.engine
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=engine,
                autoflush=False,
                expire_on_commit=False,
            )
        return self._session_factory

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    async def ping(self) -> None:
        """
        Run SELECT 1 against the database.

        Raises:
            ConfigurationError: If DATABASE_URL is not set
            SQLAlchemyError: If the database cannot be reached
        """
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close pooled connections and forget the engine."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database engine disposed")
        self._engine = None
        self._session_factory = None


def get_database_holder(request: Request) -> DatabaseHolder:
    """FastAPI dependency returning the holder owned by the application."""
    return request.app.state.database


async def get_async_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection.

    Yields a request-scoped session, commits when the handler returns and
    rolls back when it raises.

    Yields:
        AsyncSession: Async SQLAlchemy database session

    Raises:
        ConfigurationError: If DATABASE_URL is not set
    """
    holder = get_database_holder(request)
    async with holder.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
