"""
Test suite for the database connection holder.

System role: Verification of lazy engine lifecycle and configuration errors
"""

import pytest

from cigno.boundary.db.connection import DatabaseHolder
from cigno.configs import DatabaseSettings
from cigno.core.exceptions import ConfigurationError


def test_missing_url_should_raise_configuration_error() -> None:
    holder = DatabaseHolder(settings_provider=lambda: DatabaseSettings(url=None))

    with pytest.raises(ConfigurationError) as exc_info:
        _ = holder.engine

    assert "DATABASE_URL" in exc_info.value.message
    assert holder.is_initialized is False


@pytest.mark.asyncio
async def test_engine_should_be_created_once_and_reused(tmp_path) -> None:
    url = f"sqlite+aiosqlite:///{tmp_path / 'holder.db'}"
    holder = DatabaseHolder(settings_provider=lambda: DatabaseSettings(url=url))

    first = holder.engine
    second = holder.engine

    assert first is second
    assert holder.session_factory is holder.session_factory
    await holder.ping()
    await holder.dispose()
    assert holder.is_initialized is False


@pytest.mark.asyncio
async def test_url_is_rechecked_on_every_access(tmp_path) -> None:
    settings = {"url": f"sqlite+aiosqlite:///{tmp_path / 'holder.db'}"}
    holder = DatabaseHolder(settings_provider=lambda: DatabaseSettings(url=settings["url"]))
    _ = holder.engine

    settings["url"] = None

    with pytest.raises(ConfigurationError):
        _ = holder.engine
    await holder.dispose()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("postgres://u:p@db/cigno", "postgresql+asyncpg://u:p@db/cigno"),
        ("postgresql://u:p@db/cigno", "postgresql+asyncpg://u:p@db/cigno"),
        ("postgresql+asyncpg://u:p@db/cigno", "postgresql+asyncpg://u:p@db/cigno"),
    ],
)
def test_async_database_url_should_use_asyncpg(raw: str, expected: str) -> None:
    assert DatabaseSettings(url=raw).async_database_url == expected
