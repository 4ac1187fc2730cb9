"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, cigno.configs
System role: Database schema initialization

Usage:
    python -m cigno.boundary.db.create_tables
    python -m cigno.boundary.db.create_tables --drop
"""

import argparse
import asyncio
import logging

from cigno.boundary.db.base import Base
from cigno.boundary.db.connection import DatabaseHolder

# Import all models to register them with Base.metadata
import cigno.boundary.db.models  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(holder: DatabaseHolder) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: existing tables remain unchanged.

    Raises:
        ConfigurationError: If DATABASE_URL is not set
        SQLAlchemyError: If database connection or table creation fails
    """
    async with holder.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("All tables created successfully")


async def drop_all_tables(holder: DatabaseHolder) -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    async with holder.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("All tables dropped successfully")


async def _run(drop: bool) -> None:
    holder = DatabaseHolder()
    try:
        if drop:
            await drop_all_tables(holder)
        await create_all_tables(holder)
    finally:
        await holder.dispose()


def main() -> None:
    """Entry point for python -m cigno.boundary.db.create_tables."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    parser = argparse.ArgumentParser(description="Create Cigno platform tables")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    args = parser.parse_args()
    asyncio.run(_run(args.drop))


if __name__ == "__main__":
    main()
