"""
Schema bootstrap for local and preview databases.

Creates every table registered on the ORM metadata, including the CHECK
constraints that keep coin balances non-negative.

Usage:
    python -m ecocycle.boundary.db.create_tables [--drop]
"""

import argparse
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from ecocycle.boundary.db import models  # noqa: F401  (registers tables on Base.metadata)
from ecocycle.boundary.db.base import Base
from ecocycle.boundary.db.connection import dispose_engine, get_async_engine

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> list[str]:
    """Create missing tables; existing ones are left untouched. Returns the table names."""
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    tables = sorted(Base.metadata.tables)
    logger.info("Schema ready", extra={"tables": ",".join(tables)})
    return tables


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """Drop every ecocycle table. Destroys all profiles, ledgers and bookings."""
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("All ecocycle tables dropped")


async def _main(drop: bool) -> None:
    try:
        if drop:
            await drop_all_tables()
        await create_all_tables()
    finally:
        await dispose_engine()


if __name__ == "__main__":
    from ecocycle.configs import get_settings
    from ecocycle.observability import configure_logging

    parser = argparse.ArgumentParser(description="Create the ecocycle tables")
    parser.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = parser.parse_args()

    configure_logging(get_settings().log_level)
    asyncio.run(_main(args.drop))
