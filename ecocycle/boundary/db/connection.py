"""
Engine and session lifecycle.

One pooled asyncpg engine per process, built lazily from DatabaseSettings.
Request handlers get a session through ``get_async_db``; services own
their commits and rollbacks.

Dependencies: sqlalchemy, asyncpg, ecocycle.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool

from ecocycle.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Process-wide engine.

    ``pool_pre_ping`` drops connections the server closed while idle, which
    managed Postgres does after a few minutes of no traffic.
    """
    database = get_settings().database
    return create_async_engine(
        database.async_database_url,
        echo=database.echo_sql,
        poolclass=AsyncAdaptedQueuePool,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        pool_timeout=database.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    # Objects stay readable after commit so services can build responses from them
    return async_sessionmaker(bind=get_async_engine(), autoflush=False, expire_on_commit=False)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped session."""
    async with get_async_session_factory()() as session:
        yield session


async def dispose_engine() -> bool:
    """Close pooled connections if the engine was ever created."""
    if not get_async_engine.cache_info().currsize:
        return False
    await get_async_engine().dispose()
    get_async_session_factory.cache_clear()
    get_async_engine.cache_clear()
    return True
