"""Schema bootstrap against a throwaway SQLite engine."""

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from ecocycle.boundary.db.create_tables import create_all_tables, drop_all_tables


async def test_create_then_drop():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    try:
        tables = await create_all_tables(engine)
        async with engine.connect() as conn:
            existing = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

        assert set(tables) == set(existing)
        assert "profiles" in tables

        # second run is a no-op
        assert await create_all_tables(engine) == tables

        await drop_all_tables(engine)
        async with engine.connect() as conn:
            remaining = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        assert remaining == []
    finally:
        await engine.dispose()
