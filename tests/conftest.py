"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database session, seeded profiles/rewards/collectors,
signed JWTs and settings overrides
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite, PyJWT
System role: Test infrastructure and fixture management
"""

import time
import uuid

import jwt
import pytest

from ecocycle.configs import Settings
from ecocycle.configs.api import ApiSettings
from ecocycle.configs.auth import AuthSettings
from ecocycle.configs.limits import LimitSettings

TEST_JWT_SECRET = "test-secret-key-with-enough-length-for-hs256"

# Smallest payloads the classifier recognises
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from ecocycle.boundary.db.base import Base

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
        autoflush=False,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def user_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def limits() -> LimitSettings:
    return LimitSettings()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a known JWT secret and no retry delay."""
    return Settings(
        auth=AuthSettings(jwt_secret=TEST_JWT_SECRET),
        api=ApiSettings(retry_delay_seconds=0, base_url="http://testserver/api/v1"),
        limits=LimitSettings(),
    )


@pytest.fixture
async def profile(test_async_db, user_id):
    """Profile holding 500 EcoCoins."""
    from ecocycle.boundary.db.CRUD import profile_crud

    created = await profile_crud.create(
        test_async_db,
        user_id=user_id,
        email="recycler@example.com",
        full_name="Test Recycler",
        eco_coins=500,
    )
    await test_async_db.commit()
    return created


@pytest.fixture
async def reward(test_async_db):
    from ecocycle.boundary.db.CRUD import reward_crud

    created = await reward_crud.create(
        test_async_db,
        name="Coffee voucher",
        description="One free coffee",
        category="Food",
        coins_required=100,
        discount_value="100%",
        icon="coffee",
    )
    await test_async_db.commit()
    return created


@pytest.fixture
async def collector(test_async_db):
    from ecocycle.boundary.db.CRUD import collector_crud

    created = await collector_crud.create(
        test_async_db,
        name="GreenTech Recyclers",
        email="pickup@greentech.example",
        phone="+911234567890",
        city="Mumbai",
        rating=4.8,
        specialties=["Smartphones", "Laptops"],
    )
    await test_async_db.commit()
    return created


def make_token(
    user_id: uuid.UUID | str,
    secret: str = TEST_JWT_SECRET,
    expires_in: int = 3600,
    audience: str = "authenticated",
    **claims,
) -> str:
    """Sign a Supabase-style access token."""
    now = int(time.time())
    payload = {
        "sub": str(user_id),
        "aud": audience,
        "iat": now,
        "exp": now + expires_in,
        "email": "recycler@example.com",
        "role": "authenticated",
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def token_factory():
    """Callable signing tokens for a user id (see make_token)."""
    return make_token
