"""
Test suite for RateLimitService.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from ecocycle.application.services.rate_limit_service import RateLimitService, truncate_to_minute
from ecocycle.core.exceptions import RateLimitExceededError

NOW = datetime(2026, 2, 2, 10, 15, 42, tzinfo=timezone.utc)


async def test_allows_until_quota_used(test_async_db, user_id) -> None:
    service = RateLimitService(test_async_db)

    results = [await service.check_rate_limit(user_id, "booking", 3, 60, now=NOW) for _ in range(4)]

    assert results == [True, True, True, False]


async def test_window_expiry_frees_quota(test_async_db, user_id) -> None:
    service = RateLimitService(test_async_db)
    assert await service.check_rate_limit(user_id, "booking", 1, 60, now=NOW)
    assert not await service.check_rate_limit(user_id, "booking", 1, 60, now=NOW + timedelta(minutes=30))

    assert await service.check_rate_limit(user_id, "booking", 1, 60, now=NOW + timedelta(minutes=62))


async def test_actions_are_counted_separately(test_async_db, user_id) -> None:
    service = RateLimitService(test_async_db)
    await service.check_rate_limit(user_id, "booking", 1, 60, now=NOW)

    assert await service.check_rate_limit(user_id, "reward_redemption", 1, 60, now=NOW)


async def test_enforce_raises(test_async_db, user_id) -> None:
    service = RateLimitService(test_async_db)
    await service.enforce(user_id, "booking", 1, 60, now=NOW)

    with pytest.raises(RateLimitExceededError) as exc_info:
        await service.enforce(user_id, "booking", 1, 60, now=NOW)

    assert exc_info.value.details["max_requests"] == 1


async def test_database_failure_allows_request(user_id) -> None:
    db = AsyncMock()
    db.execute.side_effect = OperationalError("DELETE", {}, Exception("connection lost"))

    assert await RateLimitService(db).check_rate_limit(user_id, "booking", 1, 60) is True
    db.rollback.assert_awaited_once()


def test_truncate_to_minute() -> None:
    assert truncate_to_minute(NOW) == datetime(2026, 2, 2, 10, 15, tzinfo=timezone.utc)
