"""
Persistent per-user rate limiting.

Counts requests in one-minute buckets; a request is allowed while the
buckets inside the window sum to less than the maximum.

Dependencies: sqlalchemy, ecocycle.boundary.db.CRUD
System role: Quota enforcement ahead of the write operations
"""

import logging
from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.boundary.db.base import ensure_utc, utcnow
from ecocycle.boundary.db.CRUD.audit_crud import rate_limit_crud
from ecocycle.core.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

# Quota names shared with the HTTP client
WASTE_DETECTION = "waste_detection"
REWARD_REDEMPTION = "reward_redemption"
BOOKING = "booking"


def truncate_to_minute(value: datetime) -> datetime:
    return value.replace(second=0, microsecond=0)


class RateLimitService:
    """Rate limit checks backed by the rate_limits table."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize rate limit service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def check_rate_limit(
        self,
        user_id: UUID,
        action: str,
        max_requests: int,
        window_minutes: int,
        now: datetime | None = None,
    ) -> bool:
        """
        Count one request against ``action`` if the window has room.

        Buckets older than the window are purged first. The bucket write is
        committed immediately. Database failures are logged and the request
        is allowed.

        Args:
            user_id: Requesting user
            action: Quota name
            max_requests: Requests allowed per window
            window_minutes: Window length in minutes
            now: Current time (defaults to utcnow())

        Returns:
            bool: True if allowed, False if the quota is exhausted
        """
        current_minute = truncate_to_minute(ensure_utc(now) if now else utcnow())
        window_start = current_minute - timedelta(minutes=window_minutes)

        try:
            await rate_limit_crud.delete_before(self.db, window_start)
            used = await rate_limit_crud.sum_since(self.db, user_id, action, window_start)

            if used >= max_requests:
                await self.db.commit()
                logger.warning(
                    "Rate limit exceeded",
                    extra={"user_id": str(user_id), "action": action, "used": used, "max_requests": max_requests},
                )
                return False

            await rate_limit_crud.increment(self.db, user_id, action, current_minute)
            await self.db.commit()
            return True
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "Rate limit check failed, allowing request",
                extra={"user_id": str(user_id), "action": action, "error": str(e)},
            )
            return True

    async def enforce(
        self,
        user_id: UUID,
        action: str,
        max_requests: int,
        window_minutes: int,
        now: datetime | None = None,
    ) -> None:
        """
        Same as check_rate_limit but raises when the quota is exhausted.

        Raises:
            RateLimitExceededError: Quota exhausted for the window
        """
        if not await self.check_rate_limit(user_id, action, max_requests, window_minutes, now):
            raise RateLimitExceededError(
                action,
                {"max_requests": max_requests, "window_minutes": window_minutes},
            )
