"""
Audit log and rate limit CRUD operations.

Dependencies: sqlalchemy, ecocycle.boundary.db.models
System role: Audit trail writes and quota bucket maintenance
"""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.boundary.db.models.audit_model import AuditLogModel, RateLimitModel
from ecocycle.boundary.db.CRUD.base_crud import BaseCRUD


class AuditLogCRUD(BaseCRUD[AuditLogModel]):
    """CRUD operations for AuditLogModel."""

    def __init__(self) -> None:
        """Initialize AuditLogCRUD with AuditLogModel."""
        super().__init__(AuditLogModel)

    async def record(
        self,
        session: AsyncSession,
        user_id: UUID | None,
        action: str,
        table_name: str,
        record_id: UUID | None = None,
        new_data: dict[str, Any] | None = None,
        old_data: dict[str, Any] | None = None,
    ) -> AuditLogModel:
        """
        Append one audit row in the caller's transaction.

        Args:
            session: Async database session
            user_id: Acting user
            action: Action name, e.g. CREATE_WASTE_DETECTION
            table_name: Affected table
            record_id: Affected row
            new_data: JSON-serialisable summary of the change
            old_data: JSON-serialisable snapshot before the change

        Returns:
            Created AuditLogModel
        """
        return await self.create(
            session,
            user_id=user_id,
            action=action,
            table_name=table_name,
            record_id=record_id,
            new_data=new_data,
            old_data=old_data,
        )

    async def get_by_user_id(
        self,
        session: AsyncSession,
        user_id: UUID,
        action: str | None = None,
    ) -> Sequence[AuditLogModel]:
        stmt = select(AuditLogModel).where(AuditLogModel.user_id == user_id)
        if action:
            stmt = stmt.where(AuditLogModel.action == action)
        stmt = stmt.order_by(AuditLogModel.created_at.desc())
        result = await session.execute(stmt)
        return result.scalars().all()


class RateLimitCRUD(BaseCRUD[RateLimitModel]):
    """
    CRUD operations for RateLimitModel.

    Buckets are keyed by (user_id, action, window_start) where
    window_start is a minute boundary.
    """

    def __init__(self) -> None:
        """Initialize RateLimitCRUD with RateLimitModel."""
        super().__init__(RateLimitModel)

    async def delete_before(self, session: AsyncSession, cutoff: datetime) -> int:
        """Drop every bucket older than ``cutoff``; returns rows removed."""
        stmt = delete(RateLimitModel).where(RateLimitModel.window_start < cutoff)
        result = await session.execute(stmt)
        return result.rowcount or 0

    async def sum_since(
        self,
        session: AsyncSession,
        user_id: UUID,
        action: str,
        since: datetime,
    ) -> int:
        stmt = select(func.coalesce(func.sum(RateLimitModel.count), 0)).where(
            RateLimitModel.user_id == user_id,
            RateLimitModel.action == action,
            RateLimitModel.window_start >= since,
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def increment(
        self,
        session: AsyncSession,
        user_id: UUID,
        action: str,
        window_start: datetime,
    ) -> None:
        """
        Add one request to the bucket for ``window_start``, creating it if needed.
        """
        stmt = (
            update(RateLimitModel)
            .where(
                RateLimitModel.user_id == user_id,
                RateLimitModel.action == action,
                RateLimitModel.window_start == window_start,
            )
            .values(count=RateLimitModel.count + 1)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        if result.rowcount == 0:
            await self.create(
                session,
                user_id=user_id,
                action=action,
                count=1,
                window_start=window_start,
            )


audit_log_crud = AuditLogCRUD()
rate_limit_crud = RateLimitCRUD()
