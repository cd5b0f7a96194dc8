"""
Waste detection CRUD operations.

Provides per-user listings and the aggregates behind statistics and
dashboards.

Dependencies: sqlalchemy, ecocycle.boundary.db.models
System role: Detection history persistence
"""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.boundary.db.models.detection_model import WasteDetectionModel
from ecocycle.boundary.db.CRUD.base_crud import BaseCRUD


class WasteDetectionCRUD(BaseCRUD[WasteDetectionModel]):
    """CRUD operations for WasteDetectionModel."""

    def __init__(self) -> None:
        """Initialize WasteDetectionCRUD with WasteDetectionModel."""
        super().__init__(WasteDetectionModel)

    async def get_by_user_id(
        self,
        session: AsyncSession,
        user_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[WasteDetectionModel]:
        """A user's detections, newest first."""
        stmt = (
            select(WasteDetectionModel)
            .where(WasteDetectionModel.user_id == user_id)
            .order_by(WasteDetectionModel.detected_at.desc())
        )
        return await self._scalars(session, self._page(stmt, limit, offset))

    async def count_by_user_id(self, session: AsyncSession, user_id: UUID) -> int:
        return await self.count(session, WasteDetectionModel.user_id == user_id)

    async def get_since(
        self,
        session: AsyncSession,
        user_id: UUID,
        since: datetime,
    ) -> Sequence[WasteDetectionModel]:
        """Detections at or after ``since``, oldest first."""
        stmt = (
            select(WasteDetectionModel)
            .where(
                WasteDetectionModel.user_id == user_id,
                WasteDetectionModel.detected_at >= since,
            )
            .order_by(WasteDetectionModel.detected_at.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_between(
        self,
        session: AsyncSession,
        user_id: UUID,
        start: datetime,
        end: datetime,
    ) -> int:
        """Detections in the half-open interval [start, end)."""
        return await self.count(
            session,
            WasteDetectionModel.user_id == user_id,
            WasteDetectionModel.detected_at >= start,
            WasteDetectionModel.detected_at < end,
        )

    async def get_user_aggregates(self, session: AsyncSession, user_id: UUID) -> dict[str, Any]:
        """
        Count, average coins and latest timestamp of a user's detections.

        Returns:
            dict with total, avg_coins and last_detected_at
        """
        stmt = select(
            func.count(WasteDetectionModel.id),
            func.avg(WasteDetectionModel.eco_coins_earned),
            func.max(WasteDetectionModel.detected_at),
        ).where(WasteDetectionModel.user_id == user_id)
        total, avg_coins, last_detected_at = (await session.execute(stmt)).one()
        return {
            "total": int(total or 0),
            "avg_coins": float(avg_coins or 0),
            "last_detected_at": last_detected_at,
        }

    async def get_category_counts(self, session: AsyncSession, user_id: UUID) -> list[tuple[str, int]]:
        """
        Detections per category, most frequent first (ties by name).
        """
        count_col = func.count(WasteDetectionModel.id).label("n")
        stmt = (
            select(WasteDetectionModel.category, count_col)
            .where(WasteDetectionModel.user_id == user_id)
            .group_by(WasteDetectionModel.category)
            .order_by(count_col.desc(), WasteDetectionModel.category.asc())
        )
        result = await session.execute(stmt)
        return [(category, int(n)) for category, n in result.all()]


waste_detection_crud = WasteDetectionCRUD()
