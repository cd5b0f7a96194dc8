"""
Statistics service orchestrator.

Leaderboard ranking and per-user aggregates.

Dependencies: ecocycle.boundary.db.CRUD
System role: Read-model use cases for rankings and statistics
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.application.services.service_utils import read_with_retry
from ecocycle.boundary.db.base import ensure_utc
from ecocycle.boundary.db.CRUD.booking_crud import booking_crud
from ecocycle.boundary.db.CRUD.detection_crud import waste_detection_crud
from ecocycle.boundary.db.CRUD.profile_crud import profile_crud
from ecocycle.boundary.db.CRUD.reward_crud import reward_redemption_crud
from ecocycle.boundary.db.models.booking_model import BookingModel
from ecocycle.models.common import Pagination, page_offset

logger = logging.getLogger(__name__)


class StatisticsService:
    """Statistics service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_leaderboard(self, page: int = 1, limit: int = 50) -> dict[str, Any]:
        """
        Rank profiles by eco_coins, then total_items_recycled.

        Ranks are 1-based and continue across pages.

        Returns:
            dict: items (with rank) plus pagination
        """
        offset = page_offset(page, limit)
        profiles = await read_with_retry(
            self.db,
            "get_leaderboard",
            lambda: profile_crud.get_leaderboard(self.db, limit=limit, offset=offset),
        )
        total = await profile_crud.count(self.db)
        items = [
            {
                "rank": offset + index + 1,
                "user_id": p.user_id,
                "full_name": p.full_name,
                "avatar_url": p.avatar_url,
                "eco_coins": p.eco_coins,
                "total_items_recycled": p.total_items_recycled,
                "total_co2_saved": round(float(p.total_co2_saved), 2),
            }
            for index, p in enumerate(profiles)
        ]
        return {"items": items, "pagination": Pagination.build(page, limit, total).model_dump()}

    async def get_user_statistics(self, user_id: UUID) -> dict[str, Any]:
        """
        Aggregate a user's activity.

        Returns:
            dict: total_detections, total_bookings, total_redemptions,
            categories_detected, most_detected_category,
            avg_coins_per_detection (0 when none), last_detection_date
        """
        aggregates = await waste_detection_crud.get_user_aggregates(self.db, user_id)
        category_counts = await waste_detection_crud.get_category_counts(self.db, user_id)
        total_bookings = await booking_crud.count(self.db, BookingModel.user_id == user_id)
        total_redemptions = await reward_redemption_crud.count_by_user_id(self.db, user_id)

        return {
            "total_detections": aggregates["total"],
            "total_bookings": total_bookings,
            "total_redemptions": total_redemptions,
            "categories_detected": sorted(category for category, _ in category_counts),
            "most_detected_category": category_counts[0][0] if category_counts else None,
            "avg_coins_per_detection": round(aggregates["avg_coins"], 2),
            "last_detection_date": ensure_utc(aggregates["last_detected_at"]),
        }
