"""
Dashboard service orchestrator.

Builds the analytics view: daily trend, category split, month over
month growth, booking status split, environmental impact and level.

Dependencies: ecocycle.boundary.db.CRUD, ecocycle.core
System role: Dashboard read model
"""

import calendar
import logging
from collections import Counter
from datetime import date, datetime, time, timedelta, timezone
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.application.services.profile_service import level_to_dict
from ecocycle.boundary.db.base import ensure_utc, utcnow
from ecocycle.boundary.db.CRUD.booking_crud import booking_crud
from ecocycle.boundary.db.CRUD.detection_crud import waste_detection_crud
from ecocycle.boundary.db.CRUD.profile_crud import profile_crud
from ecocycle.core.exceptions import NotFoundError, ValidationError
from ecocycle.core.impact import trees_equivalent

logger = logging.getLogger(__name__)

TIME_RANGES = ("7d", "30d", "3m", "6m")
DEFAULT_TIME_RANGE = "30d"

# Per-item rules of thumb
CO2_PER_ITEM_KG = 2.5
WATER_PER_ITEM_L = 1000
ENERGY_PER_ITEM_KWH = 50
LANDFILL_PER_ITEM_KG = 0.5


def subtract_months(value: datetime, months: int) -> datetime:
    """Calendar month subtraction, clamping the day to the target month's length."""
    month_index = value.month - 1 - months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def range_start(time_range: str, now: datetime) -> datetime:
    if time_range == "7d":
        return now - timedelta(days=7)
    if time_range == "30d":
        return now - timedelta(days=30)
    if time_range == "3m":
        return subtract_months(now, 3)
    if time_range == "6m":
        return subtract_months(now, 6)
    raise ValidationError(
        f"Invalid time range: {time_range}. Expected one of {', '.join(TIME_RANGES)}",
        field="time_range",
    )


def month_start(value: datetime) -> datetime:
    return datetime.combine(value.date().replace(day=1), time.min, tzinfo=timezone.utc)


def growth_percent(this_month: int, last_month: int) -> float:
    if last_month == 0:
        return 0.0
    return round((this_month - last_month) / last_month * 100, 2)


class DashboardService:
    """Dashboard service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize dashboard service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def get_dashboard(
        self,
        user_id: UUID,
        time_range: str = DEFAULT_TIME_RANGE,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """
        Build the dashboard for a user.

        Args:
            user_id: Authenticated user id
            time_range: 7d | 30d | 3m | 6m
            now: Reference time (defaults to utcnow())

        Returns:
            dict: time_range, trend, categories, monthly, booking_status,
            impact and level

        Raises:
            ValidationError: Unknown time_range
            NotFoundError: User has no profile
        """
        now = ensure_utc(now) or utcnow()
        start = range_start(time_range, now)

        profile = await profile_crud.get_by_user_id(self.db, user_id)
        if profile is None:
            raise NotFoundError("Profile not found", {"user_id": str(user_id)})

        # Whole days: the first row counts everything since midnight, not since ``start``
        first_day = start.date()
        since = datetime.combine(first_day, time.min, tzinfo=timezone.utc)
        detections = await waste_detection_crud.get_since(self.db, user_id, since)
        trend = self._build_trend(detections, first_day, now.date())

        category_counts = await waste_detection_crud.get_category_counts(self.db, user_id)

        this_month_start = month_start(now)
        last_month_start = month_start(subtract_months(this_month_start, 1))
        next_month_start = month_start(this_month_start + timedelta(days=32))
        this_month = await waste_detection_crud.count_between(self.db, user_id, this_month_start, next_month_start)
        last_month = await waste_detection_crud.count_between(self.db, user_id, last_month_start, this_month_start)

        booking_status = await booking_crud.get_status_counts(self.db, user_id)

        items = profile.total_items_recycled
        co2_total = round(float(profile.total_co2_saved), 2)

        logger.info(
            "Dashboard built",
            extra={"user_id": str(user_id), "time_range": time_range, "detections_in_range": len(detections)},
        )
        return {
            "time_range": time_range,
            "trend": trend,
            "categories": [{"category": c, "count": n} for c, n in category_counts],
            "monthly": {
                "this_month": this_month,
                "last_month": last_month,
                "growth_percent": growth_percent(this_month, last_month),
            },
            "booking_status": booking_status,
            "impact": {
                "total_items": items,
                "total_co2_saved": co2_total,
                "water_saved_liters": items * WATER_PER_ITEM_L,
                "energy_saved_kwh": items * ENERGY_PER_ITEM_KWH,
                "landfill_diverted_kg": items * LANDFILL_PER_ITEM_KG,
                "trees_equivalent": trees_equivalent(co2_total),
            },
            "level": level_to_dict(profile.eco_coins),
        }

    @staticmethod
    def _build_trend(detections, first_day: date, last_day: date) -> list[dict[str, Any]]:
        """One row per day in [first_day, last_day], empty days included."""
        items_per_day: Counter = Counter()
        coins_per_day: Counter = Counter()
        for detection in detections:
            day = ensure_utc(detection.detected_at).date()
            items_per_day[day] += 1
            coins_per_day[day] += detection.eco_coins_earned

        trend = []
        day = first_day
        while day <= last_day:
            items = items_per_day[day]
            trend.append(
                {
                    "date": day,
                    "items": items,
                    "eco_coins": coins_per_day[day],
                    "co2": round(items * CO2_PER_ITEM_KG, 2),
                }
            )
            day += timedelta(days=1)
        return trend
