"""
Leaderboard, statistics and dashboard schemas.

Dependencies: pydantic
System role: Read-model API contracts
"""

import uuid
from datetime import date, datetime

from pydantic import BaseModel

from ecocycle.models.detection import SortingSuggestionSchema
from ecocycle.models.profile import LevelResponse


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: uuid.UUID
    full_name: str | None
    avatar_url: str | None
    eco_coins: int
    total_items_recycled: int
    total_co2_saved: float


class UserStatisticsResponse(BaseModel):
    total_detections: int
    total_bookings: int
    total_redemptions: int
    categories_detected: list[str]
    most_detected_category: str | None
    avg_coins_per_detection: float
    last_detection_date: datetime | None


class TrendPoint(BaseModel):
    date: date
    items: int
    eco_coins: int
    co2: float


class CategorySlice(BaseModel):
    category: str
    count: int


class MonthlyComparison(BaseModel):
    this_month: int
    last_month: int
    growth_percent: float


class ImpactSummary(BaseModel):
    total_items: int
    total_co2_saved: float
    water_saved_liters: float
    energy_saved_kwh: float
    landfill_diverted_kg: float
    trees_equivalent: float


class DashboardResponse(BaseModel):
    time_range: str
    trend: list[TrendPoint]
    categories: list[CategorySlice]
    monthly: MonthlyComparison
    booking_status: dict[str, int]
    impact: ImpactSummary
    level: LevelResponse


class ImpactEstimateResponse(BaseModel):
    category: str
    item_name: str | None
    weight_kg: float
    weight_confidence: float
    co2_saved_kg: float
    predicted_eco_coins: int
    trees_equivalent: float
    energy_kwh: float
    water_liters: int
    sorting: SortingSuggestionSchema
