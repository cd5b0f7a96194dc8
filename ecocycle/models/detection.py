"""
Waste detection domain models and schemas.

Dependencies: pydantic
System role: Detection API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

WasteCategory = Literal[
    "Smartphones",
    "Laptops",
    "Tablets",
    "Batteries",
    "Cables",
    "Chargers",
    "Gaming",
    "Audio",
    "Computer Parts",
    "Storage",
]
HazardLevelName = Literal["low", "medium", "high", "critical"]


class WasteDetectionCreate(BaseModel):
    """Payload recorded by the atomic detection write."""

    detected_item: str = Field(..., min_length=1, max_length=200)
    category: WasteCategory
    hazard_level: HazardLevelName
    disposal_method: str | None = Field(None, max_length=1000)
    image_url: HttpUrl
    eco_coins_earned: int = Field(..., ge=0, le=10000)
    weight_kg: float = Field(..., ge=0, le=1000)
    co2_saved_kg: float = Field(..., ge=0, le=10000)


class SortingSuggestionSchema(BaseModel):
    steps: list[str]
    safety: list[str]
    donate_or_resell: list[str] = Field(default_factory=list)


class ClassificationResponse(BaseModel):
    """Result of the simulated classifier, plus the recorded detection when saved."""

    item: str
    category: str
    confidence: int
    hazard_level: str
    eco_coins: int
    disposal_method: str
    materials: list[str]
    recycling_tips: list[str]
    weight_kg: float
    co2_saved_kg: float
    sorting: SortingSuggestionSchema
    detection_id: uuid.UUID | None = None


class DetectionCreatedResponse(BaseModel):
    detection_id: uuid.UUID


class DetectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    detected_item: str
    category: str
    hazard_level: str
    disposal_method: str | None
    image_url: str
    eco_coins_earned: int
    weight_kg: float | None
    co2_saved_kg: float
    detected_at: datetime
