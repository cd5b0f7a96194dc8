"""
Booking and collector domain models and schemas.

Dependencies: pydantic
System role: Pickup scheduling API contracts
"""

import uuid
from datetime import datetime

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from ecocycle.models.detection import WasteCategory


class BookingCreate(BaseModel):
    """Pickup request. pickup_date must carry a UTC offset."""

    collector_id: uuid.UUID | None = None
    pickup_address: str = Field(..., min_length=10, max_length=500)
    pickup_date: AwareDatetime
    items_description: str | None = Field(None, max_length=1000)
    estimated_weight: float | None = Field(None, ge=0, le=10000)
    notes: str | None = Field(None, max_length=1000)
    category: WasteCategory | None = Field(
        None, description="Main item category, used to predict EcoCoins"
    )


class BookingStatusUpdate(BaseModel):
    status: str = Field(..., description="Target status")


class CollectorSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    phone: str
    rating: float


class BookingResponse(BaseModel):
    id: uuid.UUID
    collector_id: uuid.UUID | None
    collector: CollectorSummary | None
    pickup_address: str
    pickup_date: datetime
    items_description: str | None
    estimated_weight: float | None
    notes: str | None
    eco_coins_earned: int
    status: str
    created_at: datetime
    updated_at: datetime


class BookingCreatedResponse(BaseModel):
    booking_id: uuid.UUID


class CollectorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    phone: str
    address: str | None
    city: str | None
    latitude: float | None
    longitude: float | None
    rating: float
    specialties: list[str]
    available: bool
