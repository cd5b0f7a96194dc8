"""
Profile domain models and schemas.

Dependencies: pydantic
System role: Profile API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl

PHONE_PATTERN = r"^\+?[1-9]\d{1,14}$"


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    full_name: str | None = Field(None, min_length=2, max_length=100, description="Display name")
    email: EmailStr | None = None
    phone: str | None = Field(None, pattern=PHONE_PATTERN, description="E.164-style phone number")
    address: str | None = Field(None, max_length=500)
    city: str | None = Field(None, max_length=100)
    avatar_url: HttpUrl | None = None


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    email: str | None
    full_name: str | None
    avatar_url: str | None
    phone: str | None
    address: str | None
    city: str | None
    eco_coins: int
    total_items_recycled: int
    total_co2_saved: float
    badges: list[str]
    created_at: datetime
    updated_at: datetime


class LevelResponse(BaseModel):
    """Level progress for the current balance."""

    eco_coins: int
    level: str
    next_level: str
    next_at: int
    progress: float = Field(ge=0, le=1)
