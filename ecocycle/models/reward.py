"""
Reward domain models and schemas.

Dependencies: pydantic
System role: Reward and redemption API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RewardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None
    category: str
    coins_required: int
    discount_value: str | None
    icon: str | None
    active: bool


class RedeemRewardRequest(BaseModel):
    reward_id: uuid.UUID = Field(..., description="Reward to redeem")
    coins_spent: int = Field(..., ge=1, description="Coins to deduct")


class RedemptionCreatedResponse(BaseModel):
    redemption_id: uuid.UUID


class RedemptionResponse(BaseModel):
    id: uuid.UUID
    reward_id: uuid.UUID
    reward_name: str | None
    coins_spent: int
    redeemed_at: datetime
