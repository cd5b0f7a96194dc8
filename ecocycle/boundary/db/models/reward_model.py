"""
Reward and redemption ORM models.

Dependencies: sqlalchemy, ecocycle.boundary.db.base
System role: Reward catalog and redemption history persistence
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ecocycle.boundary.db.base import Base, CreatedAtMixin, UUIDMixin, utcnow


class RewardModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Reward ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        name: Reward title
        description: Longer description
        category: Reward grouping (e.g. "Discount", "Donation")
        coins_required: Cost in EcoCoins (> 0)
        discount_value: Display value such as "20% off"
        icon: Icon name
        active: Whether the reward can be redeemed
    """

    __tablename__ = "rewards"
    __table_args__ = (
        CheckConstraint("coins_required > 0", name="check_coins_required_positive"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    coins_required: Mapped[int] = mapped_column(Integer, nullable=False)
    discount_value: Mapped[str | None] = mapped_column(String(100), nullable=True)
    icon: Mapped[str | None] = mapped_column(String(100), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class RewardRedemptionModel(Base, UUIDMixin):
    """
    Reward redemption ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Redeeming user
        reward_id: Redeemed reward
        coins_spent: EcoCoins deducted
        redeemed_at: Redemption timestamp (UTC)
        reward: Redeemed RewardModel
    """

    __tablename__ = "reward_redemptions"

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    reward_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("rewards.id"),
        nullable=False,
    )
    coins_spent: Mapped[int] = mapped_column(Integer, nullable=False)
    redeemed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    reward = relationship("RewardModel", lazy="joined")
