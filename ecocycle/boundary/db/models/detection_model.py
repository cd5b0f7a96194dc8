"""
Waste detection ORM model.

One row per recorded classification. Inserting a row always happens in
the same transaction as the matching profile increments.

Dependencies: sqlalchemy, ecocycle.boundary.db.base
System role: Detection history persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Enum, Float, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ecocycle.boundary.db.base import Base, UUIDMixin, utcnow


class HazardLevel(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class WasteDetectionModel(Base, UUIDMixin):
    """
    Waste detection ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Owner user id
        detected_item: Item name
        category: Waste category
        hazard_level: HazardLevel value
        disposal_method: Disposal instructions
        image_url: Uploaded photo URL
        eco_coins_earned: Coins credited (>= 0)
        weight_kg: Estimated weight
        co2_saved_kg: Estimated CO2 saved
        detected_at: Detection timestamp (UTC)
    """

    __tablename__ = "waste_detections"
    __table_args__ = (
        CheckConstraint("eco_coins_earned >= 0", name="check_detection_eco_coins_earned_positive"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    detected_item: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    hazard_level: Mapped[HazardLevel] = mapped_column(
        Enum(
            HazardLevel,
            native_enum=False,
            length=16,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    disposal_method: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    eco_coins_earned: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    co2_saved_kg: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    detected_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )
