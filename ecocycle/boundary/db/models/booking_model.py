"""
Booking ORM model.

Pickup requests from a user, optionally assigned to a collector.
Deleting a booking only stamps deleted_at so the audit trail survives.

Dependencies: sqlalchemy, ecocycle.boundary.db.base
System role: Pickup scheduling persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Enum, Float, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ecocycle.boundary.db.base import Base, TimestampMixin, UUIDMixin


class BookingStatus(str, enum.Enum):
    """
    Pickup lifecycle states.

    PENDING: Requested, awaiting collector confirmation
    CONFIRMED: Collector accepted the pickup
    IN_PROGRESS: Collector on the way or collecting
    COMPLETED: Items collected (terminal)
    CANCELLED: Pickup called off (terminal)
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BookingModel(Base, UUIDMixin, TimestampMixin):
    """
    Booking ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Owner user id
        collector_id: Assigned collector (SET NULL on collector deletion)
        pickup_address: Where to collect
        pickup_date: When to collect (timezone-aware)
        items_description: Free-text description of the items
        estimated_weight: Estimated weight in kg
        notes: Extra instructions
        eco_coins_earned: Coins credited for the pickup
        status: BookingStatus value
        deleted_at: Soft-delete timestamp (None while visible)
        collector: Assigned CollectorModel
    """

    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("eco_coins_earned >= 0", name="check_booking_eco_coins_earned_positive"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    collector_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("collectors.id", ondelete="SET NULL"),
        nullable=True,
    )

    pickup_address: Mapped[str] = mapped_column(Text, nullable=False)
    pickup_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    items_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    estimated_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    eco_coins_earned: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    status: Mapped[BookingStatus] = mapped_column(
        Enum(
            BookingStatus,
            native_enum=False,
            length=32,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=BookingStatus.PENDING,
    )

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        index=True,
    )

    # Relationships
    collector = relationship(
        "CollectorModel",
        back_populates="bookings",
        foreign_keys=[collector_id],
        lazy="selectin",
    )
