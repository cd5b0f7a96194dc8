"""
Profile ORM model.

One row per authenticated user holding contact details and the running
EcoCoin, item and CO2 totals.

Dependencies: sqlalchemy, ecocycle.boundary.db.base
System role: User balance and impact persistence
"""

import uuid

from sqlalchemy import CheckConstraint, Float, Integer, JSON, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ecocycle.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ProfileModel(Base, UUIDMixin, TimestampMixin):
    """
    Profile ORM model.

    Totals are only ever changed through atomic increments in the
    detection and redemption transactions. CHECK constraints keep them
    non-negative whatever the caller does.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Identity provider user id (unique)
        email: Contact email
        full_name: Display name
        avatar_url: Avatar image URL
        phone: Contact phone
        address: Default pickup address
        city: City used for collector matching
        eco_coins: Spendable EcoCoin balance
        total_items_recycled: Recorded detections
        total_co2_saved: Estimated CO2 saved in kg
        badges: Earned badge names
    """

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("eco_coins >= 0", name="check_eco_coins_positive"),
        CheckConstraint("total_items_recycled >= 0", name="check_total_items_positive"),
        CheckConstraint("total_co2_saved >= 0", name="check_co2_positive"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        unique=True,
        index=True,
    )

    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    full_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)

    eco_coins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_items_recycled: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_co2_saved: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        doc="Estimated CO2 saved in kg",
    )

    badges: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
