"""
Collector ORM model.

Pickup service providers users can book.

Dependencies: sqlalchemy, ecocycle.boundary.db.base
System role: Collector directory persistence
"""

from sqlalchemy import Boolean, Float, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ecocycle.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class CollectorModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Collector ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        name: Business name
        email: Contact email
        phone: Contact phone
        address: Depot address
        city: Operating city
        latitude, longitude: Depot coordinates
        rating: Average rating (0-5)
        specialties: Accepted waste categories
        available: Whether new bookings are accepted
        bookings: Bookings assigned to this collector

    Relationships:
        bookings: One-to-many with BookingModel (SET NULL on collector deletion)
    """

    __tablename__ = "collectors"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=4.5)
    specialties: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    bookings = relationship(
        "BookingModel",
        back_populates="collector",
        foreign_keys="BookingModel.collector_id",
    )
