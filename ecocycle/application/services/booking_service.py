"""
Booking service orchestrator.

Creates pickup bookings, splits them into upcoming and past, moves them
through their status lifecycle and soft-deletes them.

Dependencies: ecocycle.boundary.db.CRUD, ecocycle.core, ecocycle.configs
System role: Pickup scheduling use case orchestration
"""

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.application.services.rate_limit_service import BOOKING, RateLimitService
from ecocycle.application.services.service_utils import parse_input, transaction
from ecocycle.boundary.db.base import ensure_utc, utcnow
from ecocycle.boundary.db.CRUD.audit_crud import audit_log_crud
from ecocycle.boundary.db.CRUD.booking_crud import booking_crud
from ecocycle.boundary.db.CRUD.collector_crud import collector_crud
from ecocycle.boundary.db.models.booking_model import BookingModel, BookingStatus
from ecocycle.configs import get_settings
from ecocycle.configs.limits import LimitSettings
from ecocycle.core.exceptions import BookingConflictError, NotFoundError, ValidationError
from ecocycle.core.impact import estimate_weight_kg, predict_eco_coins
from ecocycle.core.security import sanitize_input
from ecocycle.models.booking import BookingCreate
from ecocycle.models.common import Pagination, page_offset

logger = logging.getLogger(__name__)

BOOKING_WINDOW_MINUTES = 10080

ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.IN_PROGRESS, BookingStatus.CANCELLED}),
    BookingStatus.IN_PROGRESS: frozenset({BookingStatus.COMPLETED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def booking_to_dict(booking: BookingModel) -> dict[str, Any]:
    collector = booking.collector
    return {
        "id": booking.id,
        "collector_id": booking.collector_id,
        "collector": (
            {
                "id": collector.id,
                "name": collector.name,
                "phone": collector.phone,
                "rating": collector.rating,
            }
            if collector is not None
            else None
        ),
        "pickup_address": booking.pickup_address,
        "pickup_date": ensure_utc(booking.pickup_date),
        "items_description": booking.items_description,
        "estimated_weight": booking.estimated_weight,
        "notes": booking.notes,
        "eco_coins_earned": booking.eco_coins_earned,
        "status": BookingStatus(booking.status).value,
        "created_at": ensure_utc(booking.created_at),
        "updated_at": ensure_utc(booking.updated_at),
    }


class BookingService:
    """Booking service orchestrator."""

    def __init__(self, db: AsyncSession, limits: LimitSettings | None = None) -> None:
        """
        Initialize booking service.

        Args:
            db: Async SQLAlchemy session
            limits: Quota settings (defaults to application settings)
        """
        self.db = db
        self.limits = limits or get_settings().limits
        self.rate_limits = RateLimitService(db)

    async def create_booking(self, user_id: UUID, data: BookingCreate | dict) -> UUID:
        """
        Create a pending pickup booking.

        When a category is given, eco_coins_earned is the predicted coin
        value for that category and weight (estimated when not supplied).

        Args:
            user_id: Authenticated user id
            data: Booking payload

        Returns:
            UUID: Created booking id

        Raises:
            ValidationError: Payload fails validation
            RateLimitExceededError: Weekly booking quota exhausted
            NotFoundError: Collector does not exist
            BookingConflictError: Collector not accepting bookings
        """
        payload = parse_input(BookingCreate, data)
        await self.rate_limits.enforce(
            user_id,
            BOOKING,
            self.limits.max_bookings_per_week,
            BOOKING_WINDOW_MINUTES,
        )

        eco_coins = 0
        if payload.category:
            weight = payload.estimated_weight
            if weight is None:
                weight = estimate_weight_kg(payload.category).weight_kg
            eco_coins = predict_eco_coins(payload.category, weight)

        async with transaction(self.db, "create_booking", user_id=str(user_id)):
            if payload.collector_id is not None:
                collector = await collector_crud.get_by_id(self.db, payload.collector_id)
                if collector is None:
                    raise NotFoundError("Collector not found", {"collector_id": str(payload.collector_id)})
                if not collector.available:
                    raise BookingConflictError(
                        "Collector is not accepting bookings",
                        {"collector_id": str(payload.collector_id)},
                    )

            booking = await booking_crud.create(
                self.db,
                user_id=user_id,
                collector_id=payload.collector_id,
                pickup_address=sanitize_input(payload.pickup_address),
                pickup_date=payload.pickup_date,
                items_description=sanitize_input(payload.items_description) if payload.items_description else None,
                estimated_weight=payload.estimated_weight,
                notes=sanitize_input(payload.notes) if payload.notes else None,
                eco_coins_earned=eco_coins,
                status=BookingStatus.PENDING,
            )

        logger.info(
            "Booking created",
            extra={"user_id": str(user_id), "booking_id": str(booking.id), "eco_coins_earned": eco_coins},
        )
        return booking.id

    async def get_booking(self, user_id: UUID, booking_id: UUID) -> dict[str, Any]:
        booking = await booking_crud.get_owned(self.db, booking_id, user_id)
        if booking is None:
            raise NotFoundError("Booking not found", {"booking_id": str(booking_id)})
        return booking_to_dict(booking)

    async def list_bookings(self, user_id: UUID, page: int = 1, limit: int = 20) -> dict[str, Any]:
        """
        Get a user's visible bookings, newest first.

        Returns:
            dict: items (with collector summary) plus pagination
        """
        bookings = await booking_crud.get_by_user_id(
            self.db,
            user_id,
            limit=limit,
            offset=page_offset(page, limit),
        )
        total = await booking_crud.count_by_user_id(self.db, user_id)
        return {
            "items": [booking_to_dict(b) for b in bookings],
            "pagination": Pagination.build(page, limit, total).model_dump(),
        }

    async def list_upcoming(self, user_id: UUID, now: datetime | None = None) -> list[dict[str, Any]]:
        """Bookings with pickup_date >= now that are not completed."""
        bookings = await booking_crud.get_upcoming(self.db, user_id, ensure_utc(now) or utcnow())
        return [booking_to_dict(b) for b in bookings]

    async def list_past(self, user_id: UUID, now: datetime | None = None) -> list[dict[str, Any]]:
        """Completed bookings and bookings with pickup_date < now."""
        bookings = await booking_crud.get_past(self.db, user_id, ensure_utc(now) or utcnow())
        return [booking_to_dict(b) for b in bookings]

    async def update_status(self, user_id: UUID, booking_id: UUID, status: str) -> dict[str, Any]:
        """
        Move a booking to ``status``.

        Allowed: pending -> confirmed | cancelled, confirmed -> in_progress |
        cancelled, in_progress -> completed. completed and cancelled are
        terminal.

        Raises:
            ValidationError: Unknown status
            NotFoundError: Booking not found or not owned
            BookingConflictError: Transition not allowed
        """
        try:
            target = BookingStatus(status)
        except ValueError as e:
            raise ValidationError(f"Invalid booking status: {status}", field="status") from e

        async with transaction(self.db, "update_booking_status", booking_id=str(booking_id)):
            booking = await booking_crud.get_owned(self.db, booking_id, user_id, for_update=True)
            if booking is None:
                raise NotFoundError("Booking not found", {"booking_id": str(booking_id)})

            current = BookingStatus(booking.status)
            if not can_transition(current, target):
                raise BookingConflictError(
                    f"Cannot change booking status from {current.value} to {target.value}",
                    {"current": current.value, "requested": target.value},
                )

            booking.status = target
            await self.db.flush()
            await audit_log_crud.record(
                self.db,
                user_id=user_id,
                action="UPDATE_BOOKING_STATUS",
                table_name="bookings",
                record_id=booking.id,
                old_data={"status": current.value},
                new_data={"status": target.value},
            )

        logger.info(
            "Booking status updated",
            extra={"booking_id": str(booking_id), "from_status": current.value, "to_status": target.value},
        )
        return booking_to_dict(booking)

    async def soft_delete_booking(self, user_id: UUID, booking_id: UUID) -> bool:
        """
        Hide a booking while keeping it for the audit trail.

        Returns:
            bool: True if hidden, False if not found, not owned or already deleted
        """
        async with transaction(self.db, "soft_delete_booking", booking_id=str(booking_id)):
            deleted = await booking_crud.soft_delete(self.db, booking_id, user_id)
            if deleted:
                await audit_log_crud.record(
                    self.db,
                    user_id=user_id,
                    action="SOFT_DELETE_BOOKING",
                    table_name="bookings",
                    record_id=booking_id,
                )

        if deleted:
            logger.info("Booking soft-deleted", extra={"user_id": str(user_id), "booking_id": str(booking_id)})
        return deleted
