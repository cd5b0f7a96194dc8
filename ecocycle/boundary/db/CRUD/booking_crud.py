"""
Booking CRUD operations.

Soft-deleted bookings are invisible to every query here, and every
query is scoped to the owning user.

Dependencies: sqlalchemy, ecocycle.boundary.db.models
System role: Pickup scheduling persistence
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.boundary.db.base import utcnow
from ecocycle.boundary.db.models.booking_model import BookingModel, BookingStatus
from ecocycle.boundary.db.CRUD.base_crud import BaseCRUD


class BookingCRUD(BaseCRUD[BookingModel]):
    """CRUD operations for BookingModel."""

    def __init__(self) -> None:
        """Initialize BookingCRUD with BookingModel."""
        super().__init__(BookingModel)

    def _visible(self, user_id: UUID):
        return (BookingModel.user_id == user_id, BookingModel.deleted_at.is_(None))

    async def get_owned(
        self,
        session: AsyncSession,
        booking_id: UUID,
        user_id: UUID,
        for_update: bool = False,
    ) -> BookingModel | None:
        """
        Retrieve a visible booking belonging to ``user_id``.

        Args:
            session: Async database session
            booking_id: Booking UUID
            user_id: Owner user id
            for_update: Lock the row until commit

        Returns:
            BookingModel if found and owned, None otherwise
        """
        stmt = (
            select(BookingModel)
            .where(BookingModel.id == booking_id, *self._visible(user_id))
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user_id(
        self,
        session: AsyncSession,
        user_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[BookingModel]:
        """Visible bookings for a user, newest first."""
        stmt = select(BookingModel).where(*self._visible(user_id)).order_by(BookingModel.created_at.desc())
        return await self._scalars(session, self._page(stmt, limit, offset))

    async def count_by_user_id(self, session: AsyncSession, user_id: UUID) -> int:
        return await self.count(session, *self._visible(user_id))

    async def get_upcoming(
        self,
        session: AsyncSession,
        user_id: UUID,
        now: datetime,
    ) -> Sequence[BookingModel]:
        """Pickups at or after ``now`` that are not completed, soonest first."""
        stmt = (
            select(BookingModel)
            .where(
                *self._visible(user_id),
                BookingModel.pickup_date >= now,
                BookingModel.status != BookingStatus.COMPLETED,
            )
            .order_by(BookingModel.pickup_date.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_past(
        self,
        session: AsyncSession,
        user_id: UUID,
        now: datetime,
    ) -> Sequence[BookingModel]:
        """Completed pickups or pickups before ``now``, latest first."""
        stmt = (
            select(BookingModel)
            .where(
                *self._visible(user_id),
                or_(
                    BookingModel.status == BookingStatus.COMPLETED,
                    BookingModel.pickup_date < now,
                ),
            )
            .order_by(BookingModel.pickup_date.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_status_counts(self, session: AsyncSession, user_id: UUID) -> dict[str, int]:
        stmt = (
            select(BookingModel.status, func.count(BookingModel.id))
            .where(*self._visible(user_id))
            .group_by(BookingModel.status)
        )
        result = await session.execute(stmt)
        return {BookingStatus(status).value: int(n) for status, n in result.all()}

    async def soft_delete(self, session: AsyncSession, booking_id: UUID, user_id: UUID) -> bool:
        """
        Stamp deleted_at on an owned, visible booking.

        Returns:
            True if a row was hidden, False if not found, not owned or
            already deleted
        """
        now = utcnow()
        stmt = (
            update(BookingModel)
            .where(BookingModel.id == booking_id, *self._visible(user_id))
            .values(deleted_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0


booking_crud = BookingCRUD()
