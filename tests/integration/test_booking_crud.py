"""
Integration tests for BookingCRUD against SQLite.

System role: Verification of ownership scoping, soft delete and upcoming/past split
"""

import uuid
from datetime import datetime, timedelta, timezone

from ecocycle.boundary.db.CRUD import booking_crud
from ecocycle.boundary.db.models import BookingStatus

NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)


async def _booking(db, user_id, days_from_now: int, status: BookingStatus = BookingStatus.PENDING):
    return await booking_crud.create(
        db,
        user_id=user_id,
        pickup_address="221B Baker Street, London",
        pickup_date=NOW + timedelta(days=days_from_now),
        status=status,
    )


class TestOwnership:
    async def test_get_owned_hides_other_users_bookings(self, test_async_db, user_id) -> None:
        booking = await _booking(test_async_db, user_id, 1)
        await test_async_db.commit()

        assert await booking_crud.get_owned(test_async_db, booking.id, user_id) is not None
        assert await booking_crud.get_owned(test_async_db, booking.id, uuid.uuid4()) is None

    async def test_listing_is_scoped_to_user(self, test_async_db, user_id) -> None:
        await _booking(test_async_db, user_id, 1)
        await _booking(test_async_db, uuid.uuid4(), 1)
        await test_async_db.commit()

        assert len(await booking_crud.get_by_user_id(test_async_db, user_id)) == 1
        assert await booking_crud.count_by_user_id(test_async_db, user_id) == 1


class TestSoftDelete:
    async def test_soft_deleted_booking_disappears(self, test_async_db, user_id) -> None:
        booking = await _booking(test_async_db, user_id, 1)
        await test_async_db.commit()

        deleted = await booking_crud.soft_delete(test_async_db, booking.id, user_id)
        await test_async_db.commit()

        assert deleted is True
        assert await booking_crud.get_owned(test_async_db, booking.id, user_id) is None
        assert await booking_crud.count_by_user_id(test_async_db, user_id) == 0
        # row is kept
        assert await booking_crud.get_by_id(test_async_db, booking.id) is not None

    async def test_second_delete_returns_false(self, test_async_db, user_id) -> None:
        booking = await _booking(test_async_db, user_id, 1)
        await booking_crud.soft_delete(test_async_db, booking.id, user_id)

        assert await booking_crud.soft_delete(test_async_db, booking.id, user_id) is False

    async def test_other_user_cannot_delete(self, test_async_db, user_id) -> None:
        booking = await _booking(test_async_db, user_id, 1)

        assert await booking_crud.soft_delete(test_async_db, booking.id, uuid.uuid4()) is False


class TestUpcomingAndPast:
    async def test_split(self, test_async_db, user_id) -> None:
        # Arrange
        soon = await _booking(test_async_db, user_id, 1)
        later = await _booking(test_async_db, user_id, 5, BookingStatus.CONFIRMED)
        done_future = await _booking(test_async_db, user_id, 3, BookingStatus.COMPLETED)
        elapsed = await _booking(test_async_db, user_id, -2)
        await test_async_db.commit()

        # Act
        upcoming = await booking_crud.get_upcoming(test_async_db, user_id, NOW)
        past = await booking_crud.get_past(test_async_db, user_id, NOW)

        # Assert
        assert [b.id for b in upcoming] == [soon.id, later.id]
        assert [b.id for b in past] == [done_future.id, elapsed.id]

    async def test_status_counts(self, test_async_db, user_id) -> None:
        await _booking(test_async_db, user_id, 1)
        await _booking(test_async_db, user_id, 2)
        await _booking(test_async_db, user_id, 3, BookingStatus.CANCELLED)
        await test_async_db.commit()

        counts = await booking_crud.get_status_counts(test_async_db, user_id)

        assert counts == {"pending": 2, "cancelled": 1}
