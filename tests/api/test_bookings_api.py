"""
Tests for the booking routes.
"""

import uuid

from ecocycle.core.exceptions import BookingConflictError
from ecocycle.models.booking import BookingCreate


def test_create_booking(client, booking_service, user_id):
    booking_id = uuid.uuid4()
    booking_service.create_booking.return_value = booking_id

    response = client.post(
        "/api/v1/bookings",
        json={
            "pickup_address": "12 MG Road, Bengaluru",
            "pickup_date": "2026-07-03T09:00:00+05:30",
            "category": "Smartphones",
        },
    )

    assert response.status_code == 201
    assert response.json() == {"booking_id": str(booking_id)}
    called_user, payload = booking_service.create_booking.await_args.args
    assert called_user == user_id
    assert isinstance(payload, BookingCreate)
    assert payload.pickup_date.utcoffset() is not None


def test_create_booking_requires_timezone(client, booking_service):
    response = client.post(
        "/api/v1/bookings",
        json={"pickup_address": "12 MG Road, Bengaluru", "pickup_date": "2026-07-03T09:00:00"},
    )

    assert response.status_code == 422
    booking_service.create_booking.assert_not_called()


def test_upcoming_is_not_a_booking_id(client, booking_service, booking_data):
    booking_service.list_upcoming.return_value = [booking_data]

    response = client.get("/api/v1/bookings/upcoming")

    assert response.status_code == 200
    assert response.json()[0]["status"] == "pending"
    booking_service.get_booking.assert_not_called()


def test_past(client, booking_service):
    booking_service.list_past.return_value = []

    response = client.get("/api/v1/bookings/past")

    assert response.status_code == 200
    assert response.json() == []


def test_update_status(client, booking_service, booking_data, user_id):
    booking_service.update_status.return_value = {**booking_data, "status": "confirmed"}

    response = client.patch(f"/api/v1/bookings/{booking_data['id']}/status", json={"status": "confirmed"})

    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"
    booking_service.update_status.assert_awaited_once_with(user_id, booking_data["id"], "confirmed")


def test_update_status_conflict(client, booking_service):
    booking_service.update_status.side_effect = BookingConflictError(
        "Cannot change booking status from pending to completed"
    )

    response = client.patch(f"/api/v1/bookings/{uuid.uuid4()}/status", json={"status": "completed"})

    assert response.status_code == 409
    assert response.json()["code"] == "BOOKING_CONFLICT"


def test_delete(client, booking_service):
    booking_service.soft_delete_booking.return_value = True

    response = client.delete(f"/api/v1/bookings/{uuid.uuid4()}")

    assert response.status_code == 204
    assert response.content == b""


def test_delete_missing(client, booking_service):
    booking_service.soft_delete_booking.return_value = False

    response = client.delete(f"/api/v1/bookings/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json()["code"] == "DATA_NOT_FOUND"


def test_invalid_booking_id(client, booking_service):
    response = client.get("/api/v1/bookings/not-a-uuid")

    assert response.status_code == 422
