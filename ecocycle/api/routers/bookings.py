"""
Booking API endpoints.

Routes:
- POST /bookings - Schedule a pickup
- GET /bookings - List bookings, newest first
- GET /bookings/upcoming - Pickups still ahead
- GET /bookings/past - Completed or elapsed pickups
- GET /bookings/{id} - Single booking
- PATCH /bookings/{id}/status - Move a booking through its lifecycle
- DELETE /bookings/{id} - Soft-delete a booking

Dependencies: ecocycle.application.services, ecocycle.models
System role: Pickup scheduling HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from ecocycle.api.deps import AuthUser, get_booking_service, get_current_user
from ecocycle.api.routers.router_utils import handle_service_errors
from ecocycle.application.services import BookingService
from ecocycle.core.exceptions import NotFoundError
from ecocycle.models.booking import (
    BookingCreate,
    BookingCreatedResponse,
    BookingResponse,
    BookingStatusUpdate,
)
from ecocycle.models.common import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginatedResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingCreatedResponse, status_code=201)
@handle_service_errors
async def create_booking(
    request: BookingCreate,
    user: AuthUser = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingCreatedResponse:
    """
    Schedule a pickup.

    Args:
        request: Address, date and optional collector, weight and category
        user: Authenticated user
        booking_service: Injected BookingService

    Returns:
        BookingCreatedResponse: Id of the pending booking

    Raises:
        HTTPException(404): Collector not found
        HTTPException(409): Collector not accepting bookings
        HTTPException(429): Weekly booking quota exhausted
    """
    logger.info(
        "Creating booking",
        extra={
            "user_id": str(user.user_id),
            "collector_id": str(request.collector_id) if request.collector_id else None,
        },
    )
    booking_id = await booking_service.create_booking(user.user_id, request)
    return BookingCreatedResponse(booking_id=booking_id)


@router.get("", response_model=PaginatedResponse[BookingResponse])
@handle_service_errors
async def list_bookings(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user: AuthUser = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> PaginatedResponse[BookingResponse]:
    data = await booking_service.list_bookings(user.user_id, page=page, limit=limit)
    return PaginatedResponse[BookingResponse](**data)


@router.get("/upcoming", response_model=list[BookingResponse])
@handle_service_errors
async def list_upcoming_bookings(
    user: AuthUser = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> list[BookingResponse]:
    """Bookings whose pickup date has not passed and that are not completed, soonest first."""
    return [BookingResponse(**b) for b in await booking_service.list_upcoming(user.user_id)]


@router.get("/past", response_model=list[BookingResponse])
@handle_service_errors
async def list_past_bookings(
    user: AuthUser = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> list[BookingResponse]:
    return [BookingResponse(**b) for b in await booking_service.list_past(user.user_id)]


@router.get("/{booking_id}", response_model=BookingResponse)
@handle_service_errors
async def get_booking(
    booking_id: UUID,
    user: AuthUser = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    return BookingResponse(**await booking_service.get_booking(user.user_id, booking_id))


@router.patch("/{booking_id}/status", response_model=BookingResponse)
@handle_service_errors
async def update_booking_status(
    booking_id: UUID,
    request: BookingStatusUpdate,
    user: AuthUser = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    """
    Change a booking's status.

    Raises:
        HTTPException(404): Booking not found
        HTTPException(409): Transition not allowed from the current status
        HTTPException(400): Unknown status
    """
    booking = await booking_service.update_status(user.user_id, booking_id, request.status)
    return BookingResponse(**booking)


@router.delete("/{booking_id}", status_code=204)
@handle_service_errors
async def delete_booking(
    booking_id: UUID,
    user: AuthUser = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> None:
    """
    Soft-delete a booking.

    The row is kept for the audit trail but no longer listed.

    Raises:
        HTTPException(404): Booking not found or already deleted
    """
    deleted = await booking_service.soft_delete_booking(user.user_id, booking_id)
    if not deleted:
        raise NotFoundError("Booking not found", {"booking_id": str(booking_id)})
