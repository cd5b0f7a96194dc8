"""
Collector API endpoints.

Routes:
- GET /collectors - Available collectors, best rated first
- GET /collectors/{id} - Single collector

Dependencies: ecocycle.application.services, ecocycle.models
System role: Collector directory HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from ecocycle.api.deps import AuthUser, get_collector_service, get_current_user
from ecocycle.api.routers.router_utils import handle_service_errors
from ecocycle.application.services import CollectorService
from ecocycle.models.booking import CollectorResponse

router = APIRouter(prefix="/collectors", tags=["collectors"])


@router.get("", response_model=list[CollectorResponse])
@handle_service_errors
async def list_collectors(
    city: str | None = Query(None, max_length=100),
    specialty: str | None = Query(None, max_length=100),
    user: AuthUser = Depends(get_current_user),
    collector_service: CollectorService = Depends(get_collector_service),
) -> list[CollectorResponse]:
    """
    List collectors currently accepting bookings.

    Args:
        city: Only collectors in this city (case-insensitive)
        specialty: Only collectors handling this category
    """
    collectors = await collector_service.list_available_collectors(city=city, specialty=specialty)
    return [CollectorResponse(**c) for c in collectors]


@router.get("/{collector_id}", response_model=CollectorResponse)
@handle_service_errors
async def get_collector(
    collector_id: UUID,
    user: AuthUser = Depends(get_current_user),
    collector_service: CollectorService = Depends(get_collector_service),
) -> CollectorResponse:
    return CollectorResponse(**await collector_service.get_collector(collector_id))
