"""
Profile API endpoints.

Routes:
- GET /profile - Current user's profile (created on first access)
- PUT /profile - Partial profile update
- GET /profile/level - Gamification level and progress

Dependencies: ecocycle.application.services, ecocycle.models
System role: Profile HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from ecocycle.api.deps import AuthUser, get_current_user, get_profile_service
from ecocycle.api.routers.router_utils import handle_service_errors
from ecocycle.application.services import ProfileService
from ecocycle.models.profile import LevelResponse, ProfileResponse, ProfileUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
@handle_service_errors
async def get_profile(
    user: AuthUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Get the authenticated user's profile.

    A profile with zeroed totals is created the first time a user asks
    for it.
    """
    profile = await profile_service.get_or_create_profile(user.user_id, email=user.email)
    return ProfileResponse(**profile)


@router.put("", response_model=ProfileResponse)
@handle_service_errors
async def update_profile(
    request: ProfileUpdateRequest,
    user: AuthUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Update profile fields.

    Args:
        request: Fields to change; omitted fields are left untouched
        user: Authenticated user
        profile_service: Injected ProfileService

    Returns:
        ProfileResponse: Profile after the update

    Raises:
        HTTPException(422): Invalid field values
    """
    logger.info(
        "Updating profile",
        extra={"user_id": str(user.user_id), "fields": sorted(request.model_fields_set)},
    )
    profile = await profile_service.update_profile(user.user_id, request)
    return ProfileResponse(**profile)


@router.get("/level", response_model=LevelResponse)
@handle_service_errors
async def get_level(
    user: AuthUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> LevelResponse:
    await profile_service.get_or_create_profile(user.user_id, email=user.email)
    return LevelResponse(**await profile_service.get_level(user.user_id))
