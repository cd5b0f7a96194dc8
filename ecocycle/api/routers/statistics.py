"""
Leaderboard and statistics API endpoints.

Routes:
- GET /leaderboard - Profiles ranked by EcoCoins
- GET /statistics/me - The user's activity aggregates

Dependencies: ecocycle.application.services, ecocycle.models
System role: Read-model HTTP API
"""

from fastapi import APIRouter, Depends, Query

from ecocycle.api.deps import AuthUser, get_current_user, get_statistics_service
from ecocycle.api.routers.router_utils import handle_service_errors
from ecocycle.application.services import StatisticsService
from ecocycle.models.common import MAX_PAGE_SIZE, PaginatedResponse
from ecocycle.models.statistics import LeaderboardEntry, UserStatisticsResponse

LEADERBOARD_PAGE_SIZE = 50

router = APIRouter(tags=["statistics"])


@router.get("/leaderboard", response_model=PaginatedResponse[LeaderboardEntry])
@handle_service_errors
async def get_leaderboard(
    page: int = Query(1, ge=1),
    limit: int = Query(LEADERBOARD_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user: AuthUser = Depends(get_current_user),
    statistics_service: StatisticsService = Depends(get_statistics_service),
) -> PaginatedResponse[LeaderboardEntry]:
    """
    Rank users by EcoCoins, ties broken by items recycled.

    Ranks continue across pages: page 2 with limit 50 starts at rank 51.
    """
    data = await statistics_service.get_leaderboard(page=page, limit=limit)
    return PaginatedResponse[LeaderboardEntry](**data)


@router.get("/statistics/me", response_model=UserStatisticsResponse)
@handle_service_errors
async def get_my_statistics(
    user: AuthUser = Depends(get_current_user),
    statistics_service: StatisticsService = Depends(get_statistics_service),
) -> UserStatisticsResponse:
    return UserStatisticsResponse(**await statistics_service.get_user_statistics(user.user_id))
