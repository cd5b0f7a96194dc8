"""
Reward API endpoints.

Routes:
- GET /rewards - Active rewards, cheapest first
- POST /rewards/redeem - Redeem a reward for EcoCoins
- GET /rewards/redemptions - The user's redemption history

Dependencies: ecocycle.application.services, ecocycle.models
System role: Rewards HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from ecocycle.api.deps import AuthUser, get_current_user, get_reward_service
from ecocycle.api.routers.router_utils import handle_service_errors
from ecocycle.application.services import RewardService
from ecocycle.models.common import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginatedResponse
from ecocycle.models.reward import (
    RedeemRewardRequest,
    RedemptionCreatedResponse,
    RedemptionResponse,
    RewardResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rewards", tags=["rewards"])


@router.get("", response_model=list[RewardResponse])
@handle_service_errors
async def list_rewards(
    user: AuthUser = Depends(get_current_user),
    reward_service: RewardService = Depends(get_reward_service),
) -> list[RewardResponse]:
    rewards = await reward_service.list_active_rewards()
    return [RewardResponse(**r) for r in rewards]


@router.post("/redeem", response_model=RedemptionCreatedResponse, status_code=201)
@handle_service_errors
async def redeem_reward(
    request: RedeemRewardRequest,
    user: AuthUser = Depends(get_current_user),
    reward_service: RewardService = Depends(get_reward_service),
) -> RedemptionCreatedResponse:
    """
    Redeem a reward.

    Args:
        request: Reward id and the coins to spend
        user: Authenticated user
        reward_service: Injected RewardService

    Returns:
        RedemptionCreatedResponse: Id of the new redemption

    Raises:
        HTTPException(409): Balance below coins_spent, or reward not active
        HTTPException(404): Reward or profile not found
        HTTPException(429): Daily redemption quota exhausted
    """
    logger.info(
        "Redeeming reward",
        extra={
            "user_id": str(user.user_id),
            "reward_id": str(request.reward_id),
            "coins_spent": request.coins_spent,
        },
    )
    redemption_id = await reward_service.redeem_reward(user.user_id, request.reward_id, request.coins_spent)
    return RedemptionCreatedResponse(redemption_id=redemption_id)


@router.get("/redemptions", response_model=PaginatedResponse[RedemptionResponse])
@handle_service_errors
async def list_redemptions(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user: AuthUser = Depends(get_current_user),
    reward_service: RewardService = Depends(get_reward_service),
) -> PaginatedResponse[RedemptionResponse]:
    data = await reward_service.list_redemptions(user.user_id, page=page, limit=limit)
    return PaginatedResponse[RedemptionResponse](**data)
