"""
Reward service orchestrator.

Lists the reward catalog and redeems rewards. Redemption locks the
profile row for the balance check so two concurrent redemptions can
never spend the same coins.

Dependencies: ecocycle.boundary.db.CRUD, ecocycle.core, ecocycle.configs
System role: Reward use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.application.services.rate_limit_service import REWARD_REDEMPTION, RateLimitService
from ecocycle.application.services.service_utils import parse_input, read_with_retry, transaction
from ecocycle.boundary.db.base import ensure_utc
from ecocycle.boundary.db.CRUD.audit_crud import audit_log_crud
from ecocycle.boundary.db.CRUD.profile_crud import profile_crud
from ecocycle.boundary.db.CRUD.reward_crud import reward_crud, reward_redemption_crud
from ecocycle.boundary.db.models.reward_model import RewardModel, RewardRedemptionModel
from ecocycle.configs import get_settings
from ecocycle.configs.limits import LimitSettings
from ecocycle.core.exceptions import InsufficientCoinsError, NotFoundError, RewardUnavailableError
from ecocycle.models.common import Pagination, page_offset
from ecocycle.models.reward import RedeemRewardRequest

logger = logging.getLogger(__name__)

REDEMPTION_WINDOW_MINUTES = 1440


def reward_to_dict(reward: RewardModel) -> dict[str, Any]:
    return {
        "id": reward.id,
        "name": reward.name,
        "description": reward.description,
        "category": reward.category,
        "coins_required": reward.coins_required,
        "discount_value": reward.discount_value,
        "icon": reward.icon,
        "active": reward.active,
    }


def redemption_to_dict(redemption: RewardRedemptionModel) -> dict[str, Any]:
    return {
        "id": redemption.id,
        "reward_id": redemption.reward_id,
        "reward_name": redemption.reward.name if redemption.reward else None,
        "coins_spent": redemption.coins_spent,
        "redeemed_at": ensure_utc(redemption.redeemed_at),
    }


class RewardService:
    """Reward service orchestrator."""

    def __init__(self, db: AsyncSession, limits: LimitSettings | None = None) -> None:
        """
        Initialize reward service.

        Args:
            db: Async SQLAlchemy session
            limits: Quota settings (defaults to application settings)
        """
        self.db = db
        self.limits = limits or get_settings().limits
        self.rate_limits = RateLimitService(db)

    async def list_active_rewards(self) -> list[dict[str, Any]]:
        """Active rewards ordered by coins_required ascending."""
        rewards = await read_with_retry(self.db, "list_active_rewards", lambda: reward_crud.get_active(self.db))
        return [reward_to_dict(r) for r in rewards]

    async def redeem_reward(self, user_id: UUID, reward_id: UUID, coins_spent: int) -> UUID:
        """
        Redeem a reward against the user's EcoCoin balance.

        In one transaction: check the reward exists and is active, lock the
        profile row, check the balance, insert the redemption, deduct the
        coins and write a REDEEM_REWARD audit entry.

        Args:
            user_id: Authenticated user id
            reward_id: Reward to redeem
            coins_spent: Coins to deduct (>= 1)

        Returns:
            UUID: Created redemption id

        Raises:
            ValidationError: coins_spent below 1
            RateLimitExceededError: Daily redemption quota exhausted
            NotFoundError: Reward or profile not found
            RewardUnavailableError: Reward is not active
            InsufficientCoinsError: Balance below coins_spent
        """
        request = parse_input(RedeemRewardRequest, {"reward_id": reward_id, "coins_spent": coins_spent})
        await self.rate_limits.enforce(
            user_id,
            REWARD_REDEMPTION,
            self.limits.max_redemptions_per_day,
            REDEMPTION_WINDOW_MINUTES,
        )

        async with transaction(self.db, "redeem_reward", user_id=str(user_id), reward_id=str(reward_id)):
            reward = await reward_crud.get_by_id(self.db, request.reward_id)
            if reward is None:
                raise NotFoundError("Reward not found", {"reward_id": str(reward_id)})
            if not reward.active:
                raise RewardUnavailableError("Reward is not active", {"reward_id": str(reward_id)})

            profile = await profile_crud.get_by_user_id(self.db, user_id, for_update=True)
            if profile is None:
                raise NotFoundError("Profile not found", {"user_id": str(user_id)})

            available = profile.eco_coins
            if available < request.coins_spent:
                raise InsufficientCoinsError(required=request.coins_spent, available=available)

            redemption = await reward_redemption_crud.create(
                self.db,
                user_id=user_id,
                reward_id=request.reward_id,
                coins_spent=request.coins_spent,
            )
            await profile_crud.adjust_coins(self.db, user_id, -request.coins_spent)

            await audit_log_crud.record(
                self.db,
                user_id=user_id,
                action="REDEEM_REWARD",
                table_name="reward_redemptions",
                record_id=redemption.id,
                new_data={
                    "reward_id": str(request.reward_id),
                    "coins_spent": request.coins_spent,
                    "balance_after": available - request.coins_spent,
                },
            )

        logger.info(
            "Reward redeemed",
            extra={
                "user_id": str(user_id),
                "reward_id": str(reward_id),
                "coins_spent": request.coins_spent,
                "balance_after": available - request.coins_spent,
            },
        )
        return redemption.id

    async def list_redemptions(self, user_id: UUID, page: int = 1, limit: int = 20) -> dict[str, Any]:
        redemptions = await reward_redemption_crud.get_by_user_id(
            self.db,
            user_id,
            limit=limit,
            offset=page_offset(page, limit),
        )
        total = await reward_redemption_crud.count_by_user_id(self.db, user_id)
        return {
            "items": [redemption_to_dict(r) for r in redemptions],
            "pagination": Pagination.build(page, limit, total).model_dump(),
        }
