"""
Reward and redemption CRUD operations.

Dependencies: sqlalchemy, ecocycle.boundary.db.models
System role: Reward catalog and redemption history queries
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.boundary.db.models.reward_model import RewardModel, RewardRedemptionModel
from ecocycle.boundary.db.CRUD.base_crud import BaseCRUD


class RewardCRUD(BaseCRUD[RewardModel]):
    """CRUD operations for RewardModel."""

    def __init__(self) -> None:
        """Initialize RewardCRUD with RewardModel."""
        super().__init__(RewardModel)

    async def get_active(self, session: AsyncSession) -> Sequence[RewardModel]:
        """Active rewards, cheapest first."""
        stmt = (
            select(RewardModel)
            .where(RewardModel.active.is_(True))
            .order_by(RewardModel.coins_required.asc(), RewardModel.name.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


class RewardRedemptionCRUD(BaseCRUD[RewardRedemptionModel]):
    """CRUD operations for RewardRedemptionModel."""

    def __init__(self) -> None:
        """Initialize RewardRedemptionCRUD with RewardRedemptionModel."""
        super().__init__(RewardRedemptionModel)

    async def get_by_user_id(
        self,
        session: AsyncSession,
        user_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[RewardRedemptionModel]:
        """A user's redemptions with their reward, newest first."""
        stmt = (
            select(RewardRedemptionModel)
            .where(RewardRedemptionModel.user_id == user_id)
            .order_by(RewardRedemptionModel.redeemed_at.desc())
        )
        result = await session.execute(self._page(stmt, limit, offset))
        return result.unique().scalars().all()

    async def count_by_user_id(self, session: AsyncSession, user_id: UUID) -> int:
        return await self.count(session, RewardRedemptionModel.user_id == user_id)


reward_crud = RewardCRUD()
reward_redemption_crud = RewardRedemptionCRUD()
