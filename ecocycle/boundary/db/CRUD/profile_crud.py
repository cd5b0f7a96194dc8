"""
Profile CRUD operations.

Every query is keyed on user_id; a user can only ever reach their own
profile. Balance changes are expressed as SQL increments so concurrent
transactions never overwrite each other.

Dependencies: sqlalchemy, ecocycle.boundary.db.models
System role: Profile persistence and atomic balance updates
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.boundary.db.base import utcnow
from ecocycle.boundary.db.models.profile_model import ProfileModel
from ecocycle.boundary.db.CRUD.base_crud import BaseCRUD


class ProfileCRUD(BaseCRUD[ProfileModel]):
    """CRUD operations for ProfileModel."""

    def __init__(self) -> None:
        """Initialize ProfileCRUD with ProfileModel."""
        super().__init__(ProfileModel)

    async def get_by_user_id(
        self,
        session: AsyncSession,
        user_id: UUID,
        for_update: bool = False,
    ) -> ProfileModel | None:
        """
        Retrieve a user's profile.

        Args:
            session: Async database session
            user_id: Owner user id
            for_update: Lock the row (SELECT ... FOR UPDATE) until commit

        Returns:
            ProfileModel if found, None otherwise
        """
        stmt = (
            select(ProfileModel)
            .where(ProfileModel.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_by_user_id(
        self,
        session: AsyncSession,
        user_id: UUID,
        **kwargs,
    ) -> ProfileModel | None:
        stmt = (
            update(ProfileModel)
            .where(ProfileModel.user_id == user_id)
            .values(updated_at=utcnow(), **kwargs)
            .returning(ProfileModel)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def apply_detection_totals(
        self,
        session: AsyncSession,
        user_id: UUID,
        eco_coins: int,
        co2_saved_kg: float,
    ) -> bool:
        """
        Credit a recorded detection to the profile in one UPDATE.

        Adds eco_coins to the balance, 1 to total_items_recycled and
        co2_saved_kg to total_co2_saved.

        Returns:
            True if the profile exists, False otherwise
        """
        stmt = (
            update(ProfileModel)
            .where(ProfileModel.user_id == user_id)
            .values(
                eco_coins=ProfileModel.eco_coins + eco_coins,
                total_items_recycled=ProfileModel.total_items_recycled + 1,
                total_co2_saved=ProfileModel.total_co2_saved + co2_saved_kg,
                updated_at=utcnow(),
            )
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def adjust_coins(self, session: AsyncSession, user_id: UUID, delta: int) -> bool:
        """
        Add ``delta`` (may be negative) to the coin balance.

        Callers debiting coins must hold the row lock and have checked the
        balance; the CHECK constraint rejects a negative result regardless.
        """
        stmt = (
            update(ProfileModel)
            .where(ProfileModel.user_id == user_id)
            .values(eco_coins=ProfileModel.eco_coins + delta, updated_at=utcnow())
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def get_leaderboard(
        self,
        session: AsyncSession,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[ProfileModel]:
        """
        Profiles ordered by eco_coins, then items recycled, both descending.
        """
        stmt = (
            select(ProfileModel)
            .order_by(
                ProfileModel.eco_coins.desc(),
                ProfileModel.total_items_recycled.desc(),
                ProfileModel.created_at.asc(),
            )
        )
        return await self._scalars(session, self._page(stmt, limit, offset))


profile_crud = ProfileCRUD()
