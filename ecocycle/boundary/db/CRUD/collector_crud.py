"""
Collector CRUD operations.

Dependencies: sqlalchemy, ecocycle.boundary.db.models
System role: Collector directory queries
"""

from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.boundary.db.models.collector_model import CollectorModel
from ecocycle.boundary.db.CRUD.base_crud import BaseCRUD


class CollectorCRUD(BaseCRUD[CollectorModel]):
    """CRUD operations for CollectorModel."""

    def __init__(self) -> None:
        """Initialize CollectorCRUD with CollectorModel."""
        super().__init__(CollectorModel)

    async def get_available(
        self,
        session: AsyncSession,
        city: str | None = None,
    ) -> Sequence[CollectorModel]:
        """
        Retrieve collectors accepting bookings, best rated first.

        Args:
            session: Async database session
            city: Optional case-insensitive city filter

        Returns:
            Sequence of CollectorModel
        """
        stmt = select(CollectorModel).where(CollectorModel.available.is_(True))
        if city:
            stmt = stmt.where(func.lower(CollectorModel.city) == city.strip().lower())
        stmt = stmt.order_by(CollectorModel.rating.desc(), CollectorModel.name.asc())
        result = await session.execute(stmt)
        return result.scalars().all()


collector_crud = CollectorCRUD()
