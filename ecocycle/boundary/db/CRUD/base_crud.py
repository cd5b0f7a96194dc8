"""
Generic async CRUD shared by every table.

Methods stage work on the caller's session and flush when they need
database-generated values; nothing here commits. Services decide where a
transaction ends, so a coin credit and its audit row land together or
not at all.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    CRUD over a single mapped class.

    Subclasses pass their model to ``__init__`` and add table-specific
    queries, using ``_page`` and ``_scalars`` for listings.
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    @staticmethod
    def _page(stmt: Select, limit: int | None, offset: int) -> Select:
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return stmt

    @staticmethod
    async def _scalars(session: AsyncSession, stmt: Select) -> Sequence[Any]:
        return (await session.execute(stmt)).scalars().all()

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        """Insert a row and return it with defaults (id, timestamps) populated."""
        instance = self.model(**values)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        stmt = select(self.model).where(self.model.id == id)
        return (await session.execute(stmt)).scalar_one_or_none()

    async def get_all(self, session: AsyncSession, limit: int | None = None, offset: int = 0) -> Sequence[ModelT]:
        return await self._scalars(session, self._page(select(self.model), limit, offset))

    async def update_by_id(self, session: AsyncSession, id: UUID, **values: Any) -> ModelT | None:
        """
        Apply ``values`` with a single UPDATE ... RETURNING.

        ``populate_existing`` refreshes an instance already in the identity
        map, so callers holding the row see the new values. Returns None
        when no row has that id.
        """
        stmt = (
            update(self.model)
            .where(self.model.id == id)
            .values(**values)
            .returning(self.model)
            .execution_options(populate_existing=True)
        )
        return (await session.execute(stmt)).scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        result = await session.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0

    async def exists(self, session: AsyncSession, id: UUID) -> bool:
        stmt = select(self.model.id).where(self.model.id == id)
        return (await session.execute(stmt)).first() is not None

    async def count(self, session: AsyncSession, *criteria: Any) -> int:
        """Row count, optionally filtered by SQLAlchemy boolean expressions."""
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        return int((await session.execute(stmt)).scalar_one())
