"""
Collector service orchestrator.

Dependencies: ecocycle.boundary.db.CRUD
System role: Collector directory use cases
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.application.services.service_utils import read_with_retry
from ecocycle.boundary.db.CRUD.collector_crud import collector_crud
from ecocycle.boundary.db.models.collector_model import CollectorModel
from ecocycle.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def collector_to_dict(collector: CollectorModel) -> dict[str, Any]:
    return {
        "id": collector.id,
        "name": collector.name,
        "email": collector.email,
        "phone": collector.phone,
        "address": collector.address,
        "city": collector.city,
        "latitude": collector.latitude,
        "longitude": collector.longitude,
        "rating": collector.rating,
        "specialties": list(collector.specialties or []),
        "available": collector.available,
    }


class CollectorService:
    """Collector service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_available_collectors(
        self,
        city: str | None = None,
        specialty: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Collectors accepting bookings, best rated first.

        Args:
            city: Optional city filter (case-insensitive)
            specialty: Optional category the collector must handle (case-insensitive)

        Returns:
            list[dict]: Collector data
        """
        collectors = await read_with_retry(
            self.db,
            "list_available_collectors",
            lambda: collector_crud.get_available(self.db, city=city),
        )
        if specialty:
            wanted = specialty.strip().lower()
            collectors = [c for c in collectors if wanted in (s.lower() for s in c.specialties or [])]
        return [collector_to_dict(c) for c in collectors]

    async def get_collector(self, collector_id: UUID) -> dict[str, Any]:
        """
        Raises:
            NotFoundError: Collector does not exist
        """
        collector = await collector_crud.get_by_id(self.db, collector_id)
        if collector is None:
            raise NotFoundError("Collector not found", {"collector_id": str(collector_id)})
        return collector_to_dict(collector)
