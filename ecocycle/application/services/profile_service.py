"""
Profile service orchestrator.

Creates profiles on first sight of a user, applies partial updates and
reports level progress.

Dependencies: ecocycle.boundary.db.CRUD, ecocycle.core
System role: Profile use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.application.services.service_utils import parse_input, transaction
from ecocycle.boundary.db.base import ensure_utc
from ecocycle.boundary.db.CRUD.profile_crud import profile_crud
from ecocycle.boundary.db.models.profile_model import ProfileModel
from ecocycle.core.exceptions import DatabaseError, NotFoundError
from ecocycle.core.gamification import get_level_by_coins
from ecocycle.core.security import sanitize_input
from ecocycle.models.profile import ProfileUpdateRequest

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("full_name", "address", "city")


def profile_to_dict(profile: ProfileModel) -> dict[str, Any]:
    return {
        "id": profile.id,
        "user_id": profile.user_id,
        "email": profile.email,
        "full_name": profile.full_name,
        "avatar_url": profile.avatar_url,
        "phone": profile.phone,
        "address": profile.address,
        "city": profile.city,
        "eco_coins": profile.eco_coins,
        "total_items_recycled": profile.total_items_recycled,
        "total_co2_saved": round(float(profile.total_co2_saved), 2),
        "badges": list(profile.badges or []),
        "created_at": ensure_utc(profile.created_at),
        "updated_at": ensure_utc(profile.updated_at),
    }


def level_to_dict(eco_coins: int) -> dict[str, Any]:
    progress = get_level_by_coins(eco_coins)
    return {
        "eco_coins": eco_coins,
        "level": progress.level.value,
        "next_level": progress.next_level.value,
        "next_at": progress.next_at,
        "progress": progress.progress,
    }


class ProfileService:
    """Profile service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize profile service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def get_or_create_profile(self, user_id: UUID, email: str | None = None) -> dict[str, Any]:
        """
        Return the user's profile, creating an empty one on first access.

        Args:
            user_id: Authenticated user id
            email: Email from the identity token, stored on creation

        Returns:
            dict: Profile data
        """
        profile = await profile_crud.get_by_user_id(self.db, user_id)
        if profile is not None:
            return profile_to_dict(profile)

        try:
            profile = await profile_crud.create(self.db, user_id=user_id, email=email)
            await self.db.commit()
        except IntegrityError:
            # A concurrent first request created it between the read and the insert
            await self.db.rollback()
            profile = await profile_crud.get_by_user_id(self.db, user_id)
            if profile is None:
                raise
            logger.info("Profile created concurrently, using existing row", extra={"user_id": str(user_id)})
            return profile_to_dict(profile)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("create_profile failed", extra={"user_id": str(user_id), "error": str(e)})
            raise DatabaseError(details={"operation": "create_profile"}) from e

        logger.info("Profile created", extra={"user_id": str(user_id)})
        return profile_to_dict(profile)

    async def get_profile(self, user_id: UUID) -> dict[str, Any]:
        """
        Get a user's profile.

        Raises:
            NotFoundError: If the user has no profile
        """
        profile = await profile_crud.get_by_user_id(self.db, user_id)
        if profile is None:
            raise NotFoundError("Profile not found", {"user_id": str(user_id)})
        return profile_to_dict(profile)

    async def update_profile(
        self,
        user_id: UUID,
        updates: ProfileUpdateRequest | dict,
    ) -> dict[str, Any]:
        """
        Apply a partial update, creating the profile if it does not exist.

        Only fields present in ``updates`` are written. Text fields are
        whitespace-normalised.

        Args:
            user_id: Authenticated user id
            updates: Fields to change

        Returns:
            dict: Updated profile data

        Raises:
            ValidationError: If a field fails validation
        """
        request = parse_input(ProfileUpdateRequest, updates)
        values = request.model_dump(exclude_unset=True, mode="json")
        for key in _TEXT_FIELDS:
            if values.get(key):
                values[key] = sanitize_input(values[key])

        async with transaction(self.db, "update_profile", user_id=str(user_id)):
            existing = await profile_crud.get_by_user_id(self.db, user_id, for_update=True)
            if existing is None:
                profile = await profile_crud.create(self.db, user_id=user_id, **values)
            elif values:
                profile = await profile_crud.update_by_user_id(self.db, user_id, **values)
            else:
                profile = existing

        logger.info(
            "Profile updated",
            extra={"user_id": str(user_id), "fields": sorted(values)},
        )
        return profile_to_dict(profile)

    async def get_level(self, user_id: UUID) -> dict[str, Any]:
        profile = await self.get_profile(user_id)
        return level_to_dict(profile["eco_coins"])
