"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from ecocycle.boundary.db.CRUD import profile_crud, booking_crud

    profile = await profile_crud.get_by_user_id(db, user_id)
"""

from ecocycle.boundary.db.CRUD.base_crud import BaseCRUD
from ecocycle.boundary.db.CRUD.profile_crud import ProfileCRUD, profile_crud
from ecocycle.boundary.db.CRUD.detection_crud import WasteDetectionCRUD, waste_detection_crud
from ecocycle.boundary.db.CRUD.booking_crud import BookingCRUD, booking_crud
from ecocycle.boundary.db.CRUD.collector_crud import CollectorCRUD, collector_crud
from ecocycle.boundary.db.CRUD.reward_crud import (
    RewardCRUD,
    RewardRedemptionCRUD,
    reward_crud,
    reward_redemption_crud,
)
from ecocycle.boundary.db.CRUD.audit_crud import (
    AuditLogCRUD,
    RateLimitCRUD,
    audit_log_crud,
    rate_limit_crud,
)

__all__ = [
    "BaseCRUD",
    "ProfileCRUD",
    "profile_crud",
    "WasteDetectionCRUD",
    "waste_detection_crud",
    "BookingCRUD",
    "booking_crud",
    "CollectorCRUD",
    "collector_crud",
    "RewardCRUD",
    "reward_crud",
    "RewardRedemptionCRUD",
    "reward_redemption_crud",
    "AuditLogCRUD",
    "audit_log_crud",
    "RateLimitCRUD",
    "rate_limit_crud",
]
