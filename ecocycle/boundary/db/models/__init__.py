"""
Database models package.

Exports:
  - ProfileModel: User balance and impact totals
  - CollectorModel: Pickup providers
  - BookingModel, BookingStatus: Pickup requests and their lifecycle
  - RewardModel, RewardRedemptionModel: Reward catalog and redemptions
  - WasteDetectionModel, HazardLevel: Recorded classifications
  - AuditLogModel, RateLimitModel: Audit trail and quota buckets

Dependencies: sqlalchemy, ecocycle.boundary.db.base
System role: Database model definitions for domain entities
"""

from ecocycle.boundary.db.models.profile_model import ProfileModel
from ecocycle.boundary.db.models.collector_model import CollectorModel
from ecocycle.boundary.db.models.booking_model import BookingModel, BookingStatus
from ecocycle.boundary.db.models.reward_model import RewardModel, RewardRedemptionModel
from ecocycle.boundary.db.models.detection_model import HazardLevel, WasteDetectionModel
from ecocycle.boundary.db.models.audit_model import AuditLogModel, RateLimitModel

__all__ = [
    "ProfileModel",
    "CollectorModel",
    "BookingModel",
    "BookingStatus",
    "RewardModel",
    "RewardRedemptionModel",
    "WasteDetectionModel",
    "HazardLevel",
    "AuditLogModel",
    "RateLimitModel",
]
