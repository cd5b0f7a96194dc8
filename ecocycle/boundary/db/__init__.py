"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(), dispose_engine()
  - Profile, WasteDetection, Booking, Collector, Reward, RewardRedemption,
    AuditLog and RateLimit models
  - BookingStatus, HazardLevel: Enum types
  - *_crud: CRUD operation singletons

Dependencies: sqlalchemy, ecocycle.configs
System role: Database adapter for balances, detections, bookings and rewards
"""

from ecocycle.boundary.db.base import Base, TimestampMixin, UUIDMixin, ensure_utc, utcnow
from ecocycle.boundary.db.connection import (
    dispose_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from ecocycle.boundary.db.models import (
    AuditLogModel,
    BookingModel,
    BookingStatus,
    CollectorModel,
    HazardLevel,
    ProfileModel,
    RateLimitModel,
    RewardModel,
    RewardRedemptionModel,
    WasteDetectionModel,
)
from ecocycle.boundary.db.CRUD import (
    audit_log_crud,
    booking_crud,
    collector_crud,
    profile_crud,
    rate_limit_crud,
    reward_crud,
    reward_redemption_crud,
    waste_detection_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "ensure_utc",
    "utcnow",
    # Connection
    "dispose_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "AuditLogModel",
    "BookingModel",
    "BookingStatus",
    "CollectorModel",
    "HazardLevel",
    "ProfileModel",
    "RateLimitModel",
    "RewardModel",
    "RewardRedemptionModel",
    "WasteDetectionModel",
    # CRUD singletons
    "audit_log_crud",
    "booking_crud",
    "collector_crud",
    "profile_crud",
    "rate_limit_crud",
    "reward_crud",
    "reward_redemption_crud",
    "waste_detection_crud",
]
