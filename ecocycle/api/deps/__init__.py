"""
FastAPI dependencies: authentication and service factories.
"""

from ecocycle.api.deps.auth import AuthUser, get_current_user
from ecocycle.api.deps.dependencies import (
    get_booking_service,
    get_collector_service,
    get_dashboard_service,
    get_detection_service,
    get_profile_service,
    get_reward_service,
    get_s3_upload_client,
    get_settings_dependency,
    get_statistics_service,
    get_upload_rate_limiter,
)

__all__ = [
    "AuthUser",
    "get_current_user",
    "get_booking_service",
    "get_collector_service",
    "get_dashboard_service",
    "get_detection_service",
    "get_profile_service",
    "get_reward_service",
    "get_s3_upload_client",
    "get_settings_dependency",
    "get_statistics_service",
    "get_upload_rate_limiter",
]
