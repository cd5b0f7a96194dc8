"""
Service orchestrators.

Each service wraps an AsyncSession and owns its transactions.
"""

from ecocycle.application.services.booking_service import BookingService
from ecocycle.application.services.collector_service import CollectorService
from ecocycle.application.services.dashboard_service import DashboardService
from ecocycle.application.services.detection_service import DetectionService
from ecocycle.application.services.profile_service import ProfileService
from ecocycle.application.services.rate_limit_service import RateLimitService
from ecocycle.application.services.reward_service import RewardService
from ecocycle.application.services.statistics_service import StatisticsService

__all__ = [
    "BookingService",
    "CollectorService",
    "DashboardService",
    "DetectionService",
    "ProfileService",
    "RateLimitService",
    "RewardService",
    "StatisticsService",
]
