"""API routers."""

from .bookings import router as bookings_router
from .collectors import router as collectors_router
from .dashboard import router as dashboard_router
from .detections import router as detections_router
from .health import router as health_router
from .profile import router as profile_router
from .rewards import router as rewards_router
from .statistics import router as statistics_router
from .uploads import router as uploads_router

__all__ = [
    "bookings_router",
    "collectors_router",
    "dashboard_router",
    "detections_router",
    "health_router",
    "profile_router",
    "rewards_router",
    "statistics_router",
    "uploads_router",
]
