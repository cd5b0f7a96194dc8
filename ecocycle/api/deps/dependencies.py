"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: ecocycle.configs, ecocycle.application, ecocycle.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.application.services import (
    BookingService,
    CollectorService,
    DashboardService,
    DetectionService,
    ProfileService,
    RewardService,
    StatisticsService,
)
from ecocycle.boundary.aws.s3_client import S3UploadClient
from ecocycle.boundary.db import get_async_db
from ecocycle.configs import Settings, get_settings
from ecocycle.core.rate_limiter import SlidingWindowRateLimiter

# Process-wide limiter for presigned uploads
_upload_rate_limiter = SlidingWindowRateLimiter()


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_upload_rate_limiter() -> SlidingWindowRateLimiter:
    return _upload_rate_limiter


@lru_cache
def get_s3_upload_client() -> S3UploadClient:
    """Get cached S3 uploads client."""
    settings = get_settings()
    return S3UploadClient(
        bucket=settings.s3_uploads.bucket,
        region=settings.s3_uploads.region,
    )


def get_profile_service(db: AsyncSession = Depends(get_async_db)) -> ProfileService:
    """
    Get profile service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ProfileService: Profile service instance
    """
    return ProfileService(db=db)


def get_detection_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> DetectionService:
    return DetectionService(db=db, limits=settings.limits)


def get_reward_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> RewardService:
    return RewardService(db=db, limits=settings.limits)


def get_booking_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> BookingService:
    return BookingService(db=db, limits=settings.limits)


def get_collector_service(db: AsyncSession = Depends(get_async_db)) -> CollectorService:
    return CollectorService(db=db)


def get_statistics_service(db: AsyncSession = Depends(get_async_db)) -> StatisticsService:
    return StatisticsService(db=db)


def get_dashboard_service(db: AsyncSession = Depends(get_async_db)) -> DashboardService:
    return DashboardService(db=db)
