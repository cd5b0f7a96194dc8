"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

import logging
from functools import lru_cache

from ecocycle.configs.api import ApiSettings
from ecocycle.configs.auth import AuthSettings
from ecocycle.configs.base import BaseSettings
from ecocycle.configs.database import DatabaseSettings
from ecocycle.configs.limits import LimitSettings
from ecocycle.configs.s3_uploads import S3UploadsSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = DatabaseSettings()
    auth: AuthSettings = AuthSettings()
    limits: LimitSettings = LimitSettings()
    api: ApiSettings = ApiSettings()
    s3_uploads: S3UploadsSettings = S3UploadsSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from ecocycle.configs import get_settings
        settings = get_settings()
    """
    return Settings()


def validate_settings(settings: Settings) -> list[str]:
    """
    Check settings required to serve authenticated traffic.

    Problems are logged in every environment and raised in production.

    Args:
        settings: Settings to check

    Returns:
        list[str]: Problems found (empty when valid)

    Raises:
        ValueError: In production, when any problem is found
    """
    errors: list[str] = []
    if not settings.auth.jwt_secret:
        errors.append("SUPABASE_JWT_SECRET is required")
    if settings.auth.url and not settings.auth.url.startswith(("http://", "https://")):
        errors.append("SUPABASE_URL must be a valid URL")

    if errors:
        message = "Environment configuration errors: " + "; ".join(errors)
        logger.error(message)
        if settings.is_production:
            raise ValueError(message)
    return errors
