"""
Usage limit settings.

Per-user quotas enforced before the write operations, plus upload limits.

Dependencies: pydantic_settings
System role: Rate limit and upload size configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LimitSettings(BaseSettings):
    """Quotas for detections, redemptions, bookings and uploads."""

    model_config = SettingsConfigDict(
        env_prefix="LIMITS_",
        case_sensitive=False,
        extra="ignore",
    )

    max_file_size: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum image upload size in bytes (10MB)",
    )
    allowed_image_types: list[str] = Field(
        default=["image/jpeg", "image/jpg", "image/png", "image/webp"],
        description="Accepted image MIME types",
    )
    max_detections_per_hour: int = Field(default=50, description="Detections per user per hour")
    max_redemptions_per_day: int = Field(default=20, description="Redemptions per user per day")
    max_bookings_per_week: int = Field(default=10, description="Bookings per user per week")
    max_uploads_per_minute: int = Field(default=10, description="Presigned uploads per user per minute")
