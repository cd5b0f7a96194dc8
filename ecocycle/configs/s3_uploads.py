"""
S3 uploads bucket configuration.

Settings for detection photo / avatar storage and presigned URL generation.

Dependencies: pydantic_settings
System role: S3 uploads bucket configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class S3UploadsSettings(BaseSettings):
    """Settings for S3 image bucket operations."""

    model_config = SettingsConfigDict(
        env_prefix="S3_UPLOADS_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="ecocycle-dev-uploads",
        description="S3 bucket for detection photos and avatars",
    )
    region: str = Field(
        default="ap-south-1",
        description="AWS region for S3 bucket",
    )
    presigned_url_expiry: int = Field(
        default=3600,
        description="Presigned URL expiry in seconds (default 1 hour)",
    )
