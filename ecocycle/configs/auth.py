"""
Authentication configuration settings.

Supabase issues the access tokens; this service only verifies them.

Dependencies: pydantic_settings
System role: JWT verification configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """Supabase JWT verification settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SUPABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str | None = Field(default=None, description="Supabase project URL")
    jwt_secret: str | None = Field(
        default=None,
        description="Supabase JWT secret for token verification",
    )
    jwt_audience: str = Field(default="authenticated", description="Expected token audience")
    jwt_algorithm: str = Field(default="HS256", description="Token signing algorithm")
