"""
Retry and timeout settings shared by services and the HTTP client.

Dependencies: pydantic_settings
System role: Resilience configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    """Timeouts and retry policy."""

    model_config = SettingsConfigDict(
        env_prefix="API_",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(default="http://localhost:8000/api/v1", description="API base URL for clients")
    timeout_seconds: float = Field(default=30.0, description="Request/operation timeout in seconds")
    retry_attempts: int = Field(default=3, description="Maximum attempts for retryable operations")
    retry_delay_seconds: float = Field(
        default=1.0,
        description="Base delay for exponential backoff (delay * 2^(attempt-1))",
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API from a browser",
    )
