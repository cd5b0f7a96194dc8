"""
Shared settings fields for the EcoCycle backend.

Every settings group that reads from ``.env`` subclasses this so the
deployment environment, log level and app identity live in one place.

Dependencies: pydantic_settings
System role: Root of the configuration hierarchy
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

Environment = Literal["development", "staging", "production", "test"]


class BaseSettings(PydanticBaseSettings):
    """Environment, logging and app identity read from ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Environment = Field(default="development", description="Deployment environment")
    debug: bool = False
    log_level: str = Field(default="INFO", description="Root log level for ecocycle loggers")
    app_name: str = "EcoSmart Cycle"
    app_version: str = "1.0.0"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
