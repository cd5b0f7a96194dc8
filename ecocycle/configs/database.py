"""
Postgres connection settings.

Read from ``POSTGRES_*`` variables. The engine only ever talks to the
database through asyncpg, so the URL is built for that driver.

Dependencies: pydantic, pydantic_settings
System role: Connection parameters for the SQLAlchemy engine
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from ecocycle.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Where the profiles, detections and ledgers are stored."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = "postgres"
    db: str = Field(default="ecocycle", description="Database holding the ecocycle schema")

    # asyncpg pool
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    echo_sql: bool = False

    require_ssl: bool = Field(default=False, description="Force TLS, e.g. for Supabase or RDS")

    @property
    def async_database_url(self) -> str:
        """asyncpg URL; TLS is requested through asyncpg's ``ssl`` query parameter."""
        url = f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.db}"
        return f"{url}?ssl=require" if self.require_ssl else url
