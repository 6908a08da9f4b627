"""Application settings, loaded from the environment.

Every variable takes the ``STOREFRONT_`` prefix, e.g.
``STOREFRONT_DATABASE_URL=postgresql+psycopg2://shop@localhost/shop``.
A ``.env`` file in the working directory is read as well.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = Field("sqlite:///./storefront.db", description="SQLAlchemy database URL")
    DB_ECHO: bool = Field(False, description="Log SQL statements")
    DB_POOL_SIZE: int = Field(5, description="Connection pool size (server databases only)")
    DB_MAX_OVERFLOW: int = Field(10, description="Connections allowed beyond the pool size")
    DB_POOL_TIMEOUT: int = Field(30, description="Seconds to wait for a pooled connection")

    # Logging
    LOG_LEVEL: str = Field("INFO", description="Minimum log level")
    LOG_JSON: bool = Field(False, description="Render log lines as JSON")

    # HTTP server
    HOST: str = Field("0.0.0.0", description="Bind address for `storefront serve`")
    PORT: int = Field(3005, description="Bind port for `storefront serve`")

    # Reporting
    LOW_STOCK_THRESHOLD: int = Field(10, description="Default threshold for low-stock alerts")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return Settings()
