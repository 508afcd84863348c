"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Nothing is required at load time: without Redis the
dispatcher falls back to in-process cache partitions, and without
DATABASE_URL the SQL record store is simply unavailable.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "pathconfig"
    app_version: str = "1.0.0"
    debug: bool = False

    # Record store (SQLAlchemy async URL, e.g. postgresql+asyncpg://...)
    database_url: str = ""
    database_echo: bool = False

    # Redis cache partitions
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

    # Cache policy: keys live under "<namespace>:org:" and "<namespace>:session:<id>:"
    cache_namespace: str = "pathconfig"
    cache_ttl_seconds: int = 900

    # Request
    session_header_name: str = "X-Session-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_cache(self) -> "Settings":
        """Reject cache settings that would produce unusable keys or entries."""
        if self.cache_ttl_seconds <= 0:
            raise ValueError(
                f"cache_ttl_seconds must be positive, got: {self.cache_ttl_seconds}"
            )
        if not self.cache_namespace.strip():
            raise ValueError("cache_namespace must be a non-empty string.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    In tests, call get_settings.cache_clear() after overriding env vars so
    the next get_settings() picks up the new values.
    """
    return Settings()
