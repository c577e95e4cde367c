"""Application settings via pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables with TASKFLOW_ prefix.

    ``jwt_secret`` and ``database_url`` have no defaults: constructing settings
    without them raises, which aborts startup before any traffic is accepted.
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKFLOW_",
        env_file=".env",
        case_sensitive=False,
    )

    # --- Core ---
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    database_url: str = Field(..., min_length=1)
    redis_url: str = ""
    redis_max_connections: int = 20
    cors_origins: list[str] = ["*"]
    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 60
    log_level: str = "INFO"
    log_format: str = "json"

    # --- Database ---
    db_pool_size: int = 20
    db_max_overflow: int = 10
    db_auto_create: bool = True

    # --- JWT ---
    jwt_secret: str = Field(..., min_length=1)
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7

    # --- Credentials ---
    username_min_length: int = 3
    password_min_length: int = 6
    password_reset_enabled: bool = False
    password_hash_time_cost: int = 2
    password_hash_memory_kib: int = 65536


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()  # type: ignore[call-arg]
