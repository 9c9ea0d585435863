"""
Configuration and settings for the bloglist API.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Database (any SQLAlchemy URL; Postgres or SQLite)
    database_url: Optional[str] = Field(default=None, env="DATABASE_URL")

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "use_in_memory_backends", "BLOGLIST_USE_IN_MEMORY_BACKENDS"
        ),
    )

    # Auth
    secret: str = Field(
        default="bloglist-development-secret-change-me", env="SECRET"
    )
    token_algorithm: str = Field(default="HS256", env="TOKEN_ALGORITHM")
    token_ttl_seconds: Optional[int] = Field(default=3600, env="TOKEN_TTL_SECONDS")
    bcrypt_rounds: int = Field(default=10, ge=4, le=31, env="BCRYPT_ROUNDS")

    log_level: str = Field(default="INFO", env="LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
