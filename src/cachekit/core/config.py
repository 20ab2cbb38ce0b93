# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from pathlib import Path

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cachekit.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CACHEKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Filesystem cache
    cache_path: Path = Path("cache")

    # Opaque identifier of this deployment, used to scope shared-memory keys
    instance_id: str = "default"

    # Shared-memory cache (empty URL disables the backend)
    redis_url: str = "redis://localhost:6379/0"
    redis_socket_timeout: float = 1.0
    default_ttl: int = 0  # seconds, 0 = no expiry

    @field_validator("instance_id")
    @classmethod
    def _check_instance_id(cls, v: str) -> str:
        v = v.strip()
        if not v or "@" in v:
            raise ValueError("instance_id must be non-empty and must not contain '@'")
        return v

    @field_validator("default_ttl")
    @classmethod
    def _check_default_ttl(cls, v: int) -> int:
        if v < 0:
            raise ValueError("default_ttl must be >= 0")
        return v

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"


def get_settings() -> Settings:
    """Load settings from the environment.

    Raises:
        ConfigurationError: A setting has an invalid value.
    """
    try:
        return Settings()
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        msg = f"Invalid cachekit settings: {problems}"
        raise ConfigurationError(msg) from exc
