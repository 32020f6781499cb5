"""Configuration for the lifeguard admin portal client."""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from environment."""

    api_base_url: str = "http://localhost:8000"

    # Adjust these if the backend routers are mounted at different paths
    regions_path: str = "/regions"
    managers_path: str = "/managers"
    lifeguards_path: str = "/lifeguards"
    incidents_path: str = "/incident"

    connect_timeout: float = 10.0
    read_timeout: float = 30.0
    write_timeout: float = 10.0
    pool_timeout: float = 10.0

    environment: str = "development"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="LIFEGUARD_PORTAL_", env_file=".env")

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("regions_path", "managers_path", "lifeguards_path", "incidents_path")
    @classmethod
    def _normalize_mount_path(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith("/"):
            value = f"/{value}"
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
