"""Application configuration loading via Pydantic settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_DEFAULT_MODEL_HOST = "http://localhost:8081"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    model_host: str = Field(default=_DEFAULT_MODEL_HOST, alias="MODEL_HOST")
    app_version: str = Field(default="unknown", alias="APP_VERSION")
    model_timeout_seconds: float = Field(default=10.0, gt=0.0, alias="MODEL_TIMEOUT_SECONDS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
        "protected_namespaces": (),
    }

    @field_validator("model_host")
    @classmethod
    def validate_model_host(cls, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError("MODEL_HOST is empty")
        if "://" not in value:
            raise ValueError(f'MODEL_HOST is missing protocol, like "http://..." (was: "{value}")')
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()
