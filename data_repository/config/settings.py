"""Package configuration powered by Pydantic settings."""

import logging
import os
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


_ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()
_ENV_FILE = ".env" if _ENVIRONMENT not in {"production", "prod"} else None


class Settings(BaseSettings):
    """Repository settings with environment variable support"""

    model_config = SettingsConfigDict(env_file=_ENV_FILE, case_sensitive=True, extra="ignore")

    ENVIRONMENT: str = "development"

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "plain"] = "json"

    # --- Change notifications ---
    # 0 means every subscriber gets an unbounded queue
    NOTIFICATION_QUEUE_SIZE: int = 0

    # --- Metrics ---
    METRICS_ENABLED: bool = True

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("NOTIFICATION_QUEUE_SIZE")
    @classmethod
    def non_negative_queue_size(cls, value: int) -> int:
        if value < 0:
            raise ValueError("NOTIFICATION_QUEUE_SIZE must be >= 0")
        return value


settings = Settings()


def get_settings() -> Settings:
    return settings
