"""Application configuration loader."""

from __future__ import annotations

import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

logger = logging.getLogger(__name__)
load_dotenv()

DEFAULT_BASE_URL = "https://your-company.atomicwork.com/api/v1"
API_PATH_SUFFIX = "/api/v1"

MISSING_API_KEY_MESSAGE = (
    "Error: ATOMICWORK_API_KEY environment variable not set. "
    "Please add your API key to continue."
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Configuration loaded from environment variables."""

    ATOMICWORK_API_KEY: str = ""
    ATOMICWORK_BASE_URL: str = DEFAULT_BASE_URL
    ATOMICWORK_USER_ID: str = ""
    ATOMICWORK_WORKSPACE_ID: str = ""
    ATOMICWORK_TIMEOUT: Optional[float] = None

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @field_validator("ATOMICWORK_BASE_URL")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("ATOMICWORK_BASE_URL must start with http:// or https://")
        return value.rstrip("/")

    @field_validator("ATOMICWORK_TIMEOUT", mode="before")
    @classmethod
    def empty_timeout_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        return level

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        extra="ignore",
    )

    @property
    def has_api_key(self) -> bool:
        return bool(self.ATOMICWORK_API_KEY.strip())

    @property
    def web_url(self) -> str:
        """Base URL of the web UI, i.e. the API root without ``/api/v1``."""
        return self.ATOMICWORK_BASE_URL.removesuffix(API_PATH_SUFFIX)

    def assignee_id(self) -> int:
        """Return the configured user id as an integer."""
        try:
            return int(self.ATOMICWORK_USER_ID.strip())
        except ValueError:
            raise ConfigurationError(
                f"ATOMICWORK_USER_ID must be an integer, got {self.ATOMICWORK_USER_ID!r}"
            ) from None


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except ValidationError as exc:  # pragma: no cover - fail fast on invalid config
            logger.error("Invalid configuration: %s", exc)
            raise
        if not _settings.has_api_key:
            logger.warning("ATOMICWORK_API_KEY is not set; tool calls will be rejected")
    return _settings


def configure_logging(settings: Settings) -> None:
    """Send log records to stderr; stdout carries the MCP stream."""
    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)


__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "DEFAULT_BASE_URL",
    "MISSING_API_KEY_MESSAGE",
]
