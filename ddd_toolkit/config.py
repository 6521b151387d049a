"""Toolkit configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Toolkit settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    DATABASE_URL: str = "sqlite:///:memory:"
    DATABASE_POOL_SIZE: int = 5
    SQL_ECHO: bool = False

    # Events
    EVENT_HISTORY_LIMIT: int = 1000

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    @field_validator("DATABASE_POOL_SIZE", mode="after")
    @classmethod
    def ensure_positive(cls, value: int) -> int:
        """Reject zero or negative pool sizes."""
        if value < 1:
            msg = "value must be a positive integer"
            raise ValueError(msg)
        return value

    @field_validator("EVENT_HISTORY_LIMIT", mode="after")
    @classmethod
    def ensure_not_negative(cls, value: int) -> int:
        if value < 0:
            msg = "value cannot be negative"
            raise ValueError(msg)
        return value


def configure_logging(environment: str = "development") -> None:
    """Configure structured logging with structlog."""
    use_json = environment == "production"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )

    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
