"""Configuration management for VisualCents.

This module handles application configuration using Pydantic settings.
Configuration can be loaded from environment variables or .env files.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with
    the VISUALCENTS_ prefix (e.g., VISUALCENTS_TIMEZONE).
    """

    model_config = SettingsConfigDict(
        env_prefix="VISUALCENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Calendar Configuration
    timezone: str = Field(
        default="Asia/Shanghai",
        description="IANA time zone used to decide which calendar day a transaction falls on",
    )
    first_weekday: int = Field(
        default=0,
        ge=0,
        le=6,
        description="First day of the week (0=Monday ... 6=Sunday)",
    )

    # Receipt extraction
    partial_date_year_policy: Literal["current_year", "not_future"] = Field(
        default="current_year",
        description=(
            "How to pick the year for receipt dates that only carry month and day. "
            "'current_year' always uses today's year; 'not_future' uses the previous "
            "year when the date would otherwise be after today."
        ),
    )

    # Budgets
    budget_warning_threshold: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Default progress ratio at which a budget is reported as a warning",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
