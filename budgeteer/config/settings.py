"""
Configuration Management for Budgeteer

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every tunable number the engine uses (default budget, recent list size,
progress cap, validation tolerances) is read from one place and validated
at startup.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from BUDGETEER_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUDGETEER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Calendar
    timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone used for month/day bucketing. "
                    "If unset, the device zone at startup is pinned."
    )

    # Dashboard
    default_monthly_budget: Decimal = Field(
        default=Decimal("1000"),
        gt=0,
        description="Budget used when the user profile has none"
    )
    recent_expenses_limit: int = Field(
        default=5,
        ge=0,
        le=100,
        description="How many recent expenses the dashboard shows"
    )
    max_progress_ratio: Decimal = Field(
        default=Decimal("2"),
        gt=0,
        description="Upper clamp for the budget progress ratio"
    )

    # Validation thresholds
    max_expense_amount: Decimal = Field(
        default=Decimal("1000000"),
        description="Maximum reasonable expense amount (for sanity checking)"
    )
    future_date_tolerance_days: int = Field(
        default=1,
        ge=0,
        description="How many days in the future an expense date can be"
    )

    # Remote store
    store_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for store reads before giving up"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON (False for console output)"
    )

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        """Reject unknown zone names at startup rather than at first use."""
        if v is None or not v.strip():
            return None
        try:
            ZoneInfo(v.strip())
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {v}")
        return v.strip()

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Invalid log level: {v}. Allowed: {sorted(allowed)}")
        return v.upper()


@lru_cache()
def get_settings() -> AppSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return AppSettings()
