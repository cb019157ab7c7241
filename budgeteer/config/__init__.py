"""Configuration package."""

from budgeteer.config.settings import (
    AppSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "get_settings",
]
