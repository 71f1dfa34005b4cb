"""Configuration package."""

from cosplay_planner.config.settings import (
    AppSettings,
    ImageSettings,
    ReminderSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "ImageSettings",
    "ReminderSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
