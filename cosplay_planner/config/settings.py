"""
Configuration Management for the Cosplay Planner

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage locations, reminder delivery and reporting switches are read
once and passed to the services that need them.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PLANNER_STORAGE_",
        extra="ignore"
    )

    backend: str = Field(
        default="file",
        pattern="^(file|memory)$",
        description="Key-value backend: one JSON file per key, or in-memory"
    )
    directory: Path = Field(
        default=Path.home() / ".cosplay_planner",
        description="Directory holding the collection files"
    )

    # Keys of the three persisted collections
    projects_key: str = Field(
        default="savedProjects",
        description="Key of the active projects collection"
    )
    archive_key: str = Field(
        default="archivedProjects",
        description="Key of the archived projects collection"
    )
    notifications_key: str = Field(
        default="savedNotifications",
        description="Key of the notification list"
    )

    durable_writes: bool = Field(
        default=True,
        description="fsync collection files before renaming them into place"
    )


class ReminderSettings(BaseSettings):
    """Deferred reminder delivery configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PLANNER_REMINDER_",
        extra="ignore"
    )

    backend: str = Field(
        default="scheduler",
        pattern="^(scheduler|memory)$",
        description="Delivery facility: APScheduler background jobs, or in-memory"
    )
    title: str = Field(
        default="Cosplay Reminder",
        description="Title shown on delivered reminders"
    )
    delivery_hour: int = Field(
        default=9,
        ge=0,
        le=23,
        description="Hour of day deferred reminders fire at"
    )
    delivery_minute: int = Field(
        default=0,
        ge=0,
        le=59,
        description="Minute of the hour deferred reminders fire at"
    )


class ImageSettings(BaseSettings):
    """Cover image handling configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PLANNER_IMAGE_",
        extra="ignore"
    )

    jpeg_quality: int = Field(
        default=80,
        ge=1,
        le=95,
        description="JPEG quality used when storing cover images"
    )
    max_upload_size_mb: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Maximum cover image size in MB"
    )

    @property
    def max_upload_size_bytes(self) -> int:
        """Get max upload size in bytes."""
        return self.max_upload_size_mb * 1024 * 1024


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level"
    )

    # Reporting
    statistics_include_archived: bool = Field(
        default=True,
        description="Count archived projects in the general statistics"
    )

    # Audit
    audit_history_size: int = Field(
        default=200,
        ge=1,
        le=10000,
        description="How many audit events to keep in memory"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def reminders(self) -> ReminderSettings:
        return ReminderSettings()

    @property
    def image(self) -> ImageSettings:
        return ImageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the ones that failed.
    Useful for startup checks.
    """
    results = {}
    settings = get_settings()

    for name in ("storage", "reminders", "image", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
