"""Services package."""

from cosplay_planner.services.clock import Clock, FixedClock, SystemClock
from cosplay_planner.services.image import CoverImageCodec, CoverImageError
from cosplay_planner.services.reminders import (
    InMemoryReminderCenter,
    ReminderCenterInterface,
    ReminderDeliveryError,
    SchedulerReminderCenter,
)
from cosplay_planner.services.storage import (
    DecodeError,
    FileKeyValueStorage,
    InMemoryKeyValueStorage,
    KeyValueStorageInterface,
    PlannerPersistence,
    StorageError,
    StorageUnavailableError,
)

__all__ = [
    # Clock
    "Clock",
    "FixedClock",
    "SystemClock",
    # Image
    "CoverImageCodec",
    "CoverImageError",
    # Reminders
    "InMemoryReminderCenter",
    "ReminderCenterInterface",
    "ReminderDeliveryError",
    "SchedulerReminderCenter",
    # Storage
    "DecodeError",
    "FileKeyValueStorage",
    "InMemoryKeyValueStorage",
    "KeyValueStorageInterface",
    "PlannerPersistence",
    "StorageError",
    "StorageUnavailableError",
]
