"""Reminder delivery services."""

from cosplay_planner.services.reminders.interface import (
    ReminderCenterInterface,
    ReminderDeliveryError,
)
from cosplay_planner.services.reminders.memory import InMemoryReminderCenter
from cosplay_planner.services.reminders.scheduler_center import SchedulerReminderCenter

__all__ = [
    "InMemoryReminderCenter",
    "ReminderCenterInterface",
    "ReminderDeliveryError",
    "SchedulerReminderCenter",
]
