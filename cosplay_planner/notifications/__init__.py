"""Notification scheduling package."""

from cosplay_planner.notifications.scheduler import NotificationScheduler

__all__ = ["NotificationScheduler"]
