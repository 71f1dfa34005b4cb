"""
Notification Scheduler

Turns a project's event date into reminders at fixed milestones
(7, 3, 1 and 0 days before the event) and owns the list of
materialized notifications the user sees.

SCHEDULING RULES:
1. Only milestones not yet passed apply (days until event >= milestone)
2. A milestone whose day is still ahead becomes a deferred reminder
   with the delivery facility
3. A milestone due today (or earlier) is materialized immediately

CATCH-UP RULE (run when the notification screen opens):
- A project whose event is exactly 7, 3, 1 or 0 days away gets the
  matching notification

Both paths share one dedup rule: at most one notification per
(project_id, days_left). The two rules deliberately differ (">=" vs
exact match); the catch-up scan only fills gaps for today.

Failures of the delivery facility are logged and dropped, never retried.
"""

from collections.abc import Iterable
from datetime import date, datetime, time, timedelta
from typing import Callable, Optional
from uuid import UUID, uuid4

from cosplay_planner.audit import AuditLogger
from cosplay_planner.config import ReminderSettings, get_settings
from cosplay_planner.models.audit import AuditEventBuilder
from cosplay_planner.models.notification import (
    MILESTONE_DAYS,
    AppNotification,
    ReminderRequest,
    ScheduleResult,
    reminder_identifier,
    reminder_message,
)
from cosplay_planner.models.project import Project
from cosplay_planner.services.clock import Clock, SystemClock
from cosplay_planner.services.reminders import ReminderCenterInterface, ReminderDeliveryError
from cosplay_planner.services.storage import PlannerPersistence


class NotificationScheduler:
    """
    Schedules milestone reminders and keeps the notification list.

    The list is most-recent-first and is written back to storage after
    every change.
    """

    def __init__(
        self,
        persistence: PlannerPersistence,
        reminder_center: ReminderCenterInterface,
        clock: Optional[Clock] = None,
        settings: Optional[ReminderSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
        id_factory: Callable[[], UUID] = uuid4,
    ):
        self._persistence = persistence
        self._reminder_center = reminder_center
        self._clock = clock or SystemClock()
        self._settings = settings or get_settings().reminders
        self._audit_logger = audit_logger
        self._id_factory = id_factory

        self._notifications: list[AppNotification] = persistence.load_notifications()
        self._keys: set[tuple[UUID, int]] = {n.dedup_key for n in self._notifications}

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def notifications(self) -> list[AppNotification]:
        return list(self._notifications)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._notifications if not n.is_read)

    def has_notification(self, project_id: UUID, days_left: int) -> bool:
        return (project_id, days_left) in self._keys

    # -------------------------------------------------------------------------
    # Permission
    # -------------------------------------------------------------------------

    def request_permission(self) -> bool:
        """Ask the delivery facility for permission once, at startup."""
        try:
            granted = self._reminder_center.request_permission()
        except ReminderDeliveryError as e:
            self._log_error("permission_request_failed", str(e))
            return False
        self._audit(AuditEventBuilder.permission_requested(granted))
        return granted

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    def schedule_notifications(self, project: Project) -> ScheduleResult:
        """Register or materialize every milestone that still applies to a project."""
        today = self._clock.today()
        days_until = project.days_until_event(today)
        result = ScheduleResult(project_id=project.id, days_until_event=days_until)

        if days_until < 0:
            return result

        for milestone in MILESTONE_DAYS:
            if days_until < milestone:
                continue

            notify_on = project.event_date - timedelta(days=milestone)
            if notify_on > today:
                if self._register(project, milestone, notify_on):
                    result.deferred.append(milestone)
                else:
                    result.failed.append(milestone)
            else:
                self.add_notification(project, milestone)
                result.materialized.append(milestone)

        return result

    def cancel_notifications(self, project_id: UUID) -> None:
        """
        Cancel every pending reminder of a project.

        Notifications already in the list are kept.
        """
        identifiers = [reminder_identifier(project_id, m) for m in sorted(MILESTONE_DAYS)]
        try:
            self._reminder_center.cancel(identifiers)
        except ReminderDeliveryError as e:
            self._audit(AuditEventBuilder.reminders_cancelled(project_id, identifiers, str(e)))
            return
        self._audit(AuditEventBuilder.reminders_cancelled(project_id, identifiers))

    def check_and_add_due_notifications(
        self,
        projects: Iterable[Project],
    ) -> list[AppNotification]:
        """
        Catch-up scan over the active projects.

        Returns the notifications this scan added.
        """
        today = self._clock.today()
        added = []
        for project in projects:
            days_until = project.days_until_event(today)
            if days_until in MILESTONE_DAYS:
                notification = self.add_notification(project, days_until)
                if notification is not None:
                    added.append(notification)
        return added

    # -------------------------------------------------------------------------
    # Notification list
    # -------------------------------------------------------------------------

    def add_notification(
        self,
        project: Project,
        days_left: int,
    ) -> Optional[AppNotification]:
        """
        Materialize a notification at the front of the list.

        Returns None when one already exists for (project, days_left).
        """
        key = (project.id, days_left)
        if key in self._keys:
            return None

        notification = AppNotification(
            id=self._id_factory(),
            project_id=project.id,
            project_name=project.project_name,
            event_name=project.event_name,
            days_left=days_left,
            date=self._clock.now(),
        )
        self._notifications.insert(0, notification)
        self._keys.add(key)
        self._persistence.save_notifications(self._notifications)

        self._audit(
            AuditEventBuilder.notification_materialized(notification.id, project.id, days_left)
        )
        return notification

    def delete_notification(self, notification_id: UUID) -> bool:
        """Remove a notification from the list. Future scheduling is unaffected."""
        remaining = [n for n in self._notifications if n.id != notification_id]
        if len(remaining) == len(self._notifications):
            return False

        self._notifications = remaining
        self._keys = {n.dedup_key for n in remaining}
        self._persistence.save_notifications(self._notifications)
        self._audit(AuditEventBuilder.notification_deleted(notification_id))
        return True

    def mark_as_read(self, notification_id: UUID) -> bool:
        for index, notification in enumerate(self._notifications):
            if notification.id == notification_id:
                if notification.is_read:
                    return True
                self._notifications[index] = notification.model_copy(update={"is_read": True})
                self._persistence.save_notifications(self._notifications)
                self._audit(AuditEventBuilder.notification_read(notification_id))
                return True
        return False

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _fire_time(self, notify_on: date) -> datetime:
        return datetime.combine(
            notify_on,
            time(self._settings.delivery_hour, self._settings.delivery_minute),
        )

    def _register(self, project: Project, milestone: int, notify_on: date) -> bool:
        request = ReminderRequest(
            identifier=reminder_identifier(project.id, milestone),
            project_id=project.id,
            milestone_days=milestone,
            fire_at=self._fire_time(notify_on),
            title=self._settings.title,
            body=reminder_message(project.event_name, milestone),
        )
        try:
            self._reminder_center.register(request)
        except ReminderDeliveryError as e:
            self._audit(
                AuditEventBuilder.reminder_registration_failed(
                    project.id, request.identifier, str(e)
                )
            )
            return False

        self._audit(
            AuditEventBuilder.reminder_registered(project.id, request.identifier, request.fire_at)
        )
        return True

    def _audit(self, event) -> None:
        if self._audit_logger:
            self._audit_logger.log(event)

    def _log_error(self, error_type: str, message: str) -> None:
        if self._audit_logger:
            self._audit_logger.log_error(error_type, message)
