"""
APScheduler-backed Reminder Center

Each deferred reminder becomes a one-shot APScheduler job:

    job id   = reminder identifier ("{project_id}-{milestone}")
    trigger  = DateTrigger(run_date=request.fire_at)

replace_existing=True gives the "same identifier replaces" rule for
free, and cancelling is remove_job.
"""

from collections.abc import Iterable
from typing import Callable, Optional

import structlog
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.date import DateTrigger

from cosplay_planner.models.notification import ReminderRequest
from cosplay_planner.services.reminders.interface import (
    ReminderCenterInterface,
    ReminderDeliveryError,
)


# Reminders delivered up to an hour late still fire.
MISFIRE_GRACE_SECONDS = 3600


class SchedulerReminderCenter(ReminderCenterInterface):
    """
    Delivers reminders from a background scheduler thread.

    Delivery calls on_deliver(request); without a callback the reminder
    is written to the log.
    """

    def __init__(
        self,
        scheduler: Optional[BackgroundScheduler] = None,
        on_deliver: Optional[Callable[[ReminderRequest], None]] = None,
    ):
        self._scheduler = scheduler or BackgroundScheduler()
        self._on_deliver = on_deliver
        self._logger = structlog.get_logger("cosplay_planner.reminders")

    def start(self) -> None:
        if not self._scheduler.running:
            self._scheduler.start()
            self._logger.info("reminder_scheduler_started")

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            self._logger.info("reminder_scheduler_stopped")

    def request_permission(self) -> bool:
        # A local process needs no grant; starting the scheduler is the
        # closest equivalent of "delivery is now possible".
        self.start()
        return True

    def register(self, request: ReminderRequest) -> None:
        try:
            self._scheduler.add_job(
                self._deliver,
                trigger=DateTrigger(run_date=request.fire_at),
                args=[request],
                id=request.identifier,
                name=request.title,
                replace_existing=True,
                misfire_grace_time=MISFIRE_GRACE_SECONDS,
            )
        except Exception as e:
            raise ReminderDeliveryError(
                f"Could not schedule reminder {request.identifier}: {e}"
            ) from e

    def cancel(self, identifiers: Iterable[str]) -> None:
        for identifier in identifiers:
            try:
                self._scheduler.remove_job(identifier)
            except JobLookupError:
                continue

    def pending(self) -> list[ReminderRequest]:
        requests = [
            job.args[0]
            for job in self._scheduler.get_jobs()
            if job.args and isinstance(job.args[0], ReminderRequest)
        ]
        return sorted(requests, key=lambda r: (r.fire_at, r.identifier))

    def _deliver(self, request: ReminderRequest) -> None:
        if self._on_deliver:
            self._on_deliver(request)
            return
        self._logger.info(
            "reminder_delivered",
            identifier=request.identifier,
            title=request.title,
            body=request.body,
        )
