"""In-memory reminder center, used by tests and headless sessions."""

from collections.abc import Iterable
from datetime import datetime
from typing import Callable, Optional

from cosplay_planner.models.notification import ReminderRequest
from cosplay_planner.services.reminders.interface import ReminderCenterInterface


class InMemoryReminderCenter(ReminderCenterInterface):
    """
    Keeps pending requests in a dict keyed by identifier.

    Nothing fires on its own: call deliver_due(now) to pop every request
    whose fire time has been reached.
    """

    def __init__(
        self,
        permission_granted: bool = True,
        on_deliver: Optional[Callable[[ReminderRequest], None]] = None,
    ):
        self._permission_granted = permission_granted
        self._on_deliver = on_deliver
        self._pending: dict[str, ReminderRequest] = {}
        self.permission_requests = 0

    def request_permission(self) -> bool:
        self.permission_requests += 1
        return self._permission_granted

    def register(self, request: ReminderRequest) -> None:
        self._pending[request.identifier] = request

    def cancel(self, identifiers: Iterable[str]) -> None:
        for identifier in identifiers:
            self._pending.pop(identifier, None)

    def pending(self) -> list[ReminderRequest]:
        return sorted(self._pending.values(), key=lambda r: (r.fire_at, r.identifier))

    def identifiers(self) -> set[str]:
        return set(self._pending)

    def deliver_due(self, now: datetime) -> list[ReminderRequest]:
        """Pop and deliver every request due at or before now."""
        due = [r for r in self.pending() if r.fire_at <= now]
        for request in due:
            del self._pending[request.identifier]
            if self._on_deliver:
                self._on_deliver(request)
        return due
