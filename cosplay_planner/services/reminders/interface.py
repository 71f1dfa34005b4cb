"""
Reminder Delivery Interface

Deferred reminders (those due on a future day) are handed to a
delivery facility that fires them at the requested instant. The
planner only registers and cancels; it never waits for delivery and
never retries a rejected registration.

Identifiers are "{project_id}-{milestone_days}". Registering an
identifier that is already pending replaces the earlier request.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from cosplay_planner.models.notification import ReminderRequest


class ReminderCenterInterface(ABC):
    """Abstract interface for a deferred-reminder delivery facility."""

    @abstractmethod
    def request_permission(self) -> bool:
        """
        Ask for permission to deliver reminders.

        Returns:
            True if delivery is allowed
        """
        pass

    @abstractmethod
    def register(self, request: ReminderRequest) -> None:
        """
        Register (or replace) a deferred reminder.

        Raises:
            ReminderDeliveryError: If the facility rejects the request
        """
        pass

    @abstractmethod
    def cancel(self, identifiers: Iterable[str]) -> None:
        """Cancel pending reminders. Unknown identifiers are ignored."""
        pass

    @abstractmethod
    def pending(self) -> list[ReminderRequest]:
        """Pending requests ordered by fire time."""
        pass


class ReminderDeliveryError(Exception):
    """The delivery facility rejected a reminder request."""
    pass
