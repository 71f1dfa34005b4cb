"""
Notification Models

Two kinds of reminder records exist:

- ReminderRequest: a deferred reminder handed to the delivery facility,
  identified by "{project_id}-{milestone}". It lives outside our storage.
- AppNotification: a materialized, user-visible record kept in the
  notification list and persisted with the rest of the planner state.

An AppNotification only points at its project (project_id); it is not
removed when the project is deleted.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


# Days before the event at which a reminder fires, largest first.
MILESTONE_DAYS: tuple[int, ...] = (7, 3, 1, 0)

DEFAULT_REMINDER_TITLE = "Cosplay Reminder"


def reminder_message(event_name: str, days_left: int) -> str:
    """Reminder text for a milestone."""
    if days_left == 0:
        return f"Today is the day! {event_name} is happening now!"
    if days_left == 1:
        return f"The final fitting! {event_name} is in 1 day"
    return f"Get ready! {event_name} is in {days_left} days"


def reminder_identifier(project_id: UUID, milestone_days: int) -> str:
    """Identifier of the deferred reminder for one project milestone."""
    return f"{project_id}-{milestone_days}"


class AppNotification(BaseModel):
    """A reminder that has fired and is shown in the notification list."""
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    project_id: UUID = Field(
        ...,
        description="Project this reminder was raised for (non-owning)"
    )
    project_name: str
    event_name: str
    days_left: int = Field(
        ...,
        ge=0,
        description="Milestone the reminder was raised for"
    )
    date: datetime = Field(
        default_factory=datetime.now,
        description="When the notification was materialized"
    )
    is_read: bool = False

    @property
    def message(self) -> str:
        return reminder_message(self.event_name, self.days_left)

    @property
    def dedup_key(self) -> tuple[UUID, int]:
        return (self.project_id, self.days_left)


class ReminderRequest(BaseModel):
    """A deferred reminder registered with the delivery facility."""
    model_config = ConfigDict(frozen=True)

    identifier: str
    project_id: UUID
    milestone_days: int = Field(ge=0)
    fire_at: datetime
    title: str = DEFAULT_REMINDER_TITLE
    body: str


class ScheduleResult(BaseModel):
    """
    What scheduling a project produced.

    deferred: milestones handed to the delivery facility
    materialized: milestones that were already due
    failed: milestones whose registration the facility rejected
    """

    project_id: UUID
    days_until_event: Optional[int] = None
    deferred: list[int] = Field(default_factory=list)
    materialized: list[int] = Field(default_factory=list)
    failed: list[int] = Field(default_factory=list)

    @property
    def milestones(self) -> list[int]:
        return sorted(
            [*self.deferred, *self.materialized, *self.failed],
            reverse=True,
        )
