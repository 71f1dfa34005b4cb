"""
Shared fixtures.

Every time-dependent service gets the same FixedClock, pinned to
2026-03-15 10:00. Storage and reminder delivery are in-memory; no
scheduler threads are started unless a test does it itself.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from io import BytesIO
from typing import Optional

import pytest
from PIL import Image

from cosplay_planner.audit import AuditLogger
from cosplay_planner.config import ImageSettings, ReminderSettings, StorageSettings
from cosplay_planner.models.notification import ReminderRequest
from cosplay_planner.models.project import (
    ChecklistTask,
    Expense,
    ExpenseCategory,
    Project,
)
from cosplay_planner.notifications import NotificationScheduler
from cosplay_planner.services.clock import FixedClock
from cosplay_planner.services.image import CoverImageCodec
from cosplay_planner.services.reminders import InMemoryReminderCenter, ReminderDeliveryError
from cosplay_planner.services.storage import (
    InMemoryKeyValueStorage,
    KeyValueStorageInterface,
    PlannerPersistence,
    StorageUnavailableError,
)
from cosplay_planner.store import ProjectStore
from cosplay_planner.validation import PlannerFormValidator


NOW = datetime(2026, 3, 15, 10, 0)
TODAY = NOW.date()


# =============================================================================
# TEST DOUBLES
# =============================================================================

class FailingStorage(KeyValueStorageInterface):
    """A store whose disk has gone away."""

    def __init__(self):
        self.write_attempts = 0

    def get(self, key: str) -> Optional[bytes]:
        raise StorageUnavailableError(f"cannot read {key}")

    def set(self, key: str, value: bytes) -> None:
        self.write_attempts += 1
        raise StorageUnavailableError(f"cannot write {key}")

    def delete(self, key: str) -> bool:
        raise StorageUnavailableError(f"cannot delete {key}")

    def keys(self) -> list[str]:
        return []


class RejectingReminderCenter(InMemoryReminderCenter):
    """A delivery facility that refuses every request."""

    def register(self, request: ReminderRequest) -> None:
        raise ReminderDeliveryError(f"rejected {request.identifier}")

    def cancel(self, identifiers) -> None:
        raise ReminderDeliveryError("cancel rejected")


def make_png(size=(16, 16), mode="RGBA", color=(200, 30, 90, 128)) -> bytes:
    buffer = BytesIO()
    Image.new(mode, size, color).save(buffer, format="PNG")
    return buffer.getvalue()


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def audit_logger():
    return AuditLogger()


@pytest.fixture
def storage():
    return InMemoryKeyValueStorage()


@pytest.fixture
def storage_settings():
    return StorageSettings(backend="memory")


@pytest.fixture
def reminder_settings():
    return ReminderSettings(backend="memory", delivery_hour=9, delivery_minute=0)


@pytest.fixture
def image_settings():
    return ImageSettings(jpeg_quality=80, max_upload_size_mb=1)


@pytest.fixture
def persistence(storage, storage_settings, audit_logger):
    return PlannerPersistence(storage, settings=storage_settings, audit_logger=audit_logger)


@pytest.fixture
def reminder_center():
    return InMemoryReminderCenter()


@pytest.fixture
def scheduler(persistence, reminder_center, clock, reminder_settings, audit_logger):
    return NotificationScheduler(
        persistence,
        reminder_center,
        clock=clock,
        settings=reminder_settings,
        audit_logger=audit_logger,
    )


@pytest.fixture
def store(persistence, scheduler, audit_logger):
    return ProjectStore(persistence, scheduler=scheduler, audit_logger=audit_logger)


@pytest.fixture
def validator(image_settings, audit_logger, clock):
    return PlannerFormValidator(
        image_codec=CoverImageCodec(image_settings),
        audit_logger=audit_logger,
        clock=clock,
    )


@pytest.fixture
def make_project():
    """Factory for projects whose event is a number of days after TODAY."""

    def _make(days_until: int = 30, **overrides) -> Project:
        fields = {
            "project_name": "Zelda",
            "source": "Breath of the Wild",
            "event_name": "Comic Con",
            "budget": "500",
            "event_date": TODAY + timedelta(days=days_until),
        }
        fields.update(overrides)
        return Project(**fields)

    return _make


@pytest.fixture
def expense_factory():
    def _make(
        amount: str,
        category: ExpenseCategory = ExpenseCategory.FABRIC_OUTFIT,
        date: datetime = NOW,
    ) -> Expense:
        return Expense(
            store="Fabric Town",
            item="Satin",
            amount=Decimal(amount),
            category=category,
            date=date,
        )

    return _make


@pytest.fixture
def tasks_factory():
    def _make(*completed: bool) -> list[ChecklistTask]:
        return [
            ChecklistTask(title=f"Task {i + 1}", is_completed=done)
            for i, done in enumerate(completed)
        ]

    return _make
