"""
Clock Abstraction

Scheduling and statistics both depend on "now". Services take a Clock
so tests can pin the current moment and assert exact day and month
boundaries.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from typing import Optional


class Clock(ABC):
    """Source of the current local time."""

    @abstractmethod
    def now(self) -> datetime:
        pass

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    """Wall-clock time of the running process."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """A clock that only moves when told to."""

    def __init__(self, moment: Optional[datetime] = None):
        self._moment = moment or datetime.now()

    def now(self) -> datetime:
        return self._moment

    def set(self, moment: datetime) -> None:
        self._moment = moment

    def advance(self, days: int = 0, hours: int = 0, minutes: int = 0) -> datetime:
        self._moment += timedelta(days=days, hours=hours, minutes=minutes)
        return self._moment
