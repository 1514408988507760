"""
Clock - source of "today" and "now" for every rule and use case.

Everything under core/ is pure given a date; the clock is the only place
that reads the system time, so tests swap in FixedClock.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta


class Clock(ABC):
    """Interface: today() and now()."""

    def today(self) -> date:
        return self.now().date()

    @abstractmethod
    def now(self) -> datetime: ...


class SystemClock(Clock):
    """Local wall-clock time."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """Deterministic clock for tests and backfill scripts."""

    def __init__(self, current: datetime | date):
        if not isinstance(current, datetime):
            current = datetime.combine(current, datetime.min.time()).replace(hour=12)
        self.current = current

    def now(self) -> datetime:
        return self.current

    def advance(self, days: int = 0, minutes: int = 0) -> None:
        self.current += timedelta(days=days, minutes=minutes)

    def set(self, current: datetime) -> None:
        self.current = current
