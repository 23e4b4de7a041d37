"""Injectable time source. Services never call ``datetime.now()`` directly."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):

    @abstractmethod
    def now(self) -> datetime:
        """Current time as a timezone-aware UTC datetime."""
        ...


class SystemClock(Clock):

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock for tests: starts at ``start`` and advances ``step`` per call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        if start.tzinfo is None:
            start = start.replace(tzinfo=timezone.utc)
        self._current = start
        self._step = step

    def now(self) -> datetime:
        value = self._current
        self._current = self._current + self._step
        return value
