"""Default implementations of infrastructure abstractions."""

from datetime import datetime, timedelta

from traintracker.common.utils.date_utils import utc_now
from traintracker.infrastructure.ports.system import IClock


class SystemClock(IClock):
    """Default implementation using system time."""

    def now(self) -> datetime:
        """Get current UTC time."""
        return utc_now()


class ManualClock(IClock):
    """Clock that only moves when told to. Used to drive ticks without waiting."""

    def __init__(self, start: datetime):
        self._now = start

    def now(self) -> datetime:
        return self._now

    def advance(self, seconds: float) -> datetime:
        """Move forward and return the new time."""
        self._now = self._now + timedelta(seconds=seconds)
        return self._now

    def set(self, value: datetime) -> None:
        """Jump to an absolute time."""
        self._now = value
