"""Concrete time sources for interactive and wall-clock driven scenes."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from sunlight_driver.contracts import CivilDateTime
from sunlight_driver.control.interfaces import TimeSource
from sunlight_driver.time.clamp import from_stepped_datetime, to_datetime


class ManualTimeSource(TimeSource):
    """Time source holding an explicitly set civil date/time."""

    def __init__(self, initial: CivilDateTime) -> None:
        self._current = initial

    def get_current_datetime(self) -> CivilDateTime:
        return self._current

    def set_current_datetime(self, value: CivilDateTime) -> None:
        """Replace the held date/time."""
        self._current = value

    def advance(self, minutes: int) -> CivilDateTime:
        moved = to_datetime(self._current) + timedelta(minutes=minutes)
        self._current = from_stepped_datetime(moved, forward=minutes >= 0)
        return self._current


class ClockTimeSource(TimeSource):
    """Time source following the local wall clock plus an accumulated shift."""

    def __init__(self, now: Callable[[], datetime] = datetime.now) -> None:
        self._now = now
        self._shift = timedelta(0)

    def get_current_datetime(self) -> CivilDateTime:
        return from_stepped_datetime(self._now() + self._shift)

    def advance(self, minutes: int) -> CivilDateTime:
        self._shift += timedelta(minutes=minutes)
        return self.get_current_datetime()
