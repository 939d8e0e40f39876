"""Deterministic civil time stepping helpers used by time-lapse and presets."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timedelta
from math import floor

from sunlight_driver.contracts import CivilDateTime, SeasonMarker
from sunlight_driver.time.clamp import from_stepped_datetime, to_datetime

MINUTES_PER_DAY = 24 * 60


def _split_minutes(minutes: float) -> timedelta:
    """Split total minutes into whole hours and whole remaining minutes."""
    hours = floor(minutes / 60.0)
    mins = minutes - hours * 60
    return timedelta(hours=int(hours), minutes=int(mins))


def civil_at_minute_of_day(current: CivilDateTime, minutes: float) -> CivilDateTime:
    """Keep the date of `current` and set its time from minutes since midnight.

    Values past 24h roll into the following day; see `from_stepped_datetime`
    for how day 31 and the end of the year window are handled.
    """
    midnight = to_datetime(current).replace(hour=0, minute=0)
    return from_stepped_datetime(midnight + _split_minutes(minutes), forward=minutes >= 0)


def civil_at_day_of_year(current: CivilDateTime, day: float) -> CivilDateTime:
    """Return January 1st of the current year plus `day` days, keeping the time."""
    start = datetime(current.year, 1, 1, current.hour, current.minute)
    return from_stepped_datetime(start + timedelta(days=int(day)), forward=day >= 0)


def civil_for_marker(current: CivilDateTime, marker: SeasonMarker, minutes: float) -> CivilDateTime:
    """Pin the date to a season marker of the current year at `minutes` past midnight."""
    month, day = marker.month_day
    return from_stepped_datetime(datetime(current.year, month, day) + _split_minutes(minutes))


def iter_minutes_of_day(start_minute: int, end_minute: int, step_minutes: int) -> Iterator[int]:
    """Yield minutes-of-day from `start_minute` to `end_minute` inclusive."""
    if step_minutes <= 0:
        raise ValueError("step_minutes must be positive")
    if start_minute > end_minute:
        raise ValueError("start_minute must be <= end_minute")
    current = start_minute
    while current <= end_minute:
        yield current
        current += step_minutes
