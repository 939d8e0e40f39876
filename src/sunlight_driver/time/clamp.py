"""Field-by-field clamping of raw civil date/time input."""

from __future__ import annotations

import logging
from calendar import monthrange
from datetime import datetime, timedelta

from sunlight_driver.contracts import CivilDateTime

_log = logging.getLogger(__name__)

YEAR_MIN, YEAR_MAX = 1900, 2100
MONTH_MIN, MONTH_MAX = 1, 12
DAY_MIN, DAY_MAX = 1, 30
HOUR_MIN, HOUR_MAX = 0, 23
MINUTE_MIN, MINUTE_MAX = 0, 59


def _clamp(name: str, value: int, lower: int, upper: int) -> int:
    """Clamp an integer field to [lower, upper], logging any correction."""
    clamped = max(lower, min(upper, int(value)))
    if clamped != value:
        _log.debug("clamped %s from %s to %s", name, value, clamped)
    return clamped


def normalize(year: int, month: int, day: int, hour: int, minute: int) -> CivilDateTime:
    """Clamp raw fields into the supported civil date window.

    Each field is corrected independently; `day` is capped at 30 regardless of
    month, so the result is not necessarily a real calendar date. Out-of-range
    input never raises.
    """
    return CivilDateTime(
        year=_clamp("year", year, YEAR_MIN, YEAR_MAX),
        month=_clamp("month", month, MONTH_MIN, MONTH_MAX),
        day=_clamp("day", day, DAY_MIN, DAY_MAX),
        hour=_clamp("hour", hour, HOUR_MIN, HOUR_MAX),
        minute=_clamp("minute", minute, MINUTE_MIN, MINUTE_MAX),
    )


def to_datetime(civil: CivilDateTime) -> datetime:
    """Materialize a civil value as a naive datetime, seconds fixed at 0.

    Days past the end of the month (e.g. 30 February) are rounded down to the
    month's last day.
    """
    last_day = monthrange(civil.year, civil.month)[1]
    return datetime(civil.year, civil.month, min(civil.day, last_day), civil.hour, civil.minute, 0)


def from_datetime(dt: datetime) -> CivilDateTime:
    """Normalize the civil fields of a datetime, dropping seconds and zone."""
    return normalize(dt.year, dt.month, dt.day, dt.hour, dt.minute)


def from_stepped_datetime(dt: datetime, forward: bool = True) -> CivilDateTime:
    """Normalize a datetime reached by stepping time in one direction.

    Day 31 is skipped in the direction of travel (forward to the 1st of the
    next month, backward to the 30th) and steps past either end of the year
    window saturate at its first/last minute, so the result never moves
    against the step.
    """
    if dt.day == 31:
        dt = dt + timedelta(days=1 if forward else -1)
    if dt.year > YEAR_MAX:
        return CivilDateTime(YEAR_MAX, MONTH_MAX, DAY_MAX, HOUR_MAX, MINUTE_MAX)
    if dt.year < YEAR_MIN:
        return CivilDateTime(YEAR_MIN, MONTH_MIN, DAY_MIN, HOUR_MIN, MINUTE_MIN)
    return from_datetime(dt)
