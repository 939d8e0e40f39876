"""Batch evaluation of the solar solver over a day or a list of dates."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta

import numpy as np

from sunlight_driver.astro.solar import solve
from sunlight_driver.contracts import CivilDateTime, GeoCoordinate, SolarAngles
from sunlight_driver.time.stepping import (
    MINUTES_PER_DAY,
    civil_at_minute_of_day,
    iter_minutes_of_day,
)


@dataclass(frozen=True)
class DayCurve:
    """Solar angles sampled at increasing minutes-of-day for one date."""

    date: CivilDateTime
    coord: GeoCoordinate
    minutes: np.ndarray
    azimuths: np.ndarray
    altitudes: np.ndarray

    def peak_minute(self) -> int:
        """Return the sampled minute with the highest altitude."""
        return int(self.minutes[int(np.argmax(self.altitudes))])

    def peak_altitude(self) -> float:
        """Return the highest sampled altitude in degrees."""
        return float(np.max(self.altitudes))

    def samples(self) -> list[tuple[int, SolarAngles]]:
        """Return `(minute, angles)` pairs in sampling order."""
        return [
            (int(minute), SolarAngles(azimuth=float(az), altitude=float(alt)))
            for minute, az, alt in zip(self.minutes, self.azimuths, self.altitudes)
        ]

    def to_dict(self) -> dict[str, object]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "date": self.date.to_dict(),
            "latitude": self.coord.latitude,
            "longitude": self.coord.longitude,
            "minutes": self.minutes.tolist(),
            "azimuths": self.azimuths.tolist(),
            "altitudes": self.altitudes.tolist(),
            "peak_minute": self.peak_minute(),
            "peak_altitude": self.peak_altitude(),
        }


def solve_many(
    dates: Iterable[CivilDateTime],
    coord: GeoCoordinate,
    utc_offset: timedelta = timedelta(0),
) -> list[SolarAngles]:
    """Evaluate the solver independently for each date."""
    return [solve(date, coord, utc_offset) for date in dates]


def compute_day_curve(
    date: CivilDateTime,
    coord: GeoCoordinate,
    step_minutes: int = 10,
    start_minute: int = 0,
    end_minute: int = MINUTES_PER_DAY - 1,
    utc_offset: timedelta = timedelta(0),
) -> DayCurve:
    """Sample solar angles across one local day of `date`."""
    if start_minute < 0 or end_minute >= MINUTES_PER_DAY:
        raise ValueError("minutes must lie within one day [0, 1439]")

    minutes = list(iter_minutes_of_day(start_minute, end_minute, step_minutes))
    angles = solve_many(
        (civil_at_minute_of_day(date, minute) for minute in minutes),
        coord,
        utc_offset,
    )
    return DayCurve(
        date=date,
        coord=coord,
        minutes=np.asarray(minutes, dtype=np.int64),
        azimuths=np.asarray([a.azimuth for a in angles], dtype=np.float64),
        altitudes=np.asarray([a.altitude for a in angles], dtype=np.float64),
    )
