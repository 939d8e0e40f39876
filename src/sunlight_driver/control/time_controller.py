"""Time/location controller feeding the solar solver and a light sink.

The controller owns the mutable "current" state of an interactive scene (the
observer position, the time-of-day slider value and the time-lapse mode) and
reduces every user action to `normalize` + `solve`. Date/time state lives
behind a `TimeSource`; the controller only reads it and advances it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from math import isfinite

from sunlight_driver.astro.solar import solve
from sunlight_driver.config import SunlightConfig
from sunlight_driver.contracts import CivilDateTime, GeoCoordinate, SeasonMarker, SolarAngles
from sunlight_driver.control.interfaces import OrientationSink, TimeSource
from sunlight_driver.scene.orientation import rotation_from_angles
from sunlight_driver.time.clamp import from_datetime, to_datetime
from sunlight_driver.time.stepping import (
    civil_at_day_of_year,
    civil_at_minute_of_day,
    civil_for_marker,
)

_log = logging.getLogger(__name__)


class CoordinateParseError(ValueError):
    """Raised when latitude/longitude text cannot be parsed."""


def parse_coordinate(text: str, label: str = "coordinate") -> float:
    """Parse free-text decimal degrees into a finite float."""
    try:
        value = float(text.strip())
    except (AttributeError, ValueError) as exc:
        raise CoordinateParseError(f"invalid {label}: {text!r}") from exc
    if not isfinite(value):
        raise CoordinateParseError(f"{label} must be finite, got {text!r}")
    return value


@dataclass(frozen=True)
class IterationSettings:
    """Time-lapse window and increment, in hours and minutes."""

    starting_hour: float = 6.0
    ending_hour: float = 20.0
    minutes_step: float = 10.0

    def __post_init__(self) -> None:
        if self.minutes_step <= 0:
            raise ValueError("minutes_step must be positive")
        if self.starting_hour > self.ending_hour:
            raise ValueError("starting_hour must be <= ending_hour")

    @classmethod
    def from_config(cls, cfg: SunlightConfig) -> IterationSettings:
        return cls(
            starting_hour=cfg.iteration_start_hour,
            ending_hour=cfg.iteration_end_hour,
            minutes_step=cfg.iteration_step_minutes,
        )


class TimeController:
    """Drive a light sink from a time source and an observer position."""

    def __init__(
        self,
        time_source: TimeSource,
        sink: OrientationSink,
        coord: GeoCoordinate,
        utc_offset: timedelta = timedelta(0),
        iteration: IterationSettings | None = None,
    ) -> None:
        self.time_source = time_source
        self.sink = sink
        self.coord = coord
        self.utc_offset = utc_offset
        self.iteration = iteration or IterationSettings()
        self.time_of_day_minutes = float(time_source.get_current_datetime().minute_of_day)
        self.iterating = False
        self._last_value = self.time_of_day_minutes
        self.last_angles: SolarAngles | None = None

    @property
    def current(self) -> CivilDateTime:
        """Current civil date/time reported by the time source."""
        return self.time_source.get_current_datetime()

    def _move_to(self, target: CivilDateTime) -> None:
        delta = to_datetime(target) - to_datetime(self.current)
        self.time_source.advance(int(delta.total_seconds() // 60))
        _log.debug("time moved to %s", self.current)

    def update(self) -> SolarAngles:
        """Recompute solar angles for the current state and push them to the sink."""
        angles = solve(self.current, self.coord, self.utc_offset)
        self.sink.apply_rotation(rotation_from_angles(angles))
        self.last_angles = angles
        return angles

    def set_location(self, latitude: float, longitude: float) -> SolarAngles:
        """Replace the observer position."""
        self.coord = GeoCoordinate(latitude=latitude, longitude=longitude)
        _log.debug("location set to lat=%.6f lon=%.6f", latitude, longitude)
        return self.update()

    def set_latitude(self, text: str) -> SolarAngles:
        """Parse and apply a latitude typed by the user."""
        try:
            latitude = parse_coordinate(text, "latitude")
        except CoordinateParseError:
            _log.warning("rejected latitude input %r", text)
            raise
        return self.set_location(latitude, self.coord.longitude)

    def set_longitude(self, text: str) -> SolarAngles:
        """Parse and apply a longitude typed by the user."""
        try:
            longitude = parse_coordinate(text, "longitude")
        except CoordinateParseError:
            _log.warning("rejected longitude input %r", text)
            raise
        return self.set_location(self.coord.latitude, longitude)

    def set_time_of_day(self, minutes: float) -> SolarAngles:
        """Keep the current date and set the time from minutes since midnight."""
        self.time_of_day_minutes = float(minutes)
        self._move_to(civil_at_minute_of_day(self.current, minutes))
        return self.update()

    def set_day_of_year(self, day: float) -> SolarAngles:
        """Set the date to January 1st plus `day` days, keeping the time."""
        self._move_to(civil_at_day_of_year(self.current, day))
        return self.update()

    def set_date(self, value: datetime) -> SolarAngles:
        """Set an explicit date/time; seconds and zone information are dropped."""
        target = from_datetime(value)
        self.time_of_day_minutes = float(target.minute_of_day)
        self._move_to(target)
        return self.update()

    def apply_marker(self, marker: SeasonMarker) -> SolarAngles:
        """Pin the date to an equinox/solstice preset at the slider time."""
        self._move_to(civil_for_marker(self.current, marker, self.time_of_day_minutes))
        return self.update()

    def use_current_time(self, now: datetime | None = None) -> SolarAngles:
        """Load the wall-clock time, or `now` when given."""
        moment = now or datetime.now()
        return self.set_date(moment.replace(second=0, microsecond=0))

    def toggle_iteration(self) -> bool:
        """Start or stop stepping through the day; returns the new state."""
        self.iterating = not self.iterating
        if self.iterating:
            self._last_value = self.time_of_day_minutes
            self.set_time_of_day(self.iteration.starting_hour * 60.0)
        _log.debug("iteration %s", "started" if self.iterating else "stopped")
        return self.iterating

    def tick(self) -> bool:
        """Advance one time-lapse step; returns whether iteration continues.

        Once the slider passes the ending hour it is restored to the value it
        had when iteration started and iteration stops.
        """
        if not self.iterating:
            return False
        if self.time_of_day_minutes <= self.iteration.ending_hour * 60.0:
            self.set_time_of_day(self.time_of_day_minutes + self.iteration.minutes_step)
        else:
            self.set_time_of_day(self._last_value)
            self.toggle_iteration()
        return self.iterating

    @classmethod
    def from_config(
        cls,
        cfg: SunlightConfig,
        time_source: TimeSource,
        sink: OrientationSink,
    ) -> TimeController:
        """Build a controller using configured position, offset and iteration window."""
        return cls(
            time_source=time_source,
            sink=sink,
            coord=cfg.coordinate,
            utc_offset=cfg.utc_offset,
            iteration=IterationSettings.from_config(cfg),
        )

