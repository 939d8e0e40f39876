"""Core data contracts for the sunlight driver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


@dataclass(frozen=True, slots=True)
class GeoCoordinate:
    """Observer position in decimal degrees.

    Ranges are not enforced; values beyond +-90/+-180 are accepted and simply
    produce physically meaningless angles.
    """

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class CivilDateTime:
    """Local civil date/time with seconds fixed at zero."""

    year: int
    month: int
    day: int
    hour: int
    minute: int

    @property
    def minute_of_day(self) -> int:
        """Total minutes elapsed since local midnight."""
        return self.hour * 60 + self.minute

    def to_dict(self) -> dict[str, int]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "hour": self.hour,
            "minute": self.minute,
        }


@dataclass(frozen=True, slots=True)
class SolarAngles:
    """Sun orientation in degrees."""

    azimuth: float
    altitude: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {"azimuth": self.azimuth, "altitude": self.altitude}


@dataclass(frozen=True, slots=True)
class LightRotation:
    """Euler rotation applied to a directional light transform (degrees)."""

    pitch: float
    yaw: float
    roll: float = 0.0

    def to_dict(self) -> dict[str, float]:
        """Serialize to a JSON-compatible dictionary."""
        return {"pitch": self.pitch, "yaw": self.yaw, "roll": self.roll}


class SeasonMarker(StrEnum):
    """Equinox/solstice presets offered by the time controller."""

    MARCH = "march"
    JUNE = "june"
    SEPTEMBER = "september"
    DECEMBER = "december"

    @property
    def month_day(self) -> tuple[int, int]:
        """Return the `(month, day)` this marker pins the date to."""
        return _MARKER_DATES[self]


_MARKER_DATES: dict[SeasonMarker, tuple[int, int]] = {
    SeasonMarker.MARCH: (3, 21),
    SeasonMarker.JUNE: (6, 21),
    SeasonMarker.SEPTEMBER: (9, 23),
    SeasonMarker.DECEMBER: (12, 21),
}
