"""Capability interfaces between the solver and its outer layers."""

from __future__ import annotations

from typing import Protocol

from sunlight_driver.contracts import CivilDateTime, LightRotation


class TimeSource(Protocol):
    """Interface for reading and advancing the current civil date/time."""

    def get_current_datetime(self) -> CivilDateTime:
        """Return the current local civil date/time."""

    def advance(self, minutes: int) -> CivilDateTime:
        """Move the current time forward by `minutes` and return it."""


class OrientationSink(Protocol):
    """Interface for anything that applies a rotation to a light transform."""

    def apply_rotation(self, rotation: LightRotation) -> None:
        """Apply the rotation derived from the latest solar angles."""
