"""Mapping of solar angles onto a directional light transform."""

from __future__ import annotations

from math import cos, radians, sin, sqrt

from sunlight_driver.contracts import LightRotation, SolarAngles
from sunlight_driver.control.interfaces import OrientationSink

Vec3 = tuple[float, float, float]


def _normalize(v: Vec3) -> Vec3:
    n = sqrt(max(0.0, v[0] * v[0] + v[1] * v[1] + v[2] * v[2]))
    if n <= 0.0:
        return (0.0, 0.0, 1.0)
    return (v[0] / n, v[1] / n, v[2] / n)


def rotation_from_angles(angles: SolarAngles) -> LightRotation:
    """Return the light rotation for solar angles (pitch=altitude, yaw=azimuth)."""
    return LightRotation(pitch=angles.altitude, yaw=angles.azimuth, roll=0.0)


def light_direction(rotation: LightRotation) -> Vec3:
    """Convert a light rotation to the ENU unit vector the light travels along.

    Pitch tilts the beam below the horizon and yaw is measured clockwise from
    north, so a light yawed 180 degrees from the sun's bearing shines away
    from it.
    """
    yaw = radians(rotation.yaw)
    pitch = radians(rotation.pitch)
    x_east = cos(pitch) * sin(yaw)
    y_north = cos(pitch) * cos(yaw)
    z_up = -sin(pitch)
    return _normalize((x_east, y_north, z_up))


class LightTransform(OrientationSink):
    """In-memory light transform keeping the most recent rotation."""

    def __init__(self) -> None:
        self.rotation = LightRotation(pitch=0.0, yaw=0.0, roll=0.0)
        self.update_count = 0

    def apply_rotation(self, rotation: LightRotation) -> None:
        """Store the rotation as the transform's euler angles."""
        self.rotation = rotation
        self.update_count += 1

    @property
    def direction(self) -> Vec3:
        """Unit vector the light currently travels along."""
        return light_direction(self.rotation)
