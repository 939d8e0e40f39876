"""Angle normalization helpers shared by the solar solver."""

from __future__ import annotations

from math import pi

TWO_PI = 2.0 * pi
DEG2RAD = pi / 180.0
RAD2DEG = 180.0 / pi


def correct_angle(angle_rad: float) -> float:
    """Map any radian value into [0, 2*pi).

    Negative inputs are reflected as `2*pi - (|angle| mod 2*pi)`; inputs of
    `2*pi` or more are reduced with the modulo. A reflected value that lands
    on `2*pi` (exact negative multiples, or tiny negatives that round) is
    returned as 0.
    """
    if angle_rad < 0.0:
        corrected = TWO_PI - (abs(angle_rad) % TWO_PI)
        if corrected >= TWO_PI:
            return 0.0
        return corrected
    if angle_rad >= TWO_PI:
        return angle_rad % TWO_PI
    return angle_rad
