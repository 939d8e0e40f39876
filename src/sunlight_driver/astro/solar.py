"""Solar position solver.

Turns a local civil date/time and a geographic position into the azimuth and
altitude of the sun using a low-precision Julian date / sidereal time /
ecliptic coordinate chain. Results are only meaningful for dates between
March 1900 and February 2100.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from math import asin, atan, atan2, cos, pi, sin, tan

from sunlight_driver.astro.angles import DEG2RAD, RAD2DEG, TWO_PI, correct_angle
from sunlight_driver.contracts import CivilDateTime, GeoCoordinate, SolarAngles
from sunlight_driver.time.clamp import to_datetime

_log = logging.getLogger(__name__)

AZIMUTH_EPSILON = 1e-12

_SIDEREAL_RATIO = 366.2422 / 365.2422


def julian_day(dt_utc: datetime) -> float:
    """Return days since J2000.0 at 0h UT of the given calendar date."""
    year = dt_utc.year
    month = dt_utc.month
    return (
        367 * year
        - int((7.0 / 4.0) * (year + int((month + 9.0) / 12.0)))
        + int((275.0 * month) / 9.0)
        + dt_utc.day
        - 730531.5
    )


def _azimuth_rad(numerator: float, denominator: float) -> float:
    """Resolve the azimuth quadrant from the atan numerator/denominator pair."""
    if abs(denominator) < AZIMUTH_EPSILON:
        _log.debug("azimuth denominator %.3e below epsilon, snapping", denominator)
        if numerator > 0.0:
            return pi / 2.0
        if numerator < 0.0:
            return 3.0 * pi / 2.0
        return 0.0

    azimuth = atan(numerator / denominator)
    if denominator < 0.0:
        azimuth += pi
    elif numerator < 0.0:
        azimuth += TWO_PI
    return azimuth


def solve(
    date: CivilDateTime,
    coord: GeoCoordinate,
    utc_offset: timedelta = timedelta(0),
) -> SolarAngles:
    """Compute solar azimuth/altitude for a local civil time and position.

    Args:
        date: Local civil date/time. Day values past the end of the month are
            rounded down to the month's last day.
        coord: Observer latitude/longitude in degrees (east positive).
        utc_offset: Offset of local time from UTC (local = UTC + offset).
            Defaults to zero, i.e. the civil time is already UTC.

    Returns:
        `SolarAngles` with altitude in [-90, 90] and azimuth in [0, 360).
        Azimuth carries a 180 degree shift so that it can be used directly as
        the yaw of a light pointing away from the sun.
    """
    dt_utc = to_datetime(date) - utc_offset
    hours_of_day = dt_utc.hour + dt_utc.minute / 60.0

    jd = julian_day(dt_utc)
    centuries = jd / 36525.0

    sidereal_hours = 6.6974 + 2400.0513 * centuries
    sidereal_ut = sidereal_hours + _SIDEREAL_RATIO * hours_of_day
    sidereal_deg = sidereal_ut * 15 + coord.longitude

    # Refine to the fractional day before solar coordinates.
    jd += hours_of_day / 24.0
    centuries = jd / 36525.0

    mean_longitude = correct_angle(DEG2RAD * (280.466 + 36000.77 * centuries))
    mean_anomaly = correct_angle(DEG2RAD * (357.529 + 35999.05 * centuries))
    equation_of_center = DEG2RAD * (
        (1.915 - 0.005 * centuries) * sin(mean_anomaly) + 0.02 * sin(2 * mean_anomaly)
    )
    ecliptic_longitude = correct_angle(mean_longitude + equation_of_center)
    obliquity = (23.439 - 0.013 * centuries) * DEG2RAD

    right_ascension = atan2(
        cos(obliquity) * sin(ecliptic_longitude),
        cos(ecliptic_longitude),
    )
    # Uses sin(right_ascension), not sin(ecliptic_longitude).
    declination = asin(sin(right_ascension) * sin(obliquity))

    hour_angle = correct_angle(sidereal_deg * DEG2RAD) - right_ascension
    if hour_angle > pi:
        hour_angle -= TWO_PI

    lat_rad = coord.latitude * DEG2RAD
    sin_altitude = (
        sin(lat_rad) * sin(declination) + cos(lat_rad) * cos(declination) * cos(hour_angle)
    )
    # math.asin raises for |x| > 1, which rounding can produce at the zenith.
    altitude = asin(max(-1.0, min(1.0, sin_altitude)))

    numerator = -sin(hour_angle)
    denominator = tan(declination) * cos(lat_rad) - sin(lat_rad) * cos(hour_angle)
    azimuth = _azimuth_rad(numerator, denominator)

    return SolarAngles(
        azimuth=(azimuth * RAD2DEG + 180.0) % 360.0,
        altitude=altitude * RAD2DEG,
    )


def solar_position(
    date: CivilDateTime,
    lat_deg: float,
    lon_deg: float,
    utc_offset: timedelta = timedelta(0),
) -> SolarAngles:
    """Convenience wrapper over `solve` taking bare latitude/longitude."""
    return solve(date, GeoCoordinate(latitude=lat_deg, longitude=lon_deg), utc_offset)
