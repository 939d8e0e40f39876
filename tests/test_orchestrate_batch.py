"""Tests for batch day-curve evaluation and its cache."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from sunlight_driver.astro.solar import solve
from sunlight_driver.contracts import CivilDateTime, GeoCoordinate
from sunlight_driver.orchestrate.batch import compute_day_curve, solve_many
from sunlight_driver.orchestrate.cache import DayCurveCache, DayCurveKey

LONDON = GeoCoordinate(latitude=51.549090, longitude=-0.074478)
EQUINOX = CivilDateTime(2017, 3, 21, 0, 0)


def _key(day: int) -> DayCurveKey:
    return DayCurveKey(
        year=2017,
        month=3,
        day=day,
        latitude=LONDON.latitude,
        longitude=LONDON.longitude,
        step_minutes=60,
        start_minute=0,
        end_minute=1439,
        utc_offset_minutes=0,
    )


def test_compute_day_curve_samples_whole_day() -> None:
    """Default window covers the full day at the requested cadence."""
    curve = compute_day_curve(EQUINOX, LONDON, step_minutes=10)

    assert len(curve.minutes) == 144
    assert curve.minutes[0] == 0
    assert curve.minutes[-1] == 1430
    assert np.all((curve.azimuths >= 0.0) & (curve.azimuths < 360.0))
    minute, angles = curve.samples()[54]
    assert minute == 540
    assert angles == solve(CivilDateTime(2017, 3, 21, 9, 0), LONDON)


def test_day_curve_rises_to_single_noon_peak() -> None:
    """Altitude rises to one maximum near solar noon and falls back symmetrically."""
    curve = compute_day_curve(EQUINOX, LONDON, step_minutes=5, start_minute=6 * 60, end_minute=18 * 60)
    peak_index = int(np.argmax(curve.altitudes))

    assert 700 <= curve.peak_minute() <= 750
    assert np.all(np.diff(curve.altitudes[: peak_index + 1]) > 0.0)
    assert np.all(np.diff(curve.altitudes[peak_index:]) < 0.0)

    peak = curve.peak_minute()
    before = solve(CivilDateTime(2017, 3, 21, (peak - 180) // 60, (peak - 180) % 60), LONDON)
    after = solve(CivilDateTime(2017, 3, 21, (peak + 180) // 60, (peak + 180) % 60), LONDON)
    assert before.altitude == pytest.approx(after.altitude, abs=1.5)


def test_day_curve_serializes() -> None:
    """to_dict exposes plain lists and the peak summary."""
    payload = compute_day_curve(EQUINOX, LONDON, step_minutes=120).to_dict()

    assert payload["date"] == EQUINOX.to_dict()
    assert payload["minutes"] == list(range(0, 1440, 120))
    assert len(payload["altitudes"]) == 12
    assert isinstance(payload["peak_minute"], int)


def test_compute_day_curve_rejects_window_outside_day() -> None:
    """Windows must lie within one day and steps must be positive."""
    with pytest.raises(ValueError, match="within one day"):
        compute_day_curve(EQUINOX, LONDON, end_minute=1440)
    with pytest.raises(ValueError, match="step_minutes"):
        compute_day_curve(EQUINOX, LONDON, step_minutes=0)


def test_solve_many_matches_individual_calls_and_threads() -> None:
    """Batch and concurrent evaluation agree with single calls."""
    dates = [CivilDateTime(2017, 3, 21, hour, 0) for hour in range(24)]
    expected = [solve(date, LONDON) for date in dates]

    assert solve_many(dates, LONDON) == expected
    with ThreadPoolExecutor(max_workers=4) as pool:
        assert list(pool.map(lambda d: solve(d, LONDON), dates)) == expected


def test_day_curve_cache_builds_once_and_evicts() -> None:
    """Cache returns the stored curve on hit and evicts least recently used."""
    cache = DayCurveCache(max_entries=1)
    calls: list[int] = []

    def builder():
        calls.append(1)
        return compute_day_curve(EQUINOX, LONDON, step_minutes=60)

    first, built_first = cache.get_or_build(_key(21), builder)
    second, built_second = cache.get_or_build(_key(21), builder)
    assert built_first is True
    assert built_second is False
    assert first is second
    assert cache.build_count == 1

    cache.get_or_build(_key(22), builder)
    assert len(cache) == 1
    _, rebuilt = cache.get_or_build(_key(21), builder)
    assert rebuilt is True
    assert len(calls) == 3


def test_day_curve_cache_requires_positive_capacity() -> None:
    """Capacity must be positive."""
    with pytest.raises(ValueError, match="max_entries"):
        DayCurveCache(max_entries=0)
