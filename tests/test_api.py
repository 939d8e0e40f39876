"""API tests for solar position and day-curve endpoints."""

from __future__ import annotations

import pytest

from sunlight_driver.config import SunlightConfig


def _client(config: SunlightConfig | None = None) -> object:
    """Create FastAPI TestClient with optional dependency guards."""
    pytest.importorskip("fastapi")
    testclient_module = pytest.importorskip("fastapi.testclient")
    from sunlight_driver.api.app import create_app

    return testclient_module.TestClient(create_app(config or SunlightConfig()))


def test_health_endpoint() -> None:
    """`GET /health` reports ok."""
    client = _client()
    assert client.get("/health").json() == {"status": "ok"}


def test_sun_position_endpoint_returns_angles_and_rotation() -> None:
    """`POST /sun-position` returns the reference scenario angles."""
    client = _client()

    response = client.post(
        "/sun-position",
        json={"year": 2017, "month": 3, "day": 21, "hour": 9, "minute": 0, "lat": 51.549090, "lon": -0.074478},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["altitude"] == pytest.approx(25.458262196986315, abs=1e-6)
    assert body["azimuth"] == pytest.approx(306.0758295204016, abs=1e-6)
    assert body["rotation"] == {"pitch": body["altitude"], "yaw": body["azimuth"], "roll": 0.0}


def test_sun_position_endpoint_clamps_date_fields() -> None:
    """Out-of-range date fields are clamped and echoed back."""
    client = _client()

    response = client.post(
        "/sun-position",
        json={"year": 1800, "month": 14, "day": 45, "hour": 25, "minute": -1, "lat": "10.5", "lon": "20"},
    )

    assert response.status_code == 200
    assert response.json()["date"] == {"year": 1900, "month": 12, "day": 30, "hour": 23, "minute": 0}


def test_sun_position_endpoint_applies_configured_offset() -> None:
    """Configured UTC offset is used unless the request overrides it."""
    client = _client(SunlightConfig(utc_offset_minutes=60))
    payload = {"year": 2017, "month": 3, "day": 21, "hour": 10, "minute": 0, "lat": 51.549090, "lon": -0.074478}

    shifted = client.post("/sun-position", json=payload).json()
    explicit = client.post("/sun-position", json={**payload, "hour": 9, "utc_offset_minutes": 0}).json()

    assert shifted["azimuth"] == explicit["azimuth"]
    assert shifted["altitude"] == explicit["altitude"]


def test_sun_position_endpoint_rejects_unparseable_coordinate() -> None:
    """Free-text coordinates that do not parse return 422."""
    client = _client()

    response = client.post(
        "/sun-position",
        json={"year": 2017, "month": 3, "day": 21, "lat": "north", "lon": 0.0},
    )

    assert response.status_code == 422
    assert "latitude" in response.json()["detail"]


def test_day_curve_endpoint_reuses_cached_curve() -> None:
    """`POST /day-curve` builds once per key and reports cache hits."""
    client = _client()
    payload = {"year": 2017, "month": 3, "day": 21, "lat": 51.549090, "lon": -0.074478, "step_minutes": 30}

    first = client.post("/day-curve", json=payload)
    second = client.post("/day-curve", json=payload)

    assert first.status_code == 200
    assert second.status_code == 200
    first_body = first.json()
    second_body = second.json()
    assert len(first_body["samples"]) == 48
    assert 690 <= first_body["peak_minute"] <= 750
    assert first_body["cache_hit"] is False
    assert second_body["cache_hit"] is True
    assert second_body["build_count"] == 1


def test_day_curve_endpoint_validates_window() -> None:
    """An inverted sampling window is a validation error."""
    client = _client()

    response = client.post(
        "/day-curve",
        json={"year": 2017, "month": 3, "day": 21, "lat": 0.0, "lon": 0.0, "start_minute": 600, "end_minute": 300},
    )

    assert response.status_code == 422
