"""Smoke tests for the package CLI."""

from __future__ import annotations

import json

import pytest

from sunlight_driver.__main__ import main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SUNLIGHT_UTC_OFFSET_MINUTES", "SUNLIGHT_LATITUDE", "SUNLIGHT_LONGITUDE", "SUNLIGHT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_cli_import_smoke() -> None:
    """Ensure CLI entrypoint can be imported and executed."""
    assert main([]) == 0


def test_cli_position_prints_angles(capsys: pytest.CaptureFixture[str]) -> None:
    """`position` prints the reference scenario as JSON."""
    code = main(["position", "--at", "2017-03-21T09:00", "--lat", "51.549090", "--lon", "-0.074478"])

    assert code == 0
    body = json.loads(capsys.readouterr().out)
    assert body["date"] == {"year": 2017, "month": 3, "day": 21, "hour": 9, "minute": 0}
    assert body["altitude"] == pytest.approx(25.458262196986315, abs=1e-6)
    assert body["azimuth"] == pytest.approx(306.0758295204016, abs=1e-6)
    assert body["rotation"]["yaw"] == body["azimuth"]


def test_cli_day_curve_uses_configured_position(
    capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    """`day-curve` falls back to the configured observer position."""
    monkeypatch.setenv("SUNLIGHT_LATITUDE", "0")
    code = main(["day-curve", "--at", "2024-03-20T00:00", "--step-minutes", "60"])

    assert code == 0
    body = json.loads(capsys.readouterr().out)
    assert body["latitude"] == 0.0
    assert len(body["minutes"]) == 24


def test_cli_rejects_bad_datetime() -> None:
    """Malformed datetimes are argparse errors."""
    with pytest.raises(SystemExit):
        main(["position", "--at", "not-a-date"])
