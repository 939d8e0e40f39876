"""FastAPI app exposing solar position and day-curve endpoints."""

from __future__ import annotations

import logging
from datetime import timedelta

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, model_validator

from sunlight_driver.astro.solar import solve
from sunlight_driver.config import SunlightConfig, config_from_env
from sunlight_driver.contracts import CivilDateTime, GeoCoordinate
from sunlight_driver.control.time_controller import CoordinateParseError, parse_coordinate
from sunlight_driver.orchestrate.batch import DayCurve, compute_day_curve
from sunlight_driver.orchestrate.cache import DayCurveCache, DayCurveKey
from sunlight_driver.scene.orientation import rotation_from_angles
from sunlight_driver.time.clamp import normalize

_log = logging.getLogger(__name__)

_MAX_OFFSET_MINUTES = 14 * 60


class SunPositionRequest(BaseModel):
    """Request schema for one solar position; date fields are clamped, not rejected."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    lat: float | str
    lon: float | str
    utc_offset_minutes: int | None = Field(
        default=None, ge=-_MAX_OFFSET_MINUTES, le=_MAX_OFFSET_MINUTES
    )


class CivilDateTimeResponse(BaseModel):
    """Normalized civil date/time actually used by the solver."""

    year: int
    month: int
    day: int
    hour: int
    minute: int


class RotationResponse(BaseModel):
    """Euler rotation for the light transform."""

    pitch: float
    yaw: float
    roll: float


class SunPositionResponse(BaseModel):
    """Response schema with solar angles and derived light rotation."""

    date: CivilDateTimeResponse
    azimuth: float
    altitude: float
    rotation: RotationResponse


class DayCurveRequest(BaseModel):
    """Request schema for sampling solar angles across one day."""

    year: int
    month: int
    day: int
    lat: float | str
    lon: float | str
    step_minutes: int = Field(default=10, ge=1, le=24 * 60)
    start_minute: int = Field(default=0, ge=0, le=24 * 60 - 1)
    end_minute: int = Field(default=24 * 60 - 1, ge=0, le=24 * 60 - 1)
    utc_offset_minutes: int | None = Field(
        default=None, ge=-_MAX_OFFSET_MINUTES, le=_MAX_OFFSET_MINUTES
    )

    @model_validator(mode="after")
    def validate_window(self) -> "DayCurveRequest":
        """Require an ordered sampling window."""
        if self.start_minute > self.end_minute:
            raise ValueError("start_minute must be <= end_minute")
        return self


class DayCurveSample(BaseModel):
    """One sampled minute of a day curve."""

    minute: int
    azimuth: float
    altitude: float


class DayCurveResponse(BaseModel):
    """Day-curve payload with peak summary and cache metadata."""

    date: CivilDateTimeResponse
    samples: list[DayCurveSample]
    peak_minute: int
    peak_altitude: float
    cache_hit: bool
    build_count: int


def _resolve_coordinate(lat: float | str, lon: float | str) -> GeoCoordinate:
    """Parse request latitude/longitude, mapping parse failures to HTTP 422."""
    try:
        return GeoCoordinate(
            latitude=parse_coordinate(str(lat), "latitude"),
            longitude=parse_coordinate(str(lon), "longitude"),
        )
    except CoordinateParseError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _resolve_offset(minutes: int | None, cfg: SunlightConfig) -> int:
    return cfg.utc_offset_minutes if minutes is None else minutes


def _date_response(date: CivilDateTime) -> CivilDateTimeResponse:
    return CivilDateTimeResponse(**date.to_dict())


def create_app(config: SunlightConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI app."""
    cfg = config or config_from_env()
    app = FastAPI(title="Sunlight Driver API", version="0.1.0")
    curve_cache = DayCurveCache(max_entries=64)

    app.state.config = cfg
    app.state.curve_cache = curve_cache

    @app.get("/health")
    def get_health() -> dict[str, str]:
        """Liveness check."""
        return {"status": "ok"}

    @app.post("/sun-position", response_model=SunPositionResponse)
    def post_sun_position(payload: SunPositionRequest) -> SunPositionResponse:
        """Compute solar angles for one local civil time and position."""
        coord = _resolve_coordinate(payload.lat, payload.lon)
        date = normalize(payload.year, payload.month, payload.day, payload.hour, payload.minute)
        offset = _resolve_offset(payload.utc_offset_minutes, cfg)
        angles = solve(date, coord, timedelta(minutes=offset))
        rotation = rotation_from_angles(angles)
        return SunPositionResponse(
            date=_date_response(date),
            azimuth=angles.azimuth,
            altitude=angles.altitude,
            rotation=RotationResponse(**rotation.to_dict()),
        )

    @app.post("/day-curve", response_model=DayCurveResponse)
    def post_day_curve(payload: DayCurveRequest) -> DayCurveResponse:
        """Sample solar angles across one day, reusing cached curves."""
        coord = _resolve_coordinate(payload.lat, payload.lon)
        date = normalize(payload.year, payload.month, payload.day, 0, 0)
        offset = _resolve_offset(payload.utc_offset_minutes, cfg)
        key = DayCurveKey(
            year=date.year,
            month=date.month,
            day=date.day,
            latitude=coord.latitude,
            longitude=coord.longitude,
            step_minutes=payload.step_minutes,
            start_minute=payload.start_minute,
            end_minute=payload.end_minute,
            utc_offset_minutes=offset,
        )

        def builder() -> DayCurve:
            _log.debug("building day curve for %s", key)
            return compute_day_curve(
                date,
                coord,
                step_minutes=payload.step_minutes,
                start_minute=payload.start_minute,
                end_minute=payload.end_minute,
                utc_offset=timedelta(minutes=offset),
            )

        curve, was_built = curve_cache.get_or_build(key, builder)
        return DayCurveResponse(
            date=_date_response(date),
            samples=[
                DayCurveSample(minute=minute, azimuth=angles.azimuth, altitude=angles.altitude)
                for minute, angles in curve.samples()
            ],
            peak_minute=curve.peak_minute(),
            peak_altitude=curve.peak_altitude(),
            cache_hit=not was_built,
            build_count=curve_cache.build_count,
        )

    return app


app = create_app()
