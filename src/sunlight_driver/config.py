"""
Runtime configuration and logging bootstrap.

Environment variables (all optional):
  - SUNLIGHT_LATITUDE / SUNLIGHT_LONGITUDE: default observer position
  - SUNLIGHT_UTC_OFFSET_MINUTES: local time = UTC + offset (default 0)
  - SUNLIGHT_ITERATION_START_HOUR / SUNLIGHT_ITERATION_END_HOUR
  - SUNLIGHT_ITERATION_STEP_MINUTES: time-lapse increment
  - SUNLIGHT_LOG_LEVEL: standard logging level name
"""
from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import TypeVar

from sunlight_driver.contracts import GeoCoordinate

T = TypeVar("T")

_LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s:%(lineno)d | %(message)s"


@dataclass(frozen=True)
class SunlightConfig:
    """Runtime defaults for the controller, CLI and API."""
    latitude: float = 51.549090
    longitude: float = -0.074478
    utc_offset_minutes: int = 0
    iteration_start_hour: float = 6.0
    iteration_end_hour: float = 20.0
    iteration_step_minutes: float = 10.0
    log_level: str = "INFO"

    @property
    def coordinate(self) -> GeoCoordinate:
        return GeoCoordinate(latitude=self.latitude, longitude=self.longitude)

    @property
    def utc_offset(self) -> timedelta:
        return timedelta(minutes=self.utc_offset_minutes)


def _read(env: Mapping[str, str], name: str, cast: Callable[[str], T], default: T) -> T:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a valid {getattr(cast, '__name__', 'value')}, got {raw!r}") from exc


def config_from_env(env: Mapping[str, str] | None = None) -> SunlightConfig:
    """Build SunlightConfig from environment variables."""
    source = os.environ if env is None else env
    defaults = SunlightConfig()

    log_level = _read(source, "SUNLIGHT_LOG_LEVEL", str, defaults.log_level).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"SUNLIGHT_LOG_LEVEL must be a logging level name, got {log_level!r}")

    cfg = SunlightConfig(
        latitude=_read(source, "SUNLIGHT_LATITUDE", float, defaults.latitude),
        longitude=_read(source, "SUNLIGHT_LONGITUDE", float, defaults.longitude),
        utc_offset_minutes=_read(
            source, "SUNLIGHT_UTC_OFFSET_MINUTES", int, defaults.utc_offset_minutes
        ),
        iteration_start_hour=_read(
            source, "SUNLIGHT_ITERATION_START_HOUR", float, defaults.iteration_start_hour
        ),
        iteration_end_hour=_read(
            source, "SUNLIGHT_ITERATION_END_HOUR", float, defaults.iteration_end_hour
        ),
        iteration_step_minutes=_read(
            source, "SUNLIGHT_ITERATION_STEP_MINUTES", float, defaults.iteration_step_minutes
        ),
        log_level=log_level,
    )
    if cfg.iteration_step_minutes <= 0:
        raise ValueError("SUNLIGHT_ITERATION_STEP_MINUTES must be positive")
    if cfg.iteration_start_hour > cfg.iteration_end_hour:
        raise ValueError("SUNLIGHT_ITERATION_START_HOUR must be <= SUNLIGHT_ITERATION_END_HOUR")
    return cfg


def configure_logging(level: str = "INFO") -> None:
    """Install a timestamped stderr handler unless the root logger already has one."""
    logging.basicConfig(
        level=level.upper(),
        format=_LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
