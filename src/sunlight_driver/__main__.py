"""Command-line entrypoint for sunlight_driver."""

from __future__ import annotations

import argparse
import json
from collections.abc import Sequence
from datetime import datetime, timedelta

from sunlight_driver.astro.solar import solve
from sunlight_driver.config import config_from_env, configure_logging
from sunlight_driver.contracts import CivilDateTime, GeoCoordinate
from sunlight_driver.control.time_controller import CoordinateParseError, parse_coordinate
from sunlight_driver.orchestrate.batch import compute_day_curve
from sunlight_driver.scene.orientation import rotation_from_angles
from sunlight_driver.time.clamp import from_datetime


def _parse_local_datetime(value: str) -> CivilDateTime:
    """Parse an ISO local datetime string into a clamped civil value."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid datetime: {value}") from exc
    return from_datetime(parsed)


def _parse_degrees(value: str) -> float:
    try:
        return parse_coordinate(value)
    except CoordinateParseError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    """Create and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="sunlight_driver",
        description="Solar azimuth/altitude for driving a scene's sun light.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    parser.add_argument("--log-level", default=None)

    subparsers = parser.add_subparsers(dest="command")
    for name, help_text in (
        ("position", "Print solar angles and light rotation for one local time."),
        ("day-curve", "Print solar angles sampled across one local day."),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--at", type=_parse_local_datetime, required=True)
        sub.add_argument("--lat", type=_parse_degrees, default=None)
        sub.add_argument("--lon", type=_parse_degrees, default=None)
        sub.add_argument("--utc-offset-minutes", type=int, default=None)

    subparsers.choices["day-curve"].add_argument("--step-minutes", type=int, default=10)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI application."""
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = config_from_env()
    configure_logging(args.log_level or cfg.log_level)

    if args.command is None:
        return 0

    coord = GeoCoordinate(
        latitude=cfg.latitude if args.lat is None else args.lat,
        longitude=cfg.longitude if args.lon is None else args.lon,
    )
    offset_minutes = (
        cfg.utc_offset_minutes if args.utc_offset_minutes is None else args.utc_offset_minutes
    )
    utc_offset = timedelta(minutes=offset_minutes)

    if args.command == "position":
        angles = solve(args.at, coord, utc_offset)
        payload = {
            "date": args.at.to_dict(),
            **angles.to_dict(),
            "rotation": rotation_from_angles(angles).to_dict(),
        }
        print(json.dumps(payload, sort_keys=True))
        return 0

    if args.command == "day-curve":
        if args.step_minutes <= 0:
            parser.error("--step-minutes must be positive")
        curve = compute_day_curve(args.at, coord, step_minutes=args.step_minutes, utc_offset=utc_offset)
        print(json.dumps(curve.to_dict(), sort_keys=True))
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
