"""Terminal CLI entrypoint for Mapty."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from mapty.core.controller import SessionController
from mapty.core.state import AppSettings
from mapty.geo.location import FixedLocationProvider, check_coordinates, parse_coordinates
from mapty.storage.kv_store import JsonFileStore, default_storage_path
from mapty.ui.console_map import ConsoleMapProvider
from mapty.ui.formatting import format_list_entry
from mapty.workout.codec import WorkoutCodec


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mapty workout map")
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI) with the workout map",
    )
    parser.add_argument(
        "--web-host",
        default="127.0.0.1",
        help="Host bind for --ui-web",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=8088,
        help="Port for --ui-web",
    )
    parser.add_argument(
        "--lat",
        type=float,
        default=None,
        help="Fixed latitude instead of browser geolocation (needs --lng)",
    )
    parser.add_argument(
        "--lng",
        type=float,
        default=None,
        help="Fixed longitude instead of browser geolocation (needs --lat)",
    )
    parser.add_argument(
        "--storage",
        type=Path,
        default=None,
        help=f"Workout store file (default: {default_storage_path()})",
    )
    parser.add_argument("--list", action="store_true", help="Print stored workouts")
    parser.add_argument("--reset", action="store_true", help="Delete all stored workouts")
    parser.add_argument(
        "--add",
        choices=("running", "cycling"),
        default=None,
        help="Record one workout at --at with the given values",
    )
    parser.add_argument("--at", default=None, help="Workout position as 'lat,lng' for --add")
    parser.add_argument("--distance", default="", help="Distance in km for --add")
    parser.add_argument("--duration", default="", help="Duration in minutes for --add")
    parser.add_argument("--cadence", default="", help="Cadence in steps/min (running)")
    parser.add_argument("--elevation", default="", help="Elevation gain in meters (cycling)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def settings_from_args(args: argparse.Namespace) -> AppSettings:
    if (args.lat is None) != (args.lng is None):
        raise ValueError("--lat and --lng must be given together")
    fixed_location: tuple[float, float] | None = None
    if args.lat is not None and args.lng is not None:
        check_coordinates(args.lat, args.lng)
        fixed_location = (args.lat, args.lng)
    return AppSettings(
        storage_path=args.storage or default_storage_path(),
        fixed_location=fixed_location,
    )


def run_list(settings: AppSettings) -> int:
    codec = WorkoutCodec(JsonFileStore(settings.storage_path), key=settings.storage_key)
    workouts = codec.load()
    if not workouts:
        print("No workouts recorded")
        return 0
    for workout in reversed(workouts):
        print(f"{workout.id}  {format_list_entry(workout)}")
    return 0


def run_reset(settings: AppSettings) -> int:
    WorkoutCodec(JsonFileStore(settings.storage_path), key=settings.storage_key).reset()
    print("All workouts deleted")
    return 0


def run_add(
    settings: AppSettings,
    *,
    workout_type: str,
    at: str,
    distance: str,
    duration: str,
    cadence: str,
    elevation: str,
) -> int:
    lat, lng = parse_coordinates(at)
    start_lat, start_lng = settings.fixed_location or (lat, lng)
    console_map = ConsoleMapProvider(echo=logger.debug)
    controller = SessionController(
        FixedLocationProvider(start_lat, start_lng),
        console_map,
        JsonFileStore(settings.storage_path),
        zoom=settings.map_zoom,
        storage_key=settings.storage_key,
    )
    controller.start()
    console_map.click(lat, lng)
    controller.select_type("running" if workout_type == "running" else "cycling")

    form = controller.form
    form.distance = distance
    form.duration = duration
    form.cadence = cadence
    form.elevation = elevation
    workout = controller.submit()
    if workout is None:
        return 1
    print(f"Saved {format_list_entry(workout)} ({workout.id})")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = settings_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    if args.ui_web:
        from mapty.ui.web_app import run_web_ui

        return run_web_ui(host=args.web_host, port=args.web_port, settings=settings)

    if args.reset:
        return run_reset(settings)

    if args.add is not None:
        if args.at is None:
            parser.error("--add requires --at LAT,LNG")
        try:
            return run_add(
                settings,
                workout_type=args.add,
                at=args.at,
                distance=args.distance,
                duration=args.duration,
                cadence=args.cadence,
                elevation=args.elevation,
            )
        except ValueError as exc:
            parser.error(str(exc))

    if args.list:
        return run_list(settings)

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
