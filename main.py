#!/usr/bin/env python3
"""
Replay a satellite track in the terminal.

Loads ephemeris positions from a JSON file, animates them in real time
around an observer location and reports where the off-screen indicator
would sit on a map viewport centred on the observer.

Usage:
    python main.py "40°38'57.3\"N 73°53'42.8\"W" iss_positions.json --duration-ms 5000
"""

import argparse
import json
import sys
from typing import Any, List, Optional

from pydantic import ValidationError

from config import TrackerConfig
from constants import (
    DEFAULT_VIEWPORT_HEIGHT,
    DEFAULT_VIEWPORT_SPAN_DEG,
    DEFAULT_VIEWPORT_WIDTH,
    INDICATOR_PADDING_PX,
)
from coordinates import track_distance_km
from rich_console import (
    create_animation_progress,
    format_point,
    print_banner,
    print_completion_summary,
    print_config_summary,
    print_error,
    setup_rich_logging,
)
from satellite_data.data_models import GeoBounds, GeoPoint, PositionSample, samples_from_payload
from scheduler import RealtimeScheduler
from track_animator import AnimationState
from viewport import Viewport


def _sample_from_entry(entry: Any) -> PositionSample:
    if isinstance(entry, dict):
        if "satlatitude" in entry:
            return PositionSample.from_api(entry)
        return PositionSample.at(entry["latitude"], entry["longitude"])
    lat, lon = entry
    return PositionSample.at(lat, lon)


def load_samples(path: str) -> List[PositionSample]:
    """
    Load an ordered track from JSON.

    Accepts a `satellite-positions` API response (`{"positions": [...]}`), or a
    list of `[lat, lon]` pairs or `{"latitude": .., "longitude": ..}` objects.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the JSON or any entry is malformed
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    try:
        if isinstance(data, dict):
            return samples_from_payload(data)
        if isinstance(data, list):
            return [_sample_from_entry(entry) for entry in data]
    except (AttributeError, KeyError, TypeError) as e:
        raise ValueError(f"Malformed position entry in {path}: {e}") from e
    raise ValueError(f"Unsupported track format in {path}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Animate a satellite track around an observer location.")
    parser.add_argument("location", help="Observer location as DMS or 'lat,lng'")
    parser.add_argument("samples", help="JSON file of ordered positions")
    parser.add_argument("--duration-ms", type=float, default=None,
                        help="Animation length (default: the fetch interval)")
    parser.add_argument("--no-animate", action="store_true", help="Snap to the latest position")
    parser.add_argument("--width", type=int, default=DEFAULT_VIEWPORT_WIDTH, help="Viewport width in px")
    parser.add_argument("--height", type=int, default=DEFAULT_VIEWPORT_HEIGHT, help="Viewport height in px")
    parser.add_argument("--span-deg", type=float, default=DEFAULT_VIEWPORT_SPAN_DEG,
                        help="Degrees of latitude visible in the viewport")
    parser.add_argument("--padding", type=float, default=INDICATOR_PADDING_PX,
                        help="Off-screen indicator padding in px")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_viewport(center: GeoPoint, width: int, height: int, span_deg: float) -> Viewport:
    """
    Viewport centred on `center` showing `span_deg` of latitude.

    Raises:
        ValueError: If a size or the span is negative
    """
    if width < 0 or height < 0:
        raise ValueError(f"Viewport size must not be negative, got {width}x{height}")
    lng_span = span_deg * width / height if height > 0 else span_deg
    return Viewport(
        width_px=width,
        height_px=height,
        center=center,
        bounds=GeoBounds.around(center, span_deg, lng_span),
    )


def run(args: argparse.Namespace) -> int:
    setup_rich_logging(verbose=args.verbose)
    print_banner()

    try:
        config = TrackerConfig(no_animate=args.no_animate, indicator_padding_px=args.padding)
    except ValidationError as e:
        print_error(f"Configuration Error: {e}")
        return 1

    location, location_error = config.resolve_location(args.location)
    if location_error:
        print_error(location_error, hint="Use DMS like 40°38'57.3\"N 73°53'42.8\"W or 'lat,lng'.")

    try:
        samples = load_samples(args.samples)
    except (OSError, ValueError) as e:
        print_error(f"Could not load positions: {e}")
        return 1
    if not samples:
        print_error("No position data available.", hint="Nothing to animate.")
        return 1

    duration_ms = args.duration_ms if args.duration_ms is not None else config.fetch_interval_ms
    print_config_summary(
        location=location,
        sample_count=len(samples),
        duration_ms=duration_ms,
        no_animate=config.no_animate,
        padding_px=config.indicator_padding_px,
        track_km=track_distance_km([s.point for s in samples]),
    )

    try:
        viewport = build_viewport(location, args.width, args.height, args.span_deg)
    except ValueError as e:
        print_error(f"Viewport Error: {e}", hint="Width, height and --span-deg must not be negative.")
        return 1
    projector = config.create_projector()
    scheduler = RealtimeScheduler()
    animator = config.create_animator(scheduler)
    frames = 0

    with create_animation_progress() as progress:
        task = progress.add_task("Tracking", total=1.0, status="")

        def on_update(state: AnimationState) -> None:
            nonlocal frames
            frames += 1
            edge = projector.project(viewport, state.position)
            status = f"{format_point(state.position)}  hdg {state.heading_deg:5.1f}°"
            if edge.is_offscreen:
                status += f"  -> {edge.distance_label} {edge.bearing_label}"
            progress.update(task, completed=state.progress, status=status)

        animator.start(samples, duration_ms, on_update)
        scheduler.run()

    final = animator.state
    edge = projector.project(viewport, final.position)
    indicator = None
    if edge.is_offscreen:
        indicator = (f"{edge.distance_label} {edge.bearing_label} "
                     f"at ({edge.screen_x:.0f}, {edge.screen_y:.0f})")
    print_completion_summary(final.position, final.heading_deg, frames, indicator)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    sys.exit(run(parse_args(argv)))


if __name__ == "__main__":
    main()
