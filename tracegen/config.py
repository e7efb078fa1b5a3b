"""
Run Configuration for GPS Trace Synthesis

This module defines the read-only settings of a trace run and the
command-line surface that builds them.
"""

import argparse
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
from . import constants
from . import utils
from .errors import ConfigurationError


@dataclass(frozen=True)
class TraceConfig:
    """
    Settings for one trace run, loaded once and never modified.

    The pedestrian collision feature is active only when collision_after_s
    is set. start_time anchors the simulated clock; None means the current
    UTC time when the run starts.
    """
    route_file: Optional[Path] = None
    vehicle_speed_kmph: float = constants.DEFAULT_VEHICLE_SPEED_KMPH
    sample_interval_s: float = constants.DEFAULT_SAMPLE_INTERVAL_S
    output_path: Optional[Path] = None
    collision_after_s: Optional[float] = None
    collision_angle_deg: float = constants.DEFAULT_COLLISION_ANGLE_DEG
    pedestrian_speed_kmph: float = constants.DEFAULT_PEDESTRIAN_SPEED_KMPH
    pedestrian_track_length_s: float = constants.DEFAULT_PEDESTRIAN_TRACK_LENGTH_S
    start_time: Optional[datetime] = None
    verbose: bool = False

    def __post_init__(self):
        if self.vehicle_speed_kmph <= 0:
            raise ConfigurationError(f"Vehicle speed must be positive, got {self.vehicle_speed_kmph}")
        if self.sample_interval_s <= 0:
            raise ConfigurationError(f"Sampling interval must be positive, got {self.sample_interval_s}")
        if self.collision_after_s is not None and self.collision_after_s < 0:
            raise ConfigurationError(f"Collision time must not be negative, got {self.collision_after_s}")
        if self.pedestrian_speed_kmph < 0:
            raise ConfigurationError(f"Pedestrian speed must not be negative, got {self.pedestrian_speed_kmph}")
        if self.pedestrian_track_length_s < 0:
            raise ConfigurationError(
                f"Pedestrian track length must not be negative, got {self.pedestrian_track_length_s}"
            )

    @property
    def vehicle_speed_mps(self) -> float:
        return utils.kmph_to_mps(self.vehicle_speed_kmph)

    @property
    def collision_enabled(self) -> bool:
        return self.collision_after_s is not None


def parse_start_time(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp for the simulated clock.

    Naive timestamps are taken to be UTC.

    Args:
        value: Timestamp text, e.g. "2024-05-01T12:00:00" or "2024-05-01T12:00:00+02:00".

    Returns:
        Timezone-aware datetime in UTC.

    Raises:
        argparse.ArgumentTypeError: If the text is not a valid timestamp.
    """
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid start time: {value}") from exc
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert an encoded polyline route into simulated GPRMC sentences"
    )
    parser.add_argument(
        "route_file",
        type=Path,
        help="Path to a text file containing one encoded polyline"
    )
    parser.add_argument(
        "-s", "--speed-kmph",
        dest="vehicle_speed_kmph",
        type=float,
        default=constants.DEFAULT_VEHICLE_SPEED_KMPH,
        help="Vehicle speed in km/h (default: 30)"
    )
    parser.add_argument(
        "-i", "--interval",
        dest="sample_interval_s",
        type=float,
        default=constants.DEFAULT_SAMPLE_INTERVAL_S,
        help="Sampling interval in seconds (default: 1.0)"
    )
    parser.add_argument(
        "-o", "--output",
        dest="output_path",
        type=Path,
        default=None,
        help="Output file (default: standard output)"
    )
    parser.add_argument(
        "-c", "--collision-after-s",
        dest="collision_after_s",
        type=float,
        default=None,
        help="Seconds after start at which a pedestrian meets the vehicle (default: no pedestrian)"
    )
    parser.add_argument(
        "-a", "--angle-of-collision-d",
        dest="collision_angle_deg",
        type=float,
        default=constants.DEFAULT_COLLISION_ANGLE_DEG,
        help="Angle in degrees between the vehicle and pedestrian paths (default: 90)"
    )
    parser.add_argument(
        "-p", "--pedestrian-speed-kmph",
        dest="pedestrian_speed_kmph",
        type=float,
        default=constants.DEFAULT_PEDESTRIAN_SPEED_KMPH,
        help="Pedestrian walking speed in km/h (default: 3)"
    )
    parser.add_argument(
        "-l", "--pedestrian-track-length-s",
        dest="pedestrian_track_length_s",
        type=float,
        default=constants.DEFAULT_PEDESTRIAN_TRACK_LENGTH_S,
        help="Seconds of pedestrian trace before the collision (default: 10)"
    )
    parser.add_argument(
        "--start-time",
        type=parse_start_time,
        default=None,
        help="ISO-8601 timestamp of the first fix (default: now, UTC)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print run settings and per-segment details to stderr"
    )
    return parser


def config_from_args(argv: Optional[List[str]] = None) -> TraceConfig:
    """
    Build a TraceConfig from command-line arguments.

    Args:
        argv: Argument list. Defaults to sys.argv[1:].

    Returns:
        The validated run configuration.

    Raises:
        ConfigurationError: If an option value is out of range.
    """
    args = build_parser().parse_args(argv)
    return TraceConfig(**vars(args))
