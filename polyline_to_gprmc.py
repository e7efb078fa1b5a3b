"""
Convert an encoded polyline route into simulated GPRMC sentences.

Usage:
  python3 polyline_to_gprmc.py route.txt
  python3 polyline_to_gprmc.py route.txt -s 50 -i 0.5 -o trace.nmea
  python3 polyline_to_gprmc.py route.txt -c 30 -a 90 -p 4 -l 10 --start-time 2024-05-01T08:00:00
"""

import sys
import warnings
from typing import List, Optional

from tracegen import (
    CollisionWarning,
    ConfigurationError,
    InputError,
    OutputError,
    TraceConfig,
    config_from_args,
    run_trace,
)


def print_settings(config: TraceConfig) -> None:
    """
    Print the run settings to stderr.

    Args:
        config: Run configuration.
    """
    print(f"Route file: {config.route_file}", file=sys.stderr)
    print(f"Speed: {config.vehicle_speed_kmph} km/h", file=sys.stderr)
    print(f"Interval: {config.sample_interval_s} s", file=sys.stderr)
    print(f"Output: {config.output_path or 'stdout'}", file=sys.stderr)
    if config.collision_enabled:
        print(
            f"Collision after {config.collision_after_s} s at {config.collision_angle_deg} deg, "
            f"pedestrian {config.pedestrian_speed_kmph} km/h for {config.pedestrian_track_length_s} s",
            file=sys.stderr,
        )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the command-line tool.

    Collision placement problems are printed as warnings and do not change
    the exit status.

    Args:
        argv: Command-line arguments, defaulting to sys.argv[1:].

    Returns:
        0 on success, 1 on invalid options, unreadable input or unwritable output.
    """
    try:
        config = config_from_args(argv)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if config.verbose:
        print_settings(config)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", CollisionWarning)
        try:
            count = run_trace(config)
        except (InputError, OutputError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    for warning in caught:
        if issubclass(warning.category, CollisionWarning):
            print(f"Warning: {warning.message}", file=sys.stderr)
        else:
            warnings.showwarning(warning.message, warning.category, warning.filename, warning.lineno)

    if config.verbose:
        print(f"Wrote {count} record(s)", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
