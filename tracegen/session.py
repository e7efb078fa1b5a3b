"""
Trace Session Driver for GPS Trace Synthesis

This module orchestrates a complete run: it decodes the route, interpolates
every segment, optionally adds the pedestrian collision, then stamps and
encodes each fix and writes the records to the output sink.
"""

import contextlib
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, TextIO
from . import collision
from . import interpolation
from . import nmea
from . import route_decoding
from .config import TraceConfig
from .errors import OutputError
from .models import Fix, Segment, Trajectory


def build_trajectory(segments: List[Segment], config: TraceConfig) -> Trajectory:
    """
    Build the full trajectory for a decoded route.

    Args:
        segments: Ordered route segments.
        config: Run configuration.

    Returns:
        Vehicle fixes, one per sampling interval, with pedestrian fixes
        attached when a collision is configured.
    """
    if config.verbose:
        for segment in segments:
            summary = interpolation.segment_summary(segment, config.vehicle_speed_mps, config.sample_interval_s)
            print(
                f"Segment ({segment.start.lat:.5f}, {segment.start.lon:.5f}) -> "
                f"({segment.end.lat:.5f}, {segment.end.lon:.5f}): "
                f"{summary['distance_m']:.1f} m, heading {summary['heading_deg']:.1f}, "
                f"{summary['num_steps']} step(s)",
                file=sys.stderr,
            )

    trajectory = interpolation.interpolate_route(segments, config.vehicle_speed_mps, config.sample_interval_s)
    return collision.apply_collision(trajectory, config)


def advance_clock(now: datetime, interval_s: float) -> datetime:
    """Return the simulated time one sampling interval after `now`."""
    return now + timedelta(seconds=interval_s)


def iter_sentences(trajectory: Iterable[Fix], start_time: datetime, interval_s: float) -> Iterator[str]:
    """
    Encode a trajectory as timestamped records.

    The first fix is stamped with start_time and each following fix one
    sampling interval later.

    Args:
        trajectory: Fixes in time order.
        start_time: Simulated UTC time of the first fix.
        interval_s: Sampling interval in seconds.

    Yields:
        One encoded record per fix, without line terminator.
    """
    now = start_time
    for fix in trajectory:
        yield nmea.encode(now, fix)
        now = advance_clock(now, interval_s)


@contextlib.contextmanager
def open_sink(output_path: Optional[Path] = None) -> Iterator[TextIO]:
    """
    Open the output sink for a run.

    Standard output is used when no path is given and is left open
    afterwards. A named file is truncated or created, and always closed.

    Args:
        output_path: Destination file, or None for standard output.

    Yields:
        Writable text stream.

    Raises:
        OutputError: If the file cannot be created.
    """
    if output_path is None:
        yield sys.stdout
        return

    try:
        sink = Path(output_path).open("w", encoding="ascii", newline="\n")
    except OSError as exc:
        raise OutputError(f"Unable to open {output_path} for writing: {exc}") from exc

    with sink:
        yield sink


def write_trace(sentences: Iterable[str], sink: TextIO) -> int:
    """
    Write records to a sink, one per line.

    Args:
        sentences: Encoded records.
        sink: Writable text stream.

    Returns:
        Number of records written.

    Raises:
        OutputError: If writing fails.
    """
    count = 0
    try:
        for sentence in sentences:
            sink.write(sentence + "\n")
            count += 1
        sink.flush()
    except OSError as exc:
        raise OutputError(f"Unable to write trace: {exc}") from exc
    return count


def run_trace(config: TraceConfig) -> int:
    """
    Run the full pipeline for a configuration.

    Decodes the route file before opening the sink so that an unreadable
    route produces no output at all.

    Args:
        config: Run configuration; route_file must be set.

    Returns:
        Number of records written.

    Raises:
        InputError: If the route file cannot be read or decoded.
        OutputError: If the output cannot be created or written.
    """
    segments = route_decoding.load_route(config.route_file)
    trajectory = build_trajectory(segments, config)
    start_time = config.start_time or datetime.now(timezone.utc)

    if config.verbose:
        print(f"Generated {len(trajectory)} fixes from {len(segments)} segment(s)", file=sys.stderr)

    with open_sink(config.output_path) as sink:
        return write_trace(iter_sentences(trajectory, start_time, config.sample_interval_s), sink)
