"""
GPS Trace Synthesis Package

This package converts an encoded polyline route into simulated GPRMC
sentences, optionally with a pedestrian who meets the vehicle at a configured
time. This module re-exports the public functions of the individual modules.
"""

# Import constants
from .constants import (
    EARTH_RADIUS_M,
    POLYLINE_PRECISION,
)

# Import error types
from .errors import (
    TraceError,
    InputError,
    OutputError,
    ConfigurationError,
    CollisionConfigurationError,
    CollisionWarning,
)

# Import data model
from .models import (
    GeoPoint,
    Segment,
    Fix,
    Trajectory,
    PedestrianFix,
)

# Import geodesic functions
from .geodesy import (
    distance,
    bearing,
    to_heading,
    destination,
    rotate_around,
)

# Import route decoding functions
from .route_decoding import (
    decode_polyline,
    decode,
    load_route,
)

# Import interpolation functions
from .interpolation import (
    interpolate,
    interpolate_route,
    segment_summary,
)

# Import collision functions
from .collision import (
    collision_index,
    build_pedestrian_track,
    merge_pedestrian_track,
    add_collision,
    apply_collision,
)

# Import sentence encoding functions
from .nmea import (
    checksum,
    encode,
    validate_sentence,
)

# Import configuration
from .config import (
    TraceConfig,
    config_from_args,
)

# Import session driver functions
from .session import (
    build_trajectory,
    advance_clock,
    iter_sentences,
    open_sink,
    write_trace,
    run_trace,
)

# Import telemetry functions
from .telemetry import (
    trajectory_to_frame,
    summarize_trajectory,
    trajectory_to_geojson,
)

__all__ = [
    # Constants
    "EARTH_RADIUS_M",
    "POLYLINE_PRECISION",
    # Errors
    "TraceError",
    "InputError",
    "OutputError",
    "ConfigurationError",
    "CollisionConfigurationError",
    "CollisionWarning",
    # Data model
    "GeoPoint",
    "Segment",
    "Fix",
    "Trajectory",
    "PedestrianFix",
    # Geodesy
    "distance",
    "bearing",
    "to_heading",
    "destination",
    "rotate_around",
    # Route decoding
    "decode_polyline",
    "decode",
    "load_route",
    # Interpolation
    "interpolate",
    "interpolate_route",
    "segment_summary",
    # Collision
    "collision_index",
    "build_pedestrian_track",
    "merge_pedestrian_track",
    "add_collision",
    "apply_collision",
    # Sentence encoding
    "checksum",
    "encode",
    "validate_sentence",
    # Configuration
    "TraceConfig",
    "config_from_args",
    # Session driver
    "build_trajectory",
    "advance_clock",
    "iter_sentences",
    "open_sink",
    "write_trace",
    "run_trace",
    # Telemetry
    "trajectory_to_frame",
    "summarize_trajectory",
    "trajectory_to_geojson",
]
