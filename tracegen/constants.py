"""
Constants for GPS Trace Synthesis

This module defines the physical constants, unit factors and default run
settings used throughout the trace generator.
"""

# Mean Earth radius in meters (spherical model)
EARTH_RADIUS_M = 6371000.0

# Unit conversions
KMPH_PER_MPS = 3.6
KNOTS_PER_MPS = 1.944
KMPH_PER_KNOT = 1.852

# Encoded polyline precision (decimal digits)
POLYLINE_PRECISION = 5

# Default run settings
DEFAULT_VEHICLE_SPEED_KMPH = 30.0
DEFAULT_SAMPLE_INTERVAL_S = 1.0
DEFAULT_COLLISION_ANGLE_DEG = 90.0
DEFAULT_PEDESTRIAN_SPEED_KMPH = 3.0
DEFAULT_PEDESTRIAN_TRACK_LENGTH_S = 10.0
