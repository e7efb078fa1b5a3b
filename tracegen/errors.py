"""
Error Types for GPS Trace Synthesis

Fatal conditions (unreadable route, unwritable output, invalid options) are
raised as exceptions and stop the run. A collision time that falls outside the
generated trajectory is not fatal: the collision builder reports it as a
CollisionWarning and the trace is emitted without pedestrian data.
"""


class TraceError(Exception):
    """Base class for all trace generation errors."""


class InputError(TraceError, ValueError):
    """The route file is missing, unreadable, or not a valid encoded polyline."""


class OutputError(TraceError):
    """The output destination cannot be created or written."""


class ConfigurationError(TraceError, ValueError):
    """A run option has an invalid value."""


class CollisionConfigurationError(TraceError, ValueError):
    """The configured collision time lies outside the trajectory's time span."""


class CollisionWarning(UserWarning):
    """Warning category used when a collision cannot be placed on the trajectory."""
