"""
Data Model for GPS Trace Synthesis

This module defines the immutable value types that flow through the pipeline:
geographic points, route segments, and the simulated position fixes built
from them.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class GeoPoint:
    """Latitude/longitude pair in degrees."""
    lat: float
    lon: float

    def __post_init__(self):
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude out of range: {self.lat}")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError(f"Longitude out of range: {self.lon}")


@dataclass(frozen=True)
class Segment:
    """One straight leg of a decoded route."""
    start: GeoPoint
    end: GeoPoint


@dataclass(frozen=True)
class PedestrianFix:
    """State of the synthetic pedestrian at one time step."""
    location: GeoPoint
    speed_knots: float
    heading_deg: float


@dataclass(frozen=True)
class Fix:
    """
    Simulated vehicle position sample at one time step.
    
    `secondary` carries the pedestrian's state for fixes inside the
    collision window and is None everywhere else.
    """
    location: GeoPoint
    speed_knots: float
    heading_deg: float
    secondary: Optional[PedestrianFix] = None


# Index in the list is the discrete time step
Trajectory = List[Fix]
