"""
Segment Interpolation for GPS Trace Synthesis

This module turns route segments into evenly time-spaced position fixes for a
vehicle travelling at constant speed, and joins the per-segment fixes into one
continuous trajectory.
"""

import math
from typing import Dict, Iterable, Iterator
from . import geodesy
from . import utils
from .models import Fix, Segment, Trajectory


def count_steps(segment_distance_m: float, speed_m_per_s: float, interval_s: float) -> int:
    """Number of whole sampling intervals needed to cover a segment."""
    return int(math.floor(segment_distance_m / (speed_m_per_s * interval_s)))


def interpolate(segment: Segment, speed_m_per_s: float, interval_s: float) -> Iterator[Fix]:
    """
    Generate the fixes for one segment.
    
    The heading is fixed for the whole segment. The segment is split into
    `num_steps` equal steps, where `num_steps` is the number of whole sampling
    intervals that fit in it at the given speed, and one fix is produced at
    the start plus one after every step. A segment too short for a single
    step produces only its start fix.
    
    Args:
        segment: Route leg to interpolate.
        speed_m_per_s: Vehicle ground speed in m/s.
        interval_s: Sampling interval in seconds.
        
    Yields:
        num_steps + 1 Fix objects, starting at segment.start.
    """
    segment_distance = geodesy.distance(segment.start, segment.end)
    heading = geodesy.to_heading(geodesy.bearing(segment.start, segment.end))
    num_steps = count_steps(segment_distance, speed_m_per_s, interval_s)
    speed_knots = utils.mps_to_knots(speed_m_per_s)
    
    location = segment.start
    yield Fix(location, speed_knots, heading)
    
    if num_steps == 0:
        return
    
    step_m = segment_distance / num_steps
    for _ in range(num_steps):
        location = geodesy.destination(location, heading, step_m)
        yield Fix(location, speed_knots, heading)


def interpolate_route(segments: Iterable[Segment], speed_m_per_s: float, interval_s: float) -> Trajectory:
    """
    Interpolate every segment of a route into a single trajectory.
    
    The last fix of each segment lands on the first vertex of the next one,
    so it is dropped for every segment except the final one. Segments that
    produce a single fix contribute it unchanged, unless it sits on the same
    location as the fix before it.
    
    Args:
        segments: Ordered, connected route segments.
        speed_m_per_s: Vehicle ground speed in m/s.
        interval_s: Sampling interval in seconds.
        
    Returns:
        List of fixes, one per sampling interval.
    """
    segments = list(segments)
    trajectory: Trajectory = []
    
    for position, segment in enumerate(segments):
        fixes = list(interpolate(segment, speed_m_per_s, interval_s))
        is_last = position == len(segments) - 1
        if not is_last and len(fixes) > 1:
            fixes.pop()
        # Zero-length legs repeat the previous vertex
        if trajectory and fixes[0].location == trajectory[-1].location:
            fixes = fixes[1:]
        trajectory.extend(fixes)
    
    return trajectory


def segment_summary(segment: Segment, speed_m_per_s: float, interval_s: float) -> Dict:
    """
    Describe how a segment will be interpolated.
    
    Args:
        segment: Route leg to describe.
        speed_m_per_s: Vehicle ground speed in m/s.
        interval_s: Sampling interval in seconds.
        
    Returns:
        Dictionary with distance_m, heading_deg, num_steps and degenerate
        (True when the segment yields only its start fix).
    """
    segment_distance = geodesy.distance(segment.start, segment.end)
    num_steps = count_steps(segment_distance, speed_m_per_s, interval_s)
    return {
        "distance_m": segment_distance,
        "heading_deg": geodesy.to_heading(geodesy.bearing(segment.start, segment.end)),
        "num_steps": num_steps,
        "degenerate": num_steps == 0,
    }
