"""
Collision Trajectory Builder for GPS Trace Synthesis

This module synthesizes a pedestrian who walks into the vehicle's path and
reaches the vehicle's position at a configured time. The pedestrian track is
built backwards from the collision point and attached to the vehicle fixes
that precede it.
"""

import dataclasses
import math
import warnings
from typing import List
from . import geodesy
from . import utils
from .config import TraceConfig
from .errors import CollisionConfigurationError, CollisionWarning
from .models import GeoPoint, PedestrianFix, Trajectory


def collision_index(trajectory_length: int, collision_after_s: float, interval_s: float) -> int:
    """
    Find the trajectory index at which the collision happens.

    Args:
        trajectory_length: Number of fixes in the vehicle trajectory.
        collision_after_s: Seconds after the first fix.
        interval_s: Sampling interval in seconds.

    Returns:
        Index of the vehicle fix where the pedestrian arrives.

    Raises:
        CollisionConfigurationError: If the index is 0 (no preceding fix to
            derive a direction from) or beyond the end of the trajectory.
    """
    index = int(math.floor(collision_after_s / interval_s))
    if index <= 0 or index >= trajectory_length:
        raise CollisionConfigurationError(
            f"Collision point outside trajectory: index {index} for {trajectory_length} fixes"
        )
    return index


def build_pedestrian_track(collision_point: GeoPoint, approach_origin: GeoPoint,
                           speed_kmph: float, interval_s: float,
                           track_length_s: float) -> List[PedestrianFix]:
    """
    Build the pedestrian's track in reverse time order.

    Step 0 sits on the collision point; every following step is one more
    sampling interval of walking back toward the approach origin. All steps
    share the heading from the approach origin to the collision point.

    Args:
        collision_point: Where the pedestrian meets the vehicle.
        approach_origin: Point defining the line the pedestrian walks along.
        speed_kmph: Walking speed in km/h.
        interval_s: Sampling interval in seconds.
        track_length_s: Seconds of walking to synthesize.

    Returns:
        List of floor(track_length_s / interval_s) pedestrian fixes, latest first.
    """
    steps = int(math.floor(track_length_s / interval_s))
    heading = geodesy.to_heading(geodesy.bearing(approach_origin, collision_point))
    bearing_back = geodesy.bearing(collision_point, approach_origin)
    speed_knots = utils.kmph_to_knots(speed_kmph)
    step_m = utils.kmph_to_mps(speed_kmph) * interval_s

    track = []
    for i in range(steps):
        if i == 0:
            location = collision_point
        else:
            location = geodesy.destination(collision_point, bearing_back, step_m * i)
        track.append(PedestrianFix(location, speed_knots, heading))
    return track


def merge_pedestrian_track(trajectory: Trajectory, track: List[PedestrianFix], index: int) -> Trajectory:
    """
    Attach pedestrian fixes to the vehicle fixes leading up to a collision.

    Track step 0 goes to the fix at `index`, step 1 to `index - 1` and so on,
    down to index 1 at the earliest. Attaching stops when either the track or
    the available fixes run out; fixes outside that window keep no secondary.

    Args:
        trajectory: Vehicle fixes.
        track: Pedestrian fixes, latest first.
        index: Collision index into the trajectory.

    Returns:
        New trajectory of the same length with pedestrian fixes attached.
    """
    merged = list(trajectory)
    for step, position in enumerate(range(index, 0, -1)):
        if step >= len(track):
            break
        merged[position] = dataclasses.replace(merged[position], secondary=track[step])
    return merged


def add_collision(trajectory: Trajectory, config: TraceConfig) -> Trajectory:
    """
    Add a pedestrian collision to a vehicle trajectory.

    The pedestrian approaches the collision point along a line rotated by
    the configured angle from the vehicle's last step into that point. When
    no collision time is configured the trajectory is returned as is.

    Args:
        trajectory: Vehicle fixes from interpolate_route().
        config: Run configuration.

    Returns:
        Trajectory of the same length, with secondary fixes inside the
        collision window.

    Raises:
        CollisionConfigurationError: If the collision time falls outside the
            trajectory.
    """
    if not config.collision_enabled:
        return trajectory

    index = collision_index(len(trajectory), config.collision_after_s, config.sample_interval_s)

    col = trajectory[index].location
    precol = trajectory[index - 1].location
    rotated = geodesy.rotate_around(col, precol, config.collision_angle_deg)

    track = build_pedestrian_track(
        col,
        rotated,
        config.pedestrian_speed_kmph,
        config.sample_interval_s,
        config.pedestrian_track_length_s,
    )
    return merge_pedestrian_track(trajectory, track, index)


def apply_collision(trajectory: Trajectory, config: TraceConfig) -> Trajectory:
    """
    Add a pedestrian collision, warning instead of failing when it cannot be placed.

    Same as add_collision(), except that a collision time outside the
    trajectory issues a CollisionWarning and returns the trajectory without
    pedestrian data.
    """
    try:
        return add_collision(trajectory, config)
    except CollisionConfigurationError as exc:
        warnings.warn(f"{exc}. No collision generated.", CollisionWarning, stacklevel=2)
        return trajectory
