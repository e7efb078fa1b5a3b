"""
Geodesic Math for GPS Trace Synthesis

This module provides bearing, great-circle distance and destination-point
primitives on a spherical Earth, plus the helpers that turn a signed bearing
into a compass heading and rotate a point about a pivot.
"""

import numpy as np
from .constants import EARTH_RADIUS_M
from .models import GeoPoint


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """
    Calculate the great-circle distance between two points.
    
    Uses the Haversine formula on a sphere of radius EARTH_RADIUS_M.
    
    Args:
        a: First point.
        b: Second point.
        
    Returns:
        Distance in meters between the two points.
    """
    lat1_rad, lon1_rad = np.deg2rad(a.lat), np.deg2rad(a.lon)
    lat2_rad, lon2_rad = np.deg2rad(b.lat), np.deg2rad(b.lon)
    
    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad
    
    h = np.sin(dlat / 2) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))
    
    return float(EARTH_RADIUS_M * c)


def bearing(a: GeoPoint, b: GeoPoint) -> float:
    """
    Calculate the initial great-circle bearing from one point toward another.
    
    Args:
        a: Origin point.
        b: Target point.
        
    Returns:
        Signed bearing in degrees, clockwise from north, in (-180, 180].
    """
    lat1_rad, lat2_rad = np.deg2rad(a.lat), np.deg2rad(b.lat)
    dlon = np.deg2rad(b.lon - a.lon)
    
    y = np.sin(dlon) * np.cos(lat2_rad)
    x = np.cos(lat1_rad) * np.sin(lat2_rad) - np.sin(lat1_rad) * np.cos(lat2_rad) * np.cos(dlon)
    
    result = float(np.rad2deg(np.arctan2(y, x)))
    if result <= -180.0:
        result += 360.0
    return result


def to_heading(bearing_deg: float) -> float:
    """
    Convert a signed bearing into a compass heading.
    
    Positive bearings are already compass headings; negative ones are
    measured back from 360.
    
    Args:
        bearing_deg: Signed bearing in degrees, within [-180, 180].
        
    Returns:
        Heading in degrees, in [0, 360).
    """
    assert abs(bearing_deg) <= 180.0, f"bearing not normalized: {bearing_deg}"
    if bearing_deg > 0:
        return bearing_deg
    # 0 folds back onto 0 rather than 360
    return (360.0 - abs(bearing_deg)) % 360.0


def destination(origin: GeoPoint, heading_deg: float, distance_m: float) -> GeoPoint:
    """
    Find the point reached by travelling along a great circle.
    
    Args:
        origin: Starting point.
        heading_deg: Initial direction of travel in degrees from north.
        distance_m: Distance to travel in meters.
        
    Returns:
        The destination point, with longitude normalized into [-180, 180].
    """
    lat1_rad = np.deg2rad(origin.lat)
    lon1_rad = np.deg2rad(origin.lon)
    theta = np.deg2rad(heading_deg)
    delta = distance_m / EARTH_RADIUS_M
    
    lat2_rad = np.arcsin(
        np.sin(lat1_rad) * np.cos(delta) + np.cos(lat1_rad) * np.sin(delta) * np.cos(theta)
    )
    lon2_rad = lon1_rad + np.arctan2(
        np.sin(theta) * np.sin(delta) * np.cos(lat1_rad),
        np.cos(delta) - np.sin(lat1_rad) * np.sin(lat2_rad),
    )
    
    lat2 = float(np.clip(np.rad2deg(lat2_rad), -90.0, 90.0))
    lon2 = float((np.rad2deg(lon2_rad) + 540.0) % 360.0 - 180.0)
    return GeoPoint(lat2, lon2)


def rotate_around(pivot: GeoPoint, point: GeoPoint, angle_deg: float) -> GeoPoint:
    """
    Rotate a point about a pivot in the longitude/latitude plane.
    
    The rotation is planar in degree space (x = longitude, y = latitude),
    which is accurate enough for the few meters separating consecutive fixes.
    The longitude offset is taken the short way round, so pivots and points
    on either side of the antimeridian rotate like any other pair.
    Positive angles rotate counter-clockwise.
    
    Args:
        pivot: Center of rotation.
        point: Point to rotate.
        angle_deg: Rotation angle in degrees.
        
    Returns:
        The rotated point.
    """
    angle_rad = np.deg2rad(angle_deg)
    cos_a, sin_a = np.cos(angle_rad), np.sin(angle_rad)
    
    dx = (point.lon - pivot.lon + 180.0) % 360.0 - 180.0
    dy = point.lat - pivot.lat
    
    lon = pivot.lon + dx * cos_a - dy * sin_a
    lat = pivot.lat + dx * sin_a + dy * cos_a
    lon = (lon + 540.0) % 360.0 - 180.0
    return GeoPoint(float(np.clip(lat, -90.0, 90.0)), float(lon))
