"""
Telemetry and GeoJSON Conversion for GPS Trace Synthesis

This module converts a synthesized trajectory into a tabular form and a
GeoJSON document, and summarizes it, for inspection before the sentences are
fed to downstream software.
"""

import numpy as np
import pandas as pd
from datetime import datetime
from typing import Dict, List, Optional
from .constants import EARTH_RADIUS_M
from .models import Fix


def trajectory_to_frame(trajectory: List[Fix], start_time: Optional[datetime] = None,
                        interval_s: float = 1.0) -> pd.DataFrame:
    """
    Convert a trajectory to a DataFrame with one row per fix.

    Pedestrian columns hold NaN where the fix carries no secondary.

    Args:
        trajectory: Fixes in time order.
        start_time: Simulated time of the first fix. If given, a timestamp
            column is added.
        interval_s: Sampling interval in seconds. Default 1.0.

    Returns:
        DataFrame with columns: elapsed_s, lat, lon, speed_knots, heading_deg,
        ped_lat, ped_lon, ped_speed_knots, ped_heading_deg (and timestamp).
    """
    rows = []

    for index, fix in enumerate(trajectory):
        ped = fix.secondary
        rows.append({
            "elapsed_s": index * interval_s,
            "lat": fix.location.lat,
            "lon": fix.location.lon,
            "speed_knots": fix.speed_knots,
            "heading_deg": fix.heading_deg,
            "ped_lat": ped.location.lat if ped else np.nan,
            "ped_lon": ped.location.lon if ped else np.nan,
            "ped_speed_knots": ped.speed_knots if ped else np.nan,
            "ped_heading_deg": ped.heading_deg if ped else np.nan,
        })

    df = pd.DataFrame(rows, columns=[
        "elapsed_s", "lat", "lon", "speed_knots", "heading_deg",
        "ped_lat", "ped_lon", "ped_speed_knots", "ped_heading_deg",
    ])
    if start_time is not None:
        df["timestamp"] = pd.Timestamp(start_time) + pd.to_timedelta(df["elapsed_s"], unit="s")

    return df


def _path_length_m(lat: pd.Series, lon: pd.Series) -> float:
    lat_rad = np.deg2rad(lat.to_numpy())
    lon_rad = np.deg2rad(lon.to_numpy())
    if len(lat_rad) < 2:
        return 0.0

    dlat = np.diff(lat_rad)
    dlon = np.diff(lon_rad)
    a = np.sin(dlat / 2) ** 2 + np.cos(lat_rad[:-1]) * np.cos(lat_rad[1:]) * np.sin(dlon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return float(np.sum(EARTH_RADIUS_M * c))


def summarize_trajectory(df: pd.DataFrame) -> Dict:
    """
    Summarize a trajectory DataFrame.

    Args:
        df: DataFrame from trajectory_to_frame().

    Returns:
        Dictionary with fix_count, duration_s, distance_m, pedestrian_fix_count,
        and collision_window ([first, last] index with a pedestrian fix, or None).
    """
    if df.empty:
        return {
            "fix_count": 0,
            "duration_s": 0.0,
            "distance_m": 0.0,
            "pedestrian_fix_count": 0,
            "collision_window": None,
        }

    ped_rows = df.index[df["ped_lat"].notna()]
    window = [int(ped_rows.min()), int(ped_rows.max())] if len(ped_rows) else None

    return {
        "fix_count": int(len(df)),
        "duration_s": float(df["elapsed_s"].iloc[-1]),
        "distance_m": round(_path_length_m(df["lat"], df["lon"]), 3),
        "pedestrian_fix_count": int(len(ped_rows)),
        "collision_window": window,
    }


def trajectory_to_geojson(trajectory: List[Fix]) -> Dict:
    """
    Convert a trajectory to a GeoJSON FeatureCollection.

    Creates a LineString for the vehicle path, a Point marking the start, and,
    when pedestrian fixes are present, a LineString for the pedestrian path in
    time order.

    Args:
        trajectory: Fixes in time order.

    Returns:
        GeoJSON FeatureCollection.

    Raises:
        ValueError: If the trajectory is empty.
    """
    if not trajectory:
        raise ValueError("No coordinates to convert: trajectory is empty.")

    coordinates = [[fix.location.lon, fix.location.lat] for fix in trajectory]

    features = [
        {
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": coordinates,
            },
            "properties": {
                "actor": "vehicle",
                "sampleCount": len(coordinates),
            },
        },
        {
            "type": "Feature",
            "geometry": {
                "type": "Point",
                "coordinates": coordinates[0],
            },
            "properties": {"marker": "start"},
        },
    ]

    ped_coordinates = [
        [fix.secondary.location.lon, fix.secondary.location.lat]
        for fix in trajectory
        if fix.secondary is not None
    ]
    if ped_coordinates:
        features.append({
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": ped_coordinates,
            },
            "properties": {
                "actor": "pedestrian",
                "sampleCount": len(ped_coordinates),
            },
        })

    return {
        "type": "FeatureCollection",
        "features": features,
    }
