"""
FastAPI Web Application for GPS Trace Synthesis

This module provides a REST API that runs the trace generator on a posted
encoded polyline and returns either the GPRMC sentences or a summary of the
synthesized trajectory.
"""

from datetime import datetime, timezone
from typing import List, Optional
from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field
import tracegen
from tracegen import constants


# ============================================================================
# APPLICATION SETUP
# ============================================================================

app = FastAPI(title="polyline-to-gprmc")


class TraceRequest(BaseModel):
    """Request body shared by the trace endpoints."""
    polyline: str = Field(..., description="Encoded polyline (precision 5)")
    vehicle_speed_kmph: float = constants.DEFAULT_VEHICLE_SPEED_KMPH
    sample_interval_s: float = constants.DEFAULT_SAMPLE_INTERVAL_S
    collision_after_s: Optional[float] = None
    collision_angle_deg: float = constants.DEFAULT_COLLISION_ANGLE_DEG
    pedestrian_speed_kmph: float = constants.DEFAULT_PEDESTRIAN_SPEED_KMPH
    pedestrian_track_length_s: float = constants.DEFAULT_PEDESTRIAN_TRACK_LENGTH_S
    start_time: Optional[datetime] = None


# ============================================================================
# TRACE BUILDING
# ============================================================================

def build_config(request: TraceRequest) -> tracegen.TraceConfig:
    """
    Build a run configuration from a request body.

    Args:
        request: Parsed request body.

    Returns:
        TraceConfig with the request's settings and a UTC start time.

    Raises:
        HTTPException: If an option is out of range (status 422).
    """
    start_time = request.start_time or datetime.now(timezone.utc)
    if start_time.tzinfo is None:
        start_time = start_time.replace(tzinfo=timezone.utc)

    try:
        return tracegen.TraceConfig(
            vehicle_speed_kmph=request.vehicle_speed_kmph,
            sample_interval_s=request.sample_interval_s,
            collision_after_s=request.collision_after_s,
            collision_angle_deg=request.collision_angle_deg,
            pedestrian_speed_kmph=request.pedestrian_speed_kmph,
            pedestrian_track_length_s=request.pedestrian_track_length_s,
            start_time=start_time.astimezone(timezone.utc),
        )
    except tracegen.ConfigurationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def build_request_trajectory(request: TraceRequest):
    """
    Decode the posted route and synthesize its trajectory.

    Collision placement problems are not errors; they are returned as
    warning messages alongside the trajectory.

    Args:
        request: Parsed request body.

    Returns:
        Tuple of (config, trajectory, warning messages).

    Raises:
        HTTPException: If the polyline cannot be decoded (status 400).
    """
    config = build_config(request)
    try:
        segments = tracegen.decode(request.polyline)
    except tracegen.InputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    trajectory = tracegen.interpolate_route(segments, config.vehicle_speed_mps, config.sample_interval_s)
    messages: List[str] = []
    try:
        trajectory = tracegen.add_collision(trajectory, config)
    except tracegen.CollisionConfigurationError as exc:
        messages.append(f"{exc}. No collision generated.")
    return config, trajectory, messages


# ============================================================================
# API ROUTES
# ============================================================================

@app.post("/api/trace")
def create_trace(request: TraceRequest):
    """
    Generate the GPRMC trace for a route.

    Returns one record per line, in the same format the command-line tool
    writes.

    Args:
        request: Route and run settings.

    Returns:
        PlainTextResponse: The sentence log, with Content-Disposition header
        for download. Filename: trace.nmea
    """
    config, trajectory, messages = build_request_trajectory(request)
    lines = tracegen.iter_sentences(trajectory, config.start_time, config.sample_interval_s)
    body = "".join(line + "\n" for line in lines)

    headers = {"Content-Disposition": "attachment; filename=trace.nmea"}
    if messages:
        headers["X-Trace-Warning"] = "; ".join(messages)
    return PlainTextResponse(
        body,
        media_type="text/plain",
        headers=headers
    )


@app.post("/api/trace/summary")
def summarize_trace(request: TraceRequest):
    """
    Summarize the trajectory that a route would produce.

    Args:
        request: Route and run settings.

    Returns:
        Dictionary containing:
        - summary: fix count, duration, distance and collision window
        - track: GeoJSON FeatureCollection of the vehicle and pedestrian paths
        - warnings: collision placement diagnostics
    """
    config, trajectory, messages = build_request_trajectory(request)
    df = tracegen.trajectory_to_frame(trajectory, config.start_time, config.sample_interval_s)

    return {
        "summary": tracegen.summarize_trajectory(df),
        "track": tracegen.trajectory_to_geojson(trajectory),
        "warnings": messages,
    }


# ============================================================================
# RUN INSTRUCTIONS
# ============================================================================
# Run with: uvicorn app:app --reload
