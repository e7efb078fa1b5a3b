"""
GPRMC Sentence Encoding for GPS Trace Synthesis

This module renders simulated fixes as NMEA 0183 recommended-minimum (RMC)
sentences with an XOR checksum. A fix carrying a pedestrian secondary is
rendered as two sentences joined by a semicolon on one line.
"""

import math
from datetime import datetime
from typing import Tuple
from .models import Fix, GeoPoint

SECONDARY_SEPARATOR = ";"


def _degrees_minutes(value: float) -> Tuple[int, float]:
    degrees = math.trunc(value)
    minutes = round((value - degrees) * 60.0, 5)
    # Carry so minutes never print as 60.00000
    if minutes >= 60.0:
        degrees += 1
        minutes -= 60.0
    return degrees, minutes


def format_latitude(lat: float) -> Tuple[str, str]:
    """
    Format a latitude as NMEA degrees and decimal minutes.

    Args:
        lat: Latitude in degrees.

    Returns:
        Tuple of (ddmm.mmmmm text, "N" or "S").
    """
    hemisphere = "S" if lat < 0 else "N"
    degrees, minutes = _degrees_minutes(abs(lat))
    return f"{degrees:02d}{minutes:08.5f}", hemisphere


def format_longitude(lon: float) -> Tuple[str, str]:
    """
    Format a longitude as NMEA degrees and decimal minutes.

    Args:
        lon: Longitude in degrees.

    Returns:
        Tuple of (dddmm.mmmmm text, "E" or "W").
    """
    hemisphere = "W" if lon < 0 else "E"
    degrees, minutes = _degrees_minutes(abs(lon))
    return f"{degrees:03d}{minutes:08.5f}", hemisphere


def format_decimal(value: float) -> str:
    """Format speed or track as DDD.D."""
    return f"{value:05.1f}"


def checksum(body: str) -> str:
    """
    Compute the NMEA checksum of a sentence body.

    Args:
        body: Sentence text between the leading "$" and the "*" delimiter.

    Returns:
        XOR of all character codes as two uppercase hex digits.
    """
    value = 0
    for ch in body:
        value ^= ord(ch)
    return f"{value:02X}"


def build_body(timestamp: datetime, location: GeoPoint, speed_knots: float, heading_deg: float) -> str:
    """
    Build the body of a GPRMC sentence.

    Args:
        timestamp: Simulated UTC time of the fix.
        location: Position of the fix.
        speed_knots: Speed over ground in knots.
        heading_deg: Track made good in degrees.

    Returns:
        "GPRMC,hhmmss,A,lat,N|S,lon,E|W,speed,track,ddmmyy,0,W,*"
    """
    lat_text, ns = format_latitude(location.lat)
    lon_text, ew = format_longitude(location.lon)
    return ",".join([
        "GPRMC",
        timestamp.strftime("%H%M%S"),
        "A",
        lat_text,
        ns,
        lon_text,
        ew,
        format_decimal(speed_knots),
        format_decimal(heading_deg),
        timestamp.strftime("%d%m%y"),
        "0",
        "W",
        "*",
    ])


def render_sentence(timestamp: datetime, location: GeoPoint, speed_knots: float, heading_deg: float) -> str:
    body = build_body(timestamp, location, speed_knots, heading_deg)
    # The "*" delimiter is not part of the checksummed data
    return f"${body}{checksum(body[:-1])}"


def encode(timestamp: datetime, fix: Fix) -> str:
    """
    Encode a fix as one output record.

    Args:
        timestamp: Simulated UTC time of the fix.
        fix: Vehicle fix, optionally carrying a pedestrian secondary.

    Returns:
        "$<body><ck>" or, with a secondary, "$<body1><ck1>;$<body2><ck2>".
        No line terminator is added.
    """
    line = render_sentence(timestamp, fix.location, fix.speed_knots, fix.heading_deg)
    if fix.secondary is not None:
        ped = fix.secondary
        line += SECONDARY_SEPARATOR + render_sentence(timestamp, ped.location, ped.speed_knots, ped.heading_deg)
    return line


def validate_sentence(sentence: str) -> bool:
    """
    Check a single sentence against its checksum.

    The checksum covers everything between "$" and the final "*".

    Args:
        sentence: One "$...*XX" sentence (not a semicolon-joined record).

    Returns:
        True if the trailing hex digits match the recomputed checksum.
    """
    if not sentence.startswith("$") or "*" not in sentence:
        return False
    star = sentence.rindex("*")
    body = sentence[1:star]
    expected = sentence[star + 1:]
    return checksum(body) == expected.upper()
