"""
Route Decoding for GPS Trace Synthesis

This module loads a route file and decodes its encoded-polyline content into
an ordered list of connected line segments.
"""

from pathlib import Path
from typing import List, Tuple, Union
from . import constants
from .errors import InputError
from .models import GeoPoint, Segment


def _decode_value(polyline: str, index: int) -> Tuple[int, int]:
    result = 0
    shift = 0

    while True:
        if index >= len(polyline):
            raise ValueError("Invalid polyline: buffer exhausted.")
        b = ord(polyline[index]) - 63
        if b < 0 or b > 0x3F:
            raise ValueError(f"Invalid polyline character {polyline[index]!r} at offset {index}.")
        index += 1
        result |= (b & 0x1F) << shift
        shift += 5
        if b < 0x20:
            break

    delta = ~(result >> 1) if result & 1 else result >> 1
    return delta, index


def decode_polyline(polyline: str, precision: int = constants.POLYLINE_PRECISION) -> List[Tuple[float, float]]:
    """
    Decode an encoded polyline string into (lat, lon) coordinates.
    
    Each coordinate is delta-coded against the previous one, scaled by
    10**precision and packed five bits per character with a continuation bit.
    
    Args:
        polyline: Encoded polyline text.
        precision: Number of decimal digits used by the encoder. Default 5.
        
    Returns:
        List of (lat, lon) tuples in degrees.
        
    Raises:
        ValueError: If the text is truncated or contains invalid characters.
    """
    coordinates: List[Tuple[float, float]] = []
    index = 0
    lat = 0
    lon = 0
    factor = 10 ** precision

    while index < len(polyline):
        lat_change, index = _decode_value(polyline, index)
        lon_change, index = _decode_value(polyline, index)
        lat += lat_change
        lon += lon_change
        coordinates.append((lat / factor, lon / factor))

    return coordinates


def coordinates_to_segments(coordinates: List[Tuple[float, float]]) -> List[Segment]:
    """
    Pair consecutive route vertices into segments.
    
    Args:
        coordinates: Ordered (lat, lon) vertices.
        
    Returns:
        List of N-1 segments for N vertices, each starting where the
        previous one ended.
    """
    points = [GeoPoint(lat, lon) for lat, lon in coordinates]
    return [Segment(start, end) for start, end in zip(points, points[1:])]


def decode(text: str, precision: int = constants.POLYLINE_PRECISION) -> List[Segment]:
    """
    Decode encoded-polyline text into route segments.
    
    Args:
        text: Encoded polyline. Surrounding whitespace is ignored.
        precision: Number of decimal digits used by the encoder. Default 5.
        
    Returns:
        Ordered list of connected segments.
        
    Raises:
        InputError: If the text cannot be decoded, decodes to coordinates
            outside the valid range, or holds fewer than two vertices.
    """
    try:
        coordinates = decode_polyline(text.strip(), precision)
        segments = coordinates_to_segments(coordinates)
    except ValueError as exc:
        raise InputError(f"Unable to decode polyline string: {exc}") from exc
    
    if not segments:
        raise InputError(f"Route needs at least two vertices, got {len(coordinates)}")
    
    return segments


def load_route(route_file: Union[str, Path], precision: int = constants.POLYLINE_PRECISION) -> List[Segment]:
    """
    Read a route file and decode it into segments.
    
    Args:
        route_file: Path to a text file holding one encoded polyline.
        precision: Number of decimal digits used by the encoder. Default 5.
        
    Returns:
        Ordered list of connected segments.
        
    Raises:
        InputError: If the file cannot be read or its content cannot be decoded.
    """
    try:
        with Path(route_file).open("r", encoding="utf-8") as file:
            contents = file.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Unable to read route file {route_file}: {exc}") from exc
    
    return decode(contents, precision)
