"""
Shared fixtures for trace synthesis tests.
"""

import io
from datetime import datetime, timezone

import pytest

from tracegen import GeoPoint, Segment, interpolate_route


def _encode_value(value):
    value = ~(value << 1) if value < 0 else value << 1
    chunks = []
    while value >= 0x20:
        chunks.append(chr((0x20 | (value & 0x1F)) + 63))
        value >>= 5
    chunks.append(chr(value + 63))
    return "".join(chunks)


def encode_polyline(coordinates, precision=5):
    """Encode (lat, lon) pairs as polyline text, for building route files."""
    factor = 10 ** precision
    out = []
    prev_lat = prev_lon = 0
    for lat, lon in coordinates:
        ilat = int(round(lat * factor))
        ilon = int(round(lon * factor))
        out.append(_encode_value(ilat - prev_lat))
        out.append(_encode_value(ilon - prev_lon))
        prev_lat, prev_lon = ilat, ilon
    return "".join(out)


@pytest.fixture
def start_time():
    return datetime(2024, 5, 1, 8, 30, 5, tzinfo=timezone.utc)


@pytest.fixture
def equator_segment():
    """About 1112 m due east along the equator."""
    return Segment(GeoPoint(0.0, 0.0), GeoPoint(0.0, 0.01))


@pytest.fixture
def equator_polyline():
    return encode_polyline([(0.0, 0.0), (0.0, 0.01)])


@pytest.fixture
def straight_trajectory(equator_segment):
    """112 fixes, one per second at 10 m/s."""
    return interpolate_route([equator_segment], 10.0, 1.0)


@pytest.fixture
def route_file(tmp_path, equator_polyline):
    path = tmp_path / "route.txt"
    path.write_text(equator_polyline + "\n", encoding="utf-8")
    return path


class BrokenPipeSink(io.StringIO):
    """Text stream whose reader has gone away."""

    def write(self, text):
        raise BrokenPipeError("Broken pipe")


@pytest.fixture
def broken_sink():
    return BrokenPipeSink()
