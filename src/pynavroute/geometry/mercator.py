"""Conversions between geographic and planar mercator coordinates.

The planar space keeps longitude as ``x`` and maps latitude through the
spherical mercator formula, expressed in degrees, so both axes share the
``[-180, 180]`` range. Distances in metres are always measured on the
sphere, never in the plane.
"""

from __future__ import annotations

import math

from pynavroute._constants import (
    EARTH_RADIUS_M,
    MERCATOR_MAX_X,
    MERCATOR_MAX_Y,
    MERCATOR_MIN_X,
    MERCATOR_MIN_Y,
    METRES_IN_DEGREE,
)
from pynavroute.geometry.point import Point, Rect


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def lon_to_x(lon: float) -> float:
    return lon


def x_to_lon(x: float) -> float:
    return x


def lat_to_y(lat: float) -> float:
    sin_lat = math.sin(math.radians(_clamp(lat, -86.0, 86.0)))
    y = math.degrees(0.5 * math.log((1.0 + sin_lat) / (1.0 - sin_lat)))
    return _clamp(y, MERCATOR_MIN_Y, MERCATOR_MAX_Y)


def y_to_lat(y: float) -> float:
    return math.degrees(2.0 * math.atan(math.tanh(0.5 * math.radians(y))))


def from_lat_lon(lat: float, lon: float) -> Point:
    return Point(lon_to_x(lon), lat_to_y(lat))


def to_lat_lon(pt: Point) -> tuple[float, float]:
    return y_to_lat(pt.y), x_to_lon(pt.x)


def distance_on_earth_lat_lon(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres (haversine)."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lon2 - lon1)
    x = math.sin(dphi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    return 2.0 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(x)))


def distance_on_earth(p1: Point, p2: Point) -> float:
    """Distance in metres between two planar points."""
    lat1, lon1 = to_lat_lon(p1)
    lat2, lon2 = to_lat_lon(p2)
    return distance_on_earth_lat_lon(lat1, lon1, lat2, lon2)


def metres_to_xy(lon: float, lat: float, metres: float) -> Rect:
    """Planar rectangle covering *metres* in every direction around a position."""
    lat_offset = metres / METRES_IN_DEGREE
    min_lat = max(-90.0, lat - lat_offset)
    max_lat = min(90.0, lat + lat_offset)

    # Widest longitude span of the window is at its pole-most edge.
    cos_lat = max(math.cos(math.radians(max(abs(min_lat), abs(max_lat)))), 1e-5)
    lon_offset = min(180.0, lat_offset / cos_lat)
    min_lon = max(MERCATOR_MIN_X, lon - lon_offset)
    max_lon = min(MERCATOR_MAX_X, lon + lon_offset)

    return Rect(lon_to_x(min_lon), lat_to_y(min_lat), lon_to_x(max_lon), lat_to_y(max_lat))


def angle_to_bearing(angle_deg: float) -> float:
    """Convert a planar angle (counter-clockwise from east) to a compass bearing."""
    bearing = math.fmod(90.0 - angle_deg, 360.0)
    if bearing < 0.0:
        bearing += 360.0
    return bearing
