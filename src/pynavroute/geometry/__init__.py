"""Planar geometry and the path projector."""

from pynavroute.geometry.mercator import (
    angle_to_bearing,
    distance_on_earth,
    distance_on_earth_lat_lon,
    from_lat_lon,
    metres_to_xy,
    to_lat_lon,
)
from pynavroute.geometry.point import Point, Rect, angle_to, project_to_segment
from pynavroute.geometry.polyline import INVALID_CURSOR, FollowedPolyline, PolylineCursor
from pynavroute.geometry.simplification import simplify_points

__all__ = [
    "FollowedPolyline",
    "INVALID_CURSOR",
    "Point",
    "PolylineCursor",
    "Rect",
    "angle_to",
    "angle_to_bearing",
    "distance_on_earth",
    "distance_on_earth_lat_lon",
    "from_lat_lon",
    "metres_to_xy",
    "project_to_segment",
    "simplify_points",
    "to_lat_lon",
]
