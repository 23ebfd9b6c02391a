"""Planar points and rectangles in mercator coordinates."""

from __future__ import annotations

import math
from typing import NamedTuple

from pynavroute._constants import POINT_EPSILON


class Point(NamedTuple):
    """Planar mercator point. ``x`` is longitude, ``y`` projected latitude."""

    x: float
    y: float

    def length(self, other: Point) -> float:
        """Planar (unprojected) distance to *other*."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def almost_equal(self, other: Point, eps: float = POINT_EPSILON) -> bool:
        return abs(self.x - other.x) <= eps and abs(self.y - other.y) <= eps


class Rect(NamedTuple):
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def center(self) -> Point:
        return Point((self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0)

    def contains(self, pt: Point) -> bool:
        return self.min_x <= pt.x <= self.max_x and self.min_y <= pt.y <= self.max_y


def project_to_segment(p1: Point, p2: Point, pt: Point) -> Point:
    """Closest point to *pt* on the segment *p1*-*p2*."""
    dx = p2.x - p1.x
    dy = p2.y - p1.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0.0:
        return p1
    t = ((pt.x - p1.x) * dx + (pt.y - p1.y) * dy) / length_sq
    if t <= 0.0:
        return p1
    if t >= 1.0:
        return p2
    return Point(p1.x + t * dx, p1.y + t * dy)


def angle_to(p1: Point, p2: Point) -> float:
    """Angle of the vector *p1* -> *p2* in radians, counter-clockwise from east."""
    return math.atan2(p2.y - p1.y, p2.x - p1.x)
