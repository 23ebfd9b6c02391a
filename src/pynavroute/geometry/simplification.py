"""Decimated copy of a path for pedestrian direction display."""

from __future__ import annotations

from collections.abc import Sequence

from shapely.geometry import LineString

from pynavroute.geometry.point import Point


def simplify_points(points: Sequence[Point], tolerance: float) -> list[Point]:
    """Douglas-Peucker simplification of *points* in planar coordinates.

    The first and last points are always kept. Fewer than three points
    are returned unchanged.
    """
    if len(points) < 3 or tolerance <= 0.0:
        return list(points)
    line = LineString([(p.x, p.y) for p in points])
    simplified = line.simplify(tolerance, preserve_topology=False)
    coords = list(simplified.coords)
    if len(coords) < 2:
        return [points[0], points[-1]]
    return [Point(x, y) for x, y in coords]
