"""Diagnostics sink for fix-to-route matching."""

from __future__ import annotations

from dataclasses import dataclass

from pynavroute.geometry.point import Point


@dataclass(slots=True)
class RouteMatchingInfo:
    """Where the last fix was snapped onto the route.

    Filled by :meth:`pynavroute.route.Route.match_location_to_route`
    only when the fix was close enough to be snapped.
    """

    point: Point | None = None
    index: int = -1
    distance_from_begin: float = 0.0

    @property
    def is_matched(self) -> bool:
        return self.point is not None

    def set(self, point: Point, index: int, distance_from_begin: float) -> None:
        self.point = point
        self.index = index
        self.distance_from_begin = distance_from_begin

    def reset(self) -> None:
        self.point = None
        self.index = -1
        self.distance_from_begin = 0.0
