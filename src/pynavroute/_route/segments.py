"""Per-edge export of a route."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pynavroute._constants import INVALID_ALTITUDE
from pynavroute.geometry.mercator import distance_on_earth
from pynavroute.models.segment import SegmentInfo
from pynavroute.models.traffic import SpeedGroup
from pynavroute.tables import check_per_edge, check_per_vertex

if TYPE_CHECKING:
    from pynavroute.route import Route


def check_invariants(route: Route) -> None:
    """Raise :class:`RouteInvariantError` if tables disagree with the path."""
    size = route._poly.size
    route._turns.check(size, required=True)
    route._times.check(size, required=True)
    route._streets.check(size, strict=False)
    check_per_vertex(route._altitudes, size)
    check_per_edge(route._traffic, size)


def subroute_info(route: Route) -> list[SegmentInfo]:
    """One :class:`SegmentInfo` per edge ``k-1 -> k``, described at vertex ``k``."""
    check_invariants(route)

    points = route._poly.points
    altitudes = route._altitudes
    traffic = route._traffic
    info: list[SegmentInfo] = []
    dist_m = 0.0
    dist_merc = 0.0
    for k in range(1, len(points)):
        dist_m += distance_on_earth(points[k - 1], points[k])
        dist_merc += points[k - 1].length(points[k])
        checkpoint = route._times.last_at_or_before(k)
        street = route._streets.last_at_or_before(k)
        info.append(
            SegmentInfo(
                point=points[k],
                altitude=altitudes[k] if altitudes else INVALID_ALTITUDE,
                turn=route._turns.find(k),
                street_name=street.name if street is not None else "",
                distance_from_begin_m=dist_m,
                distance_from_begin_merc=dist_merc,
                time_s=checkpoint.time_s if checkpoint is not None else 0.0,
                traffic=traffic[k - 1] if traffic else SpeedGroup.UNKNOWN,
            )
        )
    return info
