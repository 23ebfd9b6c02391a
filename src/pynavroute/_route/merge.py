"""Stitching a re-planned leg onto a route."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pynavroute._constants import INVALID_ALTITUDE
from pynavroute.exceptions import RouteInvariantError, RouteMergeError
from pynavroute.geometry.mercator import distance_on_earth
from pynavroute.models.traffic import SpeedGroup
from pynavroute.tables import check_per_edge, check_per_vertex

if TYPE_CHECKING:
    from pynavroute.route import Route

_logger = logging.getLogger(__name__)


def _check_leg(route: Route, leg: Route) -> None:
    """Validate both routes before anything is mutated."""
    check_per_edge(leg._traffic, leg._poly.size)
    check_per_vertex(leg._altitudes, leg._poly.size)

    size = route._poly.size
    if size == 0:
        return
    if not route._turns:
        raise RouteInvariantError("turns table is empty on a non-empty path", table="turns")
    if not route._times:
        raise RouteInvariantError("times table is empty on a non-empty path", table="times")
    check_per_edge(route._traffic, size)
    check_per_vertex(route._altitudes, size)

    last_street = route._streets.last()
    if last_street is not None and last_street.index + 1 >= size:
        raise RouteInvariantError(
            f"street entry {last_street.index} sits on the route end vertex",
            table="streets",
        )

    last_turn = route._turns.last()
    if last_turn is None or not last_turn.is_destination:
        raise RouteMergeError(f"last turn is not the destination marker: {last_turn!r}")

    gap = distance_on_earth(route._poly.back, leg._poly.front)
    if gap >= route._settings.merge_tolerance_m:
        raise RouteMergeError(f"appended leg starts {gap:.2f} m away from the route end")


def _pop_destination(route: Route) -> None:
    """Drop the synthetic end vertex together with its turn and time rows."""
    route._poly.pop_back()
    route._turns.pop()
    route._times.pop()
    if route._altitudes:
        route._altitudes.pop()


def append_traffic(route: Route, leg: Route) -> None:
    """Extend per-edge traffic with the leg's, padding unknown sides.

    Must run after the route's end vertex was dropped and before the leg's
    vertices are appended: at that point the route has exactly as many
    traffic values as vertices.
    """
    if not route._traffic and not leg._traffic:
        return

    if route._poly.size == 0:
        route._traffic = list(leg._traffic)
        return

    traffic = route._traffic or [SpeedGroup.UNKNOWN] * route._poly.size
    if len(traffic) != route._poly.size:
        raise RouteInvariantError(
            f"traffic array has {len(traffic)} values for {route._poly.size} vertices before merge",
            table="traffic",
        )

    if leg._traffic:
        traffic.extend(leg._traffic)
    else:
        traffic.extend([SpeedGroup.UNKNOWN] * max(leg._poly.size - 1, 0))
    route._traffic = traffic


def append_altitudes(route: Route, leg: Route) -> None:
    """Extend per-vertex altitudes with the leg's, padding unknown sides."""
    if not route._altitudes and not leg._altitudes:
        return

    if route._poly.size == 0:
        route._altitudes = list(leg._altitudes)
        return

    altitudes = route._altitudes or [INVALID_ALTITUDE] * route._poly.size
    if leg._altitudes:
        altitudes.extend(leg._altitudes)
    else:
        altitudes.extend([INVALID_ALTITUDE] * leg._poly.size)
    route._altitudes = altitudes


def append_route(route: Route, leg: Route) -> None:
    """Append *leg*, computed from the end of *route*, to *route*.

    The route's last vertex (a synthetic destination point) is replaced by
    the leg. Leg rows are re-based past the route's remaining vertices.
    Rows on the leg's first vertex are always dropped, also when the
    route has no path yet. Leg times are shifted by the route's total
    time.

    Raises
    ------
    RouteMergeError
        If the leg does not start at the route end or the route does not
        end with a destination turn.
    RouteInvariantError
        If either route's tables are inconsistent with its path.
    """
    if leg._poly.size == 0:
        return

    _check_leg(route, leg)

    estimated_time = route.get_total_time_sec()
    if route._poly.size:
        _pop_destination(route)

    offset = route._poly.size

    route._turns.extend_shifted(leg._turns, offset)
    route._streets.extend_shifted(leg._streets, offset)
    route._times.extend_shifted(
        leg._times,
        offset,
        updates=lambda item: {"time_s": item.time_s + estimated_time},
    )

    append_traffic(route, leg)
    append_altitudes(route, leg)

    route._poly.append(leg._poly)
    check_per_edge(route._traffic, route._poly.size)
    check_per_vertex(route._altitudes, route._poly.size)

    _logger.debug(
        "Appended leg: offset=%d points=%d turns=%d times=%d",
        offset,
        route._poly.size,
        len(route._turns),
        len(route._times),
    )
    route.update()
