"""Remaining travel time along a route."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pynavroute.exceptions import RouteInvariantError

if TYPE_CHECKING:
    from pynavroute.route import Route

# Checkpoint segments shorter than this are treated as zero length.
_ZERO_DISTANCE_M = 1e-9


def current_time_to_end(route: Route) -> float:
    """Seconds left to the destination from the cursor.

    The time between the two checkpoints around the cursor is spread
    linearly over their distance; everything after the next checkpoint
    is taken from the time table as is.
    """
    poly = route._poly
    times = route._times
    if not times or poly.size == 0:
        return 0.0
    cursor = poly.current
    if not cursor.is_valid:
        return 0.0

    # Checkpoints are searched from the cursor's segment start vertex. A
    # cursor standing on a checkpoint vertex gives the same value with
    # either neighbouring checkpoint as target.
    pos = times.upper_bound(cursor.index)
    if pos == len(times):
        return 0.0

    target = times[pos]
    if target.index >= poly.size:
        raise RouteInvariantError(
            f"time checkpoint {target.index} out of range for {poly.size} vertices",
            table="times",
        )
    if pos > 0:
        prev_index, prev_time = times[pos - 1].index, times[pos - 1].time_s
    else:
        prev_index, prev_time = 0, 0.0

    total = route.get_total_time_sec()
    seg_time = target.time_s - prev_time
    seg_dist = poly.distance_between_indices_m(prev_index, target.index)
    if math.isclose(seg_dist, 0.0, abs_tol=_ZERO_DISTANCE_M):
        return total - target.time_s

    remaining = poly.distance_m(cursor, poly.cursor_at(target.index))
    return (total - target.time_s) + seg_time * (remaining / seg_dist)
