"""Path projector: a polyline with a movable arc-length cursor."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from pynavroute.geometry.mercator import distance_on_earth
from pynavroute.geometry.point import Point, Rect, project_to_segment

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PolylineCursor:
    """A position on the polyline.

    ``index`` is the start vertex of the segment that holds ``point``.
    A cursor with ``index == -1`` is invalid.
    """

    point: Point | None = None
    index: int = -1

    @property
    def is_valid(self) -> bool:
        return self.index >= 0 and self.point is not None


INVALID_CURSOR = PolylineCursor()


class FollowedPolyline:
    """Polyline geometry plus the current projected position of the agent.

    Segment lengths are precomputed in metres so arc-length queries are
    O(1). The cursor only moves forward through projection updates:
    the best-projection search starts at the current segment.

    Ties keep the earliest segment. A position exactly on vertex ``v``
    projects onto the end of segment ``v - 1``, so the cursor index is
    ``v - 1`` and a turn at ``v`` is still reported as ahead (at 0 m).
    """

    def __init__(self, points: Iterable[Point] = ()) -> None:
        self._points: list[Point] = [Point(*p) for p in points]
        self._seg_distance: list[float] = []
        self._current: PolylineCursor = INVALID_CURSOR
        self._update()

    def _update(self) -> None:
        self._seg_distance = list(
            itertools.accumulate(distance_on_earth(p1, p2) for p1, p2 in itertools.pairwise(self._points))
        )
        self._current = PolylineCursor(self._points[0], 0) if self._points else INVALID_CURSOR

    # ------------------------------------------------------------------
    # Geometry accessors
    # ------------------------------------------------------------------

    @property
    def points(self) -> Sequence[Point]:
        return tuple(self._points)

    @property
    def size(self) -> int:
        return len(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def point(self, index: int) -> Point:
        return self._points[index]

    @property
    def front(self) -> Point:
        return self._points[0]

    @property
    def back(self) -> Point:
        return self._points[-1]

    @property
    def is_valid(self) -> bool:
        return self._current.is_valid and len(self._points) > 1

    # ------------------------------------------------------------------
    # Arc-length queries
    # ------------------------------------------------------------------

    @property
    def current(self) -> PolylineCursor:
        return self._current

    def cursor_at(self, index: int) -> PolylineCursor:
        return PolylineCursor(self._points[index], index)

    def total_distance_m(self) -> float:
        return self._seg_distance[-1] if self._seg_distance else 0.0

    def distance_from_begin_m(self) -> float:
        cur = self._current
        if not cur.is_valid:
            return 0.0
        before = self._seg_distance[cur.index - 1] if cur.index > 0 else 0.0
        return before + distance_on_earth(cur.point, self._points[cur.index])

    def distance_to_end_m(self) -> float:
        return self.total_distance_m() - self.distance_from_begin_m()

    def mercator_distance_from_begin(self) -> float:
        """Planar length of the path up to the cursor."""
        cur = self._current
        if not cur.is_valid:
            return 0.0
        dist = sum(p1.length(p2) for p1, p2 in itertools.pairwise(self._points[: cur.index + 1]))
        return dist + self._points[cur.index].length(cur.point)

    def distance_m(self, first: PolylineCursor, second: PolylineCursor) -> float:
        """Arc length in metres between two cursors, in either order."""
        if not (first.is_valid and second.is_valid):
            return 0.0
        if second.index < first.index:
            first, second = second, first
        if first.index == second.index:
            return distance_on_earth(first.point, second.point)
        return (
            distance_on_earth(first.point, self._points[first.index + 1])
            + self._seg_distance[second.index - 1]
            - self._seg_distance[first.index]
            + distance_on_earth(self._points[second.index], second.point)
        )

    def distance_between_indices_m(self, start: int, end: int) -> float:
        if start > end:
            start, end = end, start
        before = self._seg_distance[start - 1] if start > 0 else 0.0
        upto = self._seg_distance[end - 1] if end > 0 else 0.0
        return upto - before

    # ------------------------------------------------------------------
    # Cursor movement
    # ------------------------------------------------------------------

    def move_to_index(self, index: int) -> PolylineCursor:
        """Place the cursor on vertex *index*."""
        self._current = self.cursor_at(index)
        return self._current

    def update_projection(self, rect: Rect, position: Point | None = None) -> PolylineCursor:
        """Move the cursor to the nearest projection inside *rect*."""
        target = position if position is not None else rect.center
        res = self._best_projection(rect, target, lambda it: distance_on_earth(it.point, target))
        if res.is_valid:
            self._current = res
        return res

    def update_projection_by_prediction(
        self,
        rect: Rect,
        predict_distance: float,
        position: Point | None = None,
    ) -> PolylineCursor:
        """Move the cursor to the projection closest to the predicted arc length.

        A non-positive *predict_distance* falls back to the nearest-point
        search of :meth:`update_projection`.
        """
        if not self._current.is_valid:
            return INVALID_CURSOR
        if predict_distance <= 0.0:
            return self.update_projection(rect, position)

        target = position if position is not None else rect.center
        start = self._current
        res = self._best_projection(rect, target, lambda it: abs(self.distance_m(start, it) - predict_distance))
        if res.is_valid:
            self._current = res
        return res

    def _best_projection(
        self,
        rect: Rect,
        target: Point,
        score: Callable[[PolylineCursor], float],
    ) -> PolylineCursor:
        res = INVALID_CURSOR
        best = float("inf")
        first = max(self._current.index, 0)
        for i in range(first, len(self._points) - 1):
            pt = project_to_segment(self._points[i], self._points[i + 1], target)
            if not rect.contains(pt):
                continue
            candidate = PolylineCursor(pt, i)
            value = score(candidate)
            if value < best:
                res = candidate
                best = value
        return res

    def current_direction_point(self, tolerance_m: float) -> Point:
        """First vertex ahead of the cursor further than *tolerance_m* away.

        Falls back to the last vertex.
        """
        cur = self._current
        last = len(self._points) - 1
        if not cur.is_valid:
            return self._points[last]
        index = min(cur.index + 1, last)
        point = self._points[index]
        while index < last:
            if distance_on_earth(point, cur.point) > tolerance_m:
                break
            index += 1
            point = self._points[index]
        return point

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def pop_back(self) -> Point:
        point = self._points.pop()
        self._update()
        return point

    def append(self, other: FollowedPolyline) -> None:
        self._points.extend(other._points)
        self._update()
        _logger.debug("Polyline extended to %d points", len(self._points))

    def __repr__(self) -> str:
        return f"FollowedPolyline(points={len(self._points)}, current={self._current.index})"
