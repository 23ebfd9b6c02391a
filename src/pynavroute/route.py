"""A followed navigation route and its query surface."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

import polyline

from pynavroute._route import eta as _eta
from pynavroute._route import matcher as _matcher
from pynavroute._route import merge as _merge
from pynavroute._route import segments as _segments
from pynavroute.config import RoutingSettings
from pynavroute.exceptions import RoutePreconditionError
from pynavroute.geometry import mercator
from pynavroute.geometry.point import Point
from pynavroute.geometry.polyline import FollowedPolyline
from pynavroute.geometry.simplification import simplify_points
from pynavroute.models.annotations import StreetItem, TimeItem
from pynavroute.models.gps import GpsInfo
from pynavroute.models.matching import RouteMatchingInfo
from pynavroute.models.segment import SegmentInfo, SubrouteSettings
from pynavroute.models.traffic import SpeedGroup
from pynavroute.models.turns import TurnDirection, TurnItem, TurnItemDist
from pynavroute.tables import IndexedTable

_logger = logging.getLogger(__name__)


def _turn_item(value: TurnItem | tuple[int, TurnDirection]) -> TurnItem:
    if isinstance(value, TurnItem):
        return value
    index, direction = value
    return TurnItem(index=index, turn=TurnDirection(direction))


def _time_item(value: TimeItem | tuple[int, float]) -> TimeItem:
    if isinstance(value, TimeItem):
        return value
    index, time_s = value
    return TimeItem(index=index, time_s=time_s)


def _street_item(value: StreetItem | tuple[int, str]) -> StreetItem:
    if isinstance(value, StreetItem):
        return value
    index, name = value
    return StreetItem(index=index, name=name)


class Route:
    """A precomputed path followed by a moving agent.

    The route owns the path geometry (through a :class:`FollowedPolyline`
    projector) and the annotation tables a leg-building collaborator fills
    right after construction. Fixes move the projector cursor forward;
    every query reads off that cursor.

    Usage::

        route = Route("vehicle", points, "Home", settings=RoutingSettings.car())
        route.set_turn_instructions(turns)
        route.set_section_times(times)
        if route.move_iterator(fix):
            turn = route.get_current_turn()

    Instances are not safe for concurrent use: the owning navigation
    session must serialise all calls.
    """

    def __init__(
        self,
        router: str,
        points: Iterable[Point],
        name: str = "",
        *,
        settings: RoutingSettings | None = None,
    ) -> None:
        self._router = router
        self._name = name
        self._settings = settings if settings is not None else RoutingSettings.car()
        self._poly = FollowedPolyline(points)
        self._simplified_poly = FollowedPolyline()
        self._current_time: float | None = None
        self._turns: IndexedTable[TurnItem] = IndexedTable(name="turns")
        self._times: IndexedTable[TimeItem] = IndexedTable(name="times")
        self._streets: IndexedTable[StreetItem] = IndexedTable(name="streets")
        self._altitudes: list[float] = []
        self._traffic: list[SpeedGroup] = []
        self._absent_countries: set[str] = set()
        self._subroute_uid: Any = None
        self.update()

    @classmethod
    def from_lat_lon(
        cls,
        router: str,
        latlons: Iterable[tuple[float, float]],
        name: str = "",
        *,
        settings: RoutingSettings | None = None,
    ) -> Route:
        """Build a route from ``(lat, lon)`` pairs."""
        return cls(router, (mercator.from_lat_lon(lat, lon) for lat, lon in latlons), name, settings=settings)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def router(self) -> str:
        return self._router

    @property
    def name(self) -> str:
        return self._name

    @property
    def settings(self) -> RoutingSettings:
        return self._settings

    @property
    def poly(self) -> FollowedPolyline:
        return self._poly

    @property
    def simplified_poly(self) -> FollowedPolyline:
        return self._simplified_poly

    @property
    def is_valid(self) -> bool:
        return self._poly.is_valid

    @property
    def turns(self) -> Sequence[TurnItem]:
        return self._turns.items

    @property
    def times(self) -> Sequence[TimeItem]:
        return self._times.items

    @property
    def streets(self) -> Sequence[StreetItem]:
        return self._streets.items

    @property
    def altitudes(self) -> Sequence[float]:
        return tuple(self._altitudes)

    @property
    def traffic(self) -> Sequence[SpeedGroup]:
        return tuple(self._traffic)

    @property
    def absent_countries(self) -> frozenset[str]:
        return frozenset(self._absent_countries)

    # ------------------------------------------------------------------
    # Annotation population
    # ------------------------------------------------------------------

    def set_turn_instructions(self, turns: Iterable[TurnItem | tuple[int, TurnDirection]]) -> None:
        self._turns = IndexedTable((_turn_item(t) for t in turns), name="turns")

    def set_section_times(self, times: Iterable[TimeItem | tuple[int, float]]) -> None:
        self._times = IndexedTable((_time_item(t) for t in times), name="times")

    def set_street_names(self, streets: Iterable[StreetItem | tuple[int, str]]) -> None:
        self._streets = IndexedTable((_street_item(s) for s in streets), name="streets")

    def set_altitudes(self, altitudes: Iterable[float]) -> None:
        self._altitudes = [float(a) for a in altitudes]

    def set_traffic(self, traffic: Iterable[SpeedGroup | int]) -> None:
        self._traffic = [SpeedGroup(t) for t in traffic]

    def add_absent_country(self, name: str) -> None:
        if name:
            self._absent_countries.add(name)

    def update(self) -> None:
        """Rebuild the simplified path and forget the previous fix time."""
        if self._settings.keep_pedestrian_info and self._poly.is_valid:
            points = simplify_points(self._poly.points, self._settings.simplification_tolerance)
            self._simplified_poly = FollowedPolyline(points)
            _logger.debug("Simplified path: %d -> %d points", self._poly.size, len(points))
        else:
            self._simplified_poly = FollowedPolyline()
        self._current_time = None

    # ------------------------------------------------------------------
    # Distance
    # ------------------------------------------------------------------

    def get_total_distance_meters(self) -> float:
        if not self._poly.is_valid:
            return 0.0
        return self._poly.total_distance_m()

    def get_current_distance_from_begin_meters(self) -> float:
        if not self._poly.is_valid:
            return 0.0
        return self._poly.distance_from_begin_m()

    def get_current_distance_to_end_meters(self) -> float:
        if not self._poly.is_valid:
            return 0.0
        return self._poly.distance_to_end_m()

    def get_mercator_distance_from_begin(self) -> float:
        return self._poly.mercator_distance_from_begin()

    def is_current_on_end(self) -> bool:
        return self._poly.distance_to_end_m() < self._settings.on_end_tolerance_m

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    def get_total_time_sec(self) -> float:
        last = self._times.last()
        return last.time_s if last is not None else 0.0

    def get_current_time_to_end_sec(self) -> float:
        return _eta.current_time_to_end(self)

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------

    def _turn_dist(self, pos: int) -> TurnItemDist | None:
        if pos >= len(self._turns):
            return None
        turn = self._turns[pos]
        dist = self._poly.distance_m(self._poly.current, self._poly.cursor_at(turn.index))
        return TurnItemDist(turn_item=turn, dist_meters=dist)

    def get_current_turn(self) -> TurnItemDist | None:
        """First turn strictly after the cursor's vertex, with its distance.

        Standing exactly on a turn vertex yields the following turn.
        """
        if not self._turns or not self._poly.is_valid:
            return None
        return self._turn_dist(self._turns.upper_bound(self._poly.current.index))

    def get_next_turn(self) -> TurnItemDist | None:
        """The turn after :meth:`get_current_turn`."""
        if not self._turns or not self._poly.is_valid:
            return None
        return self._turn_dist(self._turns.upper_bound(self._poly.current.index) + 1)

    def get_next_turns(self) -> list[TurnItemDist]:
        """Current and next turn, at most two; empty when no turn is ahead."""
        current = self.get_current_turn()
        if current is None:
            return []
        turns = [current]
        following = self.get_next_turn()
        if following is not None:
            turns.append(following)
        return turns

    def get_turns_distances(self) -> list[float]:
        """Cumulative distances from the path start to every displayed turn.

        Turns on the first and last vertex are not displayed.
        """
        if not self._poly.is_valid:
            return []
        last_index = self._poly.size - 1
        distances: list[float] = []
        travelled = 0.0
        for pos, turn in enumerate(self._turns):
            if turn.index == 0 or turn.index == last_index:
                continue
            former = self._turns[pos - 1].index if pos > 0 else 0
            travelled += self._poly.distance_between_indices_m(former, turn.index)
            distances.append(travelled)
        return distances

    # ------------------------------------------------------------------
    # Streets
    # ------------------------------------------------------------------

    def get_current_street_name(self) -> str:
        pos = self._streets.interval_containing(self._poly.current.index)
        if pos is None:
            return ""
        return self._streets[pos].name

    def get_street_name_after_idx(self, idx: int) -> str:
        """Next non-empty street name from vertex *idx*, if close enough.

        Names further than ``settings.street_name_link_m`` along the path
        are not reported.
        """
        if not self._streets:
            return ""
        pos = self._streets.interval_containing(idx)
        start = pos if pos is not None else 0
        for street in self._streets.items[start:]:
            if not street.name:
                continue
            dist = self._poly.distance_between_indices_m(idx, max(street.index, idx))
            return street.name if dist < self._settings.street_name_link_m else ""
        return ""

    # ------------------------------------------------------------------
    # Location matching
    # ------------------------------------------------------------------

    def move_iterator(self, fix: GpsInfo) -> bool:
        return _matcher.move_iterator(self, fix)

    def match_location_to_route(
        self,
        fix: GpsInfo,
        matching_info: RouteMatchingInfo | None = None,
    ) -> GpsInfo:
        return _matcher.match_location_to_route(self, fix, matching_info)

    def get_current_direction_point(self) -> Point | None:
        """Point ahead of the cursor for the direction arrow."""
        tolerance = self._settings.on_end_tolerance_m
        if self._settings.keep_pedestrian_info and self._simplified_poly.is_valid:
            return self._simplified_poly.current_direction_point(tolerance)
        if not self._poly.is_valid:
            return None
        return self._poly.current_direction_point(tolerance)

    # ------------------------------------------------------------------
    # Re-planning
    # ------------------------------------------------------------------

    def append_route(self, other: Route) -> None:
        _merge.append_route(self, other)

    # ------------------------------------------------------------------
    # Subroutes
    # ------------------------------------------------------------------

    def get_subroute_count(self) -> int:
        return 1 if self.is_valid else 0

    def _check_subroute_idx(self, segment_idx: int) -> None:
        if not 0 <= segment_idx < self.get_subroute_count():
            raise RoutePreconditionError(
                f"subroute index {segment_idx} out of range ({self.get_subroute_count()} subroutes)"
            )

    def get_subroute_info(self, segment_idx: int = 0) -> list[SegmentInfo]:
        self._check_subroute_idx(segment_idx)
        return _segments.subroute_info(self)

    def get_subroute_settings(self, segment_idx: int = 0) -> SubrouteSettings:
        self._check_subroute_idx(segment_idx)
        return SubrouteSettings(routing_settings=self._settings, router=self._router, subroute_uid=self._subroute_uid)

    def set_subroute_uid(self, segment_idx: int, subroute_uid: Any) -> None:
        self._check_subroute_idx(segment_idx)
        self._subroute_uid = subroute_uid

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def debug_print(self) -> str:
        """Text description with the path as an encoded polyline."""
        latlons = [mercator.to_lat_lon(p) for p in self._poly.points]
        encoded = polyline.encode(latlons) if latlons else ""
        return (
            f"Route(router={self._router!r}, name={self._name!r}, points={len(latlons)}, "
            f"turns={len(self._turns)}, times={len(self._times)}, polyline={encoded})"
        )

    def __repr__(self) -> str:
        return f"Route(router={self._router!r}, name={self._name!r}, points={self._poly.size})"


