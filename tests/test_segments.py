from __future__ import annotations

import math

import pytest

from pynavroute._constants import EARTH_RADIUS_M, INVALID_ALTITUDE
from pynavroute.config import RoutingSettings
from pynavroute.exceptions import RouteInvariantError, RoutePreconditionError
from pynavroute.models import SpeedGroup, TurnDirection
from pynavroute.route import Route

_DEG_PER_M = 180.0 / (math.pi * EARTH_RADIUS_M)


def _annotated_route() -> Route:
    route = Route.from_lat_lon("vehicle", [(0.0, i * 100.0 * _DEG_PER_M) for i in range(5)], "Test")
    route.set_turn_instructions(
        [
            (0, TurnDirection.GO_STRAIGHT),
            (2, TurnDirection.TURN_LEFT),
            (4, TurnDirection.REACHED_YOUR_DESTINATION),
        ]
    )
    route.set_section_times([(2, 20.0), (4, 40.0)])
    route.set_street_names([(0, "A"), (3, "B")])
    route.set_altitudes([10.0, 11.0, 12.0, 13.0, 14.0])
    route.set_traffic([SpeedGroup.G1, SpeedGroup.G2, SpeedGroup.G3, SpeedGroup.G4])
    return route


class TestSubrouteInfo:
    def test_one_entry_per_edge(self) -> None:
        route = _annotated_route()
        info = route.get_subroute_info()
        assert len(info) == route.poly.size - 1
        assert info[-1].distance_from_begin_m == pytest.approx(route.get_total_distance_meters())
        assert info[-1].point == route.poly.back

    def test_entries_describe_end_vertex(self) -> None:
        info = _annotated_route().get_subroute_info()

        assert info[0].turn is None
        assert info[0].time_s == 0.0
        assert info[0].street_name == "A"
        assert info[0].altitude == 11.0
        assert info[0].traffic == SpeedGroup.G1
        assert info[0].distance_from_begin_m == pytest.approx(100.0)
        assert info[0].distance_from_begin_merc == pytest.approx(100.0 * _DEG_PER_M)

        assert info[1].turn is not None
        assert info[1].turn.turn == TurnDirection.TURN_LEFT
        assert info[1].time_s == 20.0

        # Times carry forward until the next checkpoint.
        assert info[2].time_s == 20.0
        assert info[2].street_name == "B"
        assert info[2].traffic == SpeedGroup.G3

        assert info[3].turn is not None and info[3].turn.is_destination
        assert info[3].time_s == 40.0

    def test_missing_optional_arrays(self) -> None:
        route = _annotated_route()
        route.set_altitudes([])
        route.set_traffic([])
        info = route.get_subroute_info()
        assert all(seg.altitude == INVALID_ALTITUDE for seg in info)
        assert all(seg.traffic == SpeedGroup.UNKNOWN for seg in info)

    def test_empty_turns_raise(self) -> None:
        route = _annotated_route()
        route.set_turn_instructions([])
        with pytest.raises(RouteInvariantError) as err:
            route.get_subroute_info()
        assert err.value.table == "turns"

    def test_time_checkpoint_out_of_range(self) -> None:
        route = _annotated_route()
        route.set_section_times([(2, 20.0), (7, 70.0)])
        with pytest.raises(RouteInvariantError):
            route.get_subroute_info()

    def test_unsorted_turns_raise(self) -> None:
        route = _annotated_route()
        route.set_turn_instructions([(3, TurnDirection.TURN_LEFT), (1, TurnDirection.TURN_RIGHT)])
        with pytest.raises(RouteInvariantError, match="sorted"):
            route.get_subroute_info()

    def test_altitude_size_mismatch(self) -> None:
        route = _annotated_route()
        route.set_altitudes([1.0, 2.0])
        with pytest.raises(RouteInvariantError):
            route.get_subroute_info()

    def test_traffic_size_mismatch(self) -> None:
        route = _annotated_route()
        route.set_traffic([SpeedGroup.G1] * 5)
        with pytest.raises(RouteInvariantError):
            route.get_subroute_info()


class TestSubrouteSettings:
    def test_single_subroute(self) -> None:
        route = _annotated_route()
        assert route.get_subroute_count() == 1
        settings = route.get_subroute_settings()
        assert settings.router == "vehicle"
        assert settings.routing_settings == RoutingSettings.car()
        assert settings.subroute_uid is None

    def test_set_subroute_uid(self) -> None:
        route = _annotated_route()
        route.set_subroute_uid(0, 17)
        assert route.get_subroute_settings(0).subroute_uid == 17

    def test_out_of_range_subroute(self) -> None:
        route = _annotated_route()
        with pytest.raises(RoutePreconditionError):
            route.get_subroute_settings(1)
        with pytest.raises(RoutePreconditionError):
            route.set_subroute_uid(-1, 3)

    def test_empty_route_has_no_subroutes(self) -> None:
        route = Route("vehicle", [])
        assert route.get_subroute_count() == 0
        with pytest.raises(RoutePreconditionError):
            route.get_subroute_info(0)
