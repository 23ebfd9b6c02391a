from __future__ import annotations

import math

import pytest

from pynavroute._constants import EARTH_RADIUS_M, METRES_IN_DEGREE
from pynavroute.geometry.mercator import (
    angle_to_bearing,
    distance_on_earth,
    distance_on_earth_lat_lon,
    from_lat_lon,
    metres_to_xy,
    to_lat_lon,
)
from pynavroute.geometry.point import Point, Rect, angle_to, project_to_segment
from pynavroute.geometry.polyline import FollowedPolyline
from pynavroute.geometry.simplification import simplify_points

_DEG_PER_M = 180.0 / (math.pi * EARTH_RADIUS_M)


def _equator(n: int, step_m: float = 100.0) -> list[Point]:
    return [from_lat_lon(0.0, i * step_m * _DEG_PER_M) for i in range(n)]


class TestMercator:
    def test_lat_lon_round_trip(self) -> None:
        lat, lon = to_lat_lon(from_lat_lon(51.2562, 7.1508))
        assert lat == pytest.approx(51.2562, abs=1e-9)
        assert lon == pytest.approx(7.1508, abs=1e-12)

    def test_one_degree_on_equator(self) -> None:
        expected = EARTH_RADIUS_M * math.pi / 180.0
        assert distance_on_earth_lat_lon(0.0, 0.0, 0.0, 1.0) == pytest.approx(expected)
        assert distance_on_earth(from_lat_lon(0.0, 0.0), from_lat_lon(0.0, 1.0)) == pytest.approx(expected)

    def test_distance_is_symmetric(self) -> None:
        a = from_lat_lon(51.2562, 7.1508)
        b = from_lat_lon(51.2277, 6.7735)
        assert distance_on_earth(a, b) == pytest.approx(distance_on_earth(b, a))
        assert 26_000 < distance_on_earth(a, b) < 27_000

    def test_metres_to_xy_contains_position(self) -> None:
        rect = metres_to_xy(7.1508, 51.2562, 50.0)
        pt = from_lat_lon(51.2562, 7.1508)
        assert rect.contains(pt)
        assert not rect.contains(from_lat_lon(51.2562 + 0.01, 7.1508))

    def test_metres_to_xy_widens_towards_pole(self) -> None:
        rect = metres_to_xy(10.0, 60.0, 1000.0)
        lat_offset = 1000.0 / METRES_IN_DEGREE
        expected = lat_offset / math.cos(math.radians(60.0 + lat_offset))
        assert (rect.max_x - rect.min_x) / 2.0 == pytest.approx(expected)
        assert (rect.max_x - rect.min_x) / 2.0 > lat_offset / math.cos(math.radians(60.0))

    def test_metres_to_xy_southern_hemisphere(self) -> None:
        north = metres_to_xy(10.0, 60.0, 1000.0)
        south = metres_to_xy(10.0, -60.0, 1000.0)
        assert south.max_x - south.min_x == pytest.approx(north.max_x - north.min_x)

    @pytest.mark.parametrize(
        ("angle", "bearing"),
        [(0.0, 90.0), (90.0, 0.0), (180.0, 270.0), (-90.0, 180.0), (45.0, 45.0)],
    )
    def test_angle_to_bearing(self, angle: float, bearing: float) -> None:
        assert angle_to_bearing(angle) == pytest.approx(bearing)


class TestPoint:
    def test_projection_is_clamped_to_segment(self) -> None:
        p1, p2 = Point(0.0, 0.0), Point(10.0, 0.0)
        assert project_to_segment(p1, p2, Point(5.0, 3.0)) == Point(5.0, 0.0)
        assert project_to_segment(p1, p2, Point(-4.0, 1.0)) == p1
        assert project_to_segment(p1, p2, Point(14.0, 1.0)) == p2

    def test_projection_on_degenerate_segment(self) -> None:
        p = Point(1.0, 1.0)
        assert project_to_segment(p, p, Point(5.0, 5.0)) == p

    def test_rect_center_and_angle(self) -> None:
        assert Rect(0.0, 0.0, 2.0, 4.0).center == Point(1.0, 2.0)
        assert angle_to(Point(0.0, 0.0), Point(0.0, 1.0)) == pytest.approx(math.pi / 2)

    def test_almost_equal(self) -> None:
        assert Point(1.0, 1.0).almost_equal(Point(1.0 + 1e-12, 1.0))
        assert not Point(1.0, 1.0).almost_equal(Point(1.001, 1.0))


class TestFollowedPolyline:
    def test_empty_polyline_is_invalid(self) -> None:
        poly = FollowedPolyline()
        assert not poly.is_valid
        assert poly.total_distance_m() == 0.0
        assert poly.distance_from_begin_m() == 0.0

    def test_single_point_is_invalid(self) -> None:
        assert not FollowedPolyline(_equator(1)).is_valid

    def test_segment_lengths_sum_to_total(self) -> None:
        points = _equator(6, 73.0)
        poly = FollowedPolyline(points)
        parts = sum(poly.distance_between_indices_m(i, i + 1) for i in range(len(points) - 1))
        assert parts == pytest.approx(poly.total_distance_m())
        assert poly.total_distance_m() == pytest.approx(5 * 73.0)

    def test_cursor_distances(self) -> None:
        poly = FollowedPolyline(_equator(5))
        poly.move_to_index(3)
        assert poly.distance_from_begin_m() == pytest.approx(300.0)
        assert poly.distance_to_end_m() == pytest.approx(100.0)
        assert poly.mercator_distance_from_begin() == pytest.approx(300.0 * _DEG_PER_M)

    def test_distance_between_cursors_any_order(self) -> None:
        poly = FollowedPolyline(_equator(5))
        a, b = poly.cursor_at(1), poly.cursor_at(4)
        assert poly.distance_m(a, b) == pytest.approx(300.0)
        assert poly.distance_m(b, a) == pytest.approx(300.0)

    def test_nearest_projection(self) -> None:
        poly = FollowedPolyline(_equator(5))
        target = from_lat_lon(10.0 * _DEG_PER_M, 150.0 * _DEG_PER_M)
        rect = metres_to_xy(150.0 * _DEG_PER_M, 10.0 * _DEG_PER_M, 50.0)
        res = poly.update_projection(rect, target)
        assert res.is_valid
        assert res.index == 1
        assert poly.distance_from_begin_m() == pytest.approx(150.0, abs=0.01)

    def test_projection_outside_window_keeps_cursor(self) -> None:
        poly = FollowedPolyline(_equator(5))
        poly.move_to_index(2)
        target = from_lat_lon(0.01, 0.0)
        res = poly.update_projection(metres_to_xy(0.0, 0.01, 50.0), target)
        assert not res.is_valid
        assert poly.current.index == 2

    def test_prediction_prefers_expected_arc_length(self) -> None:
        # Out-and-back path: the fix is equally close to both passes.
        out = _equator(3)
        points = [*out, *reversed(out[:-1])]
        poly = FollowedPolyline(points)
        lon = 100.0 * _DEG_PER_M
        target = from_lat_lon(0.0, lon)
        rect = metres_to_xy(lon, 0.0, 50.0)

        res = poly.update_projection_by_prediction(rect, 300.0, target)
        assert res.is_valid
        assert poly.distance_from_begin_m() == pytest.approx(300.0, abs=0.01)

    def test_pop_back_and_append(self) -> None:
        poly = FollowedPolyline(_equator(3))
        poly.move_to_index(2)
        poly.pop_back()
        assert poly.size == 2
        assert poly.current.index == 0
        poly.append(FollowedPolyline(_equator(5)[2:]))
        assert poly.size == 5
        assert poly.total_distance_m() == pytest.approx(400.0)

    def test_direction_point_skips_close_vertices(self) -> None:
        points = _equator(2) + [from_lat_lon(0.0, 105.0 * _DEG_PER_M), from_lat_lon(0.0, 200.0 * _DEG_PER_M)]
        poly = FollowedPolyline(points)
        poly.move_to_index(1)
        assert poly.current_direction_point(10.0) == points[3]
        poly.move_to_index(3)
        assert poly.current_direction_point(10.0) == points[3]


class TestSimplification:
    def test_collinear_points_collapse_to_endpoints(self) -> None:
        points = _equator(6)
        simplified = simplify_points(points, 1e-6)
        assert simplified == [points[0], points[-1]]

    def test_corner_is_kept(self) -> None:
        points = [Point(0.0, 0.0), Point(1.0, 0.0), Point(1.0, 1.0)]
        assert simplify_points(points, 1e-4) == points

    def test_short_input_is_unchanged(self) -> None:
        points = _equator(2)
        assert simplify_points(points, 1.0) == points
