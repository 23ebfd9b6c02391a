"""Fix-to-route matching."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from pynavroute.geometry.mercator import angle_to_bearing, distance_on_earth, metres_to_xy, to_lat_lon
from pynavroute.geometry.point import angle_to
from pynavroute.geometry.polyline import FollowedPolyline
from pynavroute.models.gps import GpsInfo
from pynavroute.models.matching import RouteMatchingInfo

if TYPE_CHECKING:
    from pynavroute.route import Route

_logger = logging.getLogger(__name__)


def predict_distance(route: Route, fix: GpsInfo) -> float:
    """Arc length the agent covered since the previous fix, or ``-1``.

    Only a recent previous fix (less than ``location_time_threshold_s``
    ago) with a reported speed gives a prediction.
    """
    previous = route._current_time
    if previous is None or not fix.has_speed:
        return -1.0
    delta_t = fix.timestamp - previous
    if 0.0 < delta_t < route._settings.location_time_threshold_s:
        return fix.speed * delta_t  # type: ignore[operator]
    return -1.0


def move_iterator(route: Route, fix: GpsInfo) -> bool:
    """Project *fix* onto the route and move the cursor there.

    Returns whether a projection was found inside the search window.
    """
    settings = route._settings
    predicted = predict_distance(route, fix)
    rect = metres_to_xy(fix.longitude, fix.latitude, max(settings.matching_threshold_m, fix.horizontal_accuracy))
    position = fix.to_point()

    res = route._poly.update_projection_by_prediction(rect, predicted, position)
    if route._simplified_poly.is_valid:
        route._simplified_poly.update_projection_by_prediction(rect, predicted, position)
    route._current_time = fix.timestamp

    if not res.is_valid:
        _logger.debug("No projection for fix lat=%f lon=%f", fix.latitude, fix.longitude)
    return res.is_valid


def segment_angle(poly: FollowedPolyline, index: int) -> float:
    """Direction in degrees of the path leaving vertex *index*.

    Vertices equal to the start vertex are skipped. Returns ``0`` when no
    distinct vertex follows.
    """
    size = poly.size
    if index + 1 >= size:
        return 0.0
    p1 = poly.point(index)
    i = index + 1
    while i < size and p1.almost_equal(poly.point(i)):
        i += 1
    if i == size:
        return 0.0
    return math.degrees(angle_to(p1, poly.point(i)))


def match_location_to_route(
    route: Route,
    fix: GpsInfo,
    matching_info: RouteMatchingInfo | None = None,
) -> GpsInfo:
    """Snap *fix* to the cursor when it lies within the matching threshold.

    Returns the snapped copy, or *fix* itself when it is not snapped.
    """
    poly = route._poly
    if not poly.is_valid:
        return fix

    cursor = poly.current
    dist_from_route = distance_on_earth(cursor.point, fix.to_point())
    if dist_from_route >= route._settings.matching_threshold_m:
        return fix

    lat, lon = to_lat_lon(cursor.point)
    update: dict[str, float] = {"latitude": lat, "longitude": lon}
    if route._settings.match_route:
        update["bearing"] = angle_to_bearing(segment_angle(poly, cursor.index))

    if matching_info is not None:
        matching_info.set(cursor.point, cursor.index, poly.mercator_distance_from_begin())
    _logger.debug("Fix snapped to vertex %d (%.1f m off route)", cursor.index, dist_from_route)
    return fix.model_copy(update=update)
