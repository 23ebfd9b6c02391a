"""pynavroute - progress tracking and navigation queries along a computed route."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pynavroute")
except PackageNotFoundError:
    __version__ = "0+local"
from pynavroute.config import RoutingSettings
from pynavroute.exceptions import (
    NavRouteConfigError,
    NavRouteError,
    RouteInvariantError,
    RouteMergeError,
    RoutePreconditionError,
)
from pynavroute.geometry import FollowedPolyline, Point, PolylineCursor
from pynavroute.models import (
    GpsInfo,
    PedestrianDirection,
    RouteMatchingInfo,
    SegmentInfo,
    SpeedGroup,
    StreetItem,
    SubrouteSettings,
    TimeItem,
    TurnDirection,
    TurnItem,
    TurnItemDist,
)
from pynavroute.route import Route
from pynavroute.tables import IndexedTable

__all__ = [
    "__version__",
    "FollowedPolyline",
    "GpsInfo",
    "IndexedTable",
    "NavRouteConfigError",
    "NavRouteError",
    "PedestrianDirection",
    "Point",
    "PolylineCursor",
    "Route",
    "RouteInvariantError",
    "RouteMatchingInfo",
    "RouteMergeError",
    "RoutePreconditionError",
    "RoutingSettings",
    "SegmentInfo",
    "SpeedGroup",
    "StreetItem",
    "SubrouteSettings",
    "TimeItem",
    "TurnDirection",
    "TurnItem",
    "TurnItemDist",
]
