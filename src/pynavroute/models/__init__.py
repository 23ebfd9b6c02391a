"""Data models for route annotations, fixes and exports."""

from pynavroute.models._base import IndexedItem, NavBaseModel, NavEnum
from pynavroute.models.annotations import StreetItem, TimeItem
from pynavroute.models.gps import GpsInfo
from pynavroute.models.matching import RouteMatchingInfo
from pynavroute.models.segment import SegmentInfo, SubrouteSettings
from pynavroute.models.traffic import SpeedGroup
from pynavroute.models.turns import PedestrianDirection, TurnDirection, TurnItem, TurnItemDist

__all__ = [
    "GpsInfo",
    "IndexedItem",
    "NavBaseModel",
    "NavEnum",
    "PedestrianDirection",
    "RouteMatchingInfo",
    "SegmentInfo",
    "SpeedGroup",
    "StreetItem",
    "SubrouteSettings",
    "TimeItem",
    "TurnDirection",
    "TurnItem",
    "TurnItemDist",
]
