"""Per-edge export record and subroute settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pynavroute._constants import INVALID_ALTITUDE
from pynavroute.config import RoutingSettings
from pynavroute.geometry.point import Point
from pynavroute.models._base import NavBaseModel
from pynavroute.models.traffic import SpeedGroup
from pynavroute.models.turns import TurnItem


class SegmentInfo(NavBaseModel):
    """One exported path edge, described at its end vertex.

    Parameters
    ----------
    point : Point
        End vertex of the edge (planar mercator).
    altitude : float
        Altitude at the end vertex, ``INVALID_ALTITUDE`` when unknown.
    turn : TurnItem or None
        Turn located exactly at the end vertex.
    street_name : str
        Street covering the end vertex.
    distance_from_begin_m : float
        Running sum of edge lengths in metres.
    distance_from_begin_merc : float
        Running sum of planar edge lengths.
    time_s : float
        Most recent cumulative checkpoint time at or before the end vertex.
    traffic : SpeedGroup
        Congestion class of the edge.
    """

    point: Point
    altitude: float = INVALID_ALTITUDE
    turn: TurnItem | None = None
    street_name: str = ""
    distance_from_begin_m: float = 0.0
    distance_from_begin_merc: float = 0.0
    time_s: float = 0.0
    traffic: SpeedGroup = SpeedGroup.UNKNOWN


class SubrouteSettings(NavBaseModel):
    """Settings of the single subroute a route reports."""

    routing_settings: RoutingSettings
    router: str
    subroute_uid: Any = Field(default=None)
