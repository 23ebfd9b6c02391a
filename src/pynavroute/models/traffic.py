"""Traffic congestion classes."""

from __future__ import annotations

from pynavroute.models._base import NavEnum


class SpeedGroup(NavEnum):
    """Congestion class of a path edge.

    ``G0`` is the most congested, ``G5`` free flow. ``TEMP_BLOCK`` marks a
    temporarily closed road.
    """

    UNKNOWN = -1
    G0 = 0
    G1 = 1
    G2 = 2
    G3 = 3
    G4 = 4
    G5 = 5
    TEMP_BLOCK = 6
