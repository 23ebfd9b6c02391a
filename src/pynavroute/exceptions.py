"""Custom exception hierarchy for pynavroute."""

from __future__ import annotations


class NavRouteError(Exception):
    """Base exception for all pynavroute errors."""


class NavRouteConfigError(NavRouteError):
    """Invalid or missing configuration."""


class RoutePreconditionError(NavRouteError):
    """A route was handed data that breaks its contract.

    Annotation tables come from a trusted leg-building collaborator, so
    there is no recovery path: the caller has to fix the producer.
    """


class RouteInvariantError(RoutePreconditionError):
    """Annotation tables are inconsistent with the path.

    Covers empty turn/time tables on a non-empty path, unsorted or
    out-of-range indices and optional arrays whose size does not match
    the vertex (altitude) or edge (traffic) count.
    """

    def __init__(self, message: str, *, table: str = "") -> None:
        self.table = table
        super().__init__(message)


class RouteMergeError(RoutePreconditionError):
    """Appending a route leg failed a continuity check.

    Raised when the leg does not start where the route ends (within
    ``merge_tolerance_m``) or the route's last turn is not the
    destination marker.
    """
