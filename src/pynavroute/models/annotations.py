"""Time and street-name table rows."""

from __future__ import annotations

from pydantic import Field

from pynavroute.models._base import IndexedItem


class TimeItem(IndexedItem):
    """Cumulative travel time from the route start to vertex ``index``."""

    time_s: float = Field(ge=0.0)


class StreetItem(IndexedItem):
    """Street name valid from vertex ``index`` up to the next street row.

    The name may be empty (unnamed road).
    """

    name: str = ""
