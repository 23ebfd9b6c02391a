"""GPS fix model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pynavroute.geometry.mercator import from_lat_lon
from pynavroute.geometry.point import Point
from pynavroute.models._base import NavBaseModel

# Values above this are epoch milliseconds rather than seconds.
_MS_THRESHOLD = 1e11


class GpsInfo(NavBaseModel):
    """A single location fix.

    The route matcher never mutates a fix; snapping returns a copy with
    corrected coordinates (and bearing).

    Parameters
    ----------
    latitude : float
        Latitude in degrees.
    longitude : float
        Longitude in degrees.
    timestamp : float
        Fix time in epoch seconds. Millisecond inputs are normalised.
    speed : float or None
        Ground speed in m/s; ``None`` when the receiver does not report it.
    bearing : float or None
        Compass bearing in degrees.
    horizontal_accuracy : float
        Accuracy radius in metres.
    """

    latitude: float = Field(validation_alias=AliasChoices("latitude", "lat"))
    longitude: float = Field(validation_alias=AliasChoices("longitude", "lon", "lng"))
    timestamp: float = Field(
        default=0.0,
        validation_alias=AliasChoices("timestamp", "time", "gpsTimestamp", "gpsTimeStamp"),
    )
    speed: float | None = Field(default=None, validation_alias=AliasChoices("speed", "gpsSpeed"))
    bearing: float | None = Field(
        default=None,
        validation_alias=AliasChoices("bearing", "direction", "heading", "course"),
    )
    horizontal_accuracy: float = Field(
        default=0.0,
        ge=0.0,
        validation_alias=AliasChoices("horizontal_accuracy", "horizontalAccuracy", "accuracy"),
    )

    @field_validator("timestamp", mode="before")
    @classmethod
    def _normalize_timestamp(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and value > _MS_THRESHOLD:
            return value / 1000.0
        return value

    @property
    def has_speed(self) -> bool:
        return self.speed is not None and self.speed >= 0.0

    def to_point(self) -> Point:
        """Planar mercator position of this fix."""
        return from_lat_lon(self.latitude, self.longitude)
