"""Routing configuration for pynavroute."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pynavroute._constants import (
    LOCATION_TIME_THRESHOLD_S,
    MERGE_TOLERANCE_M,
    ON_END_TOLERANCE_M,
    SIMPLIFICATION_TOLERANCE,
    STREET_NAME_LINK_METERS,
)
from pynavroute.exceptions import NavRouteConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise NavRouteConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class RoutingSettings:
    """Per-route navigation settings.

    Passed explicitly to :class:`pynavroute.route.Route`; there is no
    process-wide default.

    Parameters
    ----------
    match_route : bool
        Replace the bearing of a snapped fix with the direction of the
        route segment under the cursor.
    sound_direction : bool
        Voice guidance announces turn directions.
    matching_threshold_m : float
        Half-size of the search window around a fix, and the maximum
        distance between a fix and the cursor for the fix to be snapped.
    keep_pedestrian_info : bool
        Keep a decimated copy of the path for the direction arrow.
    show_turn_after_next : bool
        UI shows the turn after the next one.
    street_name_link_m : float
        Look-ahead distance for announcing the next street name.
    on_end_tolerance_m : float
        Remaining distance below which the cursor is on the route end.
        Also used to pick the direction-arrow point.
    location_time_threshold_s : float
        Upper bound of the interval between fixes that still feeds the
        speed-based prediction.
    merge_tolerance_m : float
        Maximum gap between a route end and an appended leg start.
    simplification_tolerance : float
        Douglas-Peucker tolerance in planar mercator units.
    """

    match_route: bool = True
    sound_direction: bool = True
    matching_threshold_m: float = 50.0
    keep_pedestrian_info: bool = False
    show_turn_after_next: bool = True
    street_name_link_m: float = STREET_NAME_LINK_METERS
    on_end_tolerance_m: float = ON_END_TOLERANCE_M
    location_time_threshold_s: float = LOCATION_TIME_THRESHOLD_S
    merge_tolerance_m: float = MERGE_TOLERANCE_M
    simplification_tolerance: float = SIMPLIFICATION_TOLERANCE

    def __post_init__(self) -> None:
        for name in (
            "matching_threshold_m",
            "street_name_link_m",
            "on_end_tolerance_m",
            "location_time_threshold_s",
            "merge_tolerance_m",
        ):
            value = getattr(self, name)
            if value <= 0:
                raise NavRouteConfigError(f"{name} must be positive, got {value}")
        if self.simplification_tolerance < 0:
            raise NavRouteConfigError(
                f"simplification_tolerance must not be negative, got {self.simplification_tolerance}"
            )

    @classmethod
    def car(cls, **overrides: Any) -> RoutingSettings:
        return cls(**overrides)

    @classmethod
    def pedestrian(cls, **overrides: Any) -> RoutingSettings:
        values: dict[str, Any] = {
            "match_route": False,
            "sound_direction": False,
            "matching_threshold_m": 20.0,
            "keep_pedestrian_info": True,
            "show_turn_after_next": False,
        }
        values.update(overrides)
        return cls(**values)

    @classmethod
    def bicycle(cls, **overrides: Any) -> RoutingSettings:
        values: dict[str, Any] = {
            "match_route": False,
            "sound_direction": False,
            "matching_threshold_m": 30.0,
            "keep_pedestrian_info": False,
            "show_turn_after_next": False,
        }
        values.update(overrides)
        return cls(**values)

    @classmethod
    def from_env(cls, preset: str = "car", **overrides: Any) -> RoutingSettings:
        """Create settings from a preset and ``NAVROUTE_*`` variables.

        Explicit keyword arguments override environment values, which
        override the preset.

        Parameters
        ----------
        preset : str
            ``"car"``, ``"pedestrian"`` or ``"bicycle"``. ``NAVROUTE_PRESET``
            wins over this argument when set.
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        RoutingSettings
            Populated settings.
        """
        env = os.environ

        preset_name = env.get("NAVROUTE_PRESET", preset).strip().lower()
        factories = {"car": cls.car, "pedestrian": cls.pedestrian, "bicycle": cls.bicycle}
        factory = factories.get(preset_name)
        if factory is None:
            raise NavRouteConfigError(f"Unknown routing preset: {preset_name!r}")
        base = factory()

        _ENV_BOOL_MAP = {
            "NAVROUTE_MATCH_ROUTE": "match_route",
            "NAVROUTE_SOUND_DIRECTION": "sound_direction",
            "NAVROUTE_KEEP_PEDESTRIAN_INFO": "keep_pedestrian_info",
            "NAVROUTE_SHOW_TURN_AFTER_NEXT": "show_turn_after_next",
        }
        _ENV_FLOAT_MAP = {
            "NAVROUTE_MATCHING_THRESHOLD_M": "matching_threshold_m",
            "NAVROUTE_STREET_NAME_LINK_M": "street_name_link_m",
            "NAVROUTE_ON_END_TOLERANCE_M": "on_end_tolerance_m",
            "NAVROUTE_LOCATION_TIME_THRESHOLD_S": "location_time_threshold_s",
            "NAVROUTE_MERGE_TOLERANCE_M": "merge_tolerance_m",
            "NAVROUTE_SIMPLIFICATION_TOLERANCE": "simplification_tolerance",
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_BOOL_MAP.items():
            if field_name in overrides:
                continue
            config_kwargs[field_name] = _env_bool(env.get(env_key), getattr(base, field_name))

        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        config_kwargs.update(overrides)

        return dataclasses.replace(base, **config_kwargs)
