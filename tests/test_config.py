from __future__ import annotations

import pytest

from pynavroute.config import RoutingSettings
from pynavroute.exceptions import NavRouteConfigError

_ENV_KEYS = (
    "NAVROUTE_PRESET",
    "NAVROUTE_MATCH_ROUTE",
    "NAVROUTE_SOUND_DIRECTION",
    "NAVROUTE_KEEP_PEDESTRIAN_INFO",
    "NAVROUTE_SHOW_TURN_AFTER_NEXT",
    "NAVROUTE_MATCHING_THRESHOLD_M",
    "NAVROUTE_STREET_NAME_LINK_M",
    "NAVROUTE_ON_END_TOLERANCE_M",
    "NAVROUTE_LOCATION_TIME_THRESHOLD_S",
    "NAVROUTE_MERGE_TOLERANCE_M",
    "NAVROUTE_SIMPLIFICATION_TOLERANCE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestPresets:
    def test_car_defaults(self) -> None:
        settings = RoutingSettings.car()
        assert settings.match_route is True
        assert settings.sound_direction is True
        assert settings.keep_pedestrian_info is False
        assert settings.matching_threshold_m == 50.0
        assert settings.street_name_link_m == 400.0
        assert settings.on_end_tolerance_m == 10.0
        assert settings.location_time_threshold_s == 60.0
        assert settings.merge_tolerance_m == 2.0

    def test_pedestrian_keeps_simplified_path(self) -> None:
        settings = RoutingSettings.pedestrian()
        assert settings.keep_pedestrian_info is True
        assert settings.match_route is False
        assert settings.matching_threshold_m == 20.0

    def test_preset_overrides(self) -> None:
        settings = RoutingSettings.bicycle(matching_threshold_m=15.0)
        assert settings.matching_threshold_m == 15.0
        assert settings.match_route is False

    def test_settings_are_frozen(self) -> None:
        settings = RoutingSettings.car()
        with pytest.raises(AttributeError):
            settings.match_route = False  # type: ignore[misc]


class TestValidation:
    def test_non_positive_threshold_raises(self) -> None:
        with pytest.raises(NavRouteConfigError, match="matching_threshold_m"):
            RoutingSettings(matching_threshold_m=0.0)

    def test_negative_simplification_tolerance_raises(self) -> None:
        with pytest.raises(NavRouteConfigError):
            RoutingSettings(simplification_tolerance=-1.0)

    def test_zero_simplification_tolerance_allowed(self) -> None:
        assert RoutingSettings(simplification_tolerance=0.0).simplification_tolerance == 0.0


class TestFromEnv:
    def test_defaults_without_env(self) -> None:
        assert RoutingSettings.from_env() == RoutingSettings.car()

    def test_env_values_are_applied(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NAVROUTE_MATCH_ROUTE", "off")
        monkeypatch.setenv("NAVROUTE_MATCHING_THRESHOLD_M", "35.5")
        settings = RoutingSettings.from_env()
        assert settings.match_route is False
        assert settings.matching_threshold_m == 35.5

    def test_unparseable_bool_keeps_preset_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NAVROUTE_SOUND_DIRECTION", "maybe")
        assert RoutingSettings.from_env().sound_direction is True

    def test_preset_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NAVROUTE_PRESET", "Pedestrian")
        settings = RoutingSettings.from_env()
        assert settings.keep_pedestrian_info is True
        assert settings.matching_threshold_m == 20.0

    def test_overrides_win_over_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NAVROUTE_MATCHING_THRESHOLD_M", "35")
        monkeypatch.setenv("NAVROUTE_MATCH_ROUTE", "0")
        settings = RoutingSettings.from_env(matching_threshold_m=12.0, match_route=True)
        assert settings.matching_threshold_m == 12.0
        assert settings.match_route is True

    def test_unknown_preset_raises(self) -> None:
        with pytest.raises(NavRouteConfigError, match="preset"):
            RoutingSettings.from_env("boat")

    def test_bad_number_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NAVROUTE_ON_END_TOLERANCE_M", "ten")
        with pytest.raises(NavRouteConfigError, match="NAVROUTE_ON_END_TOLERANCE_M"):
            RoutingSettings.from_env()

    def test_env_value_is_validated(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NAVROUTE_MERGE_TOLERANCE_M", "-1")
        with pytest.raises(NavRouteConfigError):
            RoutingSettings.from_env()
