#!/usr/bin/env python3
"""Replay a recorded GPS track over a route file.

Each fix is matched onto the route and the navigation state after it is
printed: cursor vertex, distance and time to the end, the upcoming turn
and the current street.

Usage
-----
    python scripts/replay_track.py route.json track.json
    python scripts/replay_track.py route.json track.json --append leg2.json --preset pedestrian
    python scripts/replay_track.py route.json track.json --json -o replay.json

Route file format (JSON)::

    {
      "router": "vehicle",
      "name": "Home",
      "polyline": "_p~iF~ps|U_ulLnnqC",      # or "points": [[lat, lon], ...]
      "turns": [{"index": 3, "turn": 5}, {"index": 9, "turn": 15}],
      "times": [{"index": 9, "timeS": 120.0}],
      "streets": [{"index": 0, "name": "Main St"}],
      "altitudes": [...],                       # optional, one per vertex
      "traffic": [...]                          # optional, one per edge
    }

The track file is a JSON list of fixes; keys such as ``lat``/``lon``,
``time``, ``speed``, ``heading`` and ``accuracy`` are accepted.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import polyline

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pynavroute import (  # noqa: E402
    GpsInfo,
    NavRouteError,
    Route,
    RouteMatchingInfo,
    RoutingSettings,
    StreetItem,
    TimeItem,
    TurnItem,
)

_logger = logging.getLogger("replay_track")


def _load_json(path: str) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _load_route(path: str, settings: RoutingSettings) -> Route:
    data = _load_json(path)
    if "polyline" in data:
        latlons = polyline.decode(data["polyline"])
    else:
        latlons = [tuple(p) for p in data.get("points", [])]

    route = Route.from_lat_lon(data.get("router", "vehicle"), latlons, data.get("name", ""), settings=settings)
    route.set_turn_instructions(TurnItem.model_validate(t) for t in data.get("turns", []))
    route.set_section_times(TimeItem.model_validate(t) for t in data.get("times", []))
    route.set_street_names(StreetItem.model_validate(s) for s in data.get("streets", []))
    route.set_altitudes(data.get("altitudes", []))
    route.set_traffic(data.get("traffic", []))
    _logger.debug("Loaded %s from %s", route, path)
    return route


def _state(route: Route, fix: GpsInfo, matched: bool, info: RouteMatchingInfo) -> dict[str, Any]:
    turn = route.get_current_turn()
    return {
        "timestamp": fix.timestamp,
        "matched": matched,
        "snapped": info.is_matched,
        "vertex": route.poly.current.index,
        "distance_to_end_m": round(route.get_current_distance_to_end_meters(), 1),
        "time_to_end_s": round(route.get_current_time_to_end_sec(), 1),
        "turn": turn.turn_item.turn.name if turn is not None else None,
        "turn_distance_m": round(turn.dist_meters, 1) if turn is not None else None,
        "street": route.get_current_street_name(),
        "on_end": route.is_current_on_end(),
    }


def _format_state(state: dict[str, Any]) -> str:
    mark = "*" if state["snapped"] else ("+" if state["matched"] else "-")
    turn = f"{state['turn']} in {state['turn_distance_m']} m" if state["turn"] else "no turn"
    return (
        f"{mark} t={state['timestamp']:.0f} v={state['vertex']:<4} "
        f"left={state['distance_to_end_m']} m / {state['time_to_end_s']} s  "
        f"{turn}  street={state['street']!r}" + ("  [END]" if state["on_end"] else "")
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Replay a GPS track over a route file.")
    parser.add_argument("route", help="Route JSON file")
    parser.add_argument("track", help="Track JSON file (list of fixes)")
    parser.add_argument("--append", action="append", default=[], metavar="FILE", help="Append a leg (repeatable)")
    parser.add_argument("--preset", default="car", help="Routing preset: car, pedestrian or bicycle")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        settings = RoutingSettings.from_env(args.preset)
        route = _load_route(args.route, settings)
        for leg_path in args.append:
            route.append_route(_load_route(leg_path, settings))
        fixes = [GpsInfo.model_validate(item) for item in _load_json(args.track)]
    except NavRouteError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)

    states: list[dict[str, Any]] = []
    for fix in fixes:
        info = RouteMatchingInfo()
        matched = route.move_iterator(fix)
        route.match_location_to_route(fix, info)
        states.append(_state(route, fix, matched, info))

    if args.json_mode:
        payload = json.dumps(
            {"route": route.debug_print(), "total_distance_m": route.get_total_distance_meters(), "fixes": states},
            indent=2,
        )
    else:
        lines = [route.debug_print()]
        lines.extend(_format_state(s) for s in states)
        payload = "\n".join(lines)

    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(f"Output written to {args.output}", file=sys.stderr)
    else:
        print(payload)


if __name__ == "__main__":
    main()
