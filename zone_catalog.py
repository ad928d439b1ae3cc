from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Tuple

from config import (
    BATTER_ZONE,
    COOLING_RACK,
    CUTTING_BOARD,
    FRYER,
    SAUCE_AREA,
    SERVING_WINDOW,
    STICK_DROP,
    STICK_STATION,
    SUGAR_TRAY,
    ZONES_FILE,
)


@dataclass(frozen=True)
class ZoneDefinition:
    """Axis-aligned drop target.  ``snap`` overrides the rectangle centre."""

    key: str
    x: float
    y: float
    width: float
    height: float
    snap: Tuple[float, float] | None = None
    droppable: bool = True

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    @property
    def snap_position(self) -> Tuple[float, float]:
        return self.snap if self.snap is not None else self.center

    def contains(self, point: Tuple[float, float]) -> bool:
        px, py = point
        return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height

    def to_runtime_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "snap": list(self.snap) if self.snap is not None else None,
            "droppable": self.droppable,
        }


DEFAULT_ZONES: Dict[str, ZoneDefinition] = {
    STICK_STATION: ZoneDefinition(key=STICK_STATION, x=40, y=60, width=100, height=140),
    CUTTING_BOARD: ZoneDefinition(key=CUTTING_BOARD, x=180, y=80, width=220, height=120),
    STICK_DROP: ZoneDefinition(key=STICK_DROP, x=200, y=100, width=180, height=80),
    BATTER_ZONE: ZoneDefinition(key=BATTER_ZONE, x=440, y=60, width=140, height=160, snap=(510.0, 120.0)),
    FRYER: ZoneDefinition(key=FRYER, x=620, y=60, width=160, height=180, snap=(700.0, 140.0)),
    COOLING_RACK: ZoneDefinition(key=COOLING_RACK, x=620, y=280, width=200, height=100),
    SUGAR_TRAY: ZoneDefinition(key=SUGAR_TRAY, x=180, y=300, width=160, height=90),
    SAUCE_AREA: ZoneDefinition(key=SAUCE_AREA, x=380, y=300, width=200, height=90),
    SERVING_WINDOW: ZoneDefinition(key=SERVING_WINDOW, x=840, y=60, width=100, height=200),
}


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float)) and math.isfinite(value)


def _is_positive_number(value: Any) -> bool:
    return _is_finite_number(value) and value > 0


def _coerce_point(value: Any) -> Tuple[float, float] | None:
    if not isinstance(value, list) or len(value) != 2:
        return None
    if not all(_is_finite_number(v) for v in value):
        return None
    return (float(value[0]), float(value[1]))


def _parse_zone_entry(key: str, entry: Dict[str, Any]) -> ZoneDefinition | None:
    if not isinstance(key, str) or not key:
        return None

    x = entry.get("x")
    y = entry.get("y")
    width = entry.get("width")
    height = entry.get("height")
    raw_snap = entry.get("snap")
    droppable = entry.get("droppable", True)

    if not _is_finite_number(x) or not _is_finite_number(y):
        return None
    if not _is_positive_number(width) or not _is_positive_number(height):
        return None
    if not isinstance(droppable, bool):
        return None

    snap = None
    if raw_snap is not None:
        snap = _coerce_point(raw_snap)
        if snap is None:
            return None

    return ZoneDefinition(
        key=key,
        x=float(x),
        y=float(y),
        width=float(width),
        height=float(height),
        snap=snap,
        droppable=droppable,
    )


def _ordered_layout(zones: Iterable[ZoneDefinition]) -> Dict[str, ZoneDefinition]:
    ordered = sorted(zones, key=lambda zone: zone.key)
    return {zone.key: zone for zone in ordered}


def load_zone_layout(path: Path = ZONES_FILE) -> Dict[str, ZoneDefinition]:
    if not path.exists():
        return _ordered_layout(DEFAULT_ZONES.values())

    try:
        raw = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return _ordered_layout(DEFAULT_ZONES.values())

    if not isinstance(raw, dict):
        return _ordered_layout(DEFAULT_ZONES.values())

    zones: Dict[str, ZoneDefinition] = {}
    for key, entry in raw.items():
        if not isinstance(entry, dict):
            continue
        zone = _parse_zone_entry(key, entry)
        if zone is None:
            continue
        zones[key] = zone

    if not zones:
        return _ordered_layout(DEFAULT_ZONES.values())

    return _ordered_layout(zones.values())
