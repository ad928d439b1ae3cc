"""ZoneRegistry: point-in-zone queries and snap targets for drop validation.

The registry does not own any input handling; the cooking phases ask it
whether a reported pointer position lies inside a named zone and where an
item dropped on a zone should rest.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from kitchen.entities import Point
from zone_catalog import ZoneDefinition, load_zone_layout

logger = logging.getLogger(__name__)


class ZoneRegistry:
    def __init__(self, zones: Optional[Iterable[ZoneDefinition]] = None) -> None:
        self._zones: Dict[str, ZoneDefinition] = {}
        for zone in zones or ():
            self._zones[zone.key] = zone
        self._reported_missing: set[str] = set()

    @classmethod
    def from_layout(cls, layout: Optional[Dict[str, ZoneDefinition]] = None) -> "ZoneRegistry":
        if layout is None:
            layout = load_zone_layout()
        return cls(layout.values())

    def __contains__(self, zone_id: object) -> bool:
        return zone_id in self._zones

    def __len__(self) -> int:
        return len(self._zones)

    def zone_ids(self) -> List[str]:
        return list(self._zones)

    def get(self, zone_id: str) -> Optional[ZoneDefinition]:
        zone = self._zones.get(zone_id)
        if zone is None:
            self._report_missing(zone_id)
        return zone

    def add(self, zone: ZoneDefinition) -> None:
        self._zones[zone.key] = zone
        self._reported_missing.discard(zone.key)

    def remove(self, zone_id: str) -> None:
        self._zones.pop(zone_id, None)

    def contains(self, zone_id: str, point: Point) -> bool:
        """True when ``point`` lies inside ``zone_id``; False for unknown zones."""
        zone = self.get(zone_id)
        if zone is None:
            return False
        return zone.contains(point)

    def zone_at(self, point: Point, among: Optional[Iterable[str]] = None) -> Optional[str]:
        """Return the droppable zone containing ``point``.

        Overlapping zones resolve to the smallest one.  ``among`` restricts
        the search to the given zone ids (unknown ids are skipped).
        """
        if among is None:
            candidates = list(self._zones.values())
        else:
            candidates = [self._zones[key] for key in among if key in self._zones]
        hits = [zone for zone in candidates if zone.droppable and zone.contains(point)]
        if not hits:
            return None
        hits.sort(key=lambda zone: (zone.width * zone.height, zone.key))
        return hits[0].key

    def snap_position(self, zone_id: str) -> Optional[Point]:
        zone = self.get(zone_id)
        if zone is None:
            return None
        return zone.snap_position

    def _report_missing(self, zone_id: str) -> None:
        if zone_id in self._reported_missing:
            return
        self._reported_missing.add(zone_id)
        logger.warning("zone %r is not configured; dependent action skipped", zone_id)
