"""Topping phase: one-shot sugar coating and gauge-limited sauce drawing.

Sugar and sauce are mutually exclusive in one direction only: sugar must be
applied before any sauce is selected.  Once a sauce bottle is picked up the
sugar tray refuses the hotdog for the rest of the phase.
"""
from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Tuple

from config import (
    SAUCE_AREA,
    SAUCE_DECREASE_RATE,
    SAUCE_DOT_SPACING,
    SAUCE_MAX_AMOUNT,
    SUGAR_TRAY,
)
from kitchen.entities import Phase, Point, SauceType
from kitchen.phases import PhaseHandler

logger = logging.getLogger(__name__)


def _coerce_sauce(value: object) -> Optional[SauceType]:
    if isinstance(value, SauceType):
        return value
    try:
        return SauceType(value)
    except ValueError:
        return None


def _distance(a: Point, b: Point) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


class ToppingPhase(PhaseHandler):
    phase = Phase.TOPPING
    drop_targets = (SUGAR_TRAY,)

    def enter(self) -> None:
        super().enter()
        self.has_sugar = False
        self.sugar_locked = False
        self.used: Dict[SauceType, bool] = {sauce: False for sauce in SauceType}
        self.gauges: Dict[SauceType, float] = {sauce: SAUCE_MAX_AMOUNT for sauce in SauceType}
        self.selected: Optional[SauceType] = None
        self.drawing = False
        self.last_dot: Optional[Point] = None
        self.dots: List[Tuple[SauceType, Point]] = []

    # ------------------------------------------------------------------
    # Sugar
    # ------------------------------------------------------------------

    def apply_sugar(self) -> bool:
        if self.done:
            return False
        if self.sugar_locked:
            self.controller.emit("sugar_denied", reason="sauce_selected")
            self.controller.log_event("Sugar refused: sauce already on")
            return False
        if self.has_sugar:
            return False
        self.has_sugar = True
        self.controller.emit("sugar_applied")
        return True

    def drag_start(self, item_id: str, point: Optional[Point]) -> bool:
        return self._begin_drag(item_id, point)

    def drag_move(self, item_id: str, point: Point) -> bool:
        return self.dragging and self._move_hotdog(item_id, point)

    def drag_end(self, item_id: str, zone_id: Optional[str]) -> bool:
        if not self._end_drag(item_id):
            return False
        accepted = zone_id == SUGAR_TRAY and self.apply_sugar()
        self.controller.return_item()
        return accepted

    # ------------------------------------------------------------------
    # Sauces
    # ------------------------------------------------------------------

    def select_sauce(self, sauce: object) -> bool:
        if self.done:
            return False
        chosen = _coerce_sauce(sauce)
        if chosen is None:
            logger.debug("ignoring unknown sauce %r", sauce)
            return False
        self._end_stroke()
        self.sugar_locked = True
        self.selected = chosen
        self.controller.emit("sauce_selected", sauce=chosen, remaining=self.gauges[chosen])
        return True

    def draw_start(self, point: Point) -> bool:
        if self.done or self.selected is None:
            return False
        if self.gauges[self.selected] <= 0.0:
            return False
        self.drawing = True
        self.last_dot = None
        self.draw_move(point)
        return True

    def draw_move(self, point: Point) -> bool:
        if self.done or not self.drawing or self.selected is None:
            return False
        sauce = self.selected
        if self.gauges[sauce] <= 0.0:
            return False

        # None means no sauce area is configured: the whole counter is drawable.
        if self.controller.zone_contains(SAUCE_AREA, point) is False:
            self.last_dot = None
            return False
        if self.last_dot is not None and _distance(self.last_dot, point) < SAUCE_DOT_SPACING:
            return False
        self._place_dot(sauce, point)
        return True

    def draw_end(self) -> bool:
        if not self.drawing:
            return False
        self._end_stroke()
        return True

    def _end_stroke(self) -> None:
        self.drawing = False
        self.last_dot = None

    def _place_dot(self, sauce: SauceType, point: Point) -> None:
        # Rounded so that twenty dots of 0.05 land exactly on zero.
        remaining = max(0.0, round(self.gauges[sauce] - SAUCE_DECREASE_RATE, 9))
        self.gauges[sauce] = remaining
        self.used[sauce] = True
        self.dots.append((sauce, point))
        self.last_dot = point
        self.controller.emit("sauce_dot_placed", sauce=sauce, position=point, remaining=remaining)
        if remaining <= 0.0:
            self._end_stroke()
            self.controller.emit("sauce_exhausted", sauce=sauce)
            self.controller.log_event(f"{sauce.value.capitalize()} bottle is empty")

    # ------------------------------------------------------------------
    # Exit
    # ------------------------------------------------------------------

    def finish(self) -> bool:
        if self.done:
            return False
        self._end_stroke()
        item = self.controller.item
        item.has_sugar = self.has_sugar
        item.has_ketchup = self.used[SauceType.KETCHUP]
        item.has_mustard = self.used[SauceType.MUSTARD]
        item.ketchup_amount = self.gauges[SauceType.KETCHUP]
        item.mustard_amount = self.gauges[SauceType.MUSTARD]
        self.controller.emit("toppings_finished", item=item.copy())
        self.complete()
        return True
