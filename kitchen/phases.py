"""Phase handlers for the hotdog pipeline.

Each handler is a small state machine fed by the controller with pointer
events (``drag_start``/``drag_move``/``drag_end``), discrete triggers and
``tick(dt)``.  Handlers never schedule anything themselves; they mutate the
session item through the controller and call :meth:`PhaseHandler.complete`
as their very last step once the exit condition holds.

Every input method returns ``True`` when the action was accepted (for drops:
when the item landed on a valid target) and ``False`` otherwise.
"""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Optional, Tuple

from config import (
    BATTER_FIRST_STAGE_DELAY,
    BATTER_MAX_STAGE,
    BATTER_TIME_PER_STAGE,
    BATTER_ZONE,
    COOLING_RACK,
    CUTTING_BOARD,
    FILLING_SLOTS,
    FILLINGS,
    FRYER,
    FRYING_BROWN_UNTIL,
    FRYING_GOLDEN_UNTIL,
    FRYING_RAW_UNTIL,
    FRYING_YELLOW_UNTIL,
    HOTDOG_ID,
    SERVING_WINDOW,
    STICK_DROP,
)
from kitchen.entities import FryingColor, Phase, Point

if TYPE_CHECKING:
    from kitchen.controller import CookingController

logger = logging.getLogger(__name__)


def batter_stage(
    dwell_seconds: float,
    first_stage_delay: float = BATTER_FIRST_STAGE_DELAY,
    time_per_stage: float = BATTER_TIME_PER_STAGE,
    max_stage: int = BATTER_MAX_STAGE,
) -> int:
    if dwell_seconds < first_stage_delay:
        return 0
    return min(int(math.floor((dwell_seconds - first_stage_delay) / time_per_stage)) + 1, max_stage)


def frying_color(elapsed_seconds: float) -> FryingColor:
    if elapsed_seconds < FRYING_RAW_UNTIL:
        return FryingColor.RAW
    if elapsed_seconds < FRYING_YELLOW_UNTIL:
        return FryingColor.YELLOW
    if elapsed_seconds < FRYING_GOLDEN_UNTIL:
        return FryingColor.GOLDEN
    if elapsed_seconds < FRYING_BROWN_UNTIL:
        return FryingColor.BROWN
    return FryingColor.BURNT


class PhaseHandler:
    """Base handler: rejects every action it does not override."""

    phase: Phase = Phase.NONE
    drop_targets: Tuple[str, ...] = ()

    def __init__(self, controller: "CookingController") -> None:
        self.controller = controller
        self.done = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def enter(self) -> None:
        self.done = False
        self.dragging = False

    def exit(self) -> None:
        return None

    def complete(self) -> None:
        if self.done:
            return
        self.done = True
        self.controller.complete_phase(self.phase)

    # ------------------------------------------------------------------
    # Inputs (overridden per phase)
    # ------------------------------------------------------------------

    def tick(self, dt: float) -> None:
        return None

    def pick_up(self, point: Point) -> bool:
        return False

    def drag_start(self, item_id: str, point: Optional[Point]) -> bool:
        return False

    def drag_move(self, item_id: str, point: Point) -> bool:
        return False

    def drag_end(self, item_id: str, zone_id: Optional[str]) -> bool:
        return False

    def select_sauce(self, sauce: object) -> bool:
        return False

    def draw_start(self, point: Point) -> bool:
        return False

    def draw_move(self, point: Point) -> bool:
        return False

    def draw_end(self) -> bool:
        return False

    def apply_sugar(self) -> bool:
        return False

    def finish(self) -> bool:
        return False

    # ------------------------------------------------------------------
    # Shared hotdog dragging
    # ------------------------------------------------------------------

    def _is_hotdog(self, item_id: str) -> bool:
        return item_id == HOTDOG_ID and self.controller.item is not None

    def _move_hotdog(self, item_id: str, point: Point) -> bool:
        if self.done or not self._is_hotdog(item_id):
            return False
        self.controller.move_item(point)
        return True

    def _begin_drag(self, item_id: str, point: Optional[Point]) -> bool:
        if self.done or self.dragging or not self._is_hotdog(item_id):
            return False
        self.dragging = True
        if point is not None:
            self.controller.move_item(point)
        return True

    def _end_drag(self, item_id: str) -> bool:
        """Close the drag in flight; a drop without one is ignored."""
        if self.done or not self.dragging or not self._is_hotdog(item_id):
            return False
        self.dragging = False
        return True


class StickPickupPhase(PhaseHandler):
    """Pull a stick from the station and lay it on the cutting board."""

    phase = Phase.STICK_PICKUP
    drop_targets = (CUTTING_BOARD,)

    def pick_up(self, point: Point) -> bool:
        if self.done or self.dragging:
            return False
        self.dragging = True
        self.controller.move_item(point)
        self.controller.emit("stick_picked_up", position=point)
        return True

    def drag_move(self, item_id: str, point: Point) -> bool:
        return self.dragging and self._move_hotdog(item_id, point)

    def drag_end(self, item_id: str, zone_id: Optional[str]) -> bool:
        if not self._end_drag(item_id):
            return False
        if zone_id != CUTTING_BOARD:
            self.controller.discard_item()
            return False
        self.controller.snap_item(CUTTING_BOARD)
        self.controller.log_event("Stick placed on cutting board")
        self.complete()
        return True


class IngredientPhase(PhaseHandler):
    """Thread two half-fillings onto the stick, in arrival order."""

    phase = Phase.INGREDIENT
    drop_targets = (STICK_DROP,)

    def enter(self) -> None:
        super().enter()
        self.assigned = 0
        self.in_flight: Optional[str] = None
        self.piece_position: Optional[Point] = None

    def drag_start(self, item_id: str, point: Optional[Point]) -> bool:
        if self.done or self.assigned >= FILLING_SLOTS:
            return False
        if self.in_flight is not None:
            return False
        if item_id not in FILLINGS:
            logger.debug("ignoring unknown filling %r", item_id)
            return False
        self.in_flight = item_id
        self.piece_position = point
        self.controller.emit("ingredient_grabbed", filling=item_id, position=point)
        return True

    def drag_move(self, item_id: str, point: Point) -> bool:
        if item_id != self.in_flight:
            return False
        self.piece_position = point
        return True

    def drag_end(self, item_id: str, zone_id: Optional[str]) -> bool:
        if self.done or item_id != self.in_flight:
            return False
        self.in_flight = None
        self.piece_position = None

        if zone_id != STICK_DROP:
            self.controller.emit("ingredient_discarded", filling=item_id)
            return False

        item = self.controller.item
        self.assigned += 1
        if self.assigned == 1:
            item.filling1 = item_id
        else:
            item.filling2 = item_id
        self.controller.emit("ingredient_attached", filling=item_id, slot=self.assigned)

        if self.assigned >= FILLING_SLOTS:
            self.controller.log_event(f"Fillings: {item.filling1} + {item.filling2}")
            self.complete()
        return True


class BatterPhase(PhaseHandler):
    """Dip the hotdog in batter; time spent inside the zone sets the stage."""

    phase = Phase.BATTER
    drop_targets = (BATTER_ZONE,)

    def enter(self) -> None:
        super().enter()
        self.dwell_seconds = 0.0
        self.stage = 0
        self.in_zone = False

    def _inside(self, point: Optional[Point]) -> bool:
        if point is None:
            return False
        # A missing batter zone makes dipping a no-op.
        return bool(self.controller.zone_contains(BATTER_ZONE, point))

    def drag_start(self, item_id: str, point: Optional[Point]) -> bool:
        if self.done or self.dragging or not self._is_hotdog(item_id):
            return False
        self.dragging = True
        self.dwell_seconds = 0.0
        if point is not None:
            self.controller.move_item(point)
        self.in_zone = self._inside(point)
        return True

    def drag_move(self, item_id: str, point: Point) -> bool:
        if not self.dragging or not self._move_hotdog(item_id, point):
            return False
        was_inside = self.in_zone
        self.in_zone = self._inside(point)
        if was_inside and not self.in_zone:
            self.dwell_seconds = 0.0
            self.controller.emit("batter_zone_exited")
        elif self.in_zone and not was_inside:
            self.controller.emit("batter_zone_entered")
        return True

    def tick(self, dt: float) -> None:
        if self.done or not self.dragging or not self.in_zone:
            return
        self.dwell_seconds += dt
        new_stage = max(self.stage, batter_stage(self.dwell_seconds))
        if new_stage != self.stage:
            self.stage = new_stage
            self.controller.emit("batter_stage_changed", stage=self.stage)
        if self.stage >= BATTER_MAX_STAGE:
            self._finish_batter()

    def drag_end(self, item_id: str, zone_id: Optional[str]) -> bool:
        if self.done or not self.dragging or not self._is_hotdog(item_id):
            return False
        self.dragging = False
        self.in_zone = False
        self.dwell_seconds = 0.0
        if self.stage < 1:
            self.controller.return_item()
            return False
        self._finish_batter()
        return True

    def _finish_batter(self) -> None:
        self.dragging = False
        self.controller.item.batter_stage = self.stage
        self.controller.snap_item(BATTER_ZONE)
        self.controller.log_event(f"Battered to stage {self.stage}")
        self.complete()


class FryingPhase(PhaseHandler):
    """Fry in oil; elapsed time decides the colour, the cooling rack ends it."""

    phase = Phase.FRYING
    drop_targets = (FRYER, COOLING_RACK)

    def enter(self) -> None:
        super().enter()
        self.elapsed = self.controller.item.frying_elapsed_seconds
        self.color = frying_color(self.elapsed)
        self.frying = False
        self.started = False

    def exit(self) -> None:
        self.frying = False

    def drag_start(self, item_id: str, point: Optional[Point]) -> bool:
        if not self._begin_drag(item_id, point):
            return False
        if self.frying:
            self.frying = False
            self.controller.emit("frying_paused", elapsed=self.elapsed)
        return True

    def drag_move(self, item_id: str, point: Point) -> bool:
        return self.dragging and self._move_hotdog(item_id, point)

    def drag_end(self, item_id: str, zone_id: Optional[str]) -> bool:
        if not self._end_drag(item_id):
            return False
        if zone_id == FRYER:
            self._start_frying()
            return True
        if zone_id == COOLING_RACK:
            self.frying = False
            self.controller.snap_item(COOLING_RACK)
            item = self.controller.item
            item.frying_color = self.color
            item.frying_elapsed_seconds = self.elapsed
            self.controller.log_event(f"Fried {self.color.value} ({self.elapsed:.1f}s)")
            self.complete()
            return True

        if self.started:
            self._start_frying()
        else:
            self.controller.return_item()
        return False

    def tick(self, dt: float) -> None:
        if self.done or not self.frying:
            return
        self.elapsed += dt
        new_color = frying_color(self.elapsed)
        if new_color != self.color:
            self.color = new_color
            self.controller.emit("frying_color_changed", color=new_color, elapsed=self.elapsed)

    def _start_frying(self) -> None:
        self.controller.snap_item(FRYER)
        self.started = True
        if not self.frying:
            self.frying = True
            self.controller.emit("frying_started", elapsed=self.elapsed)


class CompletionPhase(PhaseHandler):
    """Hand the finished hotdog through the serving window."""

    phase = Phase.COMPLETED
    drop_targets = (SERVING_WINDOW,)

    def drag_start(self, item_id: str, point: Optional[Point]) -> bool:
        return self._begin_drag(item_id, point)

    def drag_move(self, item_id: str, point: Point) -> bool:
        return self.dragging and self._move_hotdog(item_id, point)

    def drag_end(self, item_id: str, zone_id: Optional[str]) -> bool:
        if not self._end_drag(item_id):
            return False
        if zone_id != SERVING_WINDOW:
            self.controller.return_item()
            return False
        self.complete()
        return True
