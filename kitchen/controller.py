"""CookingController: owns the current phase, the session item and the events.

The controller is the only object the input and presentation layers talk
to.  It routes pointer events and ticks to the active phase handler,
advances phases in a fixed order, and scores the served hotdog.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Dict, List, Optional

from config import EVENT_LOG_LIMIT
from kitchen.entities import (
    PHASE_ORDER,
    CookingEvent,
    ItemState,
    OrderSpec,
    Phase,
    Point,
    ServeResult,
)
from kitchen.phases import (
    BatterPhase,
    CompletionPhase,
    FryingPhase,
    IngredientPhase,
    PhaseHandler,
    StickPickupPhase,
)
from kitchen.scoring import score, score_breakdown, score_without_order
from kitchen.toppings import ToppingPhase
from kitchen.zones import ZoneRegistry

logger = logging.getLogger(__name__)

Listener = Callable[[CookingEvent], None]

HANDLER_TYPES = (
    StickPickupPhase,
    IngredientPhase,
    BatterPhase,
    FryingPhase,
    ToppingPhase,
    CompletionPhase,
)


class CookingController:
    def __init__(
        self,
        zones: Optional[ZoneRegistry] = None,
        handlers: Optional[Dict[Phase, PhaseHandler]] = None,
    ) -> None:
        self.zones = zones if zones is not None else ZoneRegistry.from_layout()
        self.phase = Phase.NONE
        self.item: Optional[ItemState] = None
        self.order: Optional[OrderSpec] = None
        self.item_position: Optional[Point] = None
        self.rest_position: Optional[Point] = None
        self.last_result: Optional[ServeResult] = None
        self.sessions_started = 0
        self.sessions_finished = 0
        self.time = 0.0
        self.event_log: List[str] = []
        self._listeners: List[Listener] = []
        self._missing_zones: set[str] = set()

        if handlers is None:
            handlers = {handler_type.phase: handler_type(self) for handler_type in HANDLER_TYPES}
        for phase in PHASE_ORDER:
            if phase not in handlers:
                raise ValueError(f"no handler registered for phase {phase.value}")
            if handlers[phase].phase != phase:
                raise ValueError(f"handler for {phase.value} reports phase {handlers[phase].phase.value}")
        self.handlers: Dict[Phase, PhaseHandler] = handlers

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, name: str, **data) -> CookingEvent:
        event = CookingEvent(name=name, data=data)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.warning("listener %r failed on %s: %s", listener, name, e)
        return event

    def log_event(self, message: str) -> None:
        self.event_log.append(message)
        self.event_log = self.event_log[-EVENT_LOG_LIMIT:]

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    @property
    def session_active(self) -> bool:
        return self.phase != Phase.NONE

    @property
    def active_handler(self) -> Optional[PhaseHandler]:
        if self.phase == Phase.NONE:
            return None
        return self.handlers[self.phase]

    def start_session(self, order: Optional[OrderSpec] = None) -> None:
        """Begin a fresh hotdog for ``order``.

        Calling this while a session is running discards the unfinished
        item and starts over; nothing is scored for the discarded one.
        """
        if self.session_active:
            discarded_phase = self.phase
            self._leave_phase()
            self.emit("session_discarded", phase=discarded_phase, item=self.item.copy())
            self.log_event(f"Hotdog discarded during {discarded_phase.value}")
            logger.info("session discarded in phase %s", discarded_phase.value)

        self.item = ItemState()
        self.order = order
        self.item_position = None
        self.rest_position = None
        self.sessions_started += 1
        self.emit("session_started", order=order)
        self.log_event(f"Order: {order.display_name or order.describe()}" if order else "Walk-in customer")
        self._enter_phase(PHASE_ORDER[0])

    def advance(self) -> bool:
        if self.phase == Phase.NONE:
            return False
        if self.phase == PHASE_ORDER[-1]:
            return self.finish_session() is not None
        next_phase = PHASE_ORDER[PHASE_ORDER.index(self.phase) + 1]
        self._leave_phase()
        self._enter_phase(next_phase)
        return True

    def complete_phase(self, phase: Phase) -> bool:
        """Advance if ``phase`` is the current one; stale requests are ignored."""
        if phase != self.phase:
            logger.debug("ignoring completion of %s while in %s", phase.value, self.phase.value)
            return False
        return self.advance()

    def finish_session(self) -> Optional[ServeResult]:
        """Score the served hotdog; only valid once the serving phase is reached."""
        if self.phase != PHASE_ORDER[-1] or self.item is None:
            logger.debug("finish_session ignored in phase %s", self.phase.value)
            return None

        self._leave_phase()
        item = self.item.copy()
        order = self.order
        if order is None:
            total = score_without_order(item)
            breakdown = None
        else:
            total = score(order, item)
            breakdown = score_breakdown(order, item)

        result = ServeResult(score=total, item=item, order=order, breakdown=breakdown)
        self.last_result = result
        self.sessions_finished += 1
        self._reset_session()
        self.emit("phase_changed", phase=Phase.NONE)
        self.emit("session_finished", result=result, score=total)
        self.log_event(f"Served for {total} won")
        logger.info("session finished score=%d", total)
        return result

    def abandon_session(self) -> bool:
        if not self.session_active:
            return False
        abandoned_phase = self.phase
        self._leave_phase()
        self._reset_session()
        self.emit("phase_changed", phase=Phase.NONE)
        self.emit("session_abandoned", phase=abandoned_phase)
        self.log_event("Hotdog abandoned")
        return True

    def _enter_phase(self, phase: Phase) -> None:
        self.phase = phase
        self.handlers[phase].enter()
        self.emit("phase_changed", phase=phase)
        logger.debug("entered phase %s", phase.value)

    def _leave_phase(self) -> None:
        handler = self.active_handler
        if handler is not None:
            handler.exit()

    def _reset_session(self) -> None:
        self.phase = Phase.NONE
        self.item = None
        self.order = None
        self.item_position = None
        self.rest_position = None

    # ------------------------------------------------------------------
    # Input routing
    # ------------------------------------------------------------------

    def tick(self, dt: float) -> None:
        if not math.isfinite(dt) or dt < 0:
            logger.debug("ignoring tick with dt=%r", dt)
            return
        self.time += dt
        handler = self.active_handler
        if handler is not None:
            handler.tick(dt)

    def pick_up(self, point: Point) -> bool:
        handler = self.active_handler
        return handler.pick_up(point) if handler is not None else False

    def drag_start(self, item_id: str, point: Optional[Point] = None) -> bool:
        handler = self.active_handler
        return handler.drag_start(item_id, point) if handler is not None else False

    def drag_move(self, item_id: str, point: Point) -> bool:
        handler = self.active_handler
        return handler.drag_move(item_id, point) if handler is not None else False

    def drag_end(self, item_id: str, zone_id: Optional[str]) -> bool:
        handler = self.active_handler
        return handler.drag_end(item_id, zone_id) if handler is not None else False

    def drop_at(self, item_id: str, point: Point) -> bool:
        """Resolve the drop zone under ``point`` and finish the drag there."""
        handler = self.active_handler
        if handler is None:
            return False
        zone_id = self.zones.zone_at(point, among=handler.drop_targets)
        return handler.drag_end(item_id, zone_id)

    def place_ingredient(self, filling: str, zone_id: Optional[str]) -> bool:
        """Grab ``filling`` and drop it on ``zone_id`` in one step."""
        if not self.drag_start(filling, None):
            return False
        return self.drag_end(filling, zone_id)

    def select_sauce(self, sauce: object) -> bool:
        handler = self.active_handler
        return handler.select_sauce(sauce) if handler is not None else False

    def draw_start(self, point: Point) -> bool:
        handler = self.active_handler
        return handler.draw_start(point) if handler is not None else False

    def draw_move(self, point: Point) -> bool:
        handler = self.active_handler
        return handler.draw_move(point) if handler is not None else False

    def draw_end(self) -> bool:
        handler = self.active_handler
        return handler.draw_end() if handler is not None else False

    def apply_sugar(self) -> bool:
        handler = self.active_handler
        return handler.apply_sugar() if handler is not None else False

    def finish_toppings(self) -> bool:
        handler = self.active_handler
        return handler.finish() if handler is not None else False

    # ------------------------------------------------------------------
    # Item placement helpers used by the handlers
    # ------------------------------------------------------------------

    def zone_contains(self, zone_id: str, point: Point) -> Optional[bool]:
        """Point-in-zone test; ``None`` when the zone is not configured."""
        if zone_id not in self.zones:
            self._note_missing_zone(zone_id)
            return None
        return self.zones.contains(zone_id, point)

    def move_item(self, point: Point) -> None:
        self.item_position = point

    def snap_item(self, zone_id: str) -> Optional[Point]:
        if zone_id in self.zones:
            position = self.zones.snap_position(zone_id)
        else:
            self._note_missing_zone(zone_id)
            position = self.item_position
        self.item_position = position
        self.rest_position = position
        self.emit("item_moved", zone=zone_id, position=position)
        return position

    def return_item(self) -> None:
        self.item_position = self.rest_position
        self.emit("item_returned", position=self.rest_position)

    def discard_item(self) -> None:
        self.item = ItemState()
        self.item_position = None
        self.rest_position = None
        self.emit("item_destroyed")
        self.log_event("Stick dropped and destroyed")

    def _note_missing_zone(self, zone_id: str) -> None:
        self.zones.get(zone_id)
        if zone_id not in self._missing_zones:
            self._missing_zones.add(zone_id)
            self.log_event(f"Zone {zone_id} missing")
