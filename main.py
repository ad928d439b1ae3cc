from __future__ import annotations
import argparse
import logging
import math
import random
import sys
from typing import Dict, List, Optional, Tuple

try:
    import pygame  # type: ignore
except Exception:
    pygame = None

from config import (
    BATTER_ZONE,
    CHEESE,
    COOLING_RACK,
    CUTTING_BOARD,
    FPS,
    FRYER,
    HOTDOG_ID,
    PANEL_H,
    SAUCE_AREA,
    SAUSAGE,
    SERVING_WINDOW,
    SHIFT_CUSTOMERS,
    SHIFT_GOAL_AMOUNT,
    STICK_DROP,
    STICK_STATION,
    SUGAR_TRAY,
    WINDOW_H,
    WINDOW_W,
)
from kitchen import CookingController, OrderSpec, Phase, SauceType, ShiftLedger
from kitchen.entities import CookingEvent, Point
from kitchen.scoring import frying_grade
from order_catalog import load_order_catalog, random_order

logger = logging.getLogger("hotdog_stand")

FILLING_BINS: Dict[str, Tuple[int, int, int, int]] = {
    SAUSAGE: (40, 240, 100, 50),
    CHEESE: (40, 300, 100, 50),
}
GRAB_RADIUS = 40.0


def _center(controller: CookingController, zone_id: str) -> Point:
    zone = controller.zones.get(zone_id)
    if zone is None:
        return (0.0, 0.0)
    return zone.center


def cook_scripted(
    controller: CookingController,
    order: Optional[OrderSpec],
    rng: random.Random,
    dt: float = 0.1,
) -> None:
    """Play one session the way a reasonably skilled cook would.

    Fillings and toppings follow the order; the frying time is drawn from
    ``rng`` so results vary between customers.
    """
    controller.start_session(order)

    station = _center(controller, STICK_STATION)
    controller.pick_up(station)
    controller.drag_move(HOTDOG_ID, _center(controller, CUTTING_BOARD))
    controller.drop_at(HOTDOG_ID, _center(controller, CUTTING_BOARD))

    fillings = [order.wanted_filling1, order.wanted_filling2] if order else [SAUSAGE, CHEESE]
    for filling in fillings:
        controller.drag_start(filling, station)
        controller.drop_at(filling, _center(controller, STICK_DROP))

    batter = _center(controller, BATTER_ZONE)
    controller.drag_start(HOTDOG_ID, controller.item_position)
    controller.drag_move(HOTDOG_ID, batter)
    dip_seconds = rng.uniform(1.0, 4.5)
    waited = 0.0
    while controller.phase == Phase.BATTER and waited < dip_seconds:
        controller.tick(dt)
        waited += dt
    if controller.phase == Phase.BATTER:
        controller.drop_at(HOTDOG_ID, batter)

    fryer = _center(controller, FRYER)
    controller.drag_start(HOTDOG_ID, controller.item_position)
    controller.drag_move(HOTDOG_ID, fryer)
    controller.drop_at(HOTDOG_ID, fryer)
    fry_seconds = rng.uniform(5.0, 11.5)
    fried = 0.0
    while fried < fry_seconds:
        controller.tick(dt)
        fried += dt
    controller.drag_start(HOTDOG_ID, fryer)
    controller.drop_at(HOTDOG_ID, _center(controller, COOLING_RACK))

    if order is None or order.wants_sugar:
        controller.drag_start(HOTDOG_ID, controller.item_position)
        controller.drop_at(HOTDOG_ID, _center(controller, SUGAR_TRAY))
    for sauce, wanted in ((SauceType.KETCHUP, order.wants_ketchup if order else False),
                          (SauceType.MUSTARD, order.wants_mustard if order else False)):
        if not wanted:
            continue
        controller.select_sauce(sauce)
        _draw_zigzag(controller, _center(controller, SAUCE_AREA))
    controller.finish_toppings()

    window = _center(controller, SERVING_WINDOW)
    controller.drag_start(HOTDOG_ID, controller.item_position)
    controller.drag_move(HOTDOG_ID, window)
    controller.drop_at(HOTDOG_ID, window)


def _draw_zigzag(controller: CookingController, center: Point, strokes: int = 6) -> None:
    cx, cy = center
    controller.draw_start((cx - 60.0, cy))
    for step in range(1, strokes + 1):
        controller.draw_move((cx - 60.0 + step * 20.0, cy + (12.0 if step % 2 else -12.0)))
    controller.draw_end()


def run_headless(customers: int, dt: float, seed: int) -> ShiftLedger:
    rng = random.Random(seed)
    catalog = load_order_catalog()
    controller = CookingController()
    ledger = ShiftLedger(goal_amount=SHIFT_GOAL_AMOUNT, total_customers=customers)
    ledger.attach(controller)

    for index in range(customers):
        order = random_order(catalog, rng)
        cook_scripted(controller, order, rng, dt)
        result = controller.last_result
        if result is None:
            logger.error("customer %d was not served (stuck in %s)", index + 1, controller.phase.value)
            controller.abandon_session()
            continue
        item = result.item
        print(
            f"customer={index + 1} order={order.key if order else 'walk_in'} score={result.score} "
            f"fillings[{item.filling1},{item.filling2}] batter={item.batter_stage} "
            f"fried[{item.frying_color.value},{frying_grade(item.frying_color)},{item.frying_elapsed_seconds:.1f}s] "
            f"toppings[sugar={item.has_sugar},ketchup={item.has_ketchup},mustard={item.has_mustard}]"
        )

    print(
        f"headless_done {ledger.summary()} "
        f"avg={ledger.average_earnings():.1f} best={ledger.best_earning()} "
        f"worst={ledger.worst_earning()} perfect={ledger.perfect_count()}"
    )
    return ledger


class GameUI:
    def __init__(
        self,
        controller: CookingController,
        catalog: Optional[Dict[str, OrderSpec]] = None,
        seed: Optional[int] = None,
    ):
        if pygame is None:
            raise RuntimeError("pygame is required for graphical mode. Relaunch with --headless.")
        pygame.init()
        pygame.display.init()
        if not pygame.display.get_init():
            raise RuntimeError("Display subsystem is unavailable. Relaunch with --headless.")
        try:
            self.screen = pygame.display.set_mode((WINDOW_W, WINDOW_H))
        except pygame.error as exc:
            raise RuntimeError(f"Could not open a window ({exc}). Relaunch with --headless.") from exc
        pygame.display.set_caption("Hotdog Stand")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("arial", 20)
        self.small = pygame.font.SysFont("arial", 15)
        self.running = True

        self.controller = controller
        self.catalog = catalog if catalog is not None else load_order_catalog()
        self.rng = random.Random(seed)
        self.ledger = ShiftLedger(goal_amount=SHIFT_GOAL_AMOUNT, total_customers=SHIFT_CUSTOMERS)
        self.ledger.attach(controller)
        self.dragging: Optional[str] = None
        self.drawing = False
        self.sauce_dots: List[Tuple[SauceType, Point]] = []
        self.controller.subscribe(self._on_event)

        self.palette = {
            "bg": (24, 20, 18),
            "panel": (36, 30, 26),
            "panel_border": (80, 64, 50),
            "zone": (64, 56, 48),
            "zone_border": (120, 104, 84),
            "text": (240, 232, 220),
            "muted": (176, 160, 140),
        }
        self.fry_colors = {
            "raw": (236, 226, 200),
            "yellow": (242, 208, 96),
            "golden": (222, 160, 48),
            "brown": (150, 92, 40),
            "burnt": (60, 40, 30),
        }
        self.sauce_colors = {
            SauceType.KETCHUP: (200, 40, 40),
            SauceType.MUSTARD: (230, 190, 40),
        }

    def _on_event(self, event: CookingEvent) -> None:
        if event.name == "sauce_dot_placed":
            self.sauce_dots.append((event.data["sauce"], event.data["position"]))
        elif event.name in ("session_started", "session_abandoned"):
            self.sauce_dots.clear()

    def next_customer(self) -> None:
        if self.ledger.is_complete:
            self.ledger.reset()
        self.controller.start_session(random_order(self.catalog, self.rng))

    def _near_hotdog(self, pos: Point) -> bool:
        position = self.controller.item_position
        if position is None:
            return False
        return math.hypot(pos[0] - position[0], pos[1] - position[1]) <= GRAB_RADIUS

    def _press(self, pos: Point) -> None:
        controller = self.controller
        phase = controller.phase
        if phase == Phase.STICK_PICKUP:
            if controller.zones.contains(STICK_STATION, pos) and controller.pick_up(pos):
                self.dragging = HOTDOG_ID
            return
        if phase == Phase.INGREDIENT:
            for filling, (x, y, w, h) in FILLING_BINS.items():
                if x <= pos[0] <= x + w and y <= pos[1] <= y + h and controller.drag_start(filling, pos):
                    self.dragging = filling
            return
        if phase == Phase.TOPPING and not self._near_hotdog(pos):
            self.drawing = controller.draw_start(pos)
            return
        if self._near_hotdog(pos) and controller.drag_start(HOTDOG_ID, pos):
            self.dragging = HOTDOG_ID

    def _release(self, pos: Point) -> None:
        if self.drawing:
            self.controller.draw_end()
            self.drawing = False
        if self.dragging is not None:
            self.controller.drop_at(self.dragging, pos)
            self.dragging = None

    def handle_input(self) -> None:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                self.running = False
            if ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_n:
                    self.next_customer()
                elif ev.key == pygame.K_ESCAPE:
                    self.controller.abandon_session()
                elif ev.key == pygame.K_k:
                    self.controller.select_sauce(SauceType.KETCHUP)
                elif ev.key == pygame.K_m:
                    self.controller.select_sauce(SauceType.MUSTARD)
                elif ev.key == pygame.K_RETURN:
                    self.controller.finish_toppings()
            if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
                self._press(ev.pos)
            if ev.type == pygame.MOUSEMOTION:
                if self.dragging is not None:
                    self.controller.drag_move(self.dragging, ev.pos)
                if self.drawing:
                    self.controller.draw_move(ev.pos)
            if ev.type == pygame.MOUSEBUTTONUP and ev.button == 1:
                self._release(ev.pos)

    def _draw_zones(self) -> None:
        for zone_id in self.controller.zones.zone_ids():
            zone = self.controller.zones.get(zone_id)
            rect = pygame.Rect(int(zone.x), int(zone.y), int(zone.width), int(zone.height))
            pygame.draw.rect(self.screen, self.palette["zone"], rect, border_radius=8)
            pygame.draw.rect(self.screen, self.palette["zone_border"], rect, width=1, border_radius=8)
            label = zone_id.replace("_", " ")
            self.screen.blit(self.small.render(label, True, self.palette["muted"]), (rect.x + 6, rect.y + 4))
        if self.controller.phase == Phase.INGREDIENT:
            for filling, (x, y, w, h) in FILLING_BINS.items():
                rect = pygame.Rect(x, y, w, h)
                pygame.draw.rect(self.screen, (110, 70, 50), rect, border_radius=8)
                self.screen.blit(self.small.render(filling, True, self.palette["text"]), (x + 8, y + 16))

    def _draw_hotdog(self) -> None:
        item = self.controller.item
        position = self.controller.item_position
        if item is None or position is None:
            return
        color = self.fry_colors.get(item.frying_color.value, (255, 255, 255))
        if self.controller.phase == Phase.FRYING:
            color = self.fry_colors.get(self.controller.active_handler.color.value, color)
        cx, cy = int(position[0]), int(position[1])
        pygame.draw.line(self.screen, (200, 180, 140), (cx, cy - 34), (cx, cy + 34), 3)
        body = pygame.Rect(0, 0, 22, 52 + item.batter_stage * 4)
        body.center = (cx, cy)
        pygame.draw.rect(self.screen, color, body, border_radius=11)

    def draw(self) -> None:
        self.screen.fill(self.palette["bg"])
        self._draw_zones()
        for sauce, (x, y) in self.sauce_dots:
            pygame.draw.circle(self.screen, self.sauce_colors[sauce], (int(x), int(y)), 4)
        self._draw_hotdog()

        panel_top = WINDOW_H - PANEL_H
        panel = pygame.Rect(0, panel_top, WINDOW_W, PANEL_H)
        pygame.draw.rect(self.screen, self.palette["panel"], panel)
        pygame.draw.line(self.screen, self.palette["panel_border"], panel.topleft, panel.topright, 2)

        order = self.controller.order
        order_text = order.describe() if order else "no order"
        status = f"Phase: {self.controller.phase.value} | {order_text} (N next customer, K/M sauce, Enter finish toppings)"
        self.screen.blit(self.small.render(status, True, self.palette["text"]), (10, panel_top + 8))
        self.screen.blit(self.font.render(self.ledger.summary(), True, (255, 236, 160)), (10, panel_top + 30))
        for row, line in enumerate(self.controller.event_log[-3:]):
            self.screen.blit(self.small.render(line, True, self.palette["muted"]), (10, panel_top + 58 + row * 18))

        pygame.display.flip()

    def run(self) -> None:
        while self.running:
            dt = self.clock.tick(FPS) / 1000.0
            self.handle_input()
            self.controller.tick(dt)
            self.draw()
        pygame.quit()


def main() -> None:
    parser = argparse.ArgumentParser(description="Hotdog stand cooking prototype")
    parser.add_argument("--headless", action="store_true", help="run scripted sessions without graphics")
    parser.add_argument("--customers", type=int, default=SHIFT_CUSTOMERS, help="headless customers to serve")
    parser.add_argument("--dt", type=float, default=0.1, help="headless timestep")
    parser.add_argument("--seed", type=int, default=7, help="order and timing seed")
    parser.add_argument("--log-level", default="WARNING", help="logging level (DEBUG, INFO, WARNING, ...)")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.headless:
        run_headless(args.customers, args.dt, args.seed)
        return

    try:
        ui = GameUI(CookingController(), seed=args.seed)
    except RuntimeError as exc:
        print(f"Startup error: {exc}", file=sys.stderr)
        raise SystemExit(1)
    ui.run()


if __name__ == "__main__":
    main()
