"""Tests for the pure timing curves and the per-phase handlers."""
from __future__ import annotations

import unittest

from config import (
    BATTER_ZONE,
    CHEESE,
    COOLING_RACK,
    CUTTING_BOARD,
    FRYER,
    HOTDOG_ID,
    SAUSAGE,
    SERVING_WINDOW,
    STICK_DROP,
)
from kitchen.controller import CookingController
from kitchen.entities import FryingColor, Phase
from kitchen.phases import batter_stage, frying_color
from kitchen.zones import ZoneRegistry
from zone_catalog import DEFAULT_ZONES

INSIDE_BATTER = (500.0, 140.0)
OUTSIDE = (20.0, 600.0)


def _controller(zones=None) -> CookingController:
    return CookingController(zones=ZoneRegistry(zones if zones is not None else DEFAULT_ZONES.values()))


def _drop(controller: CookingController, zone_id) -> bool:
    controller.drag_start(HOTDOG_ID, controller.item_position)
    return controller.drag_end(HOTDOG_ID, zone_id)


def _to_phase(controller: CookingController, phase: Phase) -> None:
    controller.start_session(None)
    if phase == Phase.STICK_PICKUP:
        return
    controller.pick_up((90.0, 130.0))
    controller.drag_end(HOTDOG_ID, CUTTING_BOARD)
    if phase == Phase.INGREDIENT:
        return
    controller.place_ingredient(SAUSAGE, STICK_DROP)
    controller.place_ingredient(CHEESE, STICK_DROP)
    if phase == Phase.BATTER:
        return
    controller.drag_start(HOTDOG_ID, INSIDE_BATTER)
    controller.tick(1.0)
    controller.drag_end(HOTDOG_ID, BATTER_ZONE)
    if phase == Phase.FRYING:
        return
    _drop(controller, FRYER)
    controller.tick(8.0)
    _drop(controller, COOLING_RACK)
    if phase == Phase.TOPPING:
        return
    controller.finish_toppings()


class TestBatterStageCurve(unittest.TestCase):
    def test_stage_boundaries(self):
        self.assertEqual(batter_stage(0.0), 0)
        self.assertEqual(batter_stage(0.69), 0)
        self.assertEqual(batter_stage(0.7), 1)
        self.assertEqual(batter_stage(2.19), 1)
        self.assertEqual(batter_stage(2.2), 2)
        self.assertEqual(batter_stage(3.7), 3)

    def test_stage_is_capped(self):
        for dwell in (4.0, 10.0, 1000.0):
            self.assertEqual(batter_stage(dwell), 3)

    def test_negative_dwell_is_stage_zero(self):
        self.assertEqual(batter_stage(-1.0), 0)


class TestFryingColorCurve(unittest.TestCase):
    def test_boundaries(self):
        cases = [
            (0.0, FryingColor.RAW),
            (2.999, FryingColor.RAW),
            (3.0, FryingColor.YELLOW),
            (6.999, FryingColor.YELLOW),
            (7.0, FryingColor.GOLDEN),
            (8.999, FryingColor.GOLDEN),
            (9.0, FryingColor.BROWN),
            (10.999, FryingColor.BROWN),
            (11.0, FryingColor.BURNT),
            (60.0, FryingColor.BURNT),
        ]
        for elapsed, expected in cases:
            with self.subTest(elapsed=elapsed):
                self.assertEqual(frying_color(elapsed), expected)

    def test_colour_never_reverses(self):
        order = list(FryingColor)
        previous = 0
        for step in range(0, 130):
            index = order.index(frying_color(step / 10.0))
            self.assertGreaterEqual(index, previous)
            previous = index


class TestStickPickupPhase(unittest.TestCase):
    def test_drop_on_cutting_board_completes(self):
        controller = _controller()
        controller.start_session(None)
        self.assertTrue(controller.pick_up((90.0, 130.0)))
        self.assertTrue(controller.drag_end(HOTDOG_ID, CUTTING_BOARD))
        self.assertEqual(controller.phase, Phase.INGREDIENT)
        self.assertEqual(controller.item_position, DEFAULT_ZONES[CUTTING_BOARD].center)

    def test_second_pick_up_is_rejected(self):
        controller = _controller()
        controller.start_session(None)
        self.assertTrue(controller.pick_up((90.0, 130.0)))
        self.assertFalse(controller.pick_up((90.0, 130.0)))

    def test_invalid_drop_destroys_stick_and_waits(self):
        controller = _controller()
        events = []
        controller.subscribe(lambda event: events.append(event.name))
        controller.start_session(None)
        controller.pick_up((90.0, 130.0))

        self.assertFalse(controller.drag_end(HOTDOG_ID, FRYER))

        self.assertIn("item_destroyed", events)
        self.assertEqual(controller.phase, Phase.STICK_PICKUP)
        self.assertIsNone(controller.item_position)
        self.assertTrue(controller.pick_up((90.0, 130.0)))

    def test_drop_without_pick_up_is_rejected(self):
        controller = _controller()
        controller.start_session(None)
        self.assertFalse(controller.drag_end(HOTDOG_ID, CUTTING_BOARD))
        self.assertEqual(controller.phase, Phase.STICK_PICKUP)


class TestIngredientPhase(unittest.TestCase):
    def test_fillings_assigned_in_arrival_order(self):
        controller = _controller()
        _to_phase(controller, Phase.INGREDIENT)

        self.assertTrue(controller.place_ingredient(CHEESE, STICK_DROP))
        self.assertEqual(controller.item.filling1, CHEESE)
        self.assertEqual(controller.phase, Phase.INGREDIENT)

        self.assertTrue(controller.place_ingredient(SAUSAGE, STICK_DROP))
        self.assertEqual(controller.phase, Phase.BATTER)
        self.assertEqual(controller.item.filling1, CHEESE)
        self.assertEqual(controller.item.filling2, SAUSAGE)

    def test_miss_discards_only_that_piece(self):
        controller = _controller()
        events = []
        controller.subscribe(lambda event: events.append(event.name))
        _to_phase(controller, Phase.INGREDIENT)

        self.assertFalse(controller.place_ingredient(SAUSAGE, None))
        self.assertIn("ingredient_discarded", events)
        self.assertEqual(controller.item.filling1, "")

        self.assertTrue(controller.place_ingredient(CHEESE, STICK_DROP))
        self.assertEqual(controller.item.filling1, CHEESE)

    def test_one_piece_in_flight_at_a_time(self):
        controller = _controller()
        _to_phase(controller, Phase.INGREDIENT)
        self.assertTrue(controller.drag_start(SAUSAGE, (10.0, 10.0)))
        self.assertFalse(controller.drag_start(CHEESE, (10.0, 10.0)))
        self.assertFalse(controller.drag_end(CHEESE, STICK_DROP))
        self.assertTrue(controller.drag_end(SAUSAGE, STICK_DROP))

    def test_unknown_filling_rejected(self):
        controller = _controller()
        _to_phase(controller, Phase.INGREDIENT)
        self.assertFalse(controller.drag_start("pickle", (10.0, 10.0)))


class TestBatterPhase(unittest.TestCase):
    def test_stage_rises_with_dwell_and_completes_on_drop(self):
        controller = _controller()
        stages = []
        controller.subscribe(
            lambda event: stages.append(event.data["stage"]) if event.name == "batter_stage_changed" else None
        )
        _to_phase(controller, Phase.BATTER)

        controller.drag_start(HOTDOG_ID, INSIDE_BATTER)
        controller.tick(1.0)
        self.assertEqual(stages, [1])
        controller.tick(1.5)
        self.assertEqual(stages, [1, 2])

        self.assertTrue(controller.drag_end(HOTDOG_ID, BATTER_ZONE))
        self.assertEqual(controller.phase, Phase.FRYING)
        self.assertEqual(controller.item.batter_stage, 2)
        self.assertEqual(controller.item_position, DEFAULT_ZONES[BATTER_ZONE].snap_position)

    def test_reaching_max_stage_completes_without_drop(self):
        controller = _controller()
        _to_phase(controller, Phase.BATTER)
        controller.drag_start(HOTDOG_ID, INSIDE_BATTER)
        controller.tick(4.0)
        self.assertEqual(controller.phase, Phase.FRYING)
        self.assertEqual(controller.item.batter_stage, 3)

    def test_leaving_zone_early_resets_and_records_nothing(self):
        controller = _controller()
        _to_phase(controller, Phase.BATTER)
        rest = controller.item_position

        controller.drag_start(HOTDOG_ID, INSIDE_BATTER)
        controller.tick(0.5)
        controller.drag_move(HOTDOG_ID, OUTSIDE)
        controller.drag_move(HOTDOG_ID, INSIDE_BATTER)
        controller.tick(0.5)

        self.assertFalse(controller.drag_end(HOTDOG_ID, BATTER_ZONE))
        self.assertEqual(controller.phase, Phase.BATTER)
        self.assertEqual(controller.item.batter_stage, 0)
        self.assertEqual(controller.item_position, rest)

    def test_stage_never_drops_after_leaving_zone(self):
        controller = _controller()
        _to_phase(controller, Phase.BATTER)
        controller.drag_start(HOTDOG_ID, INSIDE_BATTER)
        controller.tick(2.5)
        controller.drag_move(HOTDOG_ID, OUTSIDE)
        controller.tick(5.0)
        self.assertTrue(controller.drag_end(HOTDOG_ID, None))
        self.assertEqual(controller.item.batter_stage, 2)

    def test_no_dwell_outside_the_zone(self):
        controller = _controller()
        _to_phase(controller, Phase.BATTER)
        controller.drag_start(HOTDOG_ID, OUTSIDE)
        controller.tick(5.0)
        self.assertFalse(controller.drag_end(HOTDOG_ID, None))
        self.assertEqual(controller.phase, Phase.BATTER)

    def test_missing_batter_zone_makes_dipping_a_no_op(self):
        zones = [zone for key, zone in DEFAULT_ZONES.items() if key != BATTER_ZONE]
        controller = _controller(zones)
        _to_phase(controller, Phase.BATTER)
        controller.drag_start(HOTDOG_ID, INSIDE_BATTER)
        with self.assertLogs("kitchen.zones", level="WARNING"):
            controller.tick(5.0)
            controller.drag_move(HOTDOG_ID, INSIDE_BATTER)
        self.assertEqual(controller.phase, Phase.BATTER)
        self.assertIn("Zone batter_zone missing", controller.event_log)


class TestFryingPhase(unittest.TestCase):
    def test_fry_to_golden_and_cool(self):
        controller = _controller()
        _to_phase(controller, Phase.FRYING)
        self.assertTrue(_drop(controller, FRYER))
        controller.tick(8.0)
        self.assertTrue(_drop(controller, COOLING_RACK))

        self.assertEqual(controller.phase, Phase.TOPPING)
        self.assertEqual(controller.item.frying_color, FryingColor.GOLDEN)
        self.assertAlmostEqual(controller.item.frying_elapsed_seconds, 8.0)

    def test_lifting_pauses_the_timer(self):
        controller = _controller()
        _to_phase(controller, Phase.FRYING)
        _drop(controller, FRYER)
        controller.tick(4.0)
        controller.drag_start(HOTDOG_ID, (700.0, 140.0))
        controller.tick(10.0)
        controller.drag_end(HOTDOG_ID, COOLING_RACK)
        self.assertEqual(controller.item.frying_color, FryingColor.YELLOW)
        self.assertAlmostEqual(controller.item.frying_elapsed_seconds, 4.0)

    def test_invalid_drop_returns_to_fryer_and_keeps_time(self):
        controller = _controller()
        events = []
        controller.subscribe(lambda event: events.append(event.name))
        _to_phase(controller, Phase.FRYING)
        _drop(controller, FRYER)
        controller.tick(5.0)
        controller.drag_start(HOTDOG_ID, (700.0, 140.0))

        self.assertFalse(controller.drag_end(HOTDOG_ID, None))
        self.assertEqual(controller.item_position, DEFAULT_ZONES[FRYER].snap_position)
        controller.tick(5.0)
        _drop(controller, COOLING_RACK)
        self.assertEqual(controller.item.frying_color, FryingColor.BROWN)
        self.assertEqual(events.count("frying_started"), 2)
        self.assertEqual(events.count("frying_paused"), 2)

    def test_invalid_drop_before_frying_returns_to_rest(self):
        controller = _controller()
        _to_phase(controller, Phase.FRYING)
        rest = controller.item_position
        self.assertFalse(_drop(controller, None))
        self.assertEqual(controller.item_position, rest)
        controller.tick(5.0)
        _drop(controller, COOLING_RACK)
        self.assertEqual(controller.item.frying_color, FryingColor.RAW)

    def test_colour_change_events(self):
        controller = _controller()
        colours = []
        controller.subscribe(
            lambda event: colours.append(event.data["color"]) if event.name == "frying_color_changed" else None
        )
        _to_phase(controller, Phase.FRYING)
        _drop(controller, FRYER)
        for _ in range(12):
            controller.tick(1.0)
        self.assertEqual(
            colours,
            [FryingColor.YELLOW, FryingColor.GOLDEN, FryingColor.BROWN, FryingColor.BURNT],
        )

    def test_drop_without_lifting_is_ignored(self):
        controller = _controller()
        _to_phase(controller, Phase.FRYING)
        rest = controller.item_position
        self.assertFalse(controller.drag_end(HOTDOG_ID, COOLING_RACK))
        self.assertFalse(controller.drag_move(HOTDOG_ID, OUTSIDE))
        self.assertEqual(controller.phase, Phase.FRYING)
        self.assertEqual(controller.item_position, rest)
        self.assertEqual(controller.item.frying_color, FryingColor.RAW)

        _drop(controller, FRYER)
        controller.tick(8.0)
        self.assertFalse(controller.drag_end(HOTDOG_ID, COOLING_RACK))
        self.assertEqual(controller.phase, Phase.FRYING)
        self.assertEqual(controller.item_position, DEFAULT_ZONES[FRYER].snap_position)


class TestCompletionPhase(unittest.TestCase):
    def test_drop_elsewhere_waits(self):
        controller = _controller()
        _to_phase(controller, Phase.COMPLETED)
        rest = controller.item_position
        self.assertFalse(_drop(controller, FRYER))
        self.assertEqual(controller.phase, Phase.COMPLETED)
        self.assertEqual(controller.item_position, rest)

    def test_serving_window_finishes_session(self):
        controller = _controller()
        _to_phase(controller, Phase.COMPLETED)
        self.assertTrue(_drop(controller, SERVING_WINDOW))
        self.assertEqual(controller.phase, Phase.NONE)
        self.assertIsNotNone(controller.last_result)

    def test_serving_requires_a_drag_in_flight(self):
        controller = _controller()
        _to_phase(controller, Phase.COMPLETED)
        self.assertFalse(controller.drag_end(HOTDOG_ID, SERVING_WINDOW))
        self.assertEqual(controller.phase, Phase.COMPLETED)
        self.assertIsNone(controller.last_result)

        self.assertTrue(controller.drag_start(HOTDOG_ID, controller.item_position))
        self.assertFalse(controller.drag_start(HOTDOG_ID, controller.item_position))
        self.assertTrue(controller.drag_end(HOTDOG_ID, SERVING_WINDOW))
        self.assertEqual(controller.phase, Phase.NONE)


if __name__ == "__main__":
    unittest.main()
