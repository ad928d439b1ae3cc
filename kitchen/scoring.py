"""Scoring engine: compares a finished hotdog with the customer's order.

Everything here is a pure function of its arguments.  Weights live in
``config`` so the reward table can be tuned without touching the logic.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from config import (
    FILLING_MATCH_POINTS,
    FRYING_BAD_POINTS,
    FRYING_GOOD_POINTS,
    FRYING_PERFECT_POINTS,
    KETCHUP_MATCH_POINTS,
    MUSTARD_MATCH_POINTS,
    SUGAR_MATCH_POINTS,
)
from kitchen.entities import FryingColor, ItemState, OrderSpec

logger = logging.getLogger(__name__)

FRYING_POINTS: dict[FryingColor, int] = {
    FryingColor.RAW: FRYING_BAD_POINTS,
    FryingColor.YELLOW: FRYING_GOOD_POINTS,
    FryingColor.GOLDEN: FRYING_PERFECT_POINTS,
    FryingColor.BROWN: FRYING_GOOD_POINTS,
    FryingColor.BURNT: FRYING_BAD_POINTS,
}

FRYING_GRADES: dict[FryingColor, str] = {
    FryingColor.RAW: "undercooked",
    FryingColor.YELLOW: "good",
    FryingColor.GOLDEN: "perfect",
    FryingColor.BROWN: "good",
    FryingColor.BURNT: "burnt",
}


@dataclass(frozen=True)
class ScoreBreakdown:
    filling1: int = 0
    filling2: int = 0
    frying: int = 0
    sugar: int = 0
    ketchup: int = 0
    mustard: int = 0

    @property
    def fillings(self) -> int:
        return self.filling1 + self.filling2

    @property
    def toppings(self) -> int:
        return self.sugar + self.ketchup + self.mustard

    @property
    def total(self) -> int:
        return self.fillings + self.frying + self.toppings


def frying_score(color: FryingColor) -> int:
    return FRYING_POINTS.get(color, FRYING_BAD_POINTS)


def frying_grade(color: FryingColor) -> str:
    return FRYING_GRADES.get(color, "unknown")


def _filling_matches(wanted: str, actual: str) -> bool:
    # Positional: slot 1 is only compared with slot 1.  An order that leaves
    # a slot blank never awards that slot.
    return bool(wanted) and wanted == actual


def score_breakdown(order: Optional[OrderSpec], item: Optional[ItemState]) -> ScoreBreakdown:
    if order is None or item is None:
        return ScoreBreakdown()

    return ScoreBreakdown(
        filling1=FILLING_MATCH_POINTS if _filling_matches(order.wanted_filling1, item.filling1) else 0,
        filling2=FILLING_MATCH_POINTS if _filling_matches(order.wanted_filling2, item.filling2) else 0,
        frying=frying_score(item.frying_color),
        sugar=SUGAR_MATCH_POINTS if order.wants_sugar == item.has_sugar else 0,
        ketchup=KETCHUP_MATCH_POINTS if order.wants_ketchup == item.has_ketchup else 0,
        mustard=MUSTARD_MATCH_POINTS if order.wants_mustard == item.has_mustard else 0,
    )


def score(order: Optional[OrderSpec], item: Optional[ItemState]) -> int:
    """Reward in won for serving ``item`` against ``order``; 0 if either is missing."""
    if order is None or item is None:
        logger.warning("score requested without %s", "an order" if order is None else "an item")
        return 0
    breakdown = score_breakdown(order, item)
    logger.debug(
        "score fillings=%d frying=%d (%s) toppings=%d total=%d",
        breakdown.fillings,
        breakdown.frying,
        item.frying_color.value,
        breakdown.toppings,
        breakdown.total,
    )
    return breakdown.total


def score_without_order(item: Optional[ItemState]) -> int:
    """Walk-in price when no order is active.

    Each assigned filling earns the full filling weight, frying is scored as
    usual and every topping present earns half its match weight.
    """
    if item is None:
        return 0

    total = 0
    if item.filling1:
        total += FILLING_MATCH_POINTS
    if item.filling2:
        total += FILLING_MATCH_POINTS
    total += frying_score(item.frying_color)
    if item.has_sugar:
        total += SUGAR_MATCH_POINTS // 2
    if item.has_ketchup:
        total += KETCHUP_MATCH_POINTS // 2
    if item.has_mustard:
        total += MUSTARD_MATCH_POINTS // 2
    return total
