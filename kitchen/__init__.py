"""Hotdog stand cooking package.

Public API:
    from kitchen import CookingController, ItemState, OrderSpec, ShiftLedger, score
"""
from kitchen.controller import CookingController
from kitchen.entities import CookingEvent, FryingColor, ItemState, OrderSpec, Phase, SauceType, ServeResult
from kitchen.scoring import ScoreBreakdown, score, score_breakdown, score_without_order
from kitchen.shift import ShiftLedger
from kitchen.zones import ZoneRegistry

__all__ = [
    "CookingController",
    "CookingEvent",
    "FryingColor",
    "ItemState",
    "OrderSpec",
    "Phase",
    "SauceType",
    "ScoreBreakdown",
    "ServeResult",
    "ShiftLedger",
    "ZoneRegistry",
    "score",
    "score_breakdown",
    "score_without_order",
]
