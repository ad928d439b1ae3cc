"""Core dataclasses shared by the cooking phases and the scoring engine."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from config import SAUCE_MAX_AMOUNT

if TYPE_CHECKING:
    from kitchen.scoring import ScoreBreakdown

Point = Tuple[float, float]


class Phase(str, Enum):
    """Cooking phases in pipeline order."""

    NONE = "none"
    STICK_PICKUP = "stick_pickup"
    INGREDIENT = "ingredient"
    BATTER = "batter"
    FRYING = "frying"
    TOPPING = "topping"
    COMPLETED = "completed"


PHASE_ORDER: list[Phase] = [
    Phase.STICK_PICKUP,
    Phase.INGREDIENT,
    Phase.BATTER,
    Phase.FRYING,
    Phase.TOPPING,
    Phase.COMPLETED,
]


class FryingColor(str, Enum):
    RAW = "raw"
    YELLOW = "yellow"
    GOLDEN = "golden"
    BROWN = "brown"
    BURNT = "burnt"


class SauceType(str, Enum):
    KETCHUP = "ketchup"
    MUSTARD = "mustard"


@dataclass
class ItemState:
    """The hotdog under construction.

    ``filling1``/``filling2`` are empty until the ingredient phase assigns
    them.  ``ketchup_amount``/``mustard_amount`` are the *remaining* gauge
    levels (1.0 = untouched), while ``has_ketchup``/``has_mustard`` record
    whether any sauce was actually drawn.
    """

    filling1: str = ""
    filling2: str = ""
    batter_stage: int = 0
    frying_color: FryingColor = FryingColor.RAW
    frying_elapsed_seconds: float = 0.0
    has_sugar: bool = False
    has_ketchup: bool = False
    has_mustard: bool = False
    ketchup_amount: float = SAUCE_MAX_AMOUNT
    mustard_amount: float = SAUCE_MAX_AMOUNT

    def copy(self) -> "ItemState":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["frying_color"] = self.frying_color.value
        return data


@dataclass(frozen=True)
class OrderSpec:
    """A customer's order; immutable for the whole session."""

    wanted_filling1: str
    wanted_filling2: str
    wants_sugar: bool = False
    wants_ketchup: bool = False
    wants_mustard: bool = False
    key: str = ""
    display_name: str = ""

    def describe(self) -> str:
        toppings = [
            name
            for name, wanted in (
                ("sugar", self.wants_sugar),
                ("ketchup", self.wants_ketchup),
                ("mustard", self.wants_mustard),
            )
            if wanted
        ]
        topping_text = ", ".join(toppings) if toppings else "none"
        return f"fillings: {self.wanted_filling1} + {self.wanted_filling2} / toppings: {topping_text}"


@dataclass(frozen=True)
class CookingEvent:
    """A named state change pushed to presentation-layer listeners."""

    name: str
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ServeResult:
    """What the scoring consumer receives once a hotdog is served."""

    score: int
    item: ItemState
    order: Optional[OrderSpec]
    breakdown: Optional[ScoreBreakdown] = None
