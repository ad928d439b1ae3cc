"""Shift ledger: tallies served rewards against the day's earning goal."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List

from config import MAX_SCORE, SHIFT_CUSTOMERS, SHIFT_GOAL_AMOUNT
from kitchen.entities import CookingEvent

if TYPE_CHECKING:
    from kitchen.controller import CookingController

logger = logging.getLogger(__name__)


@dataclass
class ShiftLedger:
    day: int = 1
    goal_amount: int = SHIFT_GOAL_AMOUNT
    total_customers: int = SHIFT_CUSTOMERS
    earnings: List[int] = field(default_factory=list)

    @property
    def earned_amount(self) -> int:
        return sum(self.earnings)

    @property
    def customers_served(self) -> int:
        return len(self.earnings)

    @property
    def is_complete(self) -> bool:
        return self.customers_served >= self.total_customers

    @property
    def is_goal_achieved(self) -> bool:
        return self.earned_amount >= self.goal_amount

    def record(self, reward: int) -> None:
        if reward < 0:
            raise ValueError(f"reward must be non-negative, got {reward}")
        if self.is_complete:
            raise ValueError(f"shift already served {self.total_customers} customers")
        self.earnings.append(int(reward))
        logger.info("customer %d/%d paid %d", self.customers_served, self.total_customers, reward)

    def attach(self, controller: "CookingController") -> None:
        """Record every ``session_finished`` reward the controller emits."""
        controller.subscribe(self._on_event)

    def detach(self, controller: "CookingController") -> None:
        controller.unsubscribe(self._on_event)

    def _on_event(self, event: CookingEvent) -> None:
        if event.name != "session_finished":
            return
        if self.is_complete:
            logger.warning("shift is complete; reward %d not recorded", event.data["score"])
            return
        self.record(event.data["score"])

    def average_earnings(self) -> float:
        if self.customers_served == 0:
            return 0.0
        return self.earned_amount / self.customers_served

    def goal_progress(self) -> float:
        if self.goal_amount <= 0:
            return 0.0
        return self.earned_amount / self.goal_amount

    def goal_progress_percent(self) -> int:
        return int(self.goal_progress() * 100)

    def best_earning(self) -> int:
        return max(self.earnings, default=0)

    def worst_earning(self) -> int:
        return min(self.earnings, default=0)

    def perfect_count(self) -> int:
        return sum(1 for reward in self.earnings if reward >= MAX_SCORE)

    def summary(self) -> str:
        outcome = "goal reached" if self.is_goal_achieved else "goal missed"
        return (
            f"Day {self.day}: {self.earned_amount}/{self.goal_amount} won "
            f"({self.goal_progress_percent()}%) - customers {self.customers_served}/{self.total_customers} - {outcome}"
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "day": self.day,
            "goal_amount": self.goal_amount,
            "earned_amount": self.earned_amount,
            "customers_served": self.customers_served,
            "total_customers": self.total_customers,
            "is_goal_achieved": self.is_goal_achieved,
            "earnings": list(self.earnings),
        }

    def reset(self) -> None:
        self.earnings.clear()
