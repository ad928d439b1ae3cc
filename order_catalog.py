from __future__ import annotations

import json
import random
import re
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from config import CHEESE, FILLINGS, ORDERS_FILE, SAUSAGE
from kitchen.entities import OrderSpec

ORDER_KEY_RE = re.compile(r"^[a-z][a-z0-9_]*$")
TOPPING_FLAGS = ("wants_sugar", "wants_ketchup", "wants_mustard")


DEFAULT_ORDERS: Dict[str, OrderSpec] = {
    "classic": OrderSpec(
        key="classic",
        display_name="Classic Sausage",
        wanted_filling1=SAUSAGE,
        wanted_filling2=SAUSAGE,
        wants_ketchup=True,
    ),
    "cheese_lover": OrderSpec(
        key="cheese_lover",
        display_name="Cheese Lover",
        wanted_filling1=CHEESE,
        wanted_filling2=CHEESE,
        wants_sugar=True,
    ),
    "half_and_half": OrderSpec(
        key="half_and_half",
        display_name="Half and Half",
        wanted_filling1=SAUSAGE,
        wanted_filling2=CHEESE,
        wants_ketchup=True,
        wants_mustard=True,
    ),
    "sweet_cheese": OrderSpec(
        key="sweet_cheese",
        display_name="Sweet Cheese",
        wanted_filling1=CHEESE,
        wanted_filling2=SAUSAGE,
        wants_sugar=True,
        wants_ketchup=True,
    ),
    "plain": OrderSpec(
        key="plain",
        display_name="Plain Stick",
        wanted_filling1=SAUSAGE,
        wanted_filling2=CHEESE,
    ),
}


def _is_valid_key(value: Any) -> bool:
    return isinstance(value, str) and bool(ORDER_KEY_RE.fullmatch(value))


def _parse_order_entry(key: str, entry: Dict[str, Any]) -> OrderSpec | None:
    if not _is_valid_key(key):
        return None

    display_name = entry.get("display_name")
    filling1 = entry.get("filling1")
    filling2 = entry.get("filling2")

    if not isinstance(display_name, str) or not display_name.strip():
        return None
    if filling1 not in FILLINGS or filling2 not in FILLINGS:
        return None

    flags: Dict[str, bool] = {}
    for flag in TOPPING_FLAGS:
        value = entry.get(flag, False)
        if not isinstance(value, bool):
            return None
        flags[flag] = value

    return OrderSpec(
        key=key,
        display_name=display_name.strip(),
        wanted_filling1=filling1,
        wanted_filling2=filling2,
        **flags,
    )


def _ordered_catalog(orders: Iterable[OrderSpec]) -> Dict[str, OrderSpec]:
    ordered = sorted(orders, key=lambda order: order.key)
    return {order.key: order for order in ordered}


def load_order_catalog(path: Path = ORDERS_FILE) -> Dict[str, OrderSpec]:
    if not path.exists():
        return _ordered_catalog(DEFAULT_ORDERS.values())

    try:
        raw = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return _ordered_catalog(DEFAULT_ORDERS.values())

    if not isinstance(raw, dict):
        return _ordered_catalog(DEFAULT_ORDERS.values())

    orders: Dict[str, OrderSpec] = {}
    for key, entry in raw.items():
        if not isinstance(key, str) or not isinstance(entry, dict):
            continue
        order = _parse_order_entry(key, entry)
        if order is None:
            continue
        orders[key] = order

    if not orders:
        return _ordered_catalog(DEFAULT_ORDERS.values())

    return _ordered_catalog(orders.values())


def random_order(catalog: Dict[str, OrderSpec], rng: Optional[random.Random] = None) -> Optional[OrderSpec]:
    if not catalog:
        return None
    rng = rng or random.Random()
    return rng.choice(list(catalog.values()))


def order_at(catalog: Dict[str, OrderSpec], index: int) -> Optional[OrderSpec]:
    orders = list(catalog.values())
    if index < 0 or index >= len(orders):
        return None
    return orders[index]


def generate_order(rng: Optional[random.Random] = None) -> OrderSpec:
    """Build an off-menu order with random fillings and a coin flip per topping."""
    rng = rng or random.Random()
    return OrderSpec(
        key="custom",
        display_name="Custom Order",
        wanted_filling1=rng.choice(FILLINGS),
        wanted_filling2=rng.choice(FILLINGS),
        wants_sugar=rng.random() > 0.5,
        wants_ketchup=rng.random() > 0.5,
        wants_mustard=rng.random() > 0.5,
    )
