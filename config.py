"""Centralised configuration constants for the hotdog stand."""
from __future__ import annotations

from pathlib import Path

# ---------------------------------------------------------------------------
# Display (pygame front end; world coordinates are window pixels)
# ---------------------------------------------------------------------------
WINDOW_W: int = 960
WINDOW_H: int = 640
PANEL_H: int = 120
FPS: int = 60

# ---------------------------------------------------------------------------
# File paths
# ---------------------------------------------------------------------------
ORDERS_FILE: Path = Path("data/orders.json")
ZONES_FILE: Path = Path("data/zones.json")

# ---------------------------------------------------------------------------
# Zone identifiers (drop targets known to the cooking phases)
# ---------------------------------------------------------------------------
STICK_STATION: str = "stick_station"
CUTTING_BOARD: str = "cutting_board"
STICK_DROP: str = "stick_drop"
BATTER_ZONE: str = "batter_zone"
FRYER: str = "fryer"
COOLING_RACK: str = "cooling_rack"
SUGAR_TRAY: str = "sugar_tray"
SAUCE_AREA: str = "sauce_area"
SERVING_WINDOW: str = "serving_window"

ZONE_IDS: list[str] = [
    STICK_STATION,
    CUTTING_BOARD,
    STICK_DROP,
    BATTER_ZONE,
    FRYER,
    COOLING_RACK,
    SUGAR_TRAY,
    SAUCE_AREA,
    SERVING_WINDOW,
]

# ---------------------------------------------------------------------------
# Draggable item identifiers
# ---------------------------------------------------------------------------
HOTDOG_ID: str = "hotdog"

# ---------------------------------------------------------------------------
# Fillings (half-ingredients threaded onto the stick)
# ---------------------------------------------------------------------------
SAUSAGE: str = "sausage"
CHEESE: str = "cheese"
FILLINGS: list[str] = [SAUSAGE, CHEESE]
FILLING_SLOTS: int = 2

# ---------------------------------------------------------------------------
# Batter dwell timer
# ---------------------------------------------------------------------------
BATTER_FIRST_STAGE_DELAY: float = 0.7  # seconds in the batter before stage 1
BATTER_TIME_PER_STAGE: float = 1.5     # seconds per further stage
BATTER_MAX_STAGE: int = 3

# ---------------------------------------------------------------------------
# Frying colour thresholds (upper bound in seconds, exclusive)
# ---------------------------------------------------------------------------
FRYING_RAW_UNTIL: float = 3.0
FRYING_YELLOW_UNTIL: float = 7.0
FRYING_GOLDEN_UNTIL: float = 9.0   # optimal window
FRYING_BROWN_UNTIL: float = 11.0   # anything later is burnt

# ---------------------------------------------------------------------------
# Sauce gauges
# ---------------------------------------------------------------------------
SAUCE_MAX_AMOUNT: float = 1.0       # full gauge
SAUCE_DECREASE_RATE: float = 0.05   # gauge consumed per sauce dot
SAUCE_DOT_SPACING: float = 8.0      # cursor travel (px) between sauce dots

# ---------------------------------------------------------------------------
# Score weights (won)
# ---------------------------------------------------------------------------
FILLING_MATCH_POINTS: int = 600
FRYING_PERFECT_POINTS: int = 1500   # golden
FRYING_GOOD_POINTS: int = 600       # yellow / brown
FRYING_BAD_POINTS: int = 0          # raw / burnt
SUGAR_MATCH_POINTS: int = 600
KETCHUP_MATCH_POINTS: int = 300
MUSTARD_MATCH_POINTS: int = 300

MAX_SCORE: int = (
    FILLING_MATCH_POINTS * FILLING_SLOTS
    + FRYING_PERFECT_POINTS
    + SUGAR_MATCH_POINTS
    + KETCHUP_MATCH_POINTS
    + MUSTARD_MATCH_POINTS
)

# Ceiling quoted by the legacy score table. It disagrees with MAX_SCORE (3900);
# kept for reference only and never used to clamp or scale rewards.
DOCUMENTED_MAX_SCORE: int = 2000

# ---------------------------------------------------------------------------
# Shift (one day at the stand)
# ---------------------------------------------------------------------------
SHIFT_CUSTOMERS: int = 5
SHIFT_GOAL_AMOUNT: int = 4000

# ---------------------------------------------------------------------------
# Host-facing event log
# ---------------------------------------------------------------------------
EVENT_LOG_LIMIT: int = 12
