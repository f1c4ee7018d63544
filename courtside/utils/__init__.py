"""
Utilities package for the Courtside rotation manager.

This package contains constants and helper functions used throughout the application.
"""
from .time_utils import fmt_minutes, now_ts
from .slots import (
    iter_slots, next_slot, parse_slot_key, rotation_number, slot_for,
    slot_key, validate_slot
)
from .logging_utils import configure_logging
from .constants import (
    APP_TITLE, PLAYERS_ON_COURT, QUARTER_COUNT, SLOT_COUNT, SLOT_MINUTES,
    SWAPS_PER_QUARTER, TARGET_GAME_MINUTES
)

__all__ = [
    "fmt_minutes", "now_ts", "iter_slots", "next_slot", "parse_slot_key",
    "rotation_number", "slot_for", "slot_key", "validate_slot",
    "configure_logging", "APP_TITLE", "PLAYERS_ON_COURT", "QUARTER_COUNT",
    "SLOT_COUNT", "SLOT_MINUTES", "SWAPS_PER_QUARTER", "TARGET_GAME_MINUTES"
]
