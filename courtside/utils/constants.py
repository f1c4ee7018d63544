"""
Constants for the Courtside rotation manager.

This module contains the game format and scoring configuration used
throughout the application.
"""

# Application metadata
APP_TITLE = "Courtside Rotations"

# Game format
QUARTER_COUNT = 4
SWAPS_PER_QUARTER = 2
SLOT_COUNT = QUARTER_COUNT * SWAPS_PER_QUARTER
SLOT_MINUTES = 4
PLAYERS_ON_COURT = 5

# Game minutes the weighted strategy divides among attending players
TARGET_GAME_MINUTES = 32

# Player-minutes available in one game (every slot fully staffed)
GAME_PLAYER_MINUTES = SLOT_COUNT * PLAYERS_ON_COURT * SLOT_MINUTES

# Explicit per-player minute edits are accepted within [0, MAX_EDIT_MINUTES]
MAX_EDIT_MINUTES = 8

# Weighted strategy weights (lower score = plays sooner)
WEIGHT_CURRENT_GAME = 0.50
WEIGHT_HISTORICAL = 0.30
WEIGHT_GAMES_ATTENDED = -0.15
WEIGHT_SWAPS_ATTENDED = 0.05

# Historical average used by the weighted strategy when nobody has history
DEFAULT_AVERAGE_NORMALIZED_MINUTES = 16.0

# Deviation from target (percent) before a player is flagged
RECOMMENDATION_DEVIATION_PERCENT = 20
SCHEDULE_DEVIATION_PERCENT = 10

# Priority labels shown next to players
PRIORITY_HIGH = "high-priority"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low-priority"

# Reasoning attached to slots copied from history
ACTUAL_REASONING = "actual"

# Persisted data format version
DATA_VERSION = 2
