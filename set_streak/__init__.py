"""
Set Streak

Rank items by the longest run of consecutive periods (sets) they appear in.
"""

__version__ = "1.0.0"
__author__ = "MarkDev"

from .streaks import (
    Streak,
    StreakKey,
    StreakState,
    compute_streaks,
    gen_longest_streaks_table,
    streak_table_to_dataframe,
    calculate_streak_statistics,
)
from .errors import StreakError, ValidationError, InputError, StateFileError
from .periods import load_period_sets
from .state_store import save_state, load_state
from .config import StreakConfig

__all__ = [
    "Streak",
    "StreakKey",
    "StreakState",
    "compute_streaks",
    "gen_longest_streaks_table",
    "streak_table_to_dataframe",
    "calculate_streak_statistics",
    "StreakError",
    "ValidationError",
    "InputError",
    "StateFileError",
    "load_period_sets",
    "save_state",
    "load_state",
    "StreakConfig",
]
