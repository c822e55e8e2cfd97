"""
Streak detection and ranking module.

Items that show up in consecutive periods form streaks. A streak is anchored
at the period it started in and keeps growing while the item keeps showing
up; the first period the item is missing is recorded as the break period.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, List, Literal, Mapping, NamedTuple, Optional, Set, Tuple, Union

import pandas as pd

from .errors import ValidationError

logger = logging.getLogger(__name__)


STATUS_ONGOING = "ongoing"
STATUS_MIGHT_BREAK = "might-break"
STATUS_BROKEN = "broken"

StreakStatus = Literal["ongoing", "might-break", "broken"]
STREAK_STATUSES = (STATUS_ONGOING, STATUS_MIGHT_BREAK, STATUS_BROKEN)


class StreakKey(NamedTuple):
    """Identifies a streak: the period it started in and its item."""
    start: int
    item: Hashable


@dataclass
class Streak:
    """Length of a streak and the period it broke in (None while unbroken)."""
    length: int = 1
    break_period: Optional[int] = None


class StreakState(dict):
    """
    All streaks computed so far, keyed by StreakKey.

    ``last_period`` is the period through which the state has been computed.
    When it is None it is derived from the streaks themselves.
    """

    def __init__(self, *args, last_period: Optional[int] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.last_period = last_period

    def derived_last_period(self) -> int:
        """Highest period any streak is known to have been processed through."""
        last = 0
        for key, streak in self.items():
            last = max(last, key.start + streak.length - 1)
            if streak.break_period is not None:
                last = max(last, streak.break_period)
        return last

    def effective_last_period(self) -> int:
        if self.last_period is not None:
            return self.last_period
        return self.derived_last_period()

    def copy(self) -> "StreakState":
        return StreakState(
            {StreakKey(*key): Streak(s.length, s.break_period) for key, s in self.items()},
            last_period=self.last_period,
        )

    def __repr__(self) -> str:
        return f"StreakState({dict.__repr__(self)}, last_period={self.last_period!r})"


PriorState = Union[StreakState, Mapping[Tuple[int, Hashable], Any]]


def _coerce_streak(value: Any) -> Streak:
    if isinstance(value, Streak):
        return Streak(value.length, value.break_period)
    length, break_period = value
    return Streak(int(length), None if break_period is None else int(break_period))


def ingest_state(prior_state: Optional[PriorState]) -> StreakState:
    """
    Build a private StreakState from whatever the caller supplied.

    Accepts a StreakState or a plain mapping of (start, item) to either a
    Streak or a [length, break_period] pair. The caller's object is never
    modified.
    """
    if prior_state is None:
        return StreakState()
    if isinstance(prior_state, StreakState):
        return prior_state.copy()

    state = StreakState()
    for (start, item), value in prior_state.items():
        state[StreakKey(int(start), item)] = _coerce_streak(value)
    return state


def resolve_start_counter(last_period: int, start_period: Optional[int]) -> int:
    """
    Return the running period counter to start the update pass from.

    Raises:
        ValidationError: If start_period is neither the last computed period
            nor the one right after it (or not 1 for an empty state).
    """
    if start_period is None:
        return last_period

    if isinstance(start_period, bool) or not isinstance(start_period, numbers.Integral):
        raise ValidationError(
            f"start_period must be an integer, got {start_period!r}",
            details={"start_period": start_period, "last_period": last_period},
        )

    if last_period > 0:
        allowed = (last_period, last_period + 1)
        if start_period not in allowed:
            raise ValidationError(
                f"start_period must be {last_period} (recompute last period) or "
                f"{last_period + 1} (new period), got {start_period}",
                details={"start_period": start_period, "last_period": last_period},
            )
    elif start_period != 1:
        raise ValidationError(
            f"start_period must be 1 when there is no prior state, got {start_period}",
            details={"start_period": start_period, "last_period": last_period},
        )

    return int(start_period) - 1


def find_active_items(state: StreakState, first_period: int) -> Dict[Hashable, int]:
    """
    Map each item whose streak may still continue to its streak's start period.

    A streak that broke in first_period is still active: that period is about
    to be reprocessed and the break may turn out not to have happened.
    """
    active: Dict[Hashable, int] = {}
    for key, streak in state.items():
        if streak.break_period is None or streak.break_period == first_period:
            active[key.item] = key.start
    return active


def update_streaks(state: StreakState, period_sets: Iterable[Iterable[Hashable]],
                   period: int, last_period: int) -> int:
    """
    Run the incremental update pass over period_sets, mutating state.

    Args:
        state: Streaks computed so far (a private copy)
        period_sets: Sets of items, one per period, in order
        period: Running period counter before the first set
        last_period: Period the prior state had been computed through. Periods
            at or before it are being reprocessed.

    Returns:
        The last period processed
    """
    active = find_active_items(state, period + 1)

    for period_set in period_sets:
        period += 1
        items_this_period: Set[Hashable] = set(period_set)

        # find new streaks: items that just appear in this period
        new_items: Set[Hashable] = set()
        for item in items_this_period:
            if item in active:
                continue
            active[item] = period
            state[StreakKey(period, item)] = Streak(1, None)
            new_items.add(item)

        # find continued and broken streaks
        for item, start in list(active.items()):
            streak = state[StreakKey(start, item)]
            if item in items_this_period:
                if period > last_period and item not in new_items:
                    streak.length += 1
                elif period <= last_period and streak.break_period is not None:
                    # reprocessed period: the item did show up after all, so
                    # the period counts toward the streak unless it already does
                    streak.break_period = None
                    if start + streak.length - 1 < period:
                        streak.length += 1
            else:
                # for the current period this is only tentative, the item
                # might still appear before the period ends
                if streak.break_period is None:
                    streak.break_period = period
                del active[item]

        logger.debug(f"Period {period}: {len(items_this_period)} items, "
                     f"{len(new_items)} new streaks, {len(active)} active")

    return period


def filter_broken(state: StreakState, cur_period: int) -> None:
    """Drop streaks that broke before cur_period, keeping ongoing and might-break ones."""
    for key in [k for k, s in state.items()
                if s.break_period is not None and s.break_period != cur_period]:
        del state[key]


def streak_status(streak: Streak, cur_period: int) -> StreakStatus:
    if streak.break_period is None:
        return STATUS_ONGOING
    if streak.break_period < cur_period:
        return STATUS_BROKEN
    return STATUS_MIGHT_BREAK


def rank_streaks(state: StreakState, cur_period: int) -> List[Dict[str, Any]]:
    """
    Project streaks into rows and rank them.

    Longer streaks first, then earlier streaks, then items in code point order.
    """
    keys = sorted(state, key=lambda k: (-state[k].length, k.start, k.item))
    return [
        {
            "item": key.item,
            "start": key.start,
            "length": state[key].length,
            "status": streak_status(state[key], cur_period),
        }
        for key in keys
    ]


def compute_streaks(period_sets: Iterable[Iterable[Hashable]],
                    prior_state: Optional[PriorState] = None,
                    start_period: Optional[int] = None,
                    exclude_broken: bool = False,
                    raw: bool = False) -> Union[StreakState, List[Dict[str, Any]]]:
    """
    Generate a ranking table of longest streaks.

    Each set in ``period_sets`` represents a period. Items that appear in the
    most consecutive sets rank highest. Status is ``ongoing`` (item appears in
    the current period), ``might-break`` (item is missing from the current
    period, which is assumed not to have ended yet) or ``broken``.

    Args:
        period_sets: Sets of items, one per period, oldest first
        prior_state: State returned by an earlier call with raw=True, to
            continue from instead of recomputing history
        start_period: Period number of the first set. Must be the last period
            of prior_state (to recompute it with revised data) or the one
            after it. Defaults to the one after it.
        exclude_broken: Leave out streaks that are broken
        raw: Return the StreakState instead of the ranked rows

    Returns:
        StreakState if raw, else a list of dicts with item, start, length
        and status

    Raises:
        ValidationError: If start_period does not fit prior_state
    """
    state = ingest_state(prior_state)
    last_period = state.effective_last_period()
    period = resolve_start_counter(last_period, start_period)

    cur_period = update_streaks(state, period_sets, period, last_period)
    state.last_period = cur_period

    if exclude_broken:
        filter_broken(state, cur_period)

    logger.info(f"Computed {len(state)} streaks through period {cur_period}")

    if raw:
        return state
    return rank_streaks(state, cur_period)


gen_longest_streaks_table = compute_streaks


def streak_table_to_dataframe(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """
    Convert ranked rows into a DataFrame with a 1-based rank column.

    Args:
        rows: Output of compute_streaks

    Returns:
        DataFrame with rank, item, start, length and status columns
    """
    columns = ["rank", "item", "start", "length", "status"]
    if not rows:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(rows)
    df.insert(0, "rank", range(1, len(df) + 1))
    return df[columns]


def calculate_streak_statistics(rows: List[Dict[str, Any]]) -> Dict:
    """
    Calculate summary statistics for a ranked streak table.

    Args:
        rows: Output of compute_streaks

    Returns:
        Dictionary with streak statistics
    """
    if not rows:
        return {}

    df = streak_table_to_dataframe(rows)

    stats = {}
    stats['total_streaks'] = len(df)
    stats['distinct_items'] = int(df['item'].nunique())
    for status in STREAK_STATUSES:
        stats[f'{status.replace("-", "_")}_streaks'] = int((df['status'] == status).sum())

    stats['avg_length'] = float(df['length'].mean())
    stats['max_length'] = int(df['length'].max())
    stats['min_length'] = int(df['length'].min())

    longest = df.iloc[0]
    stats['longest'] = {
        'item': longest['item'],
        'start': int(longest['start']),
        'length': int(longest['length']),
        'status': longest['status'],
    }

    length_counts = df['length'].value_counts().sort_index()
    stats['length_distribution'] = {int(k): int(v) for k, v in length_counts.items()}

    return stats
