"""
Persistence of streak state so a later run can resume without recomputing
history.

The state is stored as a list of records rather than a mapping so item
identifiers never need to be encoded into keys.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .errors import StateFileError
from .streaks import Streak, StreakKey, StreakState

logger = logging.getLogger(__name__)

STATE_FORMAT_VERSION = 1


def state_to_records(state: StreakState) -> Dict[str, Any]:
    """
    Convert a StreakState into plain data.

    Args:
        state: State returned by compute_streaks(..., raw=True)

    Returns:
        Dictionary with version, last_period and a list of streak records
    """
    records = [
        {
            "start": key.start,
            "item": key.item,
            "length": streak.length,
            "break_period": streak.break_period,
        }
        for key, streak in sorted(state.items(), key=lambda kv: (kv[0].start, kv[0].item))
    ]
    return {
        "version": STATE_FORMAT_VERSION,
        "last_period": state.effective_last_period(),
        "streaks": records,
    }


def _require_int(record: Dict[str, Any], field: str, index: int, optional: bool = False):
    value = record.get(field)
    if value is None and optional:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise StateFileError(
            f"Streak record {index} has invalid '{field}': {value!r}",
            details={"record": index, "field": field},
        )
    return value


def state_from_records(data: Any) -> StreakState:
    """
    Rebuild a StreakState from data produced by state_to_records.

    Raises:
        StateFileError: If the data does not look like a saved state
    """
    if not isinstance(data, dict) or not isinstance(data.get("streaks"), list):
        raise StateFileError("State data must be a mapping with a 'streaks' list")

    version = data.get("version", STATE_FORMAT_VERSION)
    if version != STATE_FORMAT_VERSION:
        raise StateFileError(f"Unsupported state format version {version!r}",
                             details={"version": version})

    state = StreakState()
    for index, record in enumerate(data["streaks"]):
        if not isinstance(record, dict) or "item" not in record:
            raise StateFileError(f"Streak record {index} is malformed",
                                 details={"record": index})
        start = _require_int(record, "start", index)
        length = _require_int(record, "length", index)
        break_period = _require_int(record, "break_period", index, optional=True)
        state[StreakKey(start, record["item"])] = Streak(length, break_period)

    last_period = data.get("last_period")
    if last_period is not None:
        if isinstance(last_period, bool) or not isinstance(last_period, int):
            raise StateFileError(f"Invalid last_period: {last_period!r}")
        state.last_period = last_period
    return state


def save_state(state: StreakState, path: Union[str, Path]) -> None:
    """Save state as JSON, or YAML when the suffix is .yaml/.yml."""
    path = Path(path)
    data = state_to_records(state)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            if path.suffix.lower() in ('.yaml', '.yml'):
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
            else:
                json.dump(data, f, indent=2)
    except OSError as e:
        raise StateFileError(f"Cannot write state to {path}: {e}",
                             details={"path": str(path)}) from e
    logger.info(f"Saved {len(state)} streaks through period {data['last_period']} to {path}")


def load_state(path: Union[str, Path]) -> StreakState:
    """Load state saved by save_state."""
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() in ('.yaml', '.yml'):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise StateFileError(f"Cannot read state from {path}: {e}",
                             details={"path": str(path)}) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise StateFileError(f"Cannot parse state file {path}: {e}",
                             details={"path": str(path)}) from e

    state = state_from_records(data)
    logger.info(f"Loaded {len(state)} streaks through period {state.effective_last_period()} from {path}")
    return state

