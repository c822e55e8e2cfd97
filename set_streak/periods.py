"""
Loading and validation of period sets.

A period set file holds one set of items per period, oldest first. JSON and
YAML files hold an array of arrays of strings; text files hold one period
per line with whitespace-separated items (a blank line is an empty period).
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Union

import yaml

from .errors import InputError

logger = logging.getLogger(__name__)

_SUFFIX_FORMATS = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".txt": "text",
}


def detect_format(path: Union[str, Path], fmt: str = "auto") -> str:
    """Resolve the input format from the file suffix when fmt is 'auto'."""
    normalized = fmt.lower().strip()
    if normalized not in ("auto", "json", "yaml", "text"):
        raise InputError(f"Unknown input format '{fmt}'", details={"format": fmt})
    if normalized != "auto":
        return normalized
    return _SUFFIX_FORMATS.get(Path(path).suffix.lower(), "text")


def parse_text(content: str) -> List[List[str]]:
    """Parse one period per line; trailing newline does not add a period."""
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.split() for line in lines]


def validate_period_sets(data: Any) -> List[List[str]]:
    """
    Check that data is an array of arrays of strings.

    Args:
        data: Parsed file content

    Returns:
        The period sets as lists

    Raises:
        InputError: Naming the first offending period (1-based)
    """
    if not isinstance(data, list):
        raise InputError(
            f"Period sets must be a list of lists, got {type(data).__name__}"
        )

    period_sets = []
    for period, period_set in enumerate(data, start=1):
        if not isinstance(period_set, list):
            raise InputError(
                f"Period {period} must be a list of items, got {type(period_set).__name__}",
                details={"period": period},
            )
        for item in period_set:
            if not isinstance(item, str):
                raise InputError(
                    f"Period {period} contains a non-string item: {item!r}",
                    details={"period": period, "item": item},
                )
        period_sets.append(list(period_set))
    return period_sets


def normalize_period_sets(period_sets: List[List[str]]) -> List[List[str]]:
    """Drop duplicate items within each period, keeping first-seen order."""
    return [list(dict.fromkeys(period_set)) for period_set in period_sets]


def load_period_sets(path: Union[str, Path], fmt: str = "auto") -> List[List[str]]:
    """
    Load period sets from a JSON, YAML or text file.

    Args:
        path: File to read
        fmt: One of auto, json, yaml, text

    Returns:
        Validated, de-duplicated period sets
    """
    path = Path(path)
    resolved = detect_format(path, fmt)

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Cannot read period sets from {path}: {e}",
                         details={"path": str(path)}) from e

    try:
        if resolved == "json":
            data = json.loads(content)
        elif resolved == "yaml":
            data = yaml.safe_load(content)
            if data is None:
                data = []
        else:
            data = parse_text(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InputError(f"Cannot parse {path} as {resolved}: {e}",
                         details={"path": str(path), "format": resolved}) from e

    period_sets = normalize_period_sets(validate_period_sets(data))
    logger.info(f"Loaded {len(period_sets)} periods from {path} ({resolved})")
    return period_sets
