"""
Error classes for consistent error handling.

Every error raised by the package derives from StreakError so callers can
catch one type at the boundary (the CLI does exactly that).
"""

from typing import Optional, Dict, Any


class StreakError(Exception):
    """
    Base error class.

    Attributes:
        message: Error message (default: "Streak error")
        details: Optional additional error details
    """
    message: str = "Streak error"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize error.

        Args:
            message: Error message (overrides default)
            details: Optional additional error details
        """
        self.message = message or self.message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(StreakError, ValueError):
    """start_period is inconsistent with the prior state."""
    message = "Validation error"


class InputError(StreakError, ValueError):
    """Period sets could not be read or have the wrong shape."""
    message = "Invalid period sets"


class StateFileError(StreakError):
    """A persisted streak state could not be read or written."""
    message = "Invalid state file"
