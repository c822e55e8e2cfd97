"""
Configuration models for the streak ranking CLI.
"""

from typing import Optional, Literal, Union
from pydantic import BaseModel, Field, field_validator
import yaml
import json
from pathlib import Path


class StreakConfig(BaseModel):
    """Main configuration for a streak ranking run."""

    # Required parameters
    sets_path: str = Field(..., description="File with one set of items per period")

    # Input parameters
    input_format: Literal["auto", "json", "yaml", "text"] = Field(
        default="auto",
        description="Format of the period sets file"
    )

    # Resumable state
    state_path: Optional[str] = Field(
        default=None,
        description="Saved state to continue from"
    )
    save_state_path: Optional[str] = Field(
        default=None,
        description="Where to save the state after computing"
    )
    start_period: Optional[int] = Field(
        default=None,
        description="Period number of the first set (defaults to the one after the saved state)"
    )

    # Analysis parameters
    exclude_broken: bool = Field(
        default=False,
        description="Leave out streaks that are broken"
    )
    raw: bool = Field(
        default=False,
        description="Output the raw streak state instead of the ranking table"
    )

    # Output settings
    output_format: Literal["table", "json", "csv"] = Field(
        default="table",
        description="How to print the result"
    )
    export_csv: Optional[str] = Field(
        default=None,
        description="Path to export the ranking table as CSV"
    )
    top: Optional[int] = Field(
        default=None,
        description="Only show the first N rows"
    )
    ascii_only: bool = Field(
        default=False,
        description="Force ASCII-only output"
    )
    log_level: str = Field(default="WARNING", description="Logging level")
    log_file: Optional[str] = Field(default=None, description="Also write logs to this file")
    log_json: bool = Field(default=False, description="Write log lines as JSON")

    @field_validator('start_period')
    @classmethod
    def validate_start_period(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError('start_period must be at least 1')
        return v

    @field_validator('top')
    @classmethod
    def validate_top(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError('top must be at least 1')
        return v

    @classmethod
    def from_yaml(cls, file_path: Union[str, Path], **overrides) -> 'StreakConfig':
        """Load configuration from YAML file."""
        with open(file_path, 'r') as f:
            data = yaml.safe_load(f) or {}
        data.update(overrides)
        return cls(**data)

    @classmethod
    def from_json(cls, file_path: Union[str, Path], **overrides) -> 'StreakConfig':
        """Load configuration from JSON file."""
        with open(file_path, 'r') as f:
            data = json.load(f)
        data.update(overrides)
        return cls(**data)

    @classmethod
    def from_file(cls, file_path: Union[str, Path], **overrides) -> 'StreakConfig':
        """Load configuration from a YAML or JSON file, by suffix."""
        suffix = Path(file_path).suffix.lower()
        if suffix in ('.yaml', '.yml'):
            return cls.from_yaml(file_path, **overrides)
        if suffix == '.json':
            return cls.from_json(file_path, **overrides)
        raise ValueError(f"Config file must be YAML or JSON, got '{suffix}'")

    def to_yaml(self, file_path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        with open(file_path, 'w') as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False, indent=2)

    def to_json(self, file_path: Union[str, Path]) -> None:
        """Save configuration to JSON file."""
        with open(file_path, 'w') as f:
            json.dump(self.model_dump(), f, indent=2)


# Example configurations
EXAMPLE_CONFIGS = {
    "daily_releases": {
        "sets_path": "releases.json",
        "output_format": "table",
        "top": 20,
    },
    "resume_daily": {
        "sets_path": "today.txt",
        "state_path": "streaks-state.json",
        "save_state_path": "streaks-state.json",
        "start_period": 31,
    },
    "ongoing_only_csv": {
        "sets_path": "periods.yaml",
        "exclude_broken": True,
        "output_format": "csv",
        "export_csv": "streaks.csv",
    },
}
