"""
Command-line interface for streak ranking.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console

from .config import StreakConfig, EXAMPLE_CONFIGS
from .errors import StreakError
from .logging_config import setup_logging
from .periods import load_period_sets
from .state_store import load_state, save_state, state_to_records
from .streaks import calculate_streak_statistics, compute_streaks, streak_table_to_dataframe
from .terminal_render import render_length_histogram, render_streak_summary, render_streak_table

logger = logging.getLogger(__name__)

app = typer.Typer(help="Set Streak - Rank items by their longest runs of consecutive periods")


@app.command()
def rank(
    sets_file: Path = typer.Argument(..., help="File with one set of items per period"),
    input_format: str = typer.Option("auto", "--format", "-f",
                                     help="Input format: auto, json, yaml, text"),
    state: Optional[Path] = typer.Option(None, "--state", "-s",
                                         help="Saved state to continue from"),
    start_period: Optional[int] = typer.Option(None, "--start-period", "-p",
                                               help="Period number of the first set"),
    exclude_broken: bool = typer.Option(False, "--exclude-broken", "-x",
                                        help="Leave out broken streaks"),
    raw: bool = typer.Option(False, "--raw", help="Output the raw streak state"),
    save_state_path: Optional[Path] = typer.Option(None, "--save-state",
                                                   help="Save the streak state to this file"),
    output_format: str = typer.Option("table", "--output", "-o",
                                      help="Output format: table, json, csv"),
    export_csv: Optional[Path] = typer.Option(None, "--export-csv", help="Export the table as CSV"),
    top: Optional[int] = typer.Option(None, "--top", "-n", help="Only show the first N rows"),
    ascii_only: bool = typer.Option(False, "--ascii", help="Force ASCII-only output"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c",
                                               help="Configuration file (YAML/JSON)"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to this file"),
    log_json: bool = typer.Option(False, "--log-json", help="Write log lines as JSON"),
):
    """
    Rank items by the longest streak of consecutive periods they appear in.
    """
    try:
        if config_file is not None:
            config = StreakConfig.from_file(config_file, sets_path=str(sets_file))
        else:
            config = StreakConfig(
                sets_path=str(sets_file),
                input_format=input_format,
                state_path=str(state) if state else None,
                save_state_path=str(save_state_path) if save_state_path else None,
                start_period=start_period,
                exclude_broken=exclude_broken,
                raw=raw,
                output_format=output_format,
                export_csv=str(export_csv) if export_csv else None,
                top=top,
                ascii_only=ascii_only,
                log_level=log_level,
                log_file=str(log_file) if log_file else None,
                log_json=log_json,
            )
    except (ValueError, OSError, yaml.YAMLError) as e:
        typer.secho(f"Invalid configuration: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    setup_logging(level=config.log_level, log_file=config.log_file, json_format=config.log_json)

    try:
        run_ranking(config)
    except StreakError as e:
        typer.secho(f"Error: {e.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def run_ranking(config: StreakConfig) -> None:
    """Run one ranking as described by config and print the result."""
    period_sets = load_period_sets(config.sets_path, config.input_format)
    prior_state = load_state(config.state_path) if config.state_path else None

    state = compute_streaks(
        period_sets,
        prior_state=prior_state,
        start_period=config.start_period,
        raw=True,
    )
    if config.save_state_path:
        save_state(state, config.save_state_path)

    if config.raw:
        if config.exclude_broken:
            state = compute_streaks([], prior_state=state, exclude_broken=True, raw=True)
        typer.echo(json.dumps(state_to_records(state), indent=2))
        return

    rows = compute_streaks([], prior_state=state, exclude_broken=config.exclude_broken)

    if config.export_csv:
        streak_table_to_dataframe(rows).to_csv(config.export_csv, index=False)
        logger.info(f"Exported {len(rows)} rows to {config.export_csv}")

    shown = rows[:config.top] if config.top else rows
    if config.output_format == "json":
        typer.echo(json.dumps(shown, indent=2))
    elif config.output_format == "csv":
        typer.echo(streak_table_to_dataframe(shown).to_csv(index=False), nl=False)
    else:
        out = Console()
        render_streak_table(rows, top=config.top, ascii_only=config.ascii_only, out=out)
        stats = calculate_streak_statistics(rows)
        if stats:
            render_streak_summary(stats, ascii_only=config.ascii_only, out=out)
            render_length_histogram(stats, ascii_only=config.ascii_only, out=out)


@app.command()
def config_examples():
    """Show example configurations."""
    typer.echo("Example Configurations:")
    typer.echo("=" * 50)

    for name, config in EXAMPLE_CONFIGS.items():
        typer.echo(f"\n{name.upper()}:")
        for key, value in config.items():
            typer.echo(f"  {key}: {value}")

    typer.echo("\nTo use these examples, save one as YAML and run:")
    typer.echo("  set-streak rank periods.json --config my-config.yaml")


if __name__ == "__main__":
    app()
