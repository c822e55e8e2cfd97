"""
Terminal rendering module for streak tables.
"""

from rich.console import Console
from rich.table import Table
from rich import box
from rich.markup import escape
from typing import Any, Dict, List, Optional

console = Console()

STATUS_STYLES = {
    "ongoing": "green",
    "might-break": "yellow",
    "broken": "red",
}


def render_streak_table(rows: List[Dict[str, Any]], top: Optional[int] = None,
                        ascii_only: bool = False, out: Optional[Console] = None) -> None:
    """
    Render the ranked streak table in terminal.

    Args:
        rows: Ranked rows from compute_streaks
        top: Only show the first N rows
        ascii_only: Use plain ASCII borders
        out: Console to print to (defaults to the module console)
    """
    out = out or console
    if not rows:
        out.print("[yellow]No streaks found[/yellow]")
        return

    shown = rows[:top] if top else rows
    table = Table(title="Longest Streaks", box=box.ASCII if ascii_only else box.ROUNDED)
    table.add_column("Rank", justify="right", style="cyan", no_wrap=True)
    table.add_column("Item", style="bold")
    table.add_column("Start", justify="right")
    table.add_column("Length", justify="right", style="magenta")
    table.add_column("Status")

    for rank, row in enumerate(shown, start=1):
        style = STATUS_STYLES.get(row["status"], "white")
        table.add_row(
            str(rank),
            escape(str(row["item"])),
            str(row["start"]),
            str(row["length"]),
            f"[{style}]{row['status']}[/{style}]",
        )

    out.print(table)
    if len(shown) < len(rows):
        out.print(f"[dim]... {len(rows) - len(shown)} more streaks not shown[/dim]")


def render_streak_summary(stats: Dict, ascii_only: bool = False,
                          out: Optional[Console] = None) -> None:
    """
    Render streak table statistics in terminal.

    Args:
        stats: Output of calculate_streak_statistics
    """
    out = out or console
    if not stats:
        out.print("[red]No streak statistics available[/red]")
        return

    table = Table(title="Streak Summary", box=box.ASCII if ascii_only else box.ROUNDED)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="magenta")

    table.add_row("Total Streaks", str(stats.get('total_streaks', 0)))
    table.add_row("Distinct Items", str(stats.get('distinct_items', 0)))
    table.add_row("Ongoing", str(stats.get('ongoing_streaks', 0)))
    table.add_row("Might Break", str(stats.get('might_break_streaks', 0)))
    table.add_row("Broken", str(stats.get('broken_streaks', 0)))

    if 'avg_length' in stats:
        table.add_row("Average Length", f"{stats['avg_length']:.1f} periods")
    if 'longest' in stats:
        longest = stats['longest']
        table.add_row(
            "Longest",
            f"{escape(str(longest['item']))} ({longest['length']} periods from {longest['start']}, {longest['status']})",
        )

    out.print(table)


def render_length_histogram(stats: Dict, max_width: int = 60, ascii_only: bool = False,
                            out: Optional[Console] = None) -> None:
    """
    Render a histogram of streak lengths.

    Args:
        stats: Output of calculate_streak_statistics
        max_width: Maximum width for the bars
    """
    out = out or console
    distribution = stats.get('length_distribution', {}) if stats else {}
    if not distribution:
        out.print("[yellow]No streaks found for histogram[/yellow]")
        return

    bar_char = "#" if ascii_only else "█"
    max_count = max(distribution.values())
    scale_factor = max_width / max_count if max_count > 0 else 1

    out.print("\n[bold]Streak Length Distribution[/bold]")
    for length, count in sorted(distribution.items()):
        bar = bar_char * max(1, int(count * scale_factor))
        out.print(f"{length:>6}: [green]{bar}[/green] {count}")
