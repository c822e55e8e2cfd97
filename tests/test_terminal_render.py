"""Tests for terminal rendering and logging setup."""

import io
import logging

from rich.console import Console

from set_streak.logging_config import setup_logging
from set_streak.streaks import calculate_streak_statistics, compute_streaks
from set_streak.terminal_render import (
    render_length_histogram,
    render_streak_summary,
    render_streak_table,
)


def _console():
    return Console(file=io.StringIO(), width=120, color_system=None)


class TestRender:
    """Test rich rendering."""

    def test_table(self, five_period_sets):
        """Test every row is rendered."""
        out = _console()
        render_streak_table(compute_streaks(five_period_sets), out=out)

        text = out.file.getvalue()
        assert "Longest Streaks" in text
        assert text.count("might-break") == 2

    def test_table_top(self, five_period_sets):
        """Test the note about hidden rows."""
        out = _console()
        render_streak_table(compute_streaks(five_period_sets), top=2, ascii_only=True, out=out)

        assert "3 more streaks not shown" in out.file.getvalue()

    def test_empty_table(self):
        """Test the message for no streaks."""
        out = _console()
        render_streak_table([], out=out)

        assert "No streaks found" in out.file.getvalue()

    def test_summary_and_histogram(self, five_period_sets):
        """Test summary and histogram rendering."""
        stats = calculate_streak_statistics(compute_streaks(five_period_sets))
        out = _console()

        render_streak_summary(stats, out=out)
        render_length_histogram(stats, ascii_only=True, out=out)

        text = out.file.getvalue()
        assert "Streak Summary" in text
        assert "Streak Length Distribution" in text
        assert "#" in text

    def test_items_with_markup_characters(self):
        """Test items that look like rich markup are printed literally."""
        rows = compute_streaks([["[/x]", "[red]"], ["[/x]"]])
        out = _console()

        render_streak_table(rows, out=out)
        render_streak_summary(calculate_streak_statistics(rows), out=out)

        text = out.file.getvalue()
        assert "[/x]" in text
        assert "[red]" in text


class TestLogging:
    """Test logging setup."""

    def test_setup_logging(self, tmp_path):
        """Test level and file handler."""
        log_file = tmp_path / "streaks.log"
        logger = setup_logging(level="debug", log_file=str(log_file))

        try:
            assert logger.name == "set_streak"
            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 2

            compute_streaks([["A"]])
            for handler in logger.handlers:
                handler.flush()

            assert "Computed 1 streaks through period 1" in log_file.read_text()
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()
            logger.setLevel(logging.NOTSET)
