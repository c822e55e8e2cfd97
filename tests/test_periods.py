"""Tests for period set loading."""

import json

import pytest

from set_streak.errors import InputError
from set_streak.periods import (
    detect_format,
    load_period_sets,
    normalize_period_sets,
    parse_text,
    validate_period_sets,
)


class TestFormats:
    """Test format detection and parsing."""

    def test_detect_format(self):
        """Test suffix based detection."""
        assert detect_format("a.json") == "json"
        assert detect_format("a.YAML") == "yaml"
        assert detect_format("a.yml") == "yaml"
        assert detect_format("a.txt") == "text"
        assert detect_format("periods") == "text"
        assert detect_format("a.json", "text") == "text"

    def test_unknown_format(self):
        """Test an unknown explicit format is rejected."""
        with pytest.raises(InputError):
            detect_format("a.json", "xml")

    def test_parse_text(self):
        """Test one period per line with a blank line for an empty period."""
        content = "A B\n\nC  A\tD\n"

        assert parse_text(content) == [["A", "B"], [], ["C", "A", "D"]]

    def test_parse_text_without_trailing_newline(self):
        """Test the last line counts without a newline."""
        assert parse_text("A\nB") == [["A"], ["B"]]


class TestValidation:
    """Test shape validation."""

    def test_valid(self):
        """Test an array of arrays of strings passes."""
        assert validate_period_sets([["A"], []]) == [["A"], []]

    def test_not_a_list(self):
        """Test the top level must be a list."""
        with pytest.raises(InputError):
            validate_period_sets({"A": 1})

    def test_period_not_a_list(self):
        """Test each period must be a list, and the period is named."""
        with pytest.raises(InputError) as exc_info:
            validate_period_sets([["A"], "B"])

        assert exc_info.value.details == {"period": 2}

    def test_non_string_item(self):
        """Test items must be strings."""
        with pytest.raises(InputError) as exc_info:
            validate_period_sets([["A", 3]])

        assert exc_info.value.details["period"] == 1

    def test_normalize_drops_duplicates(self):
        """Test duplicates are dropped keeping first-seen order."""
        assert normalize_period_sets([["B", "A", "B"], []]) == [["B", "A"], []]


class TestLoad:
    """Test loading from files."""

    def test_load_json(self, tmp_path):
        """Test loading a JSON file."""
        path = tmp_path / "sets.json"
        path.write_text(json.dumps([["A", "A"], ["B"]]), encoding="utf-8")

        assert load_period_sets(path) == [["A"], ["B"]]

    def test_load_yaml(self, tmp_path):
        """Test loading a YAML file."""
        path = tmp_path / "sets.yaml"
        path.write_text("- [A, B]\n- []\n- [B]\n", encoding="utf-8")

        assert load_period_sets(path) == [["A", "B"], [], ["B"]]

    def test_load_empty_yaml(self, tmp_path):
        """Test an empty YAML file means no periods."""
        path = tmp_path / "sets.yaml"
        path.write_text("", encoding="utf-8")

        assert load_period_sets(path) == []

    def test_load_text(self, tmp_path):
        """Test loading a text file."""
        path = tmp_path / "sets.txt"
        path.write_text("A B\nB\n", encoding="utf-8")

        assert load_period_sets(path) == [["A", "B"], ["B"]]

    def test_load_missing_file(self, tmp_path):
        """Test a missing file raises InputError."""
        with pytest.raises(InputError):
            load_period_sets(tmp_path / "missing.json")

    def test_load_bad_json(self, tmp_path):
        """Test unparsable JSON raises InputError."""
        path = tmp_path / "sets.json"
        path.write_text("[[\"A\"", encoding="utf-8")

        with pytest.raises(InputError):
            load_period_sets(path)

    def test_load_wrong_shape(self, tmp_path):
        """Test YAML numbers are not accepted as items."""
        path = tmp_path / "sets.yaml"
        path.write_text("- [1, 2]\n", encoding="utf-8")

        with pytest.raises(InputError):
            load_period_sets(path)

    def test_load_invalid_utf8(self, tmp_path):
        """Test a file that is not UTF-8 raises InputError."""
        path = tmp_path / "sets.txt"
        path.write_bytes(b"A \xff\xfe\n")

        with pytest.raises(InputError):
            load_period_sets(path)
