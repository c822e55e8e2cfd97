"""Pytest configuration and fixtures."""

import json

import pytest


@pytest.fixture
def example_sets():
    """Three periods: A every period, B only in the first, C only in the last."""
    return [["A", "B"], ["A"], ["A", "C"]]


@pytest.fixture
def five_period_sets():
    """Five periods with streaks that break, restart and might break."""
    return [
        ["A", "B"],
        ["A", "C"],
        ["B", "C"],
        ["A", "B", "C"],
        ["C"],
    ]


@pytest.fixture
def releases_sets():
    """Daily release authors for five days."""
    return [
        ["PERLANCAR", "DART", "JJATRIA", "NERDVANA", "LEEJO", "CUKEBOT", "RSCHUPP",
         "JOYREX", "TANIGUCHI", "OODLER", "OLIVER", "JV"],
        ["SKIM", "PERLANCAR", "BURAK", "BDFOY", "SUKRIA", "AJNN", "YANGAK", "CCELSO", "SREZIC"],
        ["JGNI", "DTUCKWELL", "SREZIC", "WOUTER", "LSKATZ", "SVW", "RAWLEYFOW", "DJERIUS",
         "PERLANCAR", "CRORAA", "EINHVERFR", "ASPOSE"],
        ["JGNI", "LEONT", "LANCEW", "NKH", "MDOOTSON", "SREZIC", "PERLANCAR", "DROLSKY",
         "JOYREX", "JRM", "DAMI", "PRBRENAN", "DCHURCH"],
        ["JGNI", "JRM", "TEAM", "LICHTKIND", "JJATRIA", "JDEGUEST", "PERLANCAR", "SVW",
         "DRCLAW", "PLAIN", "SUKRIA", "RSCHUPP"],
    ]


@pytest.fixture
def sets_file(tmp_path, five_period_sets):
    """Five period sets written as JSON."""
    path = tmp_path / "periods.json"
    path.write_text(json.dumps(five_period_sets), encoding="utf-8")
    return path
