"""
Unit tests for YYYY-MM-DD date helpers.
"""

from datetime import date, datetime

import pytest

from paybysquare.domain.dates import format_iso_date, parse_iso_date


def test_parse_valid_date():
    assert parse_iso_date("2024-02-29") == date(2024, 2, 29)


@pytest.mark.parametrize("text", [
    None,
    "",
    "2023-02-29",
    "2024-00-10",
    "20240601",
    "2024-W01-1",
    "2024-06-01T10:00",
    "2024-06-01\n",
])
def test_parse_rejects(text):
    assert parse_iso_date(text) is None


def test_format_date_and_datetime():
    assert format_iso_date(date(2024, 6, 1)) == "2024-06-01"
    assert format_iso_date(datetime(2024, 6, 1, 15, 30)) == "2024-06-01"


def test_format_passes_strings_and_none():
    assert format_iso_date("not a date") == "not a date"
    assert format_iso_date(None) is None


def test_round_trip():
    text = "2025-12-31"
    assert format_iso_date(parse_iso_date(text)) == text
