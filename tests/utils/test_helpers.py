"""Tests for markdown_blog/utils/helpers.py module."""

from datetime import UTC, datetime, timedelta, timezone
from time import perf_counter

from markdown_blog.utils.helpers import ensure_utc, time_taken, utc_now, utc_now_str


def test_utc_now_is_aware() -> None:
    """Test utc_now returns an aware UTC datetime."""
    assert utc_now().tzinfo is UTC


def test_utc_now_str_format() -> None:
    """Test the string form is second-precision ISO 8601."""
    assert datetime.fromisoformat(utc_now_str()).microsecond == 0


def test_ensure_utc() -> None:
    """Test naive values are tagged and aware values converted."""
    assert ensure_utc(datetime(2025, 1, 1)) == datetime(2025, 1, 1, tzinfo=UTC)
    minus_five = timezone(-timedelta(hours=5))
    assert ensure_utc(datetime(2025, 1, 1, tzinfo=minus_five)).hour == 5


def test_time_taken() -> None:
    """Test elapsed time formatting."""
    assert time_taken(perf_counter()).startswith("0m ")
