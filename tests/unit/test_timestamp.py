"""Unit tests for timestamp utilities."""

import re
from datetime import date, datetime, timedelta, timezone

import pytest

from profmatch.utils.timestamp import format_timestamp, now, now_exact, resolve_date, today


@pytest.mark.unit
def test_today_is_iso_date():
    """Test today() returns YYYY-MM-DD."""
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", today())


@pytest.mark.unit
def test_now_is_filesystem_safe():
    """Test now() stamps contain no separators that break paths."""
    assert re.fullmatch(r"\d{8}_\d{6}", now())


@pytest.mark.unit
def test_now_exact_parses():
    """Test now_exact() round-trips through fromisoformat."""
    assert datetime.fromisoformat(now_exact()).tzinfo is not None


@pytest.mark.unit
class TestResolveDate:
    """Tests for resolve_date function."""

    def test_none_is_today(self):
        """Test a missing date falls back to today."""
        assert resolve_date(None) == today()

    def test_date_and_datetime(self):
        """Test date and datetime objects keep only the date."""
        assert resolve_date(date(2025, 1, 15)) == "2025-01-15"
        assert resolve_date(datetime(2025, 1, 15, 23, 59)) == "2025-01-15"

    def test_iso_string(self):
        """Test ISO strings are validated and normalized."""
        assert resolve_date("2025-01-15") == "2025-01-15"

    def test_invalid_string(self):
        """Test malformed dates raise ValueError."""
        with pytest.raises(ValueError):
            resolve_date("15/01/2025")


@pytest.mark.unit
class TestFormatTimestamp:
    """Tests for format_timestamp function."""

    def test_absolute(self):
        """Test absolute formatting, including a trailing Z."""
        assert format_timestamp("2025-11-13T18:45:40.572Z") == "2025-11-13 18:45:40"

    def test_relative(self):
        """Test relative formatting of a recent time."""
        two_hours_ago = datetime.now(timezone.utc) - timedelta(hours=2, minutes=5)
        assert format_timestamp(two_hours_ago.isoformat(), relative=True) == "2h ago"

    def test_unparseable_returned_unchanged(self):
        """Test bad input is returned as-is."""
        assert format_timestamp("yesterday") == "yesterday"
