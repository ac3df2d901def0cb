"""Tests for tally.dates pure functions."""

from datetime import date

import pytest

from tally.dates import (
    current_month_key,
    from_calendar_month,
    make_month_key,
    month_key_for_date,
    month_range,
    parse_month_key,
    recent_month_keys,
    shift_month,
)
from tally.domain.models import MonthKey


class TestMakeMonthKey:
    """Tests for make_month_key."""

    def test_january_is_index_zero(self) -> None:
        """Should zero-pad the zero-based month index."""
        assert make_month_key(2024, 0) == "2024-00"

    def test_december_is_index_eleven(self) -> None:
        """Should use 11 for December."""
        assert make_month_key(2024, 11) == "2024-11"

    def test_index_out_of_range_raises_valueerror(self) -> None:
        """Should reject month indexes outside 0-11."""
        with pytest.raises(ValueError):
            make_month_key(2024, 12)
        with pytest.raises(ValueError):
            make_month_key(2024, -1)


class TestParseMonthKey:
    """Tests for parse_month_key."""

    def test_parses_year_and_index(self) -> None:
        """Should split key into year and zero-based index."""
        assert parse_month_key("2024-05") == (2024, 5)

    def test_invalid_format_raises_valueerror(self) -> None:
        """Should raise ValueError for malformed keys."""
        for bad in ["invalid", "2024", "2024-1-1", "2024-xx", ""]:
            with pytest.raises(ValueError):
                parse_month_key(bad)

    def test_index_twelve_raises_valueerror(self) -> None:
        """Should reject index 12 (months are zero-based)."""
        with pytest.raises(ValueError):
            parse_month_key("2024-12")


class TestMonthKeyForDate:
    """Tests for month_key_for_date and current_month_key."""

    def test_from_date_object(self) -> None:
        """Should convert calendar month to zero-based index."""
        assert month_key_for_date(date(2024, 1, 15)) == "2024-00"
        assert month_key_for_date(date(2024, 12, 31)) == "2024-11"

    def test_from_iso_string(self) -> None:
        """Should accept ISO date strings."""
        assert month_key_for_date("2024-03-09") == "2024-02"

    def test_from_iso_datetime_string(self) -> None:
        """Should ignore a time component."""
        assert month_key_for_date("2024-03-09T10:30:00") == "2024-02"

    def test_current_month_key_uses_given_date(self) -> None:
        """Should use the reference date when provided."""
        assert current_month_key(date(2025, 7, 4)) == "2025-06"


class TestFromCalendarMonth:
    """Tests for from_calendar_month."""

    def test_converts_one_based_month(self) -> None:
        """Should turn YYYY-MM (1-12) into a zero-based key."""
        assert from_calendar_month("2024-01") == "2024-00"
        assert from_calendar_month("2024-12") == "2024-11"

    def test_invalid_month_raises_valueerror(self) -> None:
        """Should reject month 13 and garbage."""
        with pytest.raises(ValueError):
            from_calendar_month("2024-13")
        with pytest.raises(ValueError):
            from_calendar_month("January")


class TestMonthRange:
    """Tests for month_range."""

    def test_january_range(self) -> None:
        """Should calculate range for January."""
        since, until, label = month_range(MonthKey("2025-00"))

        assert since == "2025-01-01"
        assert until == "2025-02-01"
        assert label == "January 2025"

    def test_december_range_crosses_year(self) -> None:
        """Should handle December (crosses year boundary)."""
        since, until, label = month_range(MonthKey("2025-11"))

        assert since == "2025-12-01"
        assert until == "2026-01-01"
        assert label == "December 2025"

    def test_february_leap_year(self) -> None:
        """Should handle February in leap year."""
        since, until, label = month_range(MonthKey("2024-01"))

        assert since == "2024-02-01"
        assert until == "2024-03-01"  # 29 days in Feb 2024
        assert label == "February 2024"

    def test_invalid_month_key_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month key."""
        with pytest.raises(ValueError):
            month_range(MonthKey("invalid"))


class TestShiftMonth:
    """Tests for shift_month."""

    def test_next_month(self) -> None:
        """Should move forward within a year."""
        assert shift_month(MonthKey("2024-05"), 1) == "2024-06"

    def test_previous_month_crosses_year(self) -> None:
        """Should wrap from January back to December."""
        assert shift_month(MonthKey("2024-00"), -1) == "2023-11"

    def test_next_month_crosses_year(self) -> None:
        """Should wrap from December to January."""
        assert shift_month(MonthKey("2024-11"), 1) == "2025-00"

    def test_large_delta(self) -> None:
        """Should handle multi-year shifts."""
        assert shift_month(MonthKey("2024-03"), -27) == "2021-12"


class TestRecentMonthKeys:
    """Tests for recent_month_keys."""

    def test_newest_first(self) -> None:
        """Should start at the current month and go back."""
        keys = recent_month_keys(3, today=date(2024, 2, 10))
        assert keys == ["2024-01", "2024-00", "2023-11"]

    def test_default_twelve_months(self) -> None:
        """Should list a year of months by default."""
        assert len(recent_month_keys(today=date(2024, 2, 10))) == 12
