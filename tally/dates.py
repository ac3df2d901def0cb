"""Date utilities for tally.

Pure functions for building, parsing and navigating month keys.

Month keys use a zero-based month index ("2024-00" is January 2024).
Every conversion between month keys and calendar dates goes through
this module so the index is never mixed up with the 1-12 month number.
"""

from datetime import date, datetime, timedelta

from tally.domain.models import MonthKey


def make_month_key(year: int, month_index: int) -> MonthKey:
    """Build a month key from a year and zero-based month index.

    Args:
        year: Four digit year.
        month_index: Month index, 0 for January through 11 for December.

    Returns:
        Month key such as "2024-00".

    Raises:
        ValueError: If month_index is outside 0-11.
    """
    if not 0 <= month_index <= 11:
        raise ValueError(f"Month index must be between 0 and 11, got {month_index}")
    return MonthKey(f"{year}-{month_index:02d}")


def parse_month_key(month_key: str) -> tuple[int, int]:
    """Split a month key into year and zero-based month index.

    Args:
        month_key: Month key such as "2024-00".

    Returns:
        Tuple of (year, month_index).

    Raises:
        ValueError: If the key is malformed or the index is outside 0-11.
    """
    parts = month_key.split("-")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid month key: {month_key!r}")

    year, month_index = int(parts[0]), int(parts[1])
    if not 0 <= month_index <= 11:
        raise ValueError(f"Invalid month index in {month_key!r}")

    return year, month_index


def month_key_for_date(value: date | str) -> MonthKey:
    """Get the month key a date falls in.

    Args:
        value: A date, or an ISO date string (YYYY-MM-DD).

    Returns:
        Month key for that date.
    """
    if isinstance(value, str):
        value = datetime.strptime(value[:10], "%Y-%m-%d").date()
    return make_month_key(value.year, value.month - 1)


def current_month_key(today: date | None = None) -> MonthKey:
    """Get the month key for today (or the given date)."""
    return month_key_for_date(today or date.today())


def from_calendar_month(month: str) -> MonthKey:
    """Convert a YYYY-MM string (months 1-12) into a month key.

    Args:
        month: Month in YYYY-MM format, e.g. "2024-01" for January.

    Returns:
        Month key, e.g. "2024-00".

    Raises:
        ValueError: If the month is not a valid YYYY-MM string.
    """
    dt = datetime.strptime(month, "%Y-%m")
    return make_month_key(dt.year, dt.month - 1)


def month_range(month_key: MonthKey) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month_key: Month key with a zero-based month index.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    year, month_index = parse_month_key(month_key)
    dt = datetime(year, month_index + 1, 1)
    since = dt.strftime("%Y-%m-01")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = next_month.strftime("%Y-%m-%d")
    label = dt.strftime("%B %Y")
    return since, until, label


def shift_month(month_key: MonthKey, delta: int) -> MonthKey:
    """Move a month key forward or backward by whole months.

    Args:
        month_key: Starting month key.
        delta: Number of months to move (negative goes back).

    Returns:
        The shifted month key.
    """
    year, month_index = parse_month_key(month_key)
    absolute = year * 12 + month_index + delta
    return make_month_key(absolute // 12, absolute % 12)


def recent_month_keys(count: int = 12, today: date | None = None) -> list[MonthKey]:
    """List the most recent month keys, newest first.

    Args:
        count: Number of months to include.
        today: Reference date. Defaults to today.

    Returns:
        List of month keys starting with the current month.
    """
    current = current_month_key(today)
    return [shift_month(current, -offset) for offset in range(count)]
