"""Helpers shared by the command modules."""

import json
import math
import sqlite3
import sys
from typing import Any

from rich.console import Console

from tally.config import load_config, resolve_db_path
from tally.dates import current_month_key, from_calendar_month
from tally.domain.models import Money, MonthKey
from tally.store.kv import SqliteStore
from tally.store.records import RecordError
from tally.store.schema import database_exists

console = Console()

# Errors raised while reading or writing the store
STORE_ERRORS = (sqlite3.Error, json.JSONDecodeError, RecordError)


def open_store() -> tuple[SqliteStore, dict[str, Any]]:
    """Open the configured SQLite store.

    Exits with an error message if the database has not been initialized.

    Returns:
        Tuple of (store, config).
    """
    config = load_config()
    db_path = resolve_db_path(config)
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'tally init' first.[/red]", style="bold")
        sys.exit(1)
    return SqliteStore(db_path), config


def resolve_month(month: str | None) -> MonthKey:
    """Turn a --month option (YYYY-MM, months 1-12) into a month key.

    Exits with an error message if the month is malformed. No month means the current one.
    """
    if not month:
        return current_month_key()
    try:
        return from_calendar_month(month)
    except ValueError:
        console.print(f"[red]Invalid month: {month} (expected YYYY-MM)[/red]")
        sys.exit(1)


def parse_money(amount_str: str) -> Money | None:
    """Parse a non-negative amount.

    Args:
        amount_str: String containing the amount.

    Returns:
        Money amount, or None if invalid or negative.
    """
    try:
        amount = float(amount_str)
    except ValueError:
        return None
    if not math.isfinite(amount) or amount < 0:
        return None
    return Money(amount)


def parse_amount_or_exit(amount_str: str) -> Money:
    """Parse a non-negative amount, exiting with an error if it is invalid."""
    amount = parse_money(amount_str)
    if amount is None:
        console.print(f"[red]Invalid amount: {amount_str} (must be a number >= 0)[/red]")
        sys.exit(1)
    return amount


def format_money(amount: float, symbol: str = "$") -> str:
    """Format an amount with the currency symbol and two decimals."""
    if amount < 0:
        return f"-{symbol}{abs(amount):,.2f}"
    return f"{symbol}{amount:,.2f}"
