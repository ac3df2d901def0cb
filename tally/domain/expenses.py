"""Pure functions for expense filtering and spending aggregation."""

from dataclasses import dataclass
from typing import Any

from tally.dates import month_key_for_date
from tally.domain.models import CategoryName, Expense, Money, MonthKey


@dataclass(frozen=True)
class CategoryShare:
    """One category's slice of a set of expenses."""

    category: CategoryName
    amount: Money
    percentage: float


def expense_to_dict(expense: Expense) -> dict[str, Any]:
    """Convert an expense to a JSON-compatible dict, dropping an empty note."""
    record: dict[str, Any] = {
        "id": expense.id,
        "amount": expense.amount,
        "date": expense.date,
        "category": expense.category,
    }
    if expense.note:
        record["note"] = expense.note
    return record


def expense_from_dict(record: dict[str, Any]) -> Expense:
    """Build an expense from a stored dict.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If the amount is not a number or the date is not YYYY-MM-DD.
    """
    month_key_for_date(record["date"])
    return Expense(
        id=str(record["id"]),
        amount=Money(float(record["amount"])),
        date=record["date"],
        category=CategoryName(record["category"]),
        note=record.get("note") or None,
    )


def filter_expenses_for_month(expenses: list[Expense], month_key: MonthKey) -> list[Expense]:
    """Keep the expenses dated within a month.

    Args:
        expenses: Expenses to filter.
        month_key: Month to keep.

    Returns:
        Expenses in that month, in their original order.
    """
    return [expense for expense in expenses if month_key_for_date(expense.date) == month_key]


def calculate_category_spending(expenses: list[Expense]) -> dict[CategoryName, Money]:
    """Total the amount spent per category.

    Args:
        expenses: Expenses to total (usually one month's worth).

    Returns:
        Dictionary mapping category names to amounts spent.
    """
    spending: dict[CategoryName, Money] = {}
    for expense in expenses:
        spending[expense.category] = Money(spending.get(expense.category, 0) + expense.amount)
    return spending


def calculate_total_spent(expenses: list[Expense]) -> Money:
    """Sum the amounts of all expenses."""
    return Money(sum(expense.amount for expense in expenses))


def replace_expense(expenses: list[Expense], updated: Expense) -> tuple[list[Expense], bool]:
    """Replace the expense with the same id.

    Returns:
        Tuple of (new_expenses, found).
    """
    found = any(expense.id == updated.id for expense in expenses)
    return [updated if expense.id == updated.id else expense for expense in expenses], found


def remove_expense(expenses: list[Expense], expense_id: str) -> tuple[list[Expense], bool]:
    """Remove the expense with the given id.

    Returns:
        Tuple of (new_expenses, found).
    """
    remaining = [expense for expense in expenses if expense.id != expense_id]
    return remaining, len(remaining) != len(expenses)


def filter_expenses(
    expenses: list[Expense],
    category: CategoryName | None = None,
    on: str | None = None,
    since: str | None = None,
    until: str | None = None,
) -> list[Expense]:
    """Narrow expenses by category, a single date or a date range.

    Dates are ISO strings (YYYY-MM-DD) and compared as such. Range ends are
    inclusive and either end may be left open. Filters left as None match
    everything.

    Args:
        expenses: Expenses to filter.
        category: Keep only this category.
        on: Keep only expenses on this exact date.
        since: Keep expenses on or after this date.
        until: Keep expenses on or before this date.

    Returns:
        Matching expenses, in their original order.
    """
    matched = []
    for expense in expenses:
        if category is not None and expense.category != category:
            continue
        if on is not None and expense.date != on:
            continue
        if since is not None and expense.date < since:
            continue
        if until is not None and expense.date > until:
            continue
        matched.append(expense)
    return matched


def calculate_category_breakdown(expenses: list[Expense]) -> list[CategoryShare]:
    """Each category's spending and its share of the total, largest first.

    Categories with equal spending keep the order they first appear in.
    """
    spending = calculate_category_spending(expenses)
    total = calculate_total_spent(expenses)
    shares = [
        CategoryShare(category, amount, (amount / total) * 100 if total > 0 else 0.0)
        for category, amount in spending.items()
    ]
    return sorted(shares, key=lambda share: share.amount, reverse=True)
