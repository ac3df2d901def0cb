"""Domain type definitions for tally.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in major currency units (e.g., dollars)
- MonthKey: Month in YYYY-MM format with a zero-based month index
- CategoryName: Name of a spending category
"""

from dataclasses import dataclass
from typing import NewType

# Money is a float so equal shares like 100 / 3 can be stored as-is
Money = NewType("Money", float)

# MonthKey uses a zero-based month: "2024-00" is January 2024, "2024-11" is December
MonthKey = NewType("MonthKey", str)

# Category name for spending categories
CategoryName = NewType("CategoryName", str)

MonthlyBudget = dict[CategoryName, Money]

BudgetData = dict[MonthKey, MonthlyBudget]

DEFAULT_CATEGORIES: tuple[CategoryName, ...] = (
    CategoryName("Food"),
    CategoryName("Transport"),
    CategoryName("Shopping"),
    CategoryName("Entertainment"),
    CategoryName("Bills"),
    CategoryName("Healthcare"),
    CategoryName("Education"),
    CategoryName("Other"),
)


@dataclass(frozen=True)
class Expense:
    """Immutable expense record."""

    id: str
    amount: Money
    date: str  # ISO date (YYYY-MM-DD)
    category: CategoryName
    note: str | None = None
