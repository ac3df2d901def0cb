"""Domain models and types for tally.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Budget and category logic separated from storage
"""

from tally.domain.models import (
    DEFAULT_CATEGORIES,
    BudgetData,
    CategoryName,
    Expense,
    Money,
    MonthKey,
    MonthlyBudget,
)

__all__ = [
    "DEFAULT_CATEGORIES",
    "BudgetData",
    "CategoryName",
    "Expense",
    "Money",
    "MonthKey",
    "MonthlyBudget",
]
