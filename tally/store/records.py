"""Typed access to the persisted records."""

import random
import string
import time

from tally.domain.expenses import expense_from_dict, expense_to_dict
from tally.domain.models import DEFAULT_CATEGORIES, BudgetData, CategoryName, Expense, Money, MonthKey
from tally.store.kv import KeyValueStore

CATEGORIES_KEY = "categories"
BUDGET_DATA_KEY = "budgetData"
EXPENSES_KEY = "expenses"


class RecordError(ValueError):
    """A stored record decoded as JSON but does not have the expected shape."""


def load_categories(store: KeyValueStore) -> list[CategoryName]:
    """Load the category list, falling back to the defaults if none is stored.

    Raises:
        RecordError: If the stored value is not a list of names.
    """
    saved = store.load(CATEGORIES_KEY)
    if saved is None:
        return list(DEFAULT_CATEGORIES)
    if not isinstance(saved, list) or not all(isinstance(name, str) for name in saved):
        raise RecordError(f"Invalid {CATEGORIES_KEY} record: expected a list of names")
    return [CategoryName(name) for name in saved]


def save_categories(store: KeyValueStore, categories: list[CategoryName]) -> None:
    store.save(CATEGORIES_KEY, list(categories))


def load_budget_data(store: KeyValueStore) -> BudgetData:
    """Load every month's budget, or an empty record if none is stored.

    Raises:
        RecordError: If the stored value is not a mapping of months to amounts.
    """
    saved = store.load(BUDGET_DATA_KEY)
    if saved is None:
        return {}
    try:
        return {
            MonthKey(month_key): {CategoryName(cat): Money(float(amount)) for cat, amount in budget.items()}
            for month_key, budget in saved.items()
        }
    except (AttributeError, TypeError, ValueError) as e:
        raise RecordError(f"Invalid {BUDGET_DATA_KEY} record: {e}") from e


def save_budget_data(store: KeyValueStore, budget_data: BudgetData) -> None:
    store.save(BUDGET_DATA_KEY, {month_key: dict(budget) for month_key, budget in budget_data.items()})


def load_expenses(store: KeyValueStore) -> list[Expense]:
    """Load all expenses, or an empty list if none are stored.

    Raises:
        RecordError: If an expense is missing a field or has a malformed amount or date.
    """
    saved = store.load(EXPENSES_KEY)
    if saved is None:
        return []
    try:
        return [expense_from_dict(record) for record in saved]
    except KeyError as e:
        raise RecordError(f"Invalid {EXPENSES_KEY} record: missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise RecordError(f"Invalid {EXPENSES_KEY} record: {e}") from e


def save_expenses(store: KeyValueStore, expenses: list[Expense]) -> None:
    store.save(EXPENSES_KEY, [expense_to_dict(expense) for expense in expenses])


def generate_expense_id() -> str:
    """Generate an expense id from the current time in ms plus a random suffix."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"{int(time.time() * 1000)}{suffix}"
