"""Expense book: the persisted list of expenses."""

import logging

from tally.domain.expenses import filter_expenses_for_month, remove_expense, replace_expense
from tally.domain.models import CategoryName, Expense, Money, MonthKey
from tally.store.kv import KeyValueStore
from tally.store.records import generate_expense_id, load_expenses, save_expenses

logger = logging.getLogger(__name__)


class ExpenseBook:
    """Add, update, delete and list expenses."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    @property
    def expenses(self) -> list[Expense]:
        return load_expenses(self.store)

    def add_expense(self, amount: Money, date: str, category: CategoryName, note: str | None = None) -> Expense:
        """Record a new expense and return it with its generated id."""
        expense = Expense(id=generate_expense_id(), amount=amount, date=date, category=category, note=note)
        save_expenses(self.store, [*self.expenses, expense])
        logger.debug("Added expense %s", expense.id)
        return expense

    def update_expense(self, expense: Expense) -> bool:
        """Replace the stored expense with the same id.

        Returns:
            True if an expense with that id existed.
        """
        updated, found = replace_expense(self.expenses, expense)
        if found:
            save_expenses(self.store, updated)
        return found

    def delete_expense(self, expense_id: str) -> bool:
        """Delete an expense by id.

        Returns:
            True if an expense with that id existed.
        """
        remaining, found = remove_expense(self.expenses, expense_id)
        if found:
            save_expenses(self.store, remaining)
            logger.debug("Deleted expense %s", expense_id)
        return found

    def expenses_for_month(self, month_key: MonthKey) -> list[Expense]:
        return filter_expenses_for_month(self.expenses, month_key)
