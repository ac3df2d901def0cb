"""Budget ledger: per-month category budgets over a key-value store.

Each operation loads the full budget record, applies a pure function from
tally.domain.budget and saves the full record back (last write wins).
"""

import logging

from tally.domain import budget as budget_ops
from tally.domain.budget import CategoryDrift
from tally.domain.models import BudgetData, CategoryName, Money, MonthKey, MonthlyBudget
from tally.registry import CategoryRegistry
from tally.store.kv import KeyValueStore
from tally.store.records import load_budget_data, save_budget_data

logger = logging.getLogger(__name__)


class BudgetLedger:
    """Owns every month's budget.

    The ledger never reads the category registry. Callers pass the live
    categories in and decide when to reconcile.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    @property
    def budget_data(self) -> BudgetData:
        return load_budget_data(self.store)

    def _save(self, budget_data: BudgetData) -> None:
        save_budget_data(self.store, budget_data)

    def get_monthly_budget(self, month_key: MonthKey) -> MonthlyBudget:
        """Get a month's budget, or an empty dict if none is set."""
        return budget_ops.get_monthly_budget(self.budget_data, month_key)

    def set_monthly_budget(self, month_key: MonthKey, budget: MonthlyBudget) -> None:
        """Replace a month's whole budget."""
        self._save(budget_ops.set_monthly_budget(self.budget_data, month_key, budget))
        logger.debug("Set budget for %s: %s", month_key, budget)

    def set_category_budget(self, month_key: MonthKey, category: CategoryName, amount: Money) -> None:
        """Set one category's budget for a month. An amount of 0 clears it."""
        self._save(budget_ops.set_category_budget(self.budget_data, month_key, category, amount))
        logger.debug("Set %s budget for %s to %s", category, month_key, amount)

    def distribute_budget_equally(self, month_key: MonthKey, total: Money, categories: list[CategoryName]) -> None:
        """Reset a month to equal shares of total. Does nothing without categories."""
        if not categories:
            logger.debug("No categories to distribute %s across for %s", total, month_key)
            return

        self._save(budget_ops.distribute_budget_equally(self.budget_data, month_key, total, categories))
        logger.debug("Distributed %s across %d categories for %s", total, len(categories), month_key)

    def redistribute_budget(self, month_key: MonthKey, categories: list[CategoryName]) -> None:
        """Spread a month's existing total equally over categories.

        Does nothing when the month's total is 0 or categories is empty.
        """
        budget_data = self.budget_data
        updated = budget_ops.redistribute_budget(budget_data, month_key, categories)
        if updated is not budget_data:
            self._save(updated)
            logger.debug("Redistributed %s across %d categories", month_key, len(categories))

    def detect_drift(self, month_key: MonthKey, categories: list[CategoryName]) -> CategoryDrift:
        return budget_ops.detect_drift(self.get_monthly_budget(month_key), categories)

    def reconcile(self, month_key: MonthKey, categories: list[CategoryName]) -> bool:
        """Redistribute a month if its categories differ from the live ones.

        Safe to call repeatedly: without drift nothing is written.

        Returns:
            True if the stored budget changed.
        """
        budget_data = self.budget_data
        updated, drift = budget_ops.reconcile(budget_data, month_key, categories)
        if updated is budget_data:
            return False

        self._save(updated)
        logger.info(
            "Reconciled %s budget (missing: %s, extra: %s)",
            month_key,
            ", ".join(drift.missing) or "-",
            ", ".join(drift.extra) or "-",
        )
        return True


def sync_budget_with_categories(ledger: BudgetLedger, registry: CategoryRegistry, month_key: MonthKey) -> bool:
    """Reconcile one month against the registry's current categories.

    Called after every registry mutation.

    Returns:
        True if the month's budget was redistributed.
    """
    return ledger.reconcile(month_key, registry.categories)
