"""Tests for tally.ledger.BudgetLedger."""

from typing import Any

import pytest

from tally.domain.models import CategoryName, Money, MonthKey
from tally.ledger import BudgetLedger, sync_budget_with_categories
from tally.registry import CategoryRegistry
from tally.store.kv import MemoryStore
from tally.store.records import BUDGET_DATA_KEY, CATEGORIES_KEY

FOOD = CategoryName("Food")
TRANSPORT = CategoryName("Transport")
BILLS = CategoryName("Bills")
JAN = MonthKey("2024-00")


class CountingStore(MemoryStore):
    """MemoryStore that counts writes."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self.saves = 0
        super().__init__(initial)
        self.saves = 0

    def save(self, key: str, value: Any) -> None:
        self.saves += 1
        super().save(key, value)


class TestMonthlyBudget:
    """Tests for get/set of monthly and category budgets."""

    def test_unknown_month_is_empty(self) -> None:
        """Should return an empty budget."""
        assert BudgetLedger(MemoryStore()).get_monthly_budget(JAN) == {}

    def test_set_then_get(self) -> None:
        """Should read back the same mapping."""
        ledger = BudgetLedger(MemoryStore())
        ledger.set_monthly_budget(JAN, {FOOD: Money(12.34), BILLS: Money(0)})
        assert ledger.get_monthly_budget(JAN) == {FOOD: 12.34, BILLS: 0}

    def test_set_persists_whole_ledger(self) -> None:
        """Should keep other months when one is written."""
        store = MemoryStore({BUDGET_DATA_KEY: {"2023-11": {"Food": 10}}})
        BudgetLedger(store).set_monthly_budget(JAN, {FOOD: Money(20)})
        assert store.load(BUDGET_DATA_KEY) == {"2023-11": {"Food": 10}, "2024-00": {"Food": 20}}

    def test_set_category_budget_keeps_others(self) -> None:
        """Should update one entry."""
        ledger = BudgetLedger(MemoryStore())
        ledger.set_monthly_budget(JAN, {FOOD: Money(20), TRANSPORT: Money(30)})
        ledger.set_category_budget(JAN, FOOD, Money(50))
        assert ledger.get_monthly_budget(JAN) == {FOOD: 50, TRANSPORT: 30}

    def test_clear_with_zero_keeps_entry(self) -> None:
        """Should store an explicit zero."""
        may = MonthKey("2024-05")
        ledger = BudgetLedger(MemoryStore())
        ledger.set_category_budget(may, BILLS, Money(0))
        assert ledger.get_monthly_budget(may) == {BILLS: 0}


class TestDistribution:
    """Tests for distribute_budget_equally and redistribute_budget."""

    def test_distribute(self) -> None:
        """Should split the total equally."""
        ledger = BudgetLedger(MemoryStore())
        ledger.distribute_budget_equally(JAN, Money(100), [FOOD, TRANSPORT])
        assert ledger.get_monthly_budget(JAN) == {FOOD: 50, TRANSPORT: 50}

    def test_distribute_without_categories_does_not_write(self) -> None:
        """Should skip the write entirely."""
        store = CountingStore()
        BudgetLedger(store).distribute_budget_equally(JAN, Money(100), [])
        assert store.saves == 0
        assert store.load(BUDGET_DATA_KEY) is None

    def test_redistribute_preserves_total(self) -> None:
        """Should keep the month total across a category change."""
        ledger = BudgetLedger(MemoryStore())
        ledger.set_monthly_budget(JAN, {FOOD: Money(50), TRANSPORT: Money(50)})
        ledger.redistribute_budget(JAN, [FOOD, TRANSPORT, BILLS])

        budget = ledger.get_monthly_budget(JAN)
        assert set(budget) == {FOOD, TRANSPORT, BILLS}
        assert all(amount == pytest.approx(33.33, abs=0.01) for amount in budget.values())
        assert sum(budget.values()) == pytest.approx(100)

    def test_redistribute_zero_total_does_not_write(self) -> None:
        """Should leave a zero-total month untouched."""
        store = CountingStore({BUDGET_DATA_KEY: {"2024-00": {"Food": 0}}})
        BudgetLedger(store).redistribute_budget(JAN, [FOOD, BILLS])
        assert store.saves == 0


class TestReconcile:
    """Tests for reconcile and sync_budget_with_categories."""

    def test_reconcile_without_drift_does_not_write(self) -> None:
        """Should be safe to call on every update."""
        store = CountingStore({BUDGET_DATA_KEY: {"2024-00": {"Food": 70, "Transport": 30}}})
        ledger = BudgetLedger(store)

        assert not ledger.reconcile(JAN, [FOOD, TRANSPORT])
        assert not ledger.reconcile(JAN, [FOOD, TRANSPORT])
        assert store.saves == 0
        assert ledger.get_monthly_budget(JAN) == {FOOD: 70, TRANSPORT: 30}

    def test_reconcile_with_drift(self) -> None:
        """Should redistribute once and then settle."""
        ledger = BudgetLedger(MemoryStore({BUDGET_DATA_KEY: {"2024-00": {"Food": 70, "Transport": 30}}}))

        assert ledger.reconcile(JAN, [FOOD, TRANSPORT, BILLS])
        assert not ledger.reconcile(JAN, [FOOD, TRANSPORT, BILLS])
        assert sum(ledger.get_monthly_budget(JAN).values()) == pytest.approx(100)

    def test_detect_drift(self) -> None:
        """Should report missing and extra categories."""
        ledger = BudgetLedger(MemoryStore({BUDGET_DATA_KEY: {"2024-00": {"Food": 10, "Gym": 10}}}))
        drift = ledger.detect_drift(JAN, [FOOD, BILLS])
        assert drift.missing == [BILLS]
        assert drift.extra == ["Gym"]

    def test_sync_after_registry_delete(self) -> None:
        """Should move a deleted category's share to the remaining categories."""
        store = MemoryStore(
            {
                CATEGORIES_KEY: ["Food", "Transport", "Bills"],
                BUDGET_DATA_KEY: {"2024-00": {"Food": 30, "Transport": 30, "Bills": 30}},
            }
        )
        registry = CategoryRegistry(store)
        ledger = BudgetLedger(store)

        registry.delete_category(BILLS)
        assert sync_budget_with_categories(ledger, registry, JAN)
        assert ledger.get_monthly_budget(JAN) == {FOOD: 45, TRANSPORT: 45}

    def test_sync_after_registry_rename(self) -> None:
        """Should carry the total over to the renamed category."""
        store = MemoryStore(
            {
                CATEGORIES_KEY: ["Food", "Transport"],
                BUDGET_DATA_KEY: {"2024-00": {"Food": 80, "Transport": 20}},
            }
        )
        registry = CategoryRegistry(store)
        ledger = BudgetLedger(store)

        registry.update_category(FOOD, CategoryName("Groceries"))
        assert sync_budget_with_categories(ledger, registry, JAN)
        assert ledger.get_monthly_budget(JAN) == {"Groceries": 50, TRANSPORT: 50}

    def test_sync_month_without_budget(self) -> None:
        """Should not create a budget for an empty month."""
        store = MemoryStore()
        ledger = BudgetLedger(store)
        assert not sync_budget_with_categories(ledger, CategoryRegistry(store), JAN)
        assert ledger.get_monthly_budget(JAN) == {}
