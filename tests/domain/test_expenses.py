"""Tests for tally.domain.expenses pure functions."""

import pytest

from tally.domain.expenses import (
    calculate_category_breakdown,
    calculate_category_spending,
    calculate_total_spent,
    expense_from_dict,
    expense_to_dict,
    filter_expenses,
    filter_expenses_for_month,
    remove_expense,
    replace_expense,
)
from tally.domain.models import CategoryName, Expense, Money, MonthKey

FOOD = CategoryName("Food")
BILLS = CategoryName("Bills")


def make_expense(expense_id: str, amount: float, date: str, category: str = "Food", note: str | None = None) -> Expense:
    return Expense(id=expense_id, amount=Money(amount), date=date, category=CategoryName(category), note=note)


class TestFilterExpensesForMonth:
    """Tests for filter_expenses_for_month."""

    def test_keeps_only_the_month(self) -> None:
        """Should match on the zero-based month key."""
        expenses = [
            make_expense("1", 10, "2024-01-31"),
            make_expense("2", 20, "2024-02-01"),
            make_expense("3", 30, "2023-01-15"),
        ]
        result = filter_expenses_for_month(expenses, MonthKey("2024-00"))
        assert [e.id for e in result] == ["1"]

    def test_no_matches(self) -> None:
        """Should return an empty list."""
        assert filter_expenses_for_month([make_expense("1", 10, "2024-01-31")], MonthKey("2024-05")) == []


class TestSpending:
    """Tests for calculate_category_spending and calculate_total_spent."""

    def test_sums_per_category(self) -> None:
        """Should total each category separately."""
        expenses = [
            make_expense("1", 12.5, "2024-01-02"),
            make_expense("2", 7.5, "2024-01-03"),
            make_expense("3", 100, "2024-01-04", "Bills"),
        ]
        spending = calculate_category_spending(expenses)
        assert spending == {FOOD: pytest.approx(20), BILLS: pytest.approx(100)}
        assert calculate_total_spent(expenses) == pytest.approx(120)

    def test_empty(self) -> None:
        """Should handle no expenses."""
        assert calculate_category_spending([]) == {}
        assert calculate_total_spent([]) == 0


class TestSerialization:
    """Tests for expense_to_dict and expense_from_dict."""

    def test_note_omitted_when_empty(self) -> None:
        """Should drop a missing note from the stored record."""
        assert "note" not in expense_to_dict(make_expense("1", 5, "2024-01-01"))

    def test_from_dict_with_note(self) -> None:
        """Should read all fields."""
        expense = expense_from_dict({"id": "a", "amount": 5, "date": "2024-01-01", "category": "Food", "note": "lunch"})
        assert expense == make_expense("a", 5.0, "2024-01-01", note="lunch")

    def test_from_dict_missing_field_raises(self) -> None:
        """Should raise KeyError for incomplete records."""
        with pytest.raises(KeyError):
            expense_from_dict({"id": "a", "amount": 5})

    def test_from_dict_malformed_date_raises(self) -> None:
        """Should raise ValueError for a date that is not YYYY-MM-DD."""
        with pytest.raises(ValueError):
            expense_from_dict({"id": "a", "amount": 5, "date": "yesterday", "category": "Food"})


class TestReplaceAndRemove:
    """Tests for replace_expense and remove_expense."""

    def test_replace(self) -> None:
        """Should swap the expense with the same id."""
        expenses = [make_expense("1", 5, "2024-01-01"), make_expense("2", 6, "2024-01-02")]
        updated, found = replace_expense(expenses, make_expense("2", 60, "2024-01-02"))
        assert found
        assert updated[1].amount == 60
        assert expenses[1].amount == 6

    def test_replace_unknown(self) -> None:
        """Should report a missing id."""
        _, found = replace_expense([], make_expense("1", 5, "2024-01-01"))
        assert not found

    def test_remove(self) -> None:
        """Should drop the matching expense."""
        remaining, found = remove_expense([make_expense("1", 5, "2024-01-01")], "1")
        assert found
        assert remaining == []

    def test_remove_unknown(self) -> None:
        """Should report a missing id."""
        remaining, found = remove_expense([make_expense("1", 5, "2024-01-01")], "nope")
        assert not found
        assert len(remaining) == 1


class TestFilterExpenses:
    """Tests for filter_expenses."""

    EXPENSES = [
        make_expense("1", 10, "2024-01-05"),
        make_expense("2", 20, "2024-01-10", "Bills"),
        make_expense("3", 30, "2024-01-20"),
    ]

    def test_no_filters(self) -> None:
        """Should keep everything."""
        assert filter_expenses(self.EXPENSES) == self.EXPENSES

    def test_category(self) -> None:
        """Should keep one category."""
        assert [e.id for e in filter_expenses(self.EXPENSES, category=FOOD)] == ["1", "3"]

    def test_exact_date(self) -> None:
        """Should match the date exactly."""
        assert [e.id for e in filter_expenses(self.EXPENSES, on="2024-01-10")] == ["2"]
        assert filter_expenses(self.EXPENSES, on="2024-01-11") == []

    def test_range_is_inclusive(self) -> None:
        """Should keep expenses on both range ends."""
        result = filter_expenses(self.EXPENSES, since="2024-01-05", until="2024-01-10")
        assert [e.id for e in result] == ["1", "2"]

    def test_open_ended_range(self) -> None:
        """Should allow either end of the range to be omitted."""
        assert [e.id for e in filter_expenses(self.EXPENSES, since="2024-01-10")] == ["2", "3"]
        assert [e.id for e in filter_expenses(self.EXPENSES, until="2024-01-09")] == ["1"]

    def test_combined(self) -> None:
        """Should require every given filter to match."""
        result = filter_expenses(self.EXPENSES, category=FOOD, since="2024-01-06", until="2024-01-31")
        assert [e.id for e in result] == ["3"]


class TestCategoryBreakdown:
    """Tests for calculate_category_breakdown."""

    def test_sorted_by_amount(self) -> None:
        """Should list the biggest spender first with its share of the total."""
        expenses = [
            make_expense("1", 10, "2024-01-05"),
            make_expense("2", 20, "2024-01-10", "Bills"),
            make_expense("3", 30, "2024-01-20"),
        ]
        breakdown = calculate_category_breakdown(expenses)

        assert [share.category for share in breakdown] == [FOOD, BILLS]
        assert breakdown[0].amount == pytest.approx(40)
        assert breakdown[0].percentage == pytest.approx(200 / 3)
        assert breakdown[1].percentage == pytest.approx(100 / 3)

    def test_empty(self) -> None:
        """Should return nothing for no expenses."""
        assert calculate_category_breakdown([]) == []

    def test_zero_total(self) -> None:
        """Should not divide by zero."""
        breakdown = calculate_category_breakdown([make_expense("1", 0, "2024-01-05")])
        assert breakdown[0].percentage == 0
