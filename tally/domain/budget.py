"""Pure functions for budget allocation and reconciliation.

This module contains the functional core for budget operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Functions that change the ledger take a BudgetData record and return a new
one. The input record and its monthly budgets are never modified.
"""

from dataclasses import dataclass, field

from tally.domain.models import BudgetData, CategoryName, Money, MonthKey, MonthlyBudget


@dataclass(frozen=True)
class CategoryDrift:
    """Immutable difference between a monthly budget and the live categories."""

    missing: list[CategoryName] = field(default_factory=list)  # in registry, not budgeted
    extra: list[CategoryName] = field(default_factory=list)  # budgeted, no longer in registry

    @property
    def has_drift(self) -> bool:
        return bool(self.missing or self.extra)


@dataclass(frozen=True)
class CategoryBudgetStatus:
    """Immutable budget status for a single category."""

    category: CategoryName
    allocated: Money
    spent: Money
    remaining: Money
    percentage: float
    over_budget: bool

    @property
    def overspend(self) -> Money:
        return Money(self.spent - self.allocated) if self.over_budget else Money(0)


@dataclass(frozen=True)
class BudgetStatus:
    """Immutable budget status for a month."""

    total_budget: Money
    total_spent: Money
    remaining: Money
    spent_percentage: float
    is_over_budget: bool
    budgeted: list[CategoryBudgetStatus]
    unbudgeted: list[CategoryBudgetStatus]


def get_monthly_budget(budget_data: BudgetData, month_key: MonthKey) -> MonthlyBudget:
    """Get the budget for a month.

    Args:
        budget_data: The full ledger record.
        month_key: Month to look up.

    Returns:
        Copy of the month's budget, or an empty dict if none is stored.
    """
    return dict(budget_data.get(month_key, {}))


def set_monthly_budget(budget_data: BudgetData, month_key: MonthKey, budget: MonthlyBudget) -> BudgetData:
    """Replace the whole budget for a month.

    Args:
        budget_data: The full ledger record.
        month_key: Month to overwrite.
        budget: New budget for the month.

    Returns:
        New ledger record with the month replaced.
    """
    return {**budget_data, month_key: dict(budget)}


def set_category_budget(
    budget_data: BudgetData,
    month_key: MonthKey,
    category: CategoryName,
    amount: Money,
) -> BudgetData:
    """Set one category's amount for a month, keeping the other entries.

    Setting an amount of 0 keeps the entry in the month's budget.

    Args:
        budget_data: The full ledger record.
        month_key: Month to update.
        category: Category to set.
        amount: Non-negative amount.

    Returns:
        New ledger record.
    """
    monthly_budget = get_monthly_budget(budget_data, month_key)
    monthly_budget[category] = amount
    return set_monthly_budget(budget_data, month_key, monthly_budget)


def calculate_total_budget(budget: MonthlyBudget) -> Money:
    """Sum every amount in a monthly budget."""
    return Money(sum(budget.values()))


def split_equally(total: Money, categories: list[CategoryName]) -> MonthlyBudget | None:
    """Split a total into equal shares, one per category.

    Args:
        total: Non-negative amount to split.
        categories: Categories that receive a share.

    Returns:
        Budget with one entry per category, or None when there are no categories.
    """
    if not categories:
        return None

    per_category = Money(total / len(categories))
    return {category: per_category for category in categories}


def distribute_budget_equally(
    budget_data: BudgetData,
    month_key: MonthKey,
    total: Money,
    categories: list[CategoryName],
) -> BudgetData:
    """Reset a month to equal shares of a total across categories.

    Any previous per-category amounts for the month are discarded.

    Args:
        budget_data: The full ledger record.
        month_key: Month to reset.
        total: Non-negative total to distribute.
        categories: Categories that receive a share.

    Returns:
        New ledger record, or the same record when categories is empty.
    """
    new_budget = split_equally(total, categories)
    if new_budget is None:
        return budget_data
    return set_monthly_budget(budget_data, month_key, new_budget)


def redistribute_budget(
    budget_data: BudgetData,
    month_key: MonthKey,
    categories: list[CategoryName],
) -> BudgetData:
    """Spread a month's existing total equally over a new category set.

    The month total is preserved; per-category weighting is not.

    Args:
        budget_data: The full ledger record.
        month_key: Month to redistribute.
        categories: Live categories to distribute across.

    Returns:
        New ledger record, or the same record when the total is 0 or categories is empty.
    """
    total = calculate_total_budget(get_monthly_budget(budget_data, month_key))

    if total > 0 and categories:
        return distribute_budget_equally(budget_data, month_key, total, categories)

    return budget_data


def detect_drift(budget: MonthlyBudget, categories: list[CategoryName]) -> CategoryDrift:
    """Compare a month's budgeted categories with the live categories.

    Args:
        budget: Monthly budget to check.
        categories: Live categories, in registry order.

    Returns:
        CategoryDrift with missing categories in registry order and extra
        categories in budget order.
    """
    live = set(categories)
    missing = [cat for cat in categories if cat not in budget]
    extra = [cat for cat in budget if cat not in live]
    return CategoryDrift(missing=missing, extra=extra)


def reconcile(
    budget_data: BudgetData,
    month_key: MonthKey,
    categories: list[CategoryName],
) -> tuple[BudgetData, CategoryDrift]:
    """Redistribute a month only if its categories have drifted.

    Args:
        budget_data: The full ledger record.
        month_key: Month to reconcile.
        categories: Live categories.

    Returns:
        Tuple of (budget_data, drift). budget_data is the input record when there was no drift.
    """
    drift = detect_drift(get_monthly_budget(budget_data, month_key), categories)
    if not drift.has_drift:
        return budget_data, drift
    return redistribute_budget(budget_data, month_key, categories), drift


def partition_by_budget(
    budget: MonthlyBudget,
    categories: list[CategoryName],
) -> tuple[list[CategoryName], list[CategoryName]]:
    """Split categories into budgeted and unbudgeted.

    A category counts as unbudgeted when it is absent from the budget or set to 0.

    Args:
        budget: Monthly budget.
        categories: Live categories, in registry order.

    Returns:
        Tuple of (with_budget, without_budget), both in registry order.
    """
    with_budget = [cat for cat in categories if budget.get(cat, 0) > 0]
    without_budget = [cat for cat in categories if budget.get(cat, 0) <= 0]
    return with_budget, without_budget


def calculate_percentage(spent: Money, allocated: Money) -> float:
    """Calculate percentage of an allocation that has been spent.

    Returns:
        Percentage spent (0-100+), or 0.0 when nothing is allocated.
    """
    if allocated <= 0:
        return 0.0
    return (spent / allocated) * 100


def compute_category_status(category: CategoryName, allocated: Money, spent: Money) -> CategoryBudgetStatus:
    """Compute spent-versus-budget figures for one category.

    Args:
        category: Category name.
        allocated: Budgeted amount.
        spent: Amount spent this month.

    Returns:
        CategoryBudgetStatus for the category.
    """
    return CategoryBudgetStatus(
        category=category,
        allocated=allocated,
        spent=spent,
        remaining=Money(allocated - spent),
        percentage=calculate_percentage(spent, allocated),
        over_budget=spent > allocated and allocated > 0,
    )


def compute_budget_status(
    budget: MonthlyBudget,
    categories: list[CategoryName],
    spending: dict[CategoryName, Money],
) -> BudgetStatus:
    """Compute budget status for a month.

    Totals cover the whole budget and all spending, including categories
    that are no longer in the registry.

    Args:
        budget: Monthly budget.
        categories: Live categories, in registry order.
        spending: Amount spent per category this month.

    Returns:
        BudgetStatus with totals and per-category details.
    """
    total_budget = calculate_total_budget(budget)
    total_spent = Money(sum(spending.values()))

    with_budget, without_budget = partition_by_budget(budget, categories)

    def status_for(category: CategoryName) -> CategoryBudgetStatus:
        return compute_category_status(
            category,
            Money(budget.get(category, 0)),
            Money(spending.get(category, 0)),
        )

    return BudgetStatus(
        total_budget=total_budget,
        total_spent=total_spent,
        remaining=Money(total_budget - total_spent),
        spent_percentage=calculate_percentage(total_spent, total_budget),
        is_over_budget=total_spent > total_budget,
        budgeted=[status_for(cat) for cat in with_budget],
        unbudgeted=[status_for(cat) for cat in without_budget],
    )
