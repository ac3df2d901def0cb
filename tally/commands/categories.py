"""Category commands (list, add, rename, delete)."""

import sys

from rich.table import Table

from tally.commands.common import STORE_ERRORS, console, open_store, resolve_month
from tally.dates import month_range
from tally.domain.categories import custom_categories, is_default_category
from tally.domain.models import CategoryName, MonthKey
from tally.ledger import BudgetLedger, sync_budget_with_categories
from tally.registry import CategoryRegistry


def report_reconciliation(ledger: BudgetLedger, registry: CategoryRegistry, month_key: MonthKey) -> None:
    """Reconcile the month's budget with the registry and say if it changed."""
    if sync_budget_with_categories(ledger, registry, month_key):
        _, _, label = month_range(month_key)
        console.print(f"[dim]Redistributed the {label} budget equally across {len(registry)} categories[/dim]")


def list_categories_command() -> None:
    """List categories, marking the built-in defaults."""
    try:
        store, _ = open_store()
        registry = CategoryRegistry(store)
    except STORE_ERRORS as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not registry.categories:
        console.print("[yellow]No categories yet[/yellow]")
        return

    custom_count = len(custom_categories(registry.categories))
    table = Table(title=f"Categories ({len(registry)}, {custom_count} custom)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Category", style="magenta")
    table.add_column("Type", style="dim")

    for idx, category in enumerate(registry.categories, 1):
        table.add_row(str(idx), category, "default" if is_default_category(category) else "custom")

    console.print(table)


def add_category_command(name: str, month: str | None = None) -> None:
    """Add a category and reconcile the month's budget."""
    name = name.strip()
    if not name:
        console.print("[red]Category name cannot be empty[/red]")
        sys.exit(1)

    month_key = resolve_month(month)

    try:
        store, _ = open_store()
        registry = CategoryRegistry(store)

        if registry.add_category(CategoryName(name)):
            console.print(f"[green]✓[/green] Added category: {name}")
        else:
            console.print(f"[yellow]Category '{name}' already exists[/yellow]")

        report_reconciliation(BudgetLedger(store), registry, month_key)

    except STORE_ERRORS as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def rename_category_command(old_name: str, new_name: str, month: str | None = None) -> None:
    """Rename a category and reconcile the month's budget."""
    month_key = resolve_month(month)

    try:
        store, _ = open_store()
        registry = CategoryRegistry(store)

        error = registry.update_category(CategoryName(old_name), CategoryName(new_name.strip()))
        if error:
            console.print(f"[red]{error}[/red]")
            sys.exit(1)

        console.print(f"[green]✓[/green] Renamed {old_name} to {new_name.strip()}")
        report_reconciliation(BudgetLedger(store), registry, month_key)

    except STORE_ERRORS as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def delete_category_command(name: str, month: str | None = None) -> None:
    """Delete a category and reconcile the month's budget."""
    month_key = resolve_month(month)

    try:
        store, _ = open_store()
        registry = CategoryRegistry(store)

        if not registry.delete_category(CategoryName(name)):
            console.print(f"[red]Category '{name}' not found[/red]")
            sys.exit(1)

        console.print(f"[green]✓[/green] Deleted category: {name}")
        report_reconciliation(BudgetLedger(store), registry, month_key)

    except STORE_ERRORS as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
