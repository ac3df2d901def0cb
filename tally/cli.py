"""CLI entry point for tally."""

import sys
import tomllib

import typer

from tally.commands.admin import backup_command, init_command
from tally.commands.budget import budget_command, months_command
from tally.commands.categories import (
    add_category_command,
    delete_category_command,
    list_categories_command,
    rename_category_command,
)
from tally.commands.common import console
from tally.commands.expenses import (
    add_expense_command,
    delete_expense_command,
    edit_expense_command,
    list_expenses_command,
)
from tally.config import load_config
from tally.log import configure_logging

app = typer.Typer(
    name="tally",
    help="Tally - track your expenses against monthly category budgets",
    add_completion=False,
)
categories_app = typer.Typer(help="Manage your spending categories.")
expenses_app = typer.Typer(help="Record and review your expenses.")
app.add_typer(categories_app, name="categories")
app.add_typer(expenses_app, name="expenses")

MONTH_HELP = "Month (YYYY-MM), defaults to the current month"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Tally - track your expenses against monthly category budgets."""
    try:
        config = load_config()
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file: {e}[/red]", style="bold")
        sys.exit(1)

    try:
        configure_logging(config["log_level"], verbose)
    except ValueError as e:
        console.print(f"[red]Invalid config file: {e}[/red]", style="bold")
        sys.exit(1)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize tally database and configuration."""
    init_command(force)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: ~/.tally/backups)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command()
def budget(
    total: str = typer.Option(None, "--total", help="Distribute this total equally across all categories"),
    set_category: str = typer.Option(None, "--set", help="Category to set a budget for (use with --amount)"),
    amount: str = typer.Option(None, "--amount", help="Budget amount for --set"),
    clear: str = typer.Option(None, "--clear", help="Category whose budget to clear"),
    show_unbudgeted: bool = typer.Option(False, "--show-unbudgeted", help="Also list categories without a budget"),
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
) -> None:
    """Set your monthly budget and see spending against it."""
    budget_command(total, set_category, amount, clear, show_unbudgeted, month)


@app.command()
def months(
    count: int = typer.Option(6, "--count", "-n", help="Number of months to show"),
) -> None:
    """Show budget and spending totals for recent months."""
    months_command(count)


@categories_app.command(name="list")
def list_categories() -> None:
    """List your categories."""
    list_categories_command()


@categories_app.command(name="add")
def add_category(
    name: str,
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
) -> None:
    """Add a category."""
    add_category_command(name, month)


@categories_app.command(name="rename")
def rename_category(
    old_name: str,
    new_name: str,
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
) -> None:
    """Rename a category, keeping its position."""
    rename_category_command(old_name, new_name, month)


@categories_app.command(name="delete")
def delete_category(
    name: str,
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
) -> None:
    """Delete a category."""
    delete_category_command(name, month)


@expenses_app.command(name="add")
def add_expense(
    amount: str,
    category: str,
    date: str = typer.Option(None, "--date", help="Expense date (default: today)"),
    note: str = typer.Option(None, "--note", help="Optional note"),
) -> None:
    """Record an expense."""
    add_expense_command(amount, category, date, note)


@expenses_app.command(name="list")
def list_expenses(
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
    category: str = typer.Option(None, "--category", help="Only this category"),
    on: str = typer.Option(None, "--date", help="Only expenses on this date"),
    since: str = typer.Option(None, "--since", help="Only expenses on or after this date"),
    until: str = typer.Option(None, "--until", help="Only expenses on or before this date"),
) -> None:
    """List your expenses, optionally filtered by category or date."""
    list_expenses_command(month, category, on, since, until)


@expenses_app.command(name="edit")
def edit_expense(
    expense_id: str,
    amount: str = typer.Option(None, "--amount", help="New amount"),
    date: str = typer.Option(None, "--date", help="New date"),
    category: str = typer.Option(None, "--category", help="New category"),
    note: str = typer.Option(None, "--note", help="New note (empty string removes it)"),
) -> None:
    """Edit an expense by ID."""
    edit_expense_command(expense_id, amount, date, category, note)


@expenses_app.command(name="delete")
def delete_expense(expense_id: str) -> None:
    """Delete an expense by ID."""
    delete_expense_command(expense_id)


if __name__ == "__main__":
    app()
