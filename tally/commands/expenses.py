"""Expense commands (add, list, edit, delete)."""

import sys
from dataclasses import replace
from datetime import date as date_type

import pandas as pd
from rich.table import Table

from tally.commands.common import STORE_ERRORS, console, format_money, open_store, parse_amount_or_exit, resolve_month
from tally.dates import month_range
from tally.domain.expenses import calculate_category_breakdown, calculate_total_spent, filter_expenses
from tally.domain.models import CategoryName, Expense
from tally.expenses import ExpenseBook
from tally.registry import CategoryRegistry


def normalize_date(raw_date: str | None) -> str:
    """Normalize a user-entered date to YYYY-MM-DD. No date means today.

    Raises:
        ValueError: If the date cannot be parsed.
    """
    if not raw_date:
        return date_type.today().isoformat()
    try:
        return date_type.fromisoformat(raw_date).isoformat()
    except ValueError:
        pass
    try:
        return pd.to_datetime(raw_date, dayfirst=True).strftime("%Y-%m-%d")
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Invalid date format: {raw_date}") from e


def add_expense_command(amount: str, category: str, date: str | None = None, note: str | None = None) -> None:
    """Record an expense against an existing category."""
    expense_amount = parse_amount_or_exit(amount)
    if expense_amount <= 0:
        console.print("[red]Amount must be positive[/red]")
        sys.exit(1)

    try:
        normalized_date = normalize_date(date)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)

    try:
        store, config = open_store()
        registry = CategoryRegistry(store)

        if CategoryName(category) not in registry:
            console.print(f"[red]Unknown category: {category}[/red]")
            console.print("[dim]Use 'tally categories add' to create it first[/dim]")
            sys.exit(1)

        expense = ExpenseBook(store).add_expense(expense_amount, normalized_date, CategoryName(category), note or None)

        console.print("[green]✓[/green] Expense added:")
        console.print(f"  ID: {expense.id}")
        console.print(f"  Date: {expense.date}")
        console.print(f"  Amount: {format_money(expense.amount, config['currency_symbol'])}")
        console.print(f"  Category: {expense.category}")
        if expense.note:
            console.print(f"  Note: {expense.note}")

    except STORE_ERRORS as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def parse_date_option(option: str, raw_date: str | None) -> str | None:
    """Normalize an optional date filter, exiting with an error if it is invalid."""
    if raw_date is None:
        return None
    try:
        return normalize_date(raw_date)
    except ValueError as e:
        console.print(f"[red]{option}: {e}[/red]")
        sys.exit(1)


def describe_filters(category: str | None, on: str | None, since: str | None, until: str | None) -> str:
    parts = []
    if category:
        parts.append(category)
    if on:
        parts.append(f"on {on}")
    if since and until:
        parts.append(f"{since} to {until}")
    elif since:
        parts.append(f"from {since}")
    elif until:
        parts.append(f"up to {until}")
    return ", ".join(parts)


def render_breakdown(expenses: list[Expense], symbol: str) -> None:
    """Render each category's share of the listed spending, largest first."""
    table = Table(title="Spending by Category")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")
    table.add_column("Share", justify="right")

    for share in calculate_category_breakdown(expenses):
        table.add_row(share.category, format_money(share.amount, symbol), f"{share.percentage:.1f}%")

    console.print(table)


def list_expenses_command(
    month: str | None = None,
    category: str | None = None,
    on: str | None = None,
    since: str | None = None,
    until: str | None = None,
) -> None:
    """List expenses, newest first, with a per-category breakdown.

    Date filters without --month search every month. Otherwise one month is
    listed, the current one by default.
    """
    if on is not None and (since is not None or until is not None):
        console.print("[red]Use either --date or --since/--until, not both[/red]")
        sys.exit(1)

    on_date = parse_date_option("--date", on)
    since_date = parse_date_option("--since", since)
    until_date = parse_date_option("--until", until)

    if since_date and until_date and since_date > until_date:
        console.print(f"[red]--since {since_date} is after --until {until_date}[/red]")
        sys.exit(1)

    date_filtered = on_date is not None or since_date is not None or until_date is not None
    month_key = resolve_month(month) if month or not date_filtered else None

    try:
        store, config = open_store()
        book = ExpenseBook(store)
        expenses = book.expenses_for_month(month_key) if month_key else book.expenses
    except STORE_ERRORS as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    expenses = filter_expenses(
        expenses,
        category=CategoryName(category) if category else None,
        on=on_date,
        since=since_date,
        until=until_date,
    )

    label = month_range(month_key)[2] if month_key else "all months"
    filters = describe_filters(category, on_date, since_date, until_date)
    if filters:
        label = f"{label} ({filters})"

    if not expenses:
        console.print(f"[yellow]No expenses for {label}[/yellow]")
        return

    symbol = config["currency_symbol"]
    table = Table(title=f"Expenses for {label}: {len(expenses)}")
    table.add_column("Date", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right", style="red")
    table.add_column("Note")
    table.add_column("ID", style="dim")

    for expense in sorted(expenses, key=lambda e: e.date, reverse=True):
        table.add_row(
            expense.date,
            expense.category,
            format_money(expense.amount, symbol),
            expense.note or "",
            expense.id,
        )

    console.print(table)
    console.print(f"[bold]Total:[/bold] {format_money(calculate_total_spent(expenses), symbol)}\n")
    render_breakdown(expenses, symbol)


def delete_expense_command(expense_id: str) -> None:
    """Delete an expense by id."""
    try:
        store, _ = open_store()
        if not ExpenseBook(store).delete_expense(expense_id):
            console.print(f"[red]Expense {expense_id} not found[/red]")
            sys.exit(1)
        console.print(f"[green]✓[/green] Deleted expense {expense_id}")

    except STORE_ERRORS as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def edit_expense_command(
    expense_id: str,
    amount: str | None = None,
    date: str | None = None,
    category: str | None = None,
    note: str | None = None,
) -> None:
    """Change fields of an existing expense."""
    try:
        store, config = open_store()
        book = ExpenseBook(store)

        expense = next((e for e in book.expenses if e.id == expense_id), None)
        if expense is None:
            console.print(f"[red]Expense {expense_id} not found[/red]")
            sys.exit(1)

        if amount is not None:
            new_amount = parse_amount_or_exit(amount)
            if new_amount <= 0:
                console.print("[red]Amount must be positive[/red]")
                sys.exit(1)
            expense = replace(expense, amount=new_amount)

        if date is not None:
            try:
                expense = replace(expense, date=normalize_date(date))
            except ValueError as e:
                console.print(f"[red]{e}[/red]")
                sys.exit(1)

        if category is not None:
            if CategoryName(category) not in CategoryRegistry(store):
                console.print(f"[red]Unknown category: {category}[/red]")
                sys.exit(1)
            expense = replace(expense, category=CategoryName(category))

        if note is not None:
            expense = replace(expense, note=note or None)

        book.update_expense(expense)

        console.print(f"[green]✓[/green] Updated expense {expense.id}:")
        console.print(f"  Date: {expense.date}")
        console.print(f"  Amount: {format_money(expense.amount, config['currency_symbol'])}")
        console.print(f"  Category: {expense.category}")
        if expense.note:
            console.print(f"  Note: {expense.note}")

    except STORE_ERRORS as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
