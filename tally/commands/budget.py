"""Budget command for setting and reviewing monthly category budgets."""

import sys

from rich.table import Table

from tally.commands.common import STORE_ERRORS, console, format_money, open_store, parse_amount_or_exit, resolve_month
from tally.dates import month_range, recent_month_keys
from tally.domain.budget import (
    BudgetStatus,
    CategoryBudgetStatus,
    calculate_total_budget,
    compute_budget_status,
    get_monthly_budget,
)
from tally.domain.expenses import calculate_category_spending, calculate_total_spent, filter_expenses_for_month
from tally.domain.models import CategoryName, Money, MonthKey
from tally.expenses import ExpenseBook
from tally.ledger import BudgetLedger
from tally.registry import CategoryRegistry


def format_percentage_with_color(percentage: float) -> str:
    """Format a spent percentage, coloured by how close it is to the budget."""
    text = f"{percentage:.0f}%"
    if percentage > 100:
        return f"[red]{text}[/red]"
    elif percentage > 90:
        return f"[yellow]{text}[/yellow]"
    else:
        return f"[green]{text}[/green]"


def format_remaining(status: CategoryBudgetStatus, symbol: str) -> str:
    if status.remaining >= 0:
        return f"[green]{format_money(status.remaining, symbol)}[/green]"
    return f"[red]Over {format_money(abs(status.remaining), symbol)}[/red]"


def render_summary(status: BudgetStatus, symbol: str) -> None:
    """Render the month totals and overall progress."""
    console.print(f"[bold]Total Budget:[/bold] {format_money(status.total_budget, symbol)}")
    console.print(f"[bold]Total Spent:[/bold]  {format_money(status.total_spent, symbol)}")

    color = "green" if status.remaining >= 0 else "red"
    console.print(f"[bold]Remaining:[/bold]    [{color}]{format_money(status.remaining, symbol)}[/{color}]")

    if status.is_over_budget:
        over = format_money(status.total_spent - status.total_budget, symbol)
        console.print(f"\n[red]⚠ Over budget by {over} ({status.spent_percentage - 100:.1f}%)[/red]")
    else:
        console.print(f"\n[dim]{100 - status.spent_percentage:.1f}% of budget remaining[/dim]")


def render_category_table(title: str, statuses: list[CategoryBudgetStatus], symbol: str) -> None:
    table = Table(title=title)
    table.add_column("Category", style="magenta")
    table.add_column("Budget", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("Used", justify="right")

    for status in statuses:
        flag = " ⚠" if status.over_budget else ""
        table.add_row(
            f"{status.category}{flag}",
            format_money(status.allocated, symbol),
            format_money(status.spent, symbol),
            format_remaining(status, symbol),
            format_percentage_with_color(status.percentage) if status.allocated > 0 else "[dim]-[/dim]",
        )

    console.print(table)


def show_budget_status(
    month_key: MonthKey,
    ledger: BudgetLedger,
    registry: CategoryRegistry,
    book: ExpenseBook,
    symbol: str,
    show_unbudgeted: bool = False,
) -> None:
    """Show budget status and spending for a month.

    Args:
        month_key: Month to show.
        ledger: Budget ledger.
        registry: Category registry.
        book: Expense book used for spending totals.
        symbol: Currency symbol.
        show_unbudgeted: Also list categories with no budget.
    """
    _, _, label = month_range(month_key)
    console.print(f"[bold cyan]{label} Budget[/bold cyan]\n")

    budget = ledger.get_monthly_budget(month_key)
    spending = calculate_category_spending(book.expenses_for_month(month_key))
    status = compute_budget_status(budget, registry.categories, spending)

    if status.total_budget <= 0:
        console.print(f"[yellow]No budget set for {label}[/yellow]")
        console.print("[dim]Use 'tally budget --total <amount>' to distribute a budget across your categories[/dim]")
        return

    render_summary(status, symbol)
    console.print()

    if status.budgeted:
        render_category_table("Category Budgets", status.budgeted, symbol)

    if status.unbudgeted:
        if show_unbudgeted:
            render_category_table("Other Categories", status.unbudgeted, symbol)
        else:
            console.print(
                f"[dim]{len(status.unbudgeted)} other categories without a budget (use --show-unbudgeted)[/dim]"
            )


def budget_command(
    total: str | None = None,
    set_category: str | None = None,
    amount: str | None = None,
    clear: str | None = None,
    show_unbudgeted: bool = False,
    month: str | None = None,
) -> None:
    """Set budgets for a month, then show its status."""
    month_key = resolve_month(month)

    try:
        store, config = open_store()
        symbol = config["currency_symbol"]
        registry = CategoryRegistry(store)
        ledger = BudgetLedger(store)

        if total is not None:
            total_amount = parse_amount_or_exit(total)
            if not registry.categories:
                console.print("[red]No categories to distribute the budget across[/red]")
                sys.exit(1)
            ledger.distribute_budget_equally(month_key, total_amount, registry.categories)
            share = total_amount / len(registry)
            console.print(
                f"[green]✓[/green] Distributed {format_money(total_amount, symbol)} equally: "
                f"{format_money(share, symbol)} for each of {len(registry)} categories\n"
            )

        elif set_category is not None:
            if amount is None:
                console.print("[red]--set needs --amount[/red]")
                sys.exit(1)
            category_amount = parse_amount_or_exit(amount)
            category = CategoryName(set_category)
            if category not in registry:
                console.print(f"[red]Unknown category: {set_category}[/red]")
                sys.exit(1)
            ledger.set_category_budget(month_key, category, category_amount)
            console.print(f"[green]✓[/green] {category} budget set to {format_money(category_amount, symbol)}\n")

        elif clear is not None:
            category = CategoryName(clear)
            if category not in registry:
                console.print(f"[red]Unknown category: {clear}[/red]")
                sys.exit(1)
            ledger.set_category_budget(month_key, category, Money(0))
            console.print(f"[green]✓[/green] Cleared budget for {category}\n")

        if ledger.reconcile(month_key, registry.categories):
            console.print("[dim]Categories changed since this budget was set; redistributed equally[/dim]\n")

        show_budget_status(month_key, ledger, registry, ExpenseBook(store), symbol, show_unbudgeted)

    except STORE_ERRORS as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def months_command(count: int = 6) -> None:
    """Show budget and spending totals for recent months, newest first."""
    if count < 1:
        console.print("[red]--count must be at least 1[/red]")
        sys.exit(1)

    try:
        store, config = open_store()
        budget_data = BudgetLedger(store).budget_data
        expenses = ExpenseBook(store).expenses
    except STORE_ERRORS as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    symbol = config["currency_symbol"]
    table = Table(title=f"Last {count} months")
    table.add_column("Month", style="cyan")
    table.add_column("Budget", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Remaining", justify="right")

    for month_key in recent_month_keys(count):
        _, _, label = month_range(month_key)
        total_budget = calculate_total_budget(get_monthly_budget(budget_data, month_key))
        total_spent = calculate_total_spent(filter_expenses_for_month(expenses, month_key))

        if total_budget > 0:
            remaining = Money(total_budget - total_spent)
            color = "green" if remaining >= 0 else "red"
            remaining_display = f"[{color}]{format_money(remaining, symbol)}[/{color}]"
        else:
            remaining_display = "[dim]-[/dim]"

        table.add_row(label, format_money(total_budget, symbol), format_money(total_spent, symbol), remaining_display)

    console.print(table)
