"""Expense management commands (list, add, edit, delete, income, clear)."""

import sys

import requests
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from runway.client import get_client
from runway.dates import normalize_month
from runway.domain.expenses import Expense, ExpenseDraft, is_inverted, parse_amount, parse_title
from runway.domain.models import ExpenseId
from runway.domain.presentation import expense_color, format_money
from runway.errors import ExpenseNotFoundError, InvalidAmountError, InvalidMonthError, InvalidTitleError

console = Console()


def render_expense_table(expenses: list[Expense] | tuple[Expense, ...], income: float) -> None:
    """Render the expense list as a table."""
    title = f"Expenses ({len(expenses)}) - monthly income {format_money(income)}"
    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("Start", style="cyan")
    table.add_column("End", style="cyan")

    for position, expense in enumerate(expenses):
        swatch = f"[{expense_color(position)}]■[/]"
        end_display = f"[red]{expense.end_date}[/red]" if is_inverted(expense) else expense.end_date
        table.add_row(
            str(position + 1),
            str(expense.id),
            f"{swatch} {escape(expense.title)}",
            f"[red]{format_money(expense.amount)}[/red]",
            expense.start_date,
            end_display,
        )

    console.print(table)


def build_draft(title: str, amount: str, start: str, end: str) -> ExpenseDraft:
    """Parse command-line input into a draft.

    Raises:
        InvalidAmountError: If the amount isn't numeric.
        InvalidMonthError: If a month can't be read.
        InvalidTitleError: If the title is blank.
    """
    return ExpenseDraft(
        title=parse_title(title),
        amount=parse_amount(amount),
        start_date=normalize_month(start),
        end_date=normalize_month(end),
    )


def warn_if_inverted(draft: ExpenseDraft) -> None:
    if is_inverted(draft):
        console.print(
            f"[yellow]Warning: end month {draft.end_date} is before start month {draft.start_date};"
            " this expense won't count towards any month[/yellow]"
        )


def list_command() -> None:
    """List expenses and monthly income."""
    try:
        snapshot = get_client().list_expenses()
    except requests.RequestException as e:
        console.print(f"[red]Could not reach server: {e}[/red]", style="bold")
        sys.exit(1)

    if not snapshot.expenses:
        console.print("[yellow]No expenses yet[/yellow]")
        console.print(f"[dim]Monthly income: {format_money(snapshot.monthly_income)}[/dim]")
        return

    render_expense_table(snapshot.expenses, snapshot.monthly_income)


def income_command(value: str | None = None) -> None:
    """Show or set the monthly income."""
    client = get_client()
    try:
        if value is None:
            snapshot = client.list_expenses()
            console.print(f"Monthly income: [green]{format_money(snapshot.monthly_income)}[/green]")
            return

        income = client.set_income(parse_amount(value))
        console.print(f"[green]✓[/green] Monthly income set to {format_money(income)}")
    except InvalidAmountError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except requests.RequestException as e:
        console.print(f"[red]Could not reach server: {e}[/red]", style="bold")
        sys.exit(1)


def add_command(title: str, amount: str, start: str, end: str) -> None:
    """Add a recurring expense."""
    try:
        draft = build_draft(title, amount, start, end)
    except (InvalidAmountError, InvalidMonthError, InvalidTitleError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    warn_if_inverted(draft)

    try:
        expense = get_client().create_expense(draft)
    except requests.RequestException as e:
        console.print(f"[red]Could not add expense: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Expense added:")
    console.print(f"  ID: {expense.id}")
    console.print(f"  Title: {expense.title}")
    console.print(f"  Amount: {format_money(expense.amount)}")
    console.print(f"  Active: {expense.start_date} to {expense.end_date}")


def edit_command(
    expense_id: int,
    title: str | None = None,
    amount: str | None = None,
    start: str | None = None,
    end: str | None = None,
) -> None:
    """Edit an expense, keeping any field not given."""
    client = get_client()

    try:
        snapshot = client.list_expenses()
        current = next((e for e in snapshot.expenses if e.id == expense_id), None)
        if current is None:
            console.print(f"[red]Expense {expense_id} not found[/red]")
            sys.exit(1)

        draft = build_draft(
            title if title is not None else current.title,
            amount if amount is not None else str(current.amount),
            start if start is not None else current.start_date,
            end if end is not None else current.end_date,
        )
        warn_if_inverted(draft)

        updated = client.update_expense(ExpenseId(expense_id), draft)
    except (InvalidAmountError, InvalidMonthError, InvalidTitleError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except ExpenseNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except requests.RequestException as e:
        console.print(f"[red]Could not update expense: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Updated expense {updated.id}:")
    console.print(f"  Title: {updated.title}")
    console.print(f"  Amount: {format_money(updated.amount)}")
    console.print(f"  Active: {updated.start_date} to {updated.end_date}")


def delete_command(expense_id: int, yes: bool = False) -> None:
    """Delete an expense."""
    if not yes and not typer.confirm(f"Delete expense {expense_id}?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    try:
        get_client().delete_expense(ExpenseId(expense_id))
    except ExpenseNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except requests.RequestException as e:
        console.print(f"[red]Could not delete expense: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Deleted expense {expense_id}")


def clear_command(yes: bool = False) -> None:
    """Delete every expense."""
    if not yes and not typer.confirm("This will delete all expenses permanently. Continue?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    try:
        removed = get_client().clear_expenses()
    except requests.RequestException as e:
        console.print(f"[red]Could not clear expenses: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Deleted {removed} expenses")
