"""CLI entry point for runway."""

import typer

from runway.commands.admin import init_command, serve_command
from runway.commands.chart import chart_command
from runway.commands.expenses import (
    add_command,
    clear_command,
    delete_command,
    edit_command,
    income_command,
    list_command,
)
from runway.commands.transfer import export_command, import_command

app = typer.Typer(
    name="runway",
    help="Runway - see how far your income stretches against recurring expenses",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """Runway - see how far your income stretches against recurring expenses."""
    pass


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Create the runway configuration file."""
    init_command(force)


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Interface to bind (overrides config)"),
    port: int = typer.Option(None, "--port", "-p", help="Port to listen on (overrides config)"),
    income: float = typer.Option(None, "--income", help="Starting monthly income (overrides config)"),
    load: str = typer.Option(None, "--load", help="CSV file of expenses to load at startup"),
    debug: bool = typer.Option(False, "--debug", help="Run Flask in debug mode"),
) -> None:
    """Run the expense API server."""
    serve_command(host, port, income, load, debug)


@app.command(name="list")
def list_expenses() -> None:
    """List your expenses."""
    list_command()


@app.command()
def income(
    value: str = typer.Argument(None, help="New monthly income (omit to show the current value)"),
) -> None:
    """Show or set your monthly income."""
    income_command(value)


@app.command()
def add(
    title: str,
    amount: str,
    start: str = typer.Argument(..., help="First month (YYYY-MM)"),
    end: str = typer.Argument(..., help="Last month (YYYY-MM)"),
) -> None:
    """Add a recurring monthly expense."""
    add_command(title, amount, start, end)


@app.command()
def edit(
    expense_id: int,
    title: str = typer.Option(None, "--title", help="New title"),
    amount: str = typer.Option(None, "--amount", help="New monthly amount"),
    start: str = typer.Option(None, "--start", help="New first month (YYYY-MM)"),
    end: str = typer.Option(None, "--end", help="New last month (YYYY-MM)"),
) -> None:
    """Edit an expense."""
    edit_command(expense_id, title, amount, start, end)


@app.command()
def delete(
    expense_id: int,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete an expense."""
    delete_command(expense_id, yes)


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete all of your expenses."""
    clear_command(yes)


@app.command(name="export")
def export(
    output: str = typer.Option("expenses.csv", "--output", "-o", help="CSV file to write"),
) -> None:
    """Export your expenses to CSV."""
    export_command(output)


@app.command(name="import")
def import_(
    csv_file: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Replace your expenses with the contents of a CSV file."""
    import_command(csv_file, yes)


@app.command()
def chart(
    offset: float = typer.Option(0.0, "--offset", help="Scroll position from 0.0 (start) to 1.0 (end)"),
    start: str = typer.Option(None, "--start", help="Scroll so this month (YYYY-MM) is first"),
    window: int = typer.Option(None, "--window", "-w", min=1, help="Months to show (default from config)"),
) -> None:
    """Show the expense timeline and net income chart."""
    chart_command(offset, start, window)


if __name__ == "__main__":
    app()
