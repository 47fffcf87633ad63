"""CSV export and import commands."""

import sys
from pathlib import Path

import requests
import typer
from rich.console import Console
from rich.table import Table

from runway.client import get_client
from runway.domain.csvio import export_csv, parse_csv
from runway.domain.presentation import format_money

console = Console()


def export_command(output: str = "expenses.csv") -> None:
    """Write all expenses to a CSV file."""
    try:
        snapshot = get_client().list_expenses()
    except requests.RequestException as e:
        console.print(f"[red]Could not reach server: {e}[/red]", style="bold")
        sys.exit(1)

    output_path = Path(output).expanduser()
    try:
        output_path.write_text(export_csv(snapshot.expenses), encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Could not write {output_path}: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Exported {len(snapshot.expenses)} expenses to {output_path}")


def import_command(csv_file: str, yes: bool = False) -> None:
    """Replace all expenses with the contents of a CSV file."""
    csv_path = Path(csv_file).expanduser()
    if not csv_path.exists():
        console.print(f"[red]File not found: {csv_path}[/red]", style="bold")
        sys.exit(1)

    try:
        result = parse_csv(csv_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Could not read {csv_path}: {e}[/red]", style="bold")
        sys.exit(1)

    if not result.drafts:
        console.print("[yellow]No valid expenses found in file[/yellow]")
        sys.exit(1)

    preview = Table(title=f"{len(result.drafts)} expenses in {csv_path.name}")
    preview.add_column("Title", style="white")
    preview.add_column("Amount", justify="right")
    preview.add_column("Start", style="cyan")
    preview.add_column("End", style="cyan")
    for draft in result.drafts:
        preview.add_row(draft.title, format_money(draft.amount), draft.start_date, draft.end_date)
    console.print(preview)

    if result.skipped:
        console.print(f"[yellow]Skipped {result.skipped} incomplete rows[/yellow]")

    if not yes and not typer.confirm("This will replace all current expenses with uploaded data. Continue?"):
        console.print("[dim]Cancelled[/dim]")
        return

    try:
        created = get_client().replace_expenses(result.drafts)
    except requests.RequestException as e:
        console.print(f"[red]Import failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Imported {len(created)} expenses")
