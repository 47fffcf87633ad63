"""Admin commands for initializing config and running the server."""

import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from runway.config import create_default_config, get_config_path, load_settings
from runway.domain.csvio import parse_csv
from runway.domain.expenses import parse_amount
from runway.errors import InvalidAmountError
from runway.server import create_app
from runway.store.memory import ExpenseStore

console = Console()


def configure_logging(level: str) -> None:
    """Send log records to the console through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def init_command(force: bool = False) -> None:
    """Create the runway configuration file."""
    config_path = get_config_path()

    # Guard: refuse to overwrite without force flag
    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'runway init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def build_store(income: float, load: str | None = None) -> ExpenseStore:
    """Create the server's store, optionally hydrated from a CSV export.

    Args:
        income: Starting monthly income.
        load: Optional path to a CSV file of expenses.

    Returns:
        New ExpenseStore.
    """
    if not load:
        return ExpenseStore(income=parse_amount(income))

    csv_path = Path(load).expanduser()
    result = parse_csv(csv_path.read_text(encoding="utf-8"))
    console.print(f"[green]✓[/green] Loaded {len(result.drafts)} expenses from {csv_path}")
    if result.skipped:
        console.print(f"[yellow]Skipped {result.skipped} incomplete rows[/yellow]")
    return ExpenseStore(income=parse_amount(income), expenses=result.drafts)


def serve_command(
    host: str | None = None,
    port: int | None = None,
    income: float | None = None,
    load: str | None = None,
    debug: bool = False,
) -> None:
    """Run the HTTP API until interrupted."""
    settings = load_settings()
    server = settings["server"]
    configure_logging("DEBUG" if debug else server["log_level"])

    host = host or server["host"]
    port = port or server["port"]
    starting_income = income if income is not None else server["initial_income"]

    try:
        store = build_store(starting_income, load)
    except OSError as e:
        console.print(f"[red]Could not read {load}: {e}[/red]", style="bold")
        sys.exit(1)
    except InvalidAmountError as e:
        console.print(f"[red]Invalid income: {e}[/red]", style="bold")
        sys.exit(1)

    app = create_app(store, padding=settings["chart"]["padding"])
    console.print(f"[bold cyan]Server running on http://{host}:{port}[/bold cyan]")
    app.run(host=host, port=port, debug=debug)
