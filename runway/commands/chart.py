"""Chart command drawing the expense timeline and net income in the terminal."""

import sys

import requests
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from runway.client import get_client
from runway.config import load_settings
from runway.dates import normalize_month
from runway.domain.presentation import (
    ChartModel,
    ChartSeries,
    VisibleWindow,
    Viewport,
    build_chart_model,
    format_money,
    offset_for_month,
    scale_to_width,
    window_values,
)
from runway.domain.timeline import build_timeline
from runway.errors import InvalidMonthError

console = Console()

BAR_CELL = "████"


def render_timeline(model: ChartModel) -> None:
    """Render expense bars for the visible window, with per-month totals."""
    window = model.window
    table = Table(title="Expense timeline", title_justify="left")
    table.add_column("Expense", no_wrap=True)

    for column in model.columns[window.start : window.end]:
        balance_color = "red" if column.balance < 0 else "green"
        header = (
            f"{column.label}\n"
            f"[red]{format_money(column.total)}[/red]\n"
            f"[{balance_color}]{format_money(column.balance)}[/{balance_color}]"
        )
        table.add_column(header, justify="center", no_wrap=True)

    for bar, label in zip(model.bars, model.labels):
        cells = [
            f"[{bar.color}]{BAR_CELL}[/]" if bar.start_index <= index <= bar.end_index else ""
            for index in range(window.start, window.end)
        ]
        if label.visible:
            name = f"[bold {bar.color}]{escape(bar.expense.title)}[/] [dim]{format_money(bar.expense.amount)}[/dim]"
        else:
            name = f"[dim]{escape(bar.expense.title)}[/dim]"
        table.add_row(name, *cells)

    console.print(table)


def render_net_income(series: ChartSeries, window: VisibleWindow, bar_width: int = 40) -> None:
    """Render net income for the visible window as horizontal bars.

    Bars are scaled against the axis bounds of the whole timeline, so they
    keep their size as the window moves.
    """
    low, high = series.bounds
    console.print(f"\n[bold]{series.name}[/bold] [dim](axis {format_money(low)} to {format_money(high)})[/dim]\n")

    for label, value in window_values(series, window):
        length = scale_to_width(value, series.bounds, bar_width)
        value_color = "red" if value < 0 else "green"
        amount_display = f"[{value_color}]{format_money(value):>12}[/{value_color}]"
        bar = "█" * length
        console.print(f"  {label:>6}  {amount_display}  [{series.color}]{bar}[/]")


def chart_command(offset: float = 0.0, start: str | None = None, window: int | None = None) -> None:
    """Draw the expense timeline and net income chart."""
    settings = load_settings()
    window = window or settings["chart"]["window"]
    padding = settings["chart"]["padding"]
    if window < 1:
        console.print(f"[red]Window must be at least one month, got {window}[/red]")
        sys.exit(1)

    try:
        snapshot = get_client().list_expenses()
    except requests.RequestException as e:
        console.print(f"[red]Could not reach server: {e}[/red]", style="bold")
        sys.exit(1)

    if not snapshot.expenses:
        console.print("[yellow]No expenses yet - add one with 'runway add'[/yellow]")
        return

    months = build_timeline(snapshot.expenses, padding)
    if not months:
        console.print("[yellow]Nothing to draw - the expense date ranges are inverted[/yellow]")
        return

    if start:
        try:
            offset = offset_for_month(months, normalize_month(start), window)
        except InvalidMonthError as e:
            console.print(f"[red]{e}[/red]")
            sys.exit(1)

    viewport = Viewport.from_ratios(offset, min(1.0, window / len(months)))
    model = build_chart_model(snapshot.expenses, snapshot.monthly_income, viewport, padding, window)

    visible = model.window
    console.print(
        f"[bold cyan]{model.net_series.labels[visible.start]} - {model.net_series.labels[visible.end - 1]}[/bold cyan]"
        f" [dim](months {visible.start + 1}-{visible.end} of {len(months)},"
        f" income {format_money(snapshot.monthly_income)})[/dim]\n"
    )

    render_timeline(model)
    render_net_income(model.net_series, visible)
