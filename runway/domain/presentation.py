"""Pure functions that shape aggregated data for rendering.

This module contains the functional core for the two charts:
- No I/O operations and no live display surface
- Viewport geometry is passed in explicitly
- Everything is recomputed from a snapshot on each call

Geometry is expressed as fractions of the full timeline width (0.0-1.0) so
any renderer (terminal, browser) can scale it to its own units.
"""

import colorsys
import math
from collections.abc import Sequence
from dataclasses import dataclass

from runway.dates import month_label
from runway.domain.aggregate import MonthlySummary, summarize
from runway.domain.expenses import Expense
from runway.domain.models import Amount, Month
from runway.domain.timeline import PADDING_MONTHS

WINDOW_MONTHS = 12

# Hue step between consecutive expenses; the golden angle keeps neighbours apart
HUE_STEP = 137.5
BAR_SATURATION = 0.65
BAR_LIGHTNESS = 0.55

DEBT_COLOR = "#ef4444"
SURPLUS_COLOR = "#10b981"


@dataclass(frozen=True)
class Viewport:
    """Scroll geometry of a panel, in any consistent unit.

    offset: Distance scrolled from the left edge.
    visible_width: Width of the visible part of the panel.
    content_width: Width of the full scrollable content.
    """

    offset: float
    visible_width: float
    content_width: float

    @classmethod
    def from_ratios(cls, offset_ratio: float, viewport_ratio: float) -> "Viewport":
        """Build a viewport on unit-width content.

        Args:
            offset_ratio: Scroll position from 0.0 (left edge) to 1.0 (right edge).
            viewport_ratio: Visible width as a fraction of the content width.
        """
        visible = _clamp(viewport_ratio, 0.0, 1.0)
        return cls(offset=_clamp(offset_ratio, 0.0, 1.0) * (1.0 - visible), visible_width=visible, content_width=1.0)

    @property
    def scrollable(self) -> float:
        """Maximum scroll offset."""
        return max(0.0, self.content_width - self.visible_width)

    @property
    def scroll_ratio(self) -> float:
        """Scroll position from 0.0 to 1.0."""
        if self.scrollable <= 0:
            return 0.0
        return _clamp(self.offset / self.scrollable, 0.0, 1.0)

    @property
    def start_fraction(self) -> float:
        """Left edge of the visible area as a fraction of the content."""
        if self.content_width <= 0:
            return 0.0
        return self.offset / self.content_width

    @property
    def width_fraction(self) -> float:
        """Visible width as a fraction of the content."""
        if self.content_width <= 0:
            return 1.0
        return self.visible_width / self.content_width


@dataclass(frozen=True)
class TimelineBar:
    """Horizontal bar for one expense on the timeline."""

    expense: Expense
    position: int
    start_index: int
    end_index: int
    color: str
    left: float
    width: float

    @property
    def span(self) -> int:
        """Number of timeline months the bar covers."""
        return max(0, self.end_index - self.start_index + 1)

    @property
    def right(self) -> float:
        return self.left + self.width


@dataclass(frozen=True)
class BarLabel:
    """Sticky label state for a bar within the current viewport."""

    visible: bool
    offset: float  # label position inside the bar, 0.0-1.0


@dataclass(frozen=True)
class VisibleWindow:
    """Slice of the timeline currently in view."""

    start: int
    months: list[Month]

    @property
    def end(self) -> int:
        return self.start + len(self.months)


@dataclass(frozen=True)
class MonthColumn:
    """Header cell for a timeline month."""

    month: Month
    label: str
    total: Amount
    balance: Amount


@dataclass(frozen=True)
class ChartSeries:
    """Labelled numeric series handed to a chart renderer."""

    name: str
    months: list[Month]
    labels: list[str]
    values: list[Amount]
    color: str
    bounds: tuple[float, float]


@dataclass(frozen=True)
class ChartModel:
    """Everything needed to draw both charts for one snapshot."""

    summary: MonthlySummary
    columns: list[MonthColumn]
    bars: list[TimelineBar]
    labels: list[BarLabel]
    window: VisibleWindow
    net_series: ChartSeries
    viewport: Viewport


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def expense_hue(position: int) -> float:
    """Calculate a stable hue for the expense at a list position.

    Args:
        position: Index of the expense in the current list.

    Returns:
        Hue in degrees (0-360).
    """
    return (position * HUE_STEP) % 360


def hsl_to_hex(hue: float, saturation: float = BAR_SATURATION, lightness: float = BAR_LIGHTNESS) -> str:
    """Convert an HSL colour to a #rrggbb string.

    Args:
        hue: Hue in degrees.
        saturation: Saturation (0.0-1.0).
        lightness: Lightness (0.0-1.0).
    """
    red, green, blue = colorsys.hls_to_rgb((hue % 360) / 360, lightness, saturation)
    return "#{:02x}{:02x}{:02x}".format(round(red * 255), round(green * 255), round(blue * 255))


def expense_color(position: int) -> str:
    """Bar colour for the expense at a list position."""
    return hsl_to_hex(expense_hue(position))


def month_index(months: Sequence[Month], month: Month) -> int:
    """Locate a month on the timeline, clamping to the edges.

    Args:
        months: Timeline months (non-empty).
        month: Month to locate.

    Returns:
        Index into months. Months before the timeline map to 0 and months
        after it map to the last index.
    """
    if month <= months[0]:
        return 0
    if month >= months[-1]:
        return len(months) - 1
    # Timeline months are contiguous, so the offset is the distance in months
    start_year, start_month = int(months[0][:4]), int(months[0][5:7])
    year, month_num = int(month[:4]), int(month[5:7])
    return (year - start_year) * 12 + (month_num - start_month)


def build_bars(expenses: Sequence[Expense], months: Sequence[Month]) -> list[TimelineBar]:
    """Map each expense to a bar on the timeline.

    Args:
        expenses: Expenses in display order.
        months: Timeline months.

    Returns:
        One TimelineBar per expense, in the same order. Inverted expenses get
        a zero-width bar at their start month.
    """
    if not months:
        return []

    total = len(months)
    bars: list[TimelineBar] = []
    for position, expense in enumerate(expenses):
        start_index = month_index(months, expense.start_date)
        end_index = month_index(months, expense.end_date)
        span = max(0, end_index - start_index + 1)
        bars.append(
            TimelineBar(
                expense=expense,
                position=position,
                start_index=start_index,
                end_index=end_index,
                color=expense_color(position),
                left=start_index / total,
                width=span / total,
            )
        )
    return bars


def window_start(offset_ratio: float, total_months: int, window: int = WINDOW_MONTHS) -> int:
    """Calculate the first month index of the visible window.

    Args:
        offset_ratio: Scroll position from 0.0 to 1.0.
        total_months: Length of the timeline.
        window: Number of months in view.

    Returns:
        Index of the first visible month.
    """
    max_start = max(0, total_months - window)
    return _round_half_up(_clamp(offset_ratio, 0.0, 1.0) * max_start)


def visible_window(months: Sequence[Month], offset_ratio: float, window: int = WINDOW_MONTHS) -> VisibleWindow:
    """Select the sliding window of months for a scroll position.

    Args:
        months: Timeline months.
        offset_ratio: Scroll position from 0.0 to 1.0.
        window: Number of months in view.

    Returns:
        VisibleWindow with at most `window` months.
    """
    start = window_start(offset_ratio, len(months), window)
    return VisibleWindow(start=start, months=list(months[start : start + window]))


def sync_scroll(source: Viewport, target: Viewport) -> Viewport:
    """Move the target panel to the same proportional offset as the source.

    Args:
        source: Panel the user scrolled.
        target: Panel to keep in step.

    Returns:
        Target viewport with its offset updated.
    """
    return Viewport(
        offset=source.scroll_ratio * target.scrollable,
        visible_width=target.visible_width,
        content_width=target.content_width,
    )


def bar_label(bar: TimelineBar, viewport: Viewport) -> BarLabel:
    """Decide whether a bar's label is on screen and where it sticks.

    The label is visible when the bar overlaps the visible area. It sticks to
    the left edge of the viewport while the bar's start is scrolled past.

    Args:
        bar: Bar to label.
        viewport: Current scroll geometry.

    Returns:
        BarLabel with visibility and the label offset inside the bar.
    """
    view_left = viewport.start_fraction
    view_right = view_left + viewport.width_fraction
    visible = bar.right > view_left and bar.left < view_right
    if not visible or bar.width <= 0:
        return BarLabel(visible=visible and bar.width > 0, offset=0.0)
    return BarLabel(visible=True, offset=max(0.0, (view_left - bar.left) / bar.width))


def net_income_line_color(values: Sequence[Amount]) -> str:
    """Pick the net income line colour for the whole timeline.

    Returns:
        Red if any month is negative (debt), green otherwise.
    """
    return DEBT_COLOR if any(value < 0 for value in values) else SURPLUS_COLOR


def y_axis_bounds(values: Sequence[Amount]) -> tuple[float, float]:
    """Calculate net income chart bounds with 10% headroom either side.

    Args:
        values: Net income for every month of the timeline, not just the
            visible window, so the axis stays fixed while scrolling.

    Returns:
        Tuple of (low, high), floored and ceiled to whole units.
    """
    if not values:
        return 0.0, 0.0
    low, high = min(values), max(values)
    spread = high - low
    return float(math.floor(low - spread * 0.1)), float(math.ceil(high + spread * 0.1))


def month_columns(summary: MonthlySummary) -> list[MonthColumn]:
    """Header cells showing each month's total and remaining balance."""
    return [
        MonthColumn(
            month=month,
            label=month_label(month),
            total=summary.totals[month],
            balance=summary.net[month],
        )
        for month in summary.months
    ]


def net_income_series(summary: MonthlySummary) -> ChartSeries:
    """Shape net income for the line chart."""
    values = [summary.net[month] for month in summary.months]
    return ChartSeries(
        name="Net Income",
        months=list(summary.months),
        labels=[month_label(month) for month in summary.months],
        values=values,
        color=net_income_line_color(values),
        bounds=y_axis_bounds(values),
    )


def window_values(series: ChartSeries, window: VisibleWindow) -> list[tuple[str, Amount]]:
    """Pair labels and values for the months inside a window."""
    return list(zip(series.labels[window.start : window.end], series.values[window.start : window.end]))


def build_chart_model(
    expenses: Sequence[Expense],
    income: Amount,
    viewport: Viewport | None = None,
    padding: int = PADDING_MONTHS,
    window: int = WINDOW_MONTHS,
) -> ChartModel:
    """Build the full view model for both charts from a snapshot.

    Args:
        expenses: Expenses in display order.
        income: Monthly income.
        viewport: Shared scroll geometry of the two panels. Defaults to the
            left edge with everything visible.
        padding: Timeline padding in months.
        window: Months in the visible window.

    Returns:
        ChartModel ready for rendering.
    """
    if viewport is None:
        viewport = Viewport(offset=0.0, visible_width=1.0, content_width=1.0)

    summary = summarize(expenses, income, padding)
    bars = build_bars(expenses, summary.months)
    return ChartModel(
        summary=summary,
        columns=month_columns(summary),
        bars=bars,
        labels=[bar_label(bar, viewport) for bar in bars],
        window=visible_window(summary.months, viewport.scroll_ratio, window),
        net_series=net_income_series(summary),
        viewport=viewport,
    )



def scale_to_width(value: float, bounds: tuple[float, float], width: int) -> int:
    """Scale a value inside the axis bounds to a bar length.

    Args:
        value: Value to plot.
        bounds: Axis (low, high).
        width: Maximum bar width in characters.

    Returns:
        Bar length from 0 to width.
    """
    low, high = bounds
    if high <= low:
        return width if value >= high else 0
    fraction = _clamp((value - low) / (high - low), 0.0, 1.0)
    return int(fraction * width)


def format_money(amount: float, include_sign: bool = False) -> str:
    """Format an amount for display (e.g. "$1,200" or "-$350.50").

    Whole amounts are shown without decimals.
    """
    digits = f"{abs(amount):,.0f}" if float(amount).is_integer() else f"{abs(amount):,.2f}"
    if amount < 0:
        return f"-${digits}"
    if include_sign:
        return f"+${digits}"
    return f"${digits}"


def offset_for_month(months: Sequence[Month], month: Month, window: int = WINDOW_MONTHS) -> float:
    """Scroll ratio that puts a month at the left of the visible window.

    Months too close to the end of the timeline give the furthest scroll.
    """
    if not months:
        return 0.0
    max_start = max(0, len(months) - window)
    if max_start == 0:
        return 0.0
    return _clamp(month_index(months, month) / max_start, 0.0, 1.0)
