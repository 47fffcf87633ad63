"""Pure functions for building the month axis shared by every chart.

The timeline runs from the earliest expense start to the latest expense end,
padded on both sides so bars never touch the chart edges.
"""

from collections.abc import Sequence

from runway.dates import clamp_ordinal, month_from_ordinal, month_ordinal, months_between
from runway.domain.expenses import Expense
from runway.domain.models import Month

# Months added before the earliest start and after the latest end
PADDING_MONTHS = 6


def timeline_bounds(expenses: Sequence[Expense], padding: int = PADDING_MONTHS) -> tuple[Month, Month] | None:
    """Calculate the padded first and last month of the timeline.

    Args:
        expenses: Current expense set.
        padding: Months of buffer on each side.

    Returns:
        Tuple of (first_month, last_month), or None when there are no expenses.
        Padding stops at 0001-01 and 9999-12.
    """
    if not expenses:
        return None

    earliest = min(expense.start_date for expense in expenses)
    latest = max(expense.end_date for expense in expenses)
    first = clamp_ordinal(month_ordinal(earliest) - padding)
    last = clamp_ordinal(month_ordinal(latest) + padding)
    return month_from_ordinal(first), month_from_ordinal(last)


def build_timeline(expenses: Sequence[Expense], padding: int = PADDING_MONTHS) -> list[Month]:
    """Build the ordered list of months spanning all expenses.

    Args:
        expenses: Current expense set.
        padding: Months of buffer on each side.

    Returns:
        Months in YYYY-MM format, one calendar month apart. Empty when there
        are no expenses.
    """
    bounds = timeline_bounds(expenses, padding)
    if bounds is None:
        return []
    first, last = bounds
    return months_between(first, last)
