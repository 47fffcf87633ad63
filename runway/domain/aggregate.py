"""Pure functions for per-month totals and net income.

This module contains the functional core for aggregation:
- No I/O operations
- No hidden state; identical inputs give identical outputs
- Expenses with an inverted range never match a month and add zero
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from runway.domain.expenses import Expense
from runway.domain.models import Amount, Month
from runway.domain.timeline import PADDING_MONTHS, build_timeline


@dataclass(frozen=True)
class MonthlySummary:
    """Immutable aggregation of a snapshot over its timeline."""

    months: list[Month]
    totals: dict[Month, Amount]
    net: dict[Month, Amount]
    income: Amount


def monthly_totals(expenses: Sequence[Expense], months: Sequence[Month]) -> dict[Month, Amount]:
    """Sum the active expense amounts for each month.

    Args:
        expenses: Expense set to aggregate.
        months: Months to report on, usually the timeline.

    Returns:
        Dictionary of month to summed amount, in the order of months. Months
        with no active expenses map to 0.
    """
    totals: dict[Month, Amount] = {}
    for month in months:
        totals[month] = Amount(sum((expense.amount for expense in expenses if expense.covers(month)), 0.0))
    return totals


def net_income(income: Amount, totals: Mapping[Month, Amount]) -> dict[Month, Amount]:
    """Calculate income left over each month.

    Args:
        income: Monthly income.
        totals: Monthly expense totals.

    Returns:
        Dictionary of month to (income - total).
    """
    return {month: Amount(income - total) for month, total in totals.items()}


def summarize(expenses: Sequence[Expense], income: Amount, padding: int = PADDING_MONTHS) -> MonthlySummary:
    """Build the timeline, totals and net income in one pass.

    Args:
        expenses: Expense set.
        income: Monthly income.
        padding: Timeline padding in months.

    Returns:
        MonthlySummary for the expense set.
    """
    months = build_timeline(expenses, padding)
    totals = monthly_totals(expenses, months)
    return MonthlySummary(
        months=months,
        totals=totals,
        net=net_income(income, totals),
        income=income,
    )
