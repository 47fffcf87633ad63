"""Pure functions for CSV export and import of expenses.

Export format (one header row, then one line per expense):

    Title,Amount,Start Date,End Date
    "Rent",1200,2024-01,2024-12

Import is lenient: blank lines are ignored and rows missing any of the four
fields, or with an amount or month that doesn't parse, are skipped and
counted rather than failing the whole file.
"""

import csv
import io
from collections.abc import Sequence
from dataclasses import dataclass

from runway.dates import parse_month
from runway.domain.expenses import Expense, ExpenseDraft, parse_amount
from runway.domain.models import Amount, Month
from runway.errors import InvalidAmountError, InvalidMonthError

CSV_HEADER = "Title,Amount,Start Date,End Date"


@dataclass(frozen=True)
class ImportResult:
    """Immutable result of parsing a CSV file."""

    drafts: list[ExpenseDraft]
    skipped: int


def format_amount(amount: Amount) -> str:
    """Format an amount without a trailing .0 for whole numbers."""
    if float(amount).is_integer():
        return str(int(amount))
    return repr(float(amount))


def export_line(expense: Expense | ExpenseDraft) -> str:
    """Format one expense as a CSV line."""
    title = expense.title.replace('"', '""')
    return f'"{title}",{format_amount(expense.amount)},{expense.start_date},{expense.end_date}'


def export_csv(expenses: Sequence[Expense | ExpenseDraft]) -> str:
    """Serialize expenses to CSV text.

    Args:
        expenses: Expenses in display order.

    Returns:
        CSV text with a header row and a trailing newline.
    """
    lines = [CSV_HEADER, *(export_line(expense) for expense in expenses)]
    return "\n".join(lines) + "\n"


def parse_row(row: Sequence[str]) -> ExpenseDraft | None:
    """Parse one CSV row into a draft.

    Args:
        row: Cells from csv.reader.

    Returns:
        ExpenseDraft, or None if the row is incomplete or invalid.
    """
    cells = [cell.strip() for cell in row[:4]]
    if len(cells) < 4 or not all(cells):
        return None

    title, raw_amount, start_date, end_date = cells
    try:
        amount = parse_amount(raw_amount)
        parse_month(start_date)
        parse_month(end_date)
    except (InvalidAmountError, InvalidMonthError):
        return None

    return ExpenseDraft(
        title=title,
        amount=amount,
        start_date=Month(start_date),
        end_date=Month(end_date),
    )


def parse_csv(text: str) -> ImportResult:
    """Parse CSV text produced by export_csv (or edited by hand).

    Args:
        text: Full CSV file contents. The first non-blank row is treated as
            the header.

    Returns:
        ImportResult with the parsed drafts and the count of skipped rows.
    """
    drafts: list[ExpenseDraft] = []
    skipped = 0
    header_seen = False

    for row in csv.reader(io.StringIO(text.lstrip("\ufeff"))):
        if not any(cell.strip() for cell in row):
            continue
        if not header_seen:
            header_seen = True
            continue

        draft = parse_row(row)
        if draft is None:
            skipped += 1
        else:
            drafts.append(draft)

    return ImportResult(drafts=drafts, skipped=skipped)
