"""Date utilities for runway.

Pure functions for month arithmetic and formatting. Months are always
handled as zero-padded YYYY-MM strings so they compare correctly as text.
"""

import warnings
from datetime import datetime

import pandas as pd

from runway.domain.models import Month
from runway.errors import InvalidMonthError

# datetime can't represent years outside 1..9999
FIRST_ORDINAL = 1 * 12
LAST_ORDINAL = 9999 * 12 + 11


def parse_month(month: str) -> tuple[int, int]:
    """Split a month into year and month numbers.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (year, month_number).

    Raises:
        InvalidMonthError: If the month isn't valid YYYY-MM.
    """
    try:
        dt = datetime.strptime(month, "%Y-%m")
    except (TypeError, ValueError) as e:
        raise InvalidMonthError(f"Invalid month '{month}', expected YYYY-MM") from e
    # strptime accepts "2024-1"; months must be zero-padded to sort as text
    if month != f"{dt.year:04d}-{dt.month:02d}":
        raise InvalidMonthError(f"Invalid month '{month}', expected YYYY-MM")
    return dt.year, dt.month


def format_month(year: int, month: int) -> Month:
    """Format year and month numbers as YYYY-MM."""
    return Month(f"{year:04d}-{month:02d}")


def month_ordinal(month: Month) -> int:
    """Count of months since 0000-01, for arithmetic on months."""
    year, month_num = parse_month(month)
    return year * 12 + (month_num - 1)


def month_from_ordinal(ordinal: int) -> Month:
    """Inverse of month_ordinal.

    Raises:
        InvalidMonthError: If the ordinal falls outside 0001-01..9999-12.
    """
    if not FIRST_ORDINAL <= ordinal <= LAST_ORDINAL:
        raise InvalidMonthError(f"Month ordinal {ordinal} is outside 0001-01..9999-12")
    return format_month(ordinal // 12, ordinal % 12 + 1)


def clamp_ordinal(ordinal: int) -> int:
    """Pull an ordinal back inside the representable 0001-01..9999-12 range."""
    return max(FIRST_ORDINAL, min(LAST_ORDINAL, ordinal))


def add_months(month: Month, count: int) -> Month:
    """Shift a month forwards (or backwards for negative counts).

    Args:
        month: Month in YYYY-MM format.
        count: Number of calendar months to move.

    Returns:
        Shifted month, rolling over year boundaries.

    Raises:
        InvalidMonthError: If the result is before 0001-01 or after 9999-12.
    """
    return month_from_ordinal(month_ordinal(month) + count)


def months_between(start: Month, end: Month) -> list[Month]:
    """List every month from start to end inclusive.

    Returns an empty list when end is before start.
    """
    return [month_from_ordinal(ordinal) for ordinal in range(month_ordinal(start), month_ordinal(end) + 1)]


def month_label(month: Month) -> str:
    """Short label for chart axes (e.g. "Jan 24")."""
    dt = datetime.strptime(month, "%Y-%m")
    return dt.strftime("%b %y")


def normalize_month(raw: str) -> Month:
    """Normalize user-entered month text to YYYY-MM.

    Accepts YYYY-MM directly and falls back to pandas.to_datetime for looser
    forms such as "2024/03", "March 2024" or a full date.

    Raises:
        InvalidMonthError: If the text can't be read as a month.
    """
    text = raw.strip()
    try:
        parse_month(text)
        return Month(text)
    except InvalidMonthError:
        pass

    try:
        parsed = pd.to_datetime(text, format="ISO8601")
    except (ValueError, pd.errors.ParserError):
        with warnings.catch_warnings():
            # dayfirst only matters for ambiguous numeric dates; pandas warns when it can't apply
            warnings.simplefilter("ignore", UserWarning)
            try:
                parsed = pd.to_datetime(text, dayfirst=True)
            except (ValueError, pd.errors.ParserError) as e:
                raise InvalidMonthError(f"Could not parse month '{raw}': {e}") from e
    if pd.isna(parsed):
        raise InvalidMonthError(f"Could not parse month '{raw}'")
    return format_month(parsed.year, parsed.month)
