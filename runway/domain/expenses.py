"""Expense records and boundary parsing.

This module contains the functional core for expense data:
- No I/O operations (no network, no console, no files)
- Immutable records
- Explicit parsing of user-entered values before they reach the store

Wire dictionaries use the camelCase keys of the HTTP API
(startDate / endDate); attributes use snake_case.
"""

import math
from dataclasses import dataclass
from typing import Any

from runway.dates import parse_month
from runway.domain.models import Amount, ExpenseId, Month
from runway.errors import InvalidAmountError, InvalidTitleError


@dataclass(frozen=True)
class ExpenseDraft:
    """Expense fields as supplied by a caller, before an id is assigned."""

    title: str
    amount: Amount
    start_date: Month
    end_date: Month


@dataclass(frozen=True)
class Expense:
    """Immutable recurring monthly expense."""

    id: ExpenseId
    title: str
    amount: Amount
    start_date: Month
    end_date: Month

    def covers(self, month: Month) -> bool:
        """Check whether the expense is active in a month (inclusive bounds)."""
        return self.start_date <= month <= self.end_date

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire format."""
        return {
            "id": self.id,
            "title": self.title,
            "amount": self.amount,
            "startDate": self.start_date,
            "endDate": self.end_date,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Expense":
        """Build an Expense from its wire format."""
        return cls(
            id=ExpenseId(int(data["id"])),
            title=str(data["title"]),
            amount=parse_amount(data["amount"]),
            start_date=Month(str(data["startDate"])),
            end_date=Month(str(data["endDate"])),
        )


def parse_amount(raw: Any) -> Amount:
    """Parse user-entered text or a number into an Amount.

    Args:
        raw: String or number from a form, CSV cell or JSON body.

    Returns:
        Parsed amount.

    Raises:
        InvalidAmountError: If the value is missing, not numeric, or not finite.
    """
    if isinstance(raw, bool) or raw is None:
        raise InvalidAmountError(f"Invalid amount: {raw!r}")

    try:
        value = float(str(raw).strip().replace(",", "")) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError) as e:
        raise InvalidAmountError(f"Invalid amount: {raw!r}") from e

    if not math.isfinite(value):
        raise InvalidAmountError(f"Amount must be finite: {raw!r}")

    return Amount(value)


def parse_title(raw: Any) -> str:
    """Strip a title and reject blank ones.

    Raises:
        InvalidTitleError: If the title is empty after stripping.
    """
    title = str(raw).strip() if raw is not None else ""
    if not title:
        raise InvalidTitleError("Title must not be empty")
    return title


def draft_from_dict(data: dict[str, Any]) -> ExpenseDraft:
    """Build an ExpenseDraft from a request body.

    Months must be YYYY-MM but their order isn't checked.

    Raises:
        InvalidAmountError: If the amount doesn't parse.
        InvalidMonthError: If a month isn't YYYY-MM.
        InvalidTitleError: If the title is blank.
        KeyError: If a required field is missing.
    """
    start_date = Month(str(data["startDate"]))
    end_date = Month(str(data["endDate"]))
    parse_month(start_date)
    parse_month(end_date)
    return ExpenseDraft(
        title=parse_title(data["title"]),
        amount=parse_amount(data["amount"]),
        start_date=start_date,
        end_date=end_date,
    )


def draft_to_dict(draft: ExpenseDraft) -> dict[str, Any]:
    """Serialize a draft to a request body."""
    return {
        "title": draft.title,
        "amount": draft.amount,
        "startDate": draft.start_date,
        "endDate": draft.end_date,
    }


def is_inverted(expense: Expense | ExpenseDraft) -> bool:
    """Check whether an expense ends before it starts.

    Inverted expenses are stored but never match a month, so they add zero.
    """
    return expense.start_date > expense.end_date
