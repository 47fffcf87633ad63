"""Exception types raised by runway."""


class RunwayError(Exception):
    """Base class for runway errors."""


class ExpenseNotFoundError(RunwayError):
    """Raised when an update or delete targets an id that isn't stored."""

    def __init__(self, expense_id: int) -> None:
        super().__init__(f"Expense {expense_id} not found")
        self.expense_id = expense_id


class InvalidAmountError(RunwayError, ValueError):
    """Raised when user-entered text can't be used as an amount."""


class InvalidMonthError(RunwayError, ValueError):
    """Raised when a month isn't in YYYY-MM form."""


class InvalidTitleError(RunwayError, ValueError):
    """Raised when an expense title is blank."""
