"""In-memory expense store.

The store owns the expense list and the monthly income. Mutations are
serialized by a single lock and reads return copies, so a reader never sees
a partially applied change. Nothing is persisted.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Iterable
from dataclasses import dataclass

from runway.domain.expenses import Expense, ExpenseDraft
from runway.domain.models import Amount, ExpenseId, Month
from runway.errors import ExpenseNotFoundError

DEFAULT_INCOME = Amount(5000.0)


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of the store at one point in time."""

    expenses: tuple[Expense, ...]
    monthly_income: Amount


class ExpenseStore:
    """Holds the expense list and monthly income for one process."""

    def __init__(self, income: Amount = DEFAULT_INCOME, expenses: Iterable[ExpenseDraft] = ()) -> None:
        """Create a store, optionally hydrated with initial expenses.

        Args:
            income: Starting monthly income.
            expenses: Drafts to create in order.
        """
        self._lock = threading.RLock()
        self._expenses: list[Expense] = []
        self._income = income
        self._last_id = 0
        for draft in expenses:
            self.create(draft.title, draft.amount, draft.start_date, draft.end_date)

    def _next_id(self) -> ExpenseId:
        # Millisecond timestamps, bumped when two creates land in the same tick
        candidate = int(time.time() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return ExpenseId(self._last_id)

    def _index_of(self, expense_id: ExpenseId) -> int:
        for index, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return index
        raise ExpenseNotFoundError(expense_id)

    def list(self) -> Snapshot:
        """Return the current expenses and income."""
        with self._lock:
            return Snapshot(expenses=tuple(self._expenses), monthly_income=self._income)

    def get(self, expense_id: ExpenseId) -> Expense:
        """Look up one expense.

        Raises:
            ExpenseNotFoundError: If no expense has this id.
        """
        with self._lock:
            return self._expenses[self._index_of(expense_id)]

    def set_income(self, value: Amount) -> Amount:
        """Replace the monthly income."""
        with self._lock:
            self._income = value
            return self._income

    def create(self, title: str, amount: Amount, start_date: Month, end_date: Month) -> Expense:
        """Append a new expense with a fresh id."""
        with self._lock:
            expense = Expense(
                id=self._next_id(),
                title=title,
                amount=amount,
                start_date=start_date,
                end_date=end_date,
            )
            self._expenses.append(expense)
            return expense

    def update(self, expense_id: ExpenseId, title: str, amount: Amount, start_date: Month, end_date: Month) -> Expense:
        """Replace an expense in place, keeping its id and position.

        Raises:
            ExpenseNotFoundError: If no expense has this id. The store is left
                unchanged.
        """
        with self._lock:
            index = self._index_of(expense_id)
            expense = Expense(
                id=expense_id,
                title=title,
                amount=amount,
                start_date=start_date,
                end_date=end_date,
            )
            self._expenses[index] = expense
            return expense

    def delete(self, expense_id: ExpenseId) -> None:
        """Remove the first expense with this id.

        Raises:
            ExpenseNotFoundError: If no expense has this id.
        """
        with self._lock:
            del self._expenses[self._index_of(expense_id)]

    def replace_all(self, drafts: Iterable[ExpenseDraft]) -> list[Expense]:
        """Swap the whole expense list for new records in one step.

        Args:
            drafts: Expenses to create, in order.

        Returns:
            The newly created expenses.
        """
        drafts = list(drafts)
        with self._lock:
            replacement = [
                Expense(
                    id=self._next_id(),
                    title=draft.title,
                    amount=draft.amount,
                    start_date=draft.start_date,
                    end_date=draft.end_date,
                )
                for draft in drafts
            ]
            self._expenses = replacement
            return list(replacement)

    def clear(self) -> int:
        """Delete every expense.

        Returns:
            Number of expenses removed.
        """
        with self._lock:
            removed = len(self._expenses)
            self._expenses = []
            return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._expenses)
