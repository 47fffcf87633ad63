"""HTTP client for the runway API."""

from collections.abc import Iterable

import requests

from runway.config import load_settings
from runway.domain.expenses import Expense, ExpenseDraft, draft_to_dict, parse_amount
from runway.domain.models import Amount, ExpenseId
from runway.errors import ExpenseNotFoundError
from runway.store.memory import Snapshot

DEFAULT_TIMEOUT = 10


class RunwayClient:
    """Thin wrapper over the runway HTTP API.

    All methods raise requests.RequestException if the request fails, except
    that a 404 on a single expense raises ExpenseNotFoundError.
    """

    def __init__(self, base_url: str, session: requests.Session | None = None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api{path}"

    def _request(self, method: str, path: str, expense_id: ExpenseId | None = None, **kwargs) -> dict:
        response = self.session.request(method, self._url(path), timeout=self.timeout, **kwargs)
        if response.status_code == 404 and expense_id is not None:
            raise ExpenseNotFoundError(expense_id)
        response.raise_for_status()
        return response.json()

    def list_expenses(self) -> Snapshot:
        """Fetch all expenses and the monthly income.

        Returns:
            Snapshot of the server's store.
        """
        data = self._request("GET", "/expenses")
        return Snapshot(
            expenses=tuple(Expense.from_dict(item) for item in data.get("expenses", [])),
            monthly_income=parse_amount(data.get("monthlyIncome", 0)),
        )

    def set_income(self, income: Amount) -> Amount:
        """Replace the monthly income.

        Returns:
            Income as stored by the server.
        """
        data = self._request("PUT", "/income", json={"income": income})
        return parse_amount(data["monthlyIncome"])

    def create_expense(self, draft: ExpenseDraft) -> Expense:
        """Create an expense.

        Returns:
            Created expense with its assigned id.
        """
        data = self._request("POST", "/expenses", json=draft_to_dict(draft))
        return Expense.from_dict(data)

    def update_expense(self, expense_id: ExpenseId, draft: ExpenseDraft) -> Expense:
        """Replace an expense's fields.

        Raises:
            ExpenseNotFoundError: If the server has no expense with this id.
        """
        data = self._request("PUT", f"/expenses/{expense_id}", expense_id=expense_id, json=draft_to_dict(draft))
        return Expense.from_dict(data)

    def delete_expense(self, expense_id: ExpenseId) -> None:
        """Delete an expense.

        Raises:
            ExpenseNotFoundError: If the server has no expense with this id.
        """
        self._request("DELETE", f"/expenses/{expense_id}", expense_id=expense_id)

    def replace_expenses(self, drafts: Iterable[ExpenseDraft]) -> list[Expense]:
        """Replace every expense on the server in one request.

        Returns:
            Newly created expenses.
        """
        body = {"expenses": [draft_to_dict(draft) for draft in drafts]}
        data = self._request("PUT", "/expenses", json=body)
        return [Expense.from_dict(item) for item in data["expenses"]]

    def clear_expenses(self) -> int:
        """Delete every expense on the server.

        Returns:
            Number of expenses removed.
        """
        data = self._request("DELETE", "/expenses")
        return int(data["deleted"])


def get_client(settings: dict | None = None) -> RunwayClient:
    """Create a client for the configured API URL.

    Args:
        settings: Loaded settings. If None, reads the config file.
    """
    if settings is None:
        settings = load_settings()
    return RunwayClient(settings["client"]["api_url"])
