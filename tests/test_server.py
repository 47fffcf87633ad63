"""Tests for the runway Flask API."""

import pytest

from runway.server import create_app
from runway.store.memory import ExpenseStore

RENT = {"title": "Rent", "amount": 1200, "startDate": "2024-01", "endDate": "2024-12"}


@pytest.fixture
def client(store: ExpenseStore):
    app = create_app(store)
    app.config["TESTING"] = True
    return app.test_client()


class TestListExpenses:
    """Tests for GET /api/expenses."""

    def test_empty(self, client) -> None:
        """Should return no expenses and the income."""
        response = client.get("/api/expenses")

        assert response.status_code == 200
        assert response.get_json() == {"expenses": [], "monthlyIncome": 5000}

    def test_cors_header(self, client) -> None:
        """Should allow cross-origin requests from the browser client."""
        response = client.get("/api/expenses")

        assert response.headers["Access-Control-Allow-Origin"] == "*"


class TestIncome:
    """Tests for PUT /api/income."""

    def test_set_income(self, client, store: ExpenseStore) -> None:
        """Should replace the income and echo it back."""
        response = client.put("/api/income", json={"income": "6500.5"})

        assert response.status_code == 200
        assert response.get_json() == {"monthlyIncome": 6500.5}
        assert store.list().monthly_income == 6500.5

    def test_non_numeric_income_rejected(self, client, store: ExpenseStore) -> None:
        """Should return 400 and keep the old income."""
        response = client.put("/api/income", json={"income": "lots"})

        assert response.status_code == 400
        assert "error" in response.get_json()
        assert store.list().monthly_income == 5000

    def test_missing_income_rejected(self, client) -> None:
        """Should return 400 without an income field."""
        assert client.put("/api/income", json={}).status_code == 400


class TestCreateExpense:
    """Tests for POST /api/expenses."""

    def test_create(self, client) -> None:
        """Should create and return the expense with an id."""
        response = client.post("/api/expenses", json={**RENT, "amount": "1200"})

        data = response.get_json()
        assert response.status_code == 200
        assert isinstance(data["id"], int)
        assert data["amount"] == 1200.0
        assert data["startDate"] == "2024-01"
        assert client.get("/api/expenses").get_json()["expenses"] == [data]

    def test_bad_amount(self, client, store: ExpenseStore) -> None:
        """Should reject a non-numeric amount before it reaches the store."""
        response = client.post("/api/expenses", json={**RENT, "amount": "abc"})

        assert response.status_code == 400
        assert len(store) == 0

    def test_bad_month(self, client) -> None:
        """Should reject months that aren't YYYY-MM."""
        response = client.post("/api/expenses", json={**RENT, "startDate": "Jan"})

        assert response.status_code == 400

    def test_missing_field(self, client) -> None:
        """Should reject a body missing a field."""
        body = {k: v for k, v in RENT.items() if k != "endDate"}
        response = client.post("/api/expenses", json=body)

        assert response.status_code == 400
        assert "endDate" in response.get_json()["error"]

    def test_not_json(self, client) -> None:
        """Should reject a body that isn't a JSON object."""
        response = client.post("/api/expenses", data="title=Rent")

        assert response.status_code == 400


class TestUpdateExpense:
    """Tests for PUT /api/expenses/<id>."""

    def test_update(self, client) -> None:
        """Should replace the fields and keep the id."""
        created = client.post("/api/expenses", json=RENT).get_json()

        response = client.put(f"/api/expenses/{created['id']}", json={**RENT, "amount": 1300})

        assert response.status_code == 200
        assert response.get_json()["id"] == created["id"]
        assert response.get_json()["amount"] == 1300

    def test_unknown_id(self, client, store: ExpenseStore) -> None:
        """Should return 404 and leave the store unchanged."""
        client.post("/api/expenses", json=RENT)
        before = store.list()

        response = client.put("/api/expenses/123", json=RENT)

        assert response.status_code == 404
        assert response.get_json() == {"error": "Expense not found"}
        assert store.list() == before


class TestDeleteExpense:
    """Tests for DELETE /api/expenses/<id>."""

    def test_delete(self, client) -> None:
        """Should remove the expense."""
        created = client.post("/api/expenses", json=RENT).get_json()

        response = client.delete(f"/api/expenses/{created['id']}")

        assert response.status_code == 200
        assert response.get_json() == {"message": "Expense deleted successfully"}
        assert client.get("/api/expenses").get_json()["expenses"] == []

    def test_unknown_id(self, client) -> None:
        """Should return 404 for a missing expense."""
        response = client.delete("/api/expenses/99")

        assert response.status_code == 404
        assert response.get_json() == {"error": "Expense not found"}


class TestBulkEndpoints:
    """Tests for PUT and DELETE /api/expenses."""

    def test_replace_all(self, client) -> None:
        """Should swap every expense in one request."""
        client.post("/api/expenses", json={**RENT, "title": "Old"})
        gym = {"title": "Gym", "amount": 45, "startDate": "2024-03", "endDate": "2024-09"}

        response = client.put("/api/expenses", json={"expenses": [RENT, gym]})

        assert response.status_code == 200
        titles = [e["title"] for e in client.get("/api/expenses").get_json()["expenses"]]
        assert titles == ["Rent", "Gym"]

    def test_replace_all_invalid_row_changes_nothing(self, client, store: ExpenseStore) -> None:
        """Should reject the whole batch if one row is invalid."""
        client.post("/api/expenses", json=RENT)
        before = store.list()

        response = client.put("/api/expenses", json={"expenses": [RENT, {**RENT, "amount": "x"}]})

        assert response.status_code == 400
        assert store.list() == before

    def test_replace_all_requires_list(self, client) -> None:
        """Should reject a body without an expenses list."""
        assert client.put("/api/expenses", json={"expenses": "nope"}).status_code == 400

    def test_clear(self, client) -> None:
        """Should delete everything and report how many."""
        client.post("/api/expenses", json=RENT)
        client.post("/api/expenses", json=RENT)

        response = client.delete("/api/expenses")

        assert response.get_json() == {"deleted": 2}
        assert client.get("/api/expenses").get_json()["expenses"] == []


class TestSummary:
    """Tests for GET /api/summary."""

    def test_rent_example(self, client) -> None:
        """Should return the padded timeline with totals and net income."""
        client.post("/api/expenses", json=RENT)

        data = client.get("/api/summary").get_json()

        assert data["months"][0] == "2023-07"
        assert data["months"][-1] == "2025-06"
        june = data["months"].index("2024-06")
        assert data["totals"][june] == 1200
        assert data["netIncome"][june] == 3800
        assert data["totals"][0] == 0
        assert data["netIncome"][0] == 5000

    def test_empty(self, client) -> None:
        """Should return empty series without expenses."""
        data = client.get("/api/summary").get_json()

        assert data["months"] == []
        assert data["monthlyIncome"] == 5000

    def test_far_future_end_keeps_timeline(self, client) -> None:
        """Should still return the padded timeline for an open-ended expense."""
        client.post("/api/expenses", json={**RENT, "endDate": "9999-12"})

        data = client.get("/api/summary").get_json()

        assert data["months"][0] == "2023-07"
        assert data["months"][-1] == "9999-12"
        assert data["totals"][-1] == 1200


class TestHttpErrors:
    """Tests for errors raised outside the expense routes."""

    def test_unknown_route(self, client) -> None:
        """Should answer JSON for paths the API doesn't have."""
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.get_json() == {"error": "Not Found"}

    def test_method_not_allowed(self, client) -> None:
        """Should answer JSON and list the allowed methods."""
        response = client.patch("/api/expenses/1", json=RENT)

        assert response.status_code == 405
        assert response.get_json() == {"error": "Method Not Allowed"}
        assert "PUT" in response.headers["Allow"]
        assert response.headers["Access-Control-Allow-Origin"] == "*"
