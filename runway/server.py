"""Flask HTTP API serving the expense store.

Endpoints mirror the store operations. Request bodies are parsed at this
boundary: malformed amounts or months get a 400 instead of reaching the
store.
"""

import logging
from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import BadRequest, HTTPException

from runway.domain.aggregate import summarize
from runway.domain.expenses import ExpenseDraft, draft_from_dict, parse_amount
from runway.domain.models import ExpenseId
from runway.domain.timeline import PADDING_MONTHS
from runway.errors import ExpenseNotFoundError, InvalidAmountError, InvalidMonthError, InvalidTitleError
from runway.store.memory import ExpenseStore

logger = logging.getLogger(__name__)


def _json_body() -> dict[str, Any]:
    """Read the request body as a JSON object.

    Raises:
        BadRequest: If the body isn't a JSON object.
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object")
    return body


def _parse_draft(body: dict[str, Any]) -> ExpenseDraft:
    try:
        return draft_from_dict(body)
    except KeyError as e:
        raise BadRequest(f"Missing field: {e.args[0]}") from e


def create_app(store: ExpenseStore | None = None, padding: int = PADDING_MONTHS) -> Flask:
    """Create the Flask application.

    Args:
        store: Store to serve. A fresh empty store is created if None.
        padding: Timeline padding used by the summary endpoint.

    Returns:
        Configured Flask app. The store is available as app.extensions["runway.store"].
    """
    if store is None:
        store = ExpenseStore()

    app = Flask(__name__)
    app.extensions["runway.store"] = store

    @app.after_request
    def allow_cross_origin(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response

    @app.errorhandler(ExpenseNotFoundError)
    def expense_not_found(error: ExpenseNotFoundError):
        logger.info("Expense %s not found", error.expense_id)
        return jsonify({"error": "Expense not found"}), 404

    @app.errorhandler(InvalidAmountError)
    @app.errorhandler(InvalidMonthError)
    @app.errorhandler(InvalidTitleError)
    def invalid_input(error: ValueError):
        return jsonify({"error": str(error)}), 400

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        # 400s raised by the routes carry their own message
        message = error.description if isinstance(error, BadRequest) else error.name
        headers = [(name, value) for name, value in error.get_headers() if name != "Content-Type"]
        return jsonify({"error": message}), error.code, headers

    @app.get("/api/expenses")
    def list_expenses():
        snapshot = store.list()
        return jsonify(
            {
                "expenses": [expense.to_dict() for expense in snapshot.expenses],
                "monthlyIncome": snapshot.monthly_income,
            }
        )

    @app.put("/api/income")
    def set_income():
        body = _json_body()
        if "income" not in body:
            raise BadRequest("Missing field: income")
        income = store.set_income(parse_amount(body["income"]))
        logger.info("Monthly income set to %s", income)
        return jsonify({"monthlyIncome": income})

    @app.post("/api/expenses")
    def create_expense():
        draft = _parse_draft(_json_body())
        expense = store.create(draft.title, draft.amount, draft.start_date, draft.end_date)
        logger.info("Created expense %s (%s)", expense.id, expense.title)
        return jsonify(expense.to_dict())

    @app.put("/api/expenses/<int:expense_id>")
    def update_expense(expense_id: int):
        draft = _parse_draft(_json_body())
        expense = store.update(ExpenseId(expense_id), draft.title, draft.amount, draft.start_date, draft.end_date)
        logger.info("Updated expense %s", expense.id)
        return jsonify(expense.to_dict())

    @app.delete("/api/expenses/<int:expense_id>")
    def delete_expense(expense_id: int):
        store.delete(ExpenseId(expense_id))
        logger.info("Deleted expense %s", expense_id)
        return jsonify({"message": "Expense deleted successfully"})

    @app.put("/api/expenses")
    def replace_expenses():
        body = _json_body()
        items = body.get("expenses")
        if not isinstance(items, list):
            raise BadRequest("Field 'expenses' must be a list")
        drafts = [_parse_draft(item) for item in items if isinstance(item, dict)]
        if len(drafts) != len(items):
            raise BadRequest("Every expense must be a JSON object")
        expenses = store.replace_all(drafts)
        logger.info("Replaced all expenses (%d records)", len(expenses))
        return jsonify({"expenses": [expense.to_dict() for expense in expenses]})

    @app.delete("/api/expenses")
    def clear_expenses():
        removed = store.clear()
        logger.info("Cleared %d expenses", removed)
        return jsonify({"deleted": removed})

    @app.get("/api/summary")
    def summary():
        snapshot = store.list()
        result = summarize(snapshot.expenses, snapshot.monthly_income, padding)
        return jsonify(
            {
                "months": result.months,
                "totals": [result.totals[month] for month in result.months],
                "netIncome": [result.net[month] for month in result.months],
                "monthlyIncome": result.income,
            }
        )

    return app
