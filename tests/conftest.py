"""Shared fixtures: a requests-like session that talks to the Flask app in-process."""

from urllib.parse import urlsplit

import pytest
import requests

from runway.client import RunwayClient
from runway.domain.models import Amount
from runway.server import create_app
from runway.store.memory import ExpenseStore


class FlaskResponse:
    """Minimal stand-in for requests.Response backed by a Flask test response."""

    def __init__(self, response) -> None:
        self.status_code = response.status_code
        self._data = response.get_json(silent=True)

    def json(self):
        return self._data

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FlaskSession:
    """Routes RunwayClient requests to a Flask test client."""

    def __init__(self, app) -> None:
        self.test_client = app.test_client()
        self.calls: list[tuple[str, str]] = []

    def request(self, method: str, url: str, timeout=None, json=None):
        path = urlsplit(url).path
        self.calls.append((method, path))
        return FlaskResponse(self.test_client.open(path, method=method, json=json))


@pytest.fixture
def store() -> ExpenseStore:
    return ExpenseStore(income=Amount(5000))


@pytest.fixture
def api_client(store: ExpenseStore) -> RunwayClient:
    app = create_app(store)
    app.config["TESTING"] = True
    return RunwayClient("http://runway.test", session=FlaskSession(app))
