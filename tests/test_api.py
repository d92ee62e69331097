"""Tests for the HTTP API."""

from unittest.mock import MagicMock

import pytest
from fakes import FakeFeed, make_issue
from fastapi.testclient import TestClient

from ghgantt.api import create_app
from ghgantt.github.client import GitHubRateLimitError
from ghgantt.repositories import TaskStoreError
from ghgantt.sync import SyncEngine, SyncInProgressError

DUE = "Due Date: 2024-03-15"


@pytest.fixture
def feed() -> FakeFeed:
    return FakeFeed([[make_issue(1, body=DUE), make_issue(2, body=DUE, state="closed")]])


@pytest.fixture
def engine(feed, store) -> SyncEngine:
    return SyncEngine(feed, store)


@pytest.fixture
def client(store, engine) -> TestClient:
    return TestClient(create_app(store, engine))


class TestData:
    """Tests for GET /data."""

    def test_empty(self, client):
        response = client.get("/data")
        assert response.status_code == 200
        assert response.json() == {"data": []}

    def test_does_not_fetch(self, client, feed):
        client.get("/data")
        assert feed.fetched == []

    def test_after_sync(self, client, engine):
        engine.run()
        rows = client.get("/data").json()["data"]
        assert [row["id"] for row in rows] == [1]
        assert rows[0]["end_date"] == "03-15-2024"
        assert rows[0]["text"] == "Issue 1"


class TestRefreshData:
    """Tests for GET /refreshData."""

    def test_syncs_then_projects(self, client, feed):
        response = client.get("/refreshData")

        assert response.status_code == 200
        assert feed.fetched == [0]
        assert [row["id"] for row in response.json()["data"]] == [1]

    def test_github_failure_is_502(self, store):
        feed = FakeFeed([[]], fail_at=0, error=GitHubRateLimitError("rate limit"))
        client = TestClient(create_app(store, SyncEngine(feed, store)))

        response = client.get("/refreshData")

        assert response.status_code == 502
        assert response.json()["error_code"] == "UPSTREAM_ERROR"

    def test_store_failure_is_500(self, store):
        engine = MagicMock()
        engine.run.side_effect = TaskStoreError("locked")
        client = TestClient(create_app(store, engine))

        response = client.get("/refreshData")

        assert response.status_code == 500
        assert response.json()["error_code"] == "DATABASE_ERROR"

    def test_sync_in_progress_is_409(self, store):
        engine = MagicMock()
        engine.run.side_effect = SyncInProgressError("busy")
        client = TestClient(create_app(store, engine))

        response = client.get("/refreshData")

        assert response.status_code == 409
        assert response.json()["error_code"] == "SYNC_IN_PROGRESS"


class TestGetIssueUrl:
    """Tests for GET /getIssueURL."""

    def test_known_id(self, client, engine):
        engine.run()
        response = client.get("/getIssueURL", params={"id": 2})

        assert response.status_code == 200
        assert response.text == "https://github.com/acme/app/issues/2"
        assert response.headers["content-type"].startswith("text/plain")

    def test_unknown_id_is_404(self, client):
        response = client.get("/getIssueURL", params={"id": 99})
        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_non_integer_id_is_422(self, client):
        response = client.get("/getIssueURL", params={"id": "abc"})
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_missing_id_is_422(self, client):
        assert client.get("/getIssueURL").status_code == 422


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
