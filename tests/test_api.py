# tests/test_api.py

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from todo_ledger.api.app import create_app

from .conftest import ALICE, BOB


@pytest.fixture()
def client(state) -> TestClient:
    return TestClient(create_app(state))


def _add(client: TestClient, description: str, account: str | None = None) -> int:
    headers = {"X-Account": account} if account else {}
    resp = client.post("/api/tasks", json={"description": description}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["taskId"]


def test_health_and_accounts(client: TestClient) -> None:
    health = client.get("/api/health").json()
    assert health["status"] == "healthy"
    assert health["accountsAvailable"] == 3

    wallet = client.get("/api/wallet/connect").json()
    assert wallet["connected"] is True
    assert wallet["account"] == ALICE

    accounts = client.get("/api/accounts").json()
    assert accounts["default"] == ALICE
    assert BOB in accounts["accounts"]


def test_crud_flow(client: TestClient) -> None:
    assert _add(client, "Task 1") == 0
    assert _add(client, "Task 2") == 1
    assert _add(client, "Task 3") == 2

    resp = client.put("/api/tasks/2", json={"description": "Task 3 (edited)"})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "taskId": 2, "message": "Task updated successfully"}

    assert client.patch("/api/tasks/0/toggle").status_code == 200
    assert client.delete("/api/tasks/1").status_code == 200

    listing = client.get("/api/tasks").json()
    assert listing["account"] == ALICE
    assert listing["count"] == 2
    assert [t["description"] for t in listing["tasks"]] == ["Task 1", "Task 3 (edited)"]
    assert listing["tasks"][0]["completed"] is True

    task = client.get("/api/tasks/1").json()["task"]
    assert task["deleted"] is True
    assert task["description"] == "Task 2"

    stats = client.get("/api/stats/count").json()["stats"]
    assert stats == {"total": 3, "active": 2, "completed": 1, "deleted": 1}


def test_error_mapping(client: TestClient) -> None:
    _add(client, "only task")

    resp = client.get("/api/tasks/99")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Task does not exist"}

    assert client.get("/api/tasks/abc").status_code == 400
    assert client.get("/api/tasks/abc").json()["error"] == "Invalid task ID"

    resp = client.post("/api/tasks", json={"description": "   "})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Description cannot be empty"

    resp = client.post("/api/tasks", json={"description": "x" * 501})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Description too long"

    assert client.post("/api/tasks", json={}).status_code == 400

    client.delete("/api/tasks/0")
    resp = client.delete("/api/tasks/0")
    assert resp.status_code == 409
    assert resp.json()["error"] == "Task is deleted"
    assert client.put("/api/tasks/0", json={"description": "again"}).status_code == 409

    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Route not found", "path": "/api/nope"}


def test_caller_header_isolates_accounts(client: TestClient) -> None:
    _add(client, "Alice Task")
    assert _add(client, "Bob Task", account=BOB) == 0

    bob = {"X-Account": BOB}
    assert [t["description"] for t in client.get("/api/tasks", headers=bob).json()["tasks"]] == ["Bob Task"]

    # Bob's id 0 is his own task; Alice's task 0 is untouched.
    client.patch("/api/tasks/0/toggle", headers=bob)
    assert client.get("/api/tasks/0").json()["task"]["completed"] is False

    assert client.get("/api/tasks/1", headers=bob).status_code == 404

    bad = client.get("/api/tasks", headers={"X-Account": "not-an-address"})
    assert bad.status_code == 400
    assert bad.json()["error"] == "Invalid account address"


def test_user_tasks_public_read(client: TestClient) -> None:
    _add(client, "Bob Task", account=BOB)
    _add(client, "Bob Gone", account=BOB)
    client.delete("/api/tasks/1", headers={"X-Account": BOB})

    resp = client.get(f"/api/users/{BOB}/tasks")
    assert resp.status_code == 200
    body = resp.json()
    assert body["userAddress"] == BOB
    assert body["count"] == 2
    assert body["tasks"][1]["deleted"] is True

    resp = client.get("/api/users/0x1234/tasks")
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid account address"


def test_task_id_beyond_sqlite_range_is_404(client: TestClient) -> None:
    _add(client, "only task")
    huge = "99999999999999999999"

    resp = client.get(f"/api/tasks/{huge}")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Task does not exist"}

    assert client.put(f"/api/tasks/{huge}", json={"description": "x"}).status_code == 404
    assert client.patch(f"/api/tasks/{huge}/toggle").status_code == 404
    assert client.delete(f"/api/tasks/{huge}").status_code == 404

    assert client.get("/api/tasks/0.5").status_code == 400


def test_requests_are_logged_below_console_level(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="todo_ledger.api.app"):
        client.get("/api/tasks")

    records = [r for r in caplog.records if r.name == "todo_ledger.api.app" and "GET /api/tasks" in r.getMessage()]
    assert records
    assert all(r.levelno == logging.DEBUG for r in records)
