"""API integration tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from login_store.api.dependencies import get_repository
from login_store.app import app
from login_store.repository import LoginRepository


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "credentials": 0}


def test_save_and_fetch_flow(client: TestClient) -> None:
    first = client.post("/logins", params={"wait": "true"}, json={"username": "alice", "password": "pw1"})
    assert first.status_code == 201
    second = client.post("/logins", params={"wait": "true"}, json={"username": "alice", "password": "pw2"})
    assert second.status_code == 201
    assert second.json()["id"] > first.json()["id"]

    resp = client.get("/logins/alice")
    assert resp.status_code == 200
    assert resp.json() == {"id": second.json()["id"], "username": "alice", "password": "pw2"}

    assert client.get("/health").json()["credentials"] == 2


def test_save_without_wait_is_accepted(client: TestClient) -> None:
    resp = client.post("/logins", json={"username": "bob", "password": ""})
    assert resp.status_code == 202
    assert resp.json() == {"status": "accepted"}


def test_unknown_username_is_404(client: TestClient) -> None:
    resp = client.get("/logins/nobody")
    assert resp.status_code == 404


def test_storage_failure_maps_to_503(client: TestClient, broken_settings) -> None:
    broken = LoginRepository(broken_settings)
    app.dependency_overrides[get_repository] = lambda: broken
    try:
        resp = client.get("/logins/alice")
    finally:
        app.dependency_overrides.clear()
        broken.close()
    assert resp.status_code == 503
    assert "failed" in resp.json()["detail"]


def test_metrics_endpoint(client: TestClient) -> None:
    client.post("/logins", params={"wait": "true"}, json={"username": "carol", "password": "pw"})
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "login_saves_total" in resp.text
