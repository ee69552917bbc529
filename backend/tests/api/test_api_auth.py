"""HTTP tests for health and authentication endpoints."""

from __future__ import annotations

from tests.factories.user import UserFactory


def test_health(client) -> None:
    resp = client.get("/api/v1/health")

    assert resp.status_code == 200
    assert resp.get_json()["db"] == "ok"
    assert resp.headers.get("X-Request-ID")


def test_login_returns_bearer_token(app, client, session) -> None:
    """Valid credentials return an access token and its lifetime."""
    UserFactory(username="alice", raw_password="s3cret-pass")

    resp = client.post("/api/v1/auth/login", json={"username": "alice", "password": "s3cret-pass"})

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["token_type"] == "bearer"
    assert data["expires_in"] == app.config["TOKEN_EXPIRATION_TIME"]
    assert data["access_token"].count(".") == 2


def test_login_failures_share_one_response(client, session) -> None:
    UserFactory(username="alice", raw_password="s3cret-pass")

    wrong = client.post("/api/v1/auth/login", json={"username": "alice", "password": "bad"})
    unknown = client.post("/api/v1/auth/login", json={"username": "zed", "password": "bad"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.get_json()["detail"] == unknown.get_json()["detail"] == "Invalid credentials"
    assert wrong.mimetype == "application/problem+json"


def test_login_validation_error(client) -> None:
    resp = client.post("/api/v1/auth/login", json={"username": "alice"})

    assert resp.status_code == 422
    assert "password" in resp.get_json()["details"]["errors"]
