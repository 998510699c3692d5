"""HTTP-level tests for the /api/v1/auth endpoints."""

from __future__ import annotations

from datetime import timedelta

import pytest
from freezegun import freeze_time

BASE = "/api/v1/auth"
ANN = {"name": "Ann", "email": "ann@x.io", "password": "Secret123"}


def _register(client, payload=None):
    resp = client.post(f"{BASE}/register", json=payload or ANN)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["data"]


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_register_returns_account_and_credentials(client):
    data = _register(client)

    assert data["account"]["name"] == "Ann"
    assert data["account"]["email"] == "ann@x.io"
    assert data["account"]["id"].isdigit()
    assert "password" not in data["account"]
    assert "password_hash" not in data["account"]
    assert data["access_token"] and data["session_token"]
    assert data["token_type"] == "bearer"


def test_register_duplicate_email_is_400_conflict(client):
    _register(client)
    resp = client.post(f"{BASE}/register", json={**ANN, "email": "ANN@x.io"})
    assert resp.status_code == 400
    assert resp.mimetype == "application/problem+json"
    assert resp.get_json()["code"] == "conflict"


def test_register_invalid_payload_is_422(client):
    resp = client.post(f"{BASE}/register", json={"email": "not-an-email"})
    assert resp.status_code == 422
    errors = resp.get_json()["details"]["errors"]
    assert {"name", "email", "password"} <= set(errors)


def test_login_and_me(client):
    registered = _register(client)
    resp = client.post(f"{BASE}/login", json={"email": "ann@x.io", "password": "Secret123"})
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["account"] == registered["account"]

    me = client.get(f"{BASE}/me", headers=_bearer(data["access_token"]))
    assert me.status_code == 200
    assert me.get_json()["data"]["account_id"] == registered["account"]["id"]


def test_login_failures_share_one_response(client):
    _register(client)
    wrong = client.post(f"{BASE}/login", json={"email": "ann@x.io", "password": "wrongpass"})
    unknown = client.post(f"{BASE}/login", json={"email": "nouser@x.io", "password": "x"})

    assert wrong.status_code == unknown.status_code == 401
    w, u = wrong.get_json(), unknown.get_json()
    assert w["code"] == u["code"] == "invalid_credentials"
    assert w["detail"] == u["detail"]


@pytest.mark.parametrize(
    ("headers", "code"),
    [
        ({}, "missing_credential"),
        ({"Authorization": "Basic abc"}, "missing_credential"),
        ({"Authorization": "Bearer garbage"}, "invalid_token"),
    ],
)
def test_me_rejects_bad_credentials(client, headers, code):
    resp = client.get(f"{BASE}/me", headers=headers)
    assert resp.status_code == 401
    assert resp.get_json()["code"] == code


def test_me_rejects_session_credential(client):
    data = _register(client)
    resp = client.get(f"{BASE}/me", headers=_bearer(data["session_token"]))
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "invalid_token"


def test_me_rejects_expired_access_credential(client):
    with freeze_time("2026-03-01 12:00:00") as frozen:
        data = _register(client)
        frozen.tick(timedelta(minutes=16))
        resp = client.get(f"{BASE}/me", headers=_bearer(data["access_token"]))
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "token_expired"


def test_refresh_logout_refresh_flow(client):
    data = _register(client)
    session_token = data["session_token"]

    refreshed = client.post(f"{BASE}/refresh", json={"session_token": session_token})
    assert refreshed.status_code == 200
    body = refreshed.get_json()["data"]
    assert body["token_type"] == "bearer"
    assert body["access_token"] != data["access_token"]
    assert client.get(f"{BASE}/me", headers=_bearer(body["access_token"])).status_code == 200

    out = client.post(f"{BASE}/logout", json={"session_token": session_token})
    assert out.status_code == 200
    assert out.get_json() == {"data": {"ok": True}}

    again = client.post(f"{BASE}/refresh", json={"session_token": session_token})
    assert again.status_code == 401
    assert again.get_json()["code"] == "invalid_token"


def test_logout_twice_and_unknown_token_succeed(client):
    data = _register(client)
    for token in (data["session_token"], data["session_token"], "garbage"):
        resp = client.post(f"{BASE}/logout", json={"session_token": token})
        assert resp.status_code == 200


def test_refresh_requires_session_token(client):
    resp = client.post(f"{BASE}/refresh", json={})
    assert resp.status_code == 422


def test_responses_carry_request_id(client):
    resp = client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"
