"""End-to-end authentication flows over the HTTP API."""

from __future__ import annotations

from tests.factories.user import DEFAULT_PASSWORD, UserFactory

SIGNUP = {"email": "writer@example.com", "password": "Secret123", "nickname": "writer"}


def _login(client, email="writer@example.com", password="Secret123"):
    return client.post("/auth/login", json={"email": email, "password": password})


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_signup_login_logout_flow(client):
    resp = client.post("/auth/signup", json=SIGNUP)
    assert resp.status_code == 201
    assert isinstance(resp.get_json()["userId"], int)

    resp = _login(client)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["expiresIn"] == 3600
    access = body["accessToken"]
    assert body["refreshToken"]

    assert client.get("/users/me", headers=_auth(access)).status_code == 200

    resp = client.post("/auth/logout", headers=_auth(access))
    assert resp.status_code == 200
    assert resp.get_json() == {"loggedOut": True}

    resp = client.get("/users/me", headers=_auth(access))
    assert resp.status_code == 401
    assert resp.mimetype == "application/problem+json"
    assert resp.get_json()["code"] == "token_revoked"


def test_signup_duplicate_email(client):
    UserFactory(email="writer@example.com")
    resp = client.post("/auth/signup", json=SIGNUP)

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "duplicate_email"


def test_signup_validation_error(client):
    resp = client.post(
        "/auth/signup", json={"email": "nope", "password": "short", "nickname": ""}
    )
    body = resp.get_json()

    assert resp.status_code == 400
    assert body["code"] == "validation_error"
    assert set(body["details"]["errors"]) >= {"email", "password", "nickname"}


def test_signup_password_needs_letters_and_digits(client):
    resp = client.post("/auth/signup", json={**SIGNUP, "password": "onlyletters"})
    assert resp.status_code == 400
    assert "password" in resp.get_json()["details"]["errors"]


def test_login_failures_are_distinguished(client):
    UserFactory(email="writer@example.com")

    resp = _login(client, email="ghost@example.com")
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "user_not_found"

    resp = _login(client, password="wrong-pass1")
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "invalid_password"


def test_refresh_rotates_tokens(client):
    UserFactory(email="writer@example.com")
    first = _login(client, password=DEFAULT_PASSWORD).get_json()

    resp = client.post("/auth/refresh", json={"refreshToken": first["refreshToken"]})
    assert resp.status_code == 200
    second = resp.get_json()
    assert second["refreshToken"] != first["refreshToken"]

    resp = client.post("/auth/refresh", json={"refreshToken": first["refreshToken"]})
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "unknown_refresh_token"


def test_refresh_with_garbage_token(client):
    resp = client.post("/auth/refresh", json={"refreshToken": "garbage"})
    body = resp.get_json()

    assert resp.status_code == 400
    assert body["code"] == "invalid_token"
    assert body["details"] == {"reason": "malformed"}


def test_logout_without_token(client):
    resp = client.post("/auth/logout")
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "missing_token"


def test_logout_all_sessions_revokes_refresh_tokens(client):
    UserFactory(email="writer@example.com")
    pair = _login(client, password=DEFAULT_PASSWORD).get_json()

    resp = client.post(
        "/auth/logout", json={"allSessions": True}, headers=_auth(pair["accessToken"])
    )
    assert resp.status_code == 200

    resp = client.post("/auth/refresh", json={"refreshToken": pair["refreshToken"]})
    assert resp.get_json()["code"] == "unknown_refresh_token"


def test_sixth_auth_request_is_rate_limited(client):
    UserFactory(email="writer@example.com")
    statuses = [_login(client, password="wrong-pass1").status_code for _ in range(6)]

    assert statuses[:5] == [400] * 5
    assert statuses[5] == 429

    resp = _login(client, password=DEFAULT_PASSWORD)
    body = resp.get_json()
    assert resp.status_code == 429
    assert body["code"] == "too_many_requests"
    assert body["detail"] == "Too many requests. Please try again later."


def test_rate_limit_is_per_client_ip(client):
    for _ in range(5):
        _login(client)
    assert _login(client).status_code == 429

    resp = client.post(
        "/auth/login",
        json={"email": "writer@example.com", "password": "Secret123"},
        headers={"X-Forwarded-For": "203.0.113.9"},
    )
    assert resp.status_code != 429


def test_non_auth_routes_are_not_rate_limited(client):
    statuses = {client.get("/health").status_code for _ in range(8)}
    assert statuses == {200}


def test_request_id_is_echoed(client):
    resp = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"
