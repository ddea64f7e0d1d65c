"""Account endpoints and health check."""

from __future__ import annotations

from sqlalchemy import select

from blog.models import Article, User
from tests.factories.article import ArticleFactory
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


def _login(client, email):
    resp = client.post("/auth/login", json={"email": email, "password": DEFAULT_PASSWORD})
    return resp.get_json()


def test_me(client):
    user_id = UserFactory(email="me@example.com", nickname="me").id
    pair = _login(client, "me@example.com")

    resp = client.get("/users/me", headers={"Authorization": f"Bearer {pair['accessToken']}"})
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["userId"] == user_id
    assert body["email"] == "me@example.com"
    assert body["nickname"] == "me"


def test_withdraw_deletes_account_and_ends_sessions(client, session):
    user = UserFactory(email="leaving@example.com")
    article_id = ArticleFactory(author=user).id
    user_id = user.id
    pair = _login(client, user.email)
    headers = {"Authorization": f"Bearer {pair['accessToken']}"}

    resp = client.delete("/users/me", json={"password": DEFAULT_PASSWORD}, headers=headers)

    assert resp.status_code == 204
    assert session.execute(select(User).where(User.id == user_id)).first() is None
    assert session.execute(select(Article).where(Article.id == article_id)).first() is None
    assert client.get("/users/me", headers=headers).status_code == 401
    resp = client.post("/auth/refresh", json={"refreshToken": pair["refreshToken"]})
    assert resp.get_json()["code"] == "unknown_refresh_token"


def test_withdraw_with_wrong_password(client):
    user = UserFactory(email="stay@example.com")
    pair = _login(client, user.email)

    resp = client.delete(
        "/users/me",
        json={"password": "wrong-pass1"},
        headers={"Authorization": f"Bearer {pair['accessToken']}"},
    )
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "invalid_password"


def test_health(client):
    resp = client.get("/health")
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["status"] == "ok"
    assert body["db"] == "ok"
    assert body["redis"] == "disabled"
