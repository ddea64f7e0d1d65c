"""Like and bookmark endpoints."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from tests.factories.article import ArticleFactory
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


@pytest.fixture()
def headers(client):
    UserFactory(email="reader@example.com")
    resp = client.post(
        "/auth/login", json={"email": "reader@example.com", "password": DEFAULT_PASSWORD}
    )
    return {"Authorization": f"Bearer {resp.get_json()['accessToken']}"}


@pytest.fixture()
def article():
    """Plain values only: ORM instances detach once a request ends."""
    row = ArticleFactory()
    return SimpleNamespace(id=row.id, title=row.title)


def test_like_is_idempotent(client, headers, article):
    first = client.post(f"/articles/{article.id}/like", headers=headers)
    second = client.post(f"/articles/{article.id}/like", headers=headers)

    assert first.status_code == 200
    assert first.get_json() == {"liked": True, "wasAdded": True, "likeCount": 1}
    assert second.get_json() == {"liked": True, "wasAdded": False, "likeCount": 1}


def test_unlike(client, headers, article):
    client.post(f"/articles/{article.id}/like", headers=headers)

    resp = client.delete(f"/articles/{article.id}/like", headers=headers)
    assert resp.get_json() == {"liked": False, "wasRemoved": True, "likeCount": 0}

    resp = client.delete(f"/articles/{article.id}/like", headers=headers)
    assert resp.get_json() == {"liked": False, "wasRemoved": False, "likeCount": 0}


def test_like_status(client, headers, article):
    resp = client.get(f"/articles/{article.id}/like/status", headers=headers)
    assert resp.get_json() == {"liked": False, "likeCount": 0}

    client.post(f"/articles/{article.id}/like", headers=headers)
    resp = client.get(f"/articles/{article.id}/like/status", headers=headers)
    assert resp.get_json() == {"liked": True, "likeCount": 1}


def test_bookmark_endpoints(client, headers, article):
    resp = client.post(f"/articles/{article.id}/bookmark", headers=headers)
    assert resp.get_json() == {"bookmarked": True, "wasAdded": True, "bookmarkCount": 1}

    resp = client.get(f"/articles/{article.id}/bookmark/status", headers=headers)
    assert resp.get_json() == {"bookmarked": True, "bookmarkCount": 1}

    resp = client.get("/users/me/bookmarks", headers=headers)
    assert resp.get_json() == {
        "items": [{"articleId": article.id, "title": article.title, "likeCount": 0}]
    }

    resp = client.delete(f"/articles/{article.id}/bookmark", headers=headers)
    assert resp.get_json() == {"bookmarked": False, "wasRemoved": True, "bookmarkCount": 0}


def test_unknown_article_is_404(client, headers):
    resp = client.post("/articles/987654/like", headers=headers)
    assert resp.status_code == 404
    assert resp.get_json()["code"] == "not_found"


@pytest.mark.parametrize(
    "auth, code",
    [
        (None, "missing_token"),
        ({"Authorization": "Bearer not-a-jwt"}, "invalid_token"),
    ],
)
def test_engagement_requires_valid_token(client, article, auth, code):
    resp = client.post(f"/articles/{article.id}/like", headers=auth or {})
    assert resp.status_code == 401
    assert resp.get_json()["code"] == code
