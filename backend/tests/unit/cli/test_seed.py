"""Demo seeding and wiping, through the services and the ``flask seed`` group."""

from __future__ import annotations

from sqlalchemy import func, select

from blog.models import Article, ArticleBookmark, ArticleLike, Comment, User
from blog.seeds import seed_data
from blog.services.auth import LoginIn


def _count(session, model) -> int:
    return session.execute(select(func.count(model.id))).scalar_one()


def test_run_all_is_idempotent(components, session):
    first = seed_data.run_all(components)
    second = seed_data.run_all(components)

    assert first["users"] == {"created": 3, "existing": 0}
    assert first["articles"] == {"created": 3, "existing": 0}
    assert first["comments"] == {"created": 2, "existing": 0}
    assert first["article_likes"] == {"created": 3, "existing": 0}
    assert all(counters["created"] == 0 for counters in second.values())

    assert _count(session, User) == 3
    assert _count(session, Comment) == 2
    assert _count(session, ArticleLike) == 3
    assert _count(session, ArticleBookmark) == 1
    like_count = session.execute(
        select(Article.like_count).where(Article.title == "Rotating refresh tokens")
    ).scalar_one()
    assert like_count == 2


def test_wipe_removes_accounts_and_their_sessions(components, session):
    seed_data.run_all(components)
    demo = seed_data.USER_FIXTURES[0]
    pair = components.auth.login(LoginIn(email=demo["email"], password=demo["password"]))
    assert components.refresh_store.get(pair.refresh_token) == demo["email"]

    assert seed_data.wipe(components) == 3
    assert seed_data.wipe(components) == 0

    assert components.refresh_store.get(pair.refresh_token) is None
    assert _count(session, User) == 0
    assert _count(session, Article) == 0
    assert _count(session, ArticleLike) == 0


def test_cli_demo_then_wipe(app, session):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed", "demo"])
    assert result.exit_code == 0, result.output
    assert "Seed summary:" in result.output

    result = runner.invoke(args=["seed", "wipe", "--yes"])
    assert result.exit_code == 0, result.output
    assert "Removed 3 demo account(s)." in result.output
    assert _count(session, User) == 0
