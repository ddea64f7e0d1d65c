"""Real concurrent toggles against a file-backed SQLite database.

Each worker thread gets its own session (and connection) from a thread-local
``scoped_session``, so the unique constraint and SQLite's write lock are the
only things serializing the workers.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import scoped_session, sessionmaker

from blog.core.extensions import db, enable_sqlite_savepoints
from blog.models import Article, ArticleLike, User
from blog.services.engagement import LikeService

WORKERS = 8


@pytest.fixture()
def file_session(tmp_path, monkeypatch):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'toggle.db'}", connect_args={"timeout": 10}
    )
    enable_sqlite_savepoints(engine)
    db.metadata.create_all(engine)
    scoped = scoped_session(sessionmaker(bind=engine, autoflush=False))
    monkeypatch.setattr(db, "session", scoped)
    try:
        yield scoped
    finally:
        scoped.remove()
        engine.dispose()


@pytest.fixture()
def target(file_session) -> tuple[int, str]:
    user = User(email="racer@example.com", nickname="racer")
    user.password = "Passw0rd1"
    file_session.add(user)
    file_session.flush()
    article = Article(title="Contended", content="body", user_id=user.id)
    file_session.add(article)
    file_session.commit()
    article_id = article.id
    file_session.remove()
    return article_id, "racer@example.com"


@pytest.fixture()
def likes() -> LikeService:
    return LikeService(max_attempts=20, base_delay=0.005)


def _run_concurrently(fn: Callable[[], bool]) -> list[bool]:
    barrier = threading.Barrier(WORKERS)
    results: list[bool] = []
    errors: list[BaseException] = []

    def worker():
        barrier.wait()
        try:
            results.append(fn())
        except Exception as exc:
            errors.append(exc)
        finally:
            db.session.remove()

    threads = [threading.Thread(target=worker) for _ in range(WORKERS)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    return results


def _state(session, article_id: int) -> tuple[int, int]:
    rows = session.execute(
        select(func.count(ArticleLike.id)).where(ArticleLike.article_id == article_id)
    ).scalar_one()
    counter = session.execute(
        select(Article.like_count).where(Article.id == article_id)
    ).scalar_one()
    session.remove()
    return rows, counter


def test_concurrent_adds_leave_one_row(file_session, target, likes):
    article_id, email = target

    results = _run_concurrently(lambda: likes.add(article_id, email))

    assert results.count(True) == 1
    assert _state(file_session, article_id) == (1, 1)


def test_concurrent_toggles_keep_counter_equal_to_rows(file_session, target, likes):
    article_id, email = target

    _run_concurrently(lambda: likes.toggle(article_id, email))

    rows, counter = _state(file_session, article_id)
    assert rows in (0, 1)
    assert counter == rows
