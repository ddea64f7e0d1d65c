"""Idempotent demo data for local development environments."""

from __future__ import annotations

import logging

from blog.services._shared.errors import DuplicateEmailError, UserNotFoundError
from blog.services.articles import ArticleCreateIn
from blog.services.auth import SignupIn
from blog.services.identity import WithdrawIn
from blog.wiring import Components, get_components

LOGGER = logging.getLogger(__name__)

USER_FIXTURES: list[dict[str, str]] = [
    {"email": "alex.martinez@example.com", "nickname": "alexm", "password": "devPass123!"},
    {"email": "jamie.lee@example.com", "nickname": "jamielee", "password": "strongPass123"},
    {"email": "sara.kim@example.com", "nickname": "sarak", "password": "writeMore2024"},
]

ARTICLE_FIXTURES: list[dict[str, str]] = [
    {
        "author": "alex.martinez@example.com",
        "title": "Rotating refresh tokens",
        "content": "Every refresh consumes the old token and hands out a new pair.",
    },
    {
        "author": "alex.martinez@example.com",
        "title": "Idempotent likes",
        "content": "A unique constraint keeps concurrent likes down to a single row.",
    },
    {
        "author": "jamie.lee@example.com",
        "title": "Fixed-window rate limits",
        "content": "Five attempts per minute per client address on the auth routes.",
    },
]

COMMENT_FIXTURES: list[dict[str, str]] = [
    {"author": "jamie.lee@example.com", "article": "Rotating refresh tokens", "content": "Nice."},
    {"author": "sara.kim@example.com", "article": "Idempotent likes", "content": "What about retries?"},
]

LIKE_FIXTURES: list[tuple[str, str]] = [
    ("jamie.lee@example.com", "Rotating refresh tokens"),
    ("sara.kim@example.com", "Rotating refresh tokens"),
    ("alex.martinez@example.com", "Fixed-window rate limits"),
]

BOOKMARK_FIXTURES: list[tuple[str, str]] = [
    ("sara.kim@example.com", "Idempotent likes"),
]



def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    entry["created" if created else "existing"] += 1


def run_all(
    components: Components | None = None, *, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """
    Create demo users, articles, comments, likes and bookmarks.

    Everything goes through the application services, so like counters and
    password hashes are maintained exactly as for API traffic. Each service
    call commits on its own; rerunning after a partial failure fills in the
    missing rows only.
    """
    c = components or get_components()
    if verbose:
        LOGGER.info("Seeding demo data...")
    summary: dict[str, dict[str, int]] = {}

    for fixture in USER_FIXTURES:
        try:
            c.auth.signup(SignupIn(**fixture))
            created = True
        except DuplicateEmailError:
            created = False
        _touch(summary, "users", created)

    article_ids: dict[str, int] = {}
    for fixture in ARTICLE_FIXTURES:
        existing = {a.title: a.id for a in c.articles.list_by_author(fixture["author"])}
        article_id = existing.get(fixture["title"])
        if article_id is None:
            article_id = c.articles.create(
                fixture["author"],
                ArticleCreateIn(title=fixture["title"], content=fixture["content"]),
            ).id
            _touch(summary, "articles", True)
        else:
            _touch(summary, "articles", False)
        article_ids[fixture["title"]] = article_id

    for fixture in COMMENT_FIXTURES:
        article_id = article_ids[fixture["article"]]
        author_id = c.identity.get_by_email(fixture["author"]).id
        present = any(
            comment.user_id == author_id and comment.content == fixture["content"]
            for comment in c.comments.list_for_article(article_id)
        )
        if not present:
            c.comments.create(fixture["author"], article_id, fixture["content"])
        _touch(summary, "comments", not present)

    for email, title in LIKE_FIXTURES:
        _touch(summary, "article_likes", c.likes.add(article_ids[title], email))

    for email, title in BOOKMARK_FIXTURES:
        _touch(summary, "article_bookmarks", c.bookmarks.add(article_ids[title], email))

    if verbose:
        LOGGER.info("Demo data ready", extra={"summary": summary})
    return summary


def wipe(components: Components | None = None, *, verbose: bool = False) -> int:
    """Withdraw every demo account and end its sessions; returns how many were removed."""
    c = components or get_components()
    removed = 0
    for fixture in USER_FIXTURES:
        try:
            c.identity.withdraw(WithdrawIn(email=fixture["email"], password=fixture["password"]))
        except UserNotFoundError:
            if verbose:
                LOGGER.info("Demo user already absent", extra={"email": fixture["email"]})
            continue
        c.auth.revoke_all_sessions(fixture["email"])
        removed += 1
    return removed


__all__ = ["run_all", "wipe"]
