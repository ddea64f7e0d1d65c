"""ArticleRepository counter updates and lookups."""

from __future__ import annotations

from blog.repositories import ArticleRepository, BookmarkRepository, LikeRepository
from tests.factories.article import ArticleFactory
from tests.factories.user import UserFactory


def test_relative_counter_updates_floor_at_zero(session):
    repo = ArticleRepository(session)
    article = ArticleFactory()

    repo.increment_like_count(article.id)
    repo.increment_like_count(article.id)
    repo.decrement_like_count(article.id)
    repo.decrement_like_count(article.id)
    repo.decrement_like_count(article.id)

    assert repo.get_like_count(article.id) == 0


def test_get_like_count_of_missing_article(session):
    assert ArticleRepository(session).get_like_count(123456) is None


def test_decrement_like_counts_from_subquery(session):
    repo = ArticleRepository(session)
    likes = LikeRepository(session)
    user = UserFactory()
    liked, zero, untouched = ArticleFactory.create_batch(3)
    for article in (liked, zero):
        likes.insert(user.id, article.id)
    repo.increment_like_count(liked.id)
    repo.increment_like_count(untouched.id)

    updated = repo.decrement_like_counts(likes.article_ids_for_user(user.id))

    assert updated == 1  # the zero counter is left alone
    assert repo.get_like_count(liked.id) == 0
    assert repo.get_like_count(zero.id) == 0
    assert repo.get_like_count(untouched.id) == 1


def test_ids_by_author_and_delete_many(session):
    repo = ArticleRepository(session)
    author = UserFactory()
    mine = ArticleFactory.create_batch(2, author=author)
    ArticleFactory()

    ids = repo.ids_by_author(author.id)
    assert sorted(ids) == sorted(a.id for a in mine)
    assert repo.delete_many(ids) == 2
    assert repo.ids_by_author(author.id) == []
    assert repo.delete_many([]) == 0


def test_association_repository_roundtrip(session):
    bookmarks = BookmarkRepository(session)
    user = UserFactory()
    article = ArticleFactory()

    bookmarks.insert(user.id, article.id)
    assert bookmarks.is_present(user.id, article.id)
    assert bookmarks.count_for_article(article.id) == 1
    assert bookmarks.remove(user.id, article.id) == 1
    assert bookmarks.remove(user.id, article.id) == 0
    assert bookmarks.delete_for() == 0
