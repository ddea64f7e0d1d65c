"""Article repository, including the relative like-counter updates."""

from __future__ import annotations

from collections.abc import Sequence
from typing import cast

from sqlalchemy import Select, delete, select, update

from blog.models.article import Article
from blog.models.engagement import ArticleBookmark
from blog.repositories.base import BaseRepository


class ArticleRepository(BaseRepository[Article]):
    """Persistence-only repository for :class:`Article`.

    Counter changes are issued as ``like_count = like_count +/- 1`` so
    concurrent writers never overwrite each other's increments.
    """

    model = Article

    def _sortable_fields(self):
        return {
            "id": Article.id,
            "created_at": Article.created_at,
            "like_count": Article.like_count,
        }

    # ---------------------------- Like counter ----------------------------

    def increment_like_count(self, article_id: int) -> None:
        stmt = (
            update(Article)
            .where(Article.id == article_id)
            .values(like_count=Article.like_count + 1)
            .execution_options(synchronize_session=False)
        )
        self.session.execute(stmt)

    def decrement_like_count(self, article_id: int) -> None:
        """Decrement the counter; a no-op when it is already 0."""
        stmt = (
            update(Article)
            .where(Article.id == article_id, Article.like_count > 0)
            .values(like_count=Article.like_count - 1)
            .execution_options(synchronize_session=False)
        )
        self.session.execute(stmt)

    def decrement_like_counts(self, article_ids: Select) -> int:
        """Decrement every article selected by ``article_ids`` (floored at 0).

        :param article_ids: ``SELECT`` yielding article ids.
        :returns: Number of articles updated.
        """
        stmt = (
            update(Article)
            .where(Article.id.in_(article_ids), Article.like_count > 0)
            .values(like_count=Article.like_count - 1)
            .execution_options(synchronize_session=False)
        )
        return int(self.session.execute(stmt).rowcount or 0)

    def get_like_count(self, article_id: int) -> int | None:
        """Read the counter straight from the database, ``None`` if no article."""
        stmt = select(Article.like_count).where(Article.id == article_id)
        return cast(int | None, self.session.execute(stmt).scalar())

    # ---------------------------- Lookups ----------------------------

    def ids_by_author(self, user_id: int) -> list[int]:
        stmt = select(Article.id).where(Article.user_id == user_id)
        return list(self.session.execute(stmt).scalars().all())

    def list_bookmarked_by(self, user_id: int) -> list[Article]:
        """Articles bookmarked by ``user_id``, most recently bookmarked first."""
        stmt = (
            select(Article)
            .join(ArticleBookmark, ArticleBookmark.article_id == Article.id)
            .where(ArticleBookmark.user_id == user_id)
            .order_by(ArticleBookmark.created_at.desc(), ArticleBookmark.id.desc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def delete_many(self, article_ids: Sequence[int]) -> int:
        if not article_ids:
            return 0
        stmt = (
            delete(Article)
            .where(Article.id.in_(article_ids))
            .execution_options(synchronize_session=False)
        )
        return int(self.session.execute(stmt).rowcount or 0)
