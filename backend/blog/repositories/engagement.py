"""Repositories for the like and bookmark association tables."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Generic, TypeVar

from sqlalchemy import Select, delete, func, or_, select

from blog.models.engagement import ArticleBookmark, ArticleLike
from blog.repositories.base import BaseRepository

A = TypeVar("A", ArticleLike, ArticleBookmark)


class AssociationRepository(BaseRepository[A], Generic[A]):
    """Shared persistence for ``(user_id, article_id)`` association rows.

    ``insert`` flushes immediately so a duplicate surfaces as
    :class:`sqlalchemy.exc.IntegrityError` at the call site, where the toggle
    engine can absorb it inside a SAVEPOINT.
    """

    def is_present(self, user_id: int, article_id: int) -> bool:
        stmt = select(self.model.id).where(
            self.model.user_id == user_id, self.model.article_id == article_id
        )
        return self.session.execute(stmt).first() is not None

    def insert(self, user_id: int, article_id: int) -> A:
        return self.add(self.model(user_id=user_id, article_id=article_id))

    def remove(self, user_id: int, article_id: int) -> int:
        """Delete the pair; returns the number of rows deleted (0 or 1)."""
        stmt = (
            delete(self.model)
            .where(self.model.user_id == user_id, self.model.article_id == article_id)
            .execution_options(synchronize_session=False)
        )
        return int(self.session.execute(stmt).rowcount or 0)

    def count_for_article(self, article_id: int) -> int:
        stmt = select(func.count(self.model.id)).where(self.model.article_id == article_id)
        return int(self.session.execute(stmt).scalar_one())

    def article_ids_for_user(self, user_id: int) -> Select:
        """Selectable of article ids the user is associated with (for subqueries)."""
        return select(self.model.article_id).where(self.model.user_id == user_id)

    def delete_for(self, *, user_id: int | None = None, article_ids: Sequence[int] = ()) -> int:
        """Bulk-delete rows owned by ``user_id`` or pointing at ``article_ids``."""
        clauses = []
        if user_id is not None:
            clauses.append(self.model.user_id == user_id)
        if article_ids:
            clauses.append(self.model.article_id.in_(article_ids))
        if not clauses:
            return 0
        stmt = (
            delete(self.model)
            .where(or_(*clauses))
            .execution_options(synchronize_session=False)
        )
        return int(self.session.execute(stmt).rowcount or 0)


class LikeRepository(AssociationRepository[ArticleLike]):
    model = ArticleLike


class BookmarkRepository(AssociationRepository[ArticleBookmark]):
    model = ArticleBookmark
