"""User-article association tables behind likes and bookmarks.

Both tables carry a unique constraint on ``(user_id, article_id)``. That
constraint, not any application-side check, is what makes concurrent toggles
converge on a single row.
"""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from blog.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin


class ArticleLike(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """A user's like on an article."""

    __tablename__ = "article_likes"

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    article_id: Mapped[int] = mapped_column(ForeignKey("articles.id"), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "article_id", name="uq_article_likes_user_id_article_id"),
        Index("ix_article_likes_article_id", "article_id"),
    )


class ArticleBookmark(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """A user's bookmark on an article."""

    __tablename__ = "article_bookmarks"

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    article_id: Mapped[int] = mapped_column(ForeignKey("articles.id"), nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "user_id", "article_id", name="uq_article_bookmarks_user_id_article_id"
        ),
        Index("ix_article_bookmarks_article_id", "article_id"),
    )
