"""Comment model."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from blog.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Comment(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Comment left by ``user_id`` on ``article_id``."""

    __tablename__ = "comments"

    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    article_id: Mapped[int] = mapped_column(ForeignKey("articles.id"), nullable=False)

    __table_args__ = (
        Index("ix_comments_article_id", "article_id"),
        Index("ix_comments_user_id", "user_id"),
    )
