"""Article model with its denormalized like counter."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from blog.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Article(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Blog post written by a user.

    ``like_count`` mirrors the number of ``article_likes`` rows for the
    article. It is only ever changed with relative ``UPDATE`` statements
    issued next to the association insert/delete, and never drops below 0.
    """

    __tablename__ = "articles"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    like_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )

    __table_args__ = (
        CheckConstraint("like_count >= 0", name="like_count_non_negative"),
        Index("ix_articles_user_id", "user_id"),
    )
