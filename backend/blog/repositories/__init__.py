"""Repository package exposing persistence-layer access for the blog models."""

from __future__ import annotations

from blog.repositories.article import ArticleRepository
from blog.repositories.base import BaseRepository, apply_sorting
from blog.repositories.comment import CommentRepository
from blog.repositories.engagement import (
    AssociationRepository,
    BookmarkRepository,
    LikeRepository,
)
from blog.repositories.user import UserRepository, normalize_email

__all__ = [
    # Base
    "BaseRepository",
    "apply_sorting",
    # Domain
    "ArticleRepository",
    "AssociationRepository",
    "BookmarkRepository",
    "CommentRepository",
    "LikeRepository",
    "UserRepository",
    "normalize_email",
]
