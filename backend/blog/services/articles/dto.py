"""DTOs for ArticleService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class ArticleCreateIn:
    """
    Input DTO for writing an article.

    :param title: Headline, must not be blank.
    :param content: Body, must not be blank.
    """

    title: str
    content: str


@dataclass(frozen=True, slots=True)
class ArticleOut:
    id: int
    title: str
    content: str
    user_id: int
    like_count: int
    created_at: datetime
