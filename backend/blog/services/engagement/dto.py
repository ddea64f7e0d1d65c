"""DTOs for the like and bookmark toggle services."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ToggleStatus:
    """
    Current state of one user-article association.

    :param active: Whether the user has liked (or bookmarked) the article.
    :param count: Like counter, or number of bookmarks, of the article.
    """

    active: bool
    count: int


@dataclass(frozen=True, slots=True)
class BookmarkedArticleOut:
    article_id: int
    title: str
    like_count: int
