"""Service layer public API.

Callers import use cases from :mod:`blog.services` without knowing the
internal package layout.

Re-exports
----------
- Base primitives (from ``blog.services._shared.base``)
    * :class:`BaseService`

- Use-case services
    * :class:`AuthService` (signup / login / refresh / logout)
    * :class:`IdentityService` (profile lookup, withdrawal)
    * :class:`LikeService`, :class:`BookmarkService` (idempotent toggles)
    * :class:`ArticleService`, :class:`CommentService`
"""

from __future__ import annotations

from ._shared.base import BaseService
from .articles import ArticleService
from .auth import AuthService, AuthTokenConfig
from .comments import CommentService
from .engagement import BookmarkService, LikeService, ToggleService
from .identity import IdentityService

__all__ = [
    "ArticleService",
    "AuthService",
    "AuthTokenConfig",
    "BaseService",
    "BookmarkService",
    "CommentService",
    "IdentityService",
    "LikeService",
    "ToggleService",
]
