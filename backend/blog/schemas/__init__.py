"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    LoginSchema,
    LogoutSchema,
    RefreshSchema,
    SignupResponseSchema,
    SignupSchema,
    TokenPairSchema,
)
from .engagement import BookmarkedArticleSchema, BookmarkStateSchema, LikeStateSchema
from .user import UserSchema, WithdrawSchema

__all__ = [
    "BookmarkStateSchema",
    "BookmarkedArticleSchema",
    "LikeStateSchema",
    "LoginSchema",
    "LogoutSchema",
    "RefreshSchema",
    "SignupResponseSchema",
    "SignupSchema",
    "TokenPairSchema",
    "UserSchema",
    "WithdrawSchema",
]
