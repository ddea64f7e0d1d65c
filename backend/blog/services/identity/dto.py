"""
DTOs for IdentityService.

Data Transfer Objects (DTOs) isolate the service layer from ORM models,
ensuring clear input/output contracts and type safety.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class WithdrawIn:
    """
    Input DTO for account withdrawal.

    :param email: Email of the authenticated account (JWT subject).
    :type email: str
    :param password: Raw password, re-checked before anything is deleted.
    :type password: str
    """

    email: str
    password: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserOut:
    """
    Public-safe view of an account.

    :param id: Primary key.
    :param email: Login email.
    :param nickname: Display name.
    :param created_at: Registration timestamp.
    """

    id: int
    email: str
    nickname: str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class WithdrawOut:
    """Row counts removed by a withdrawal."""

    user_id: int
    articles: int = 0
    comments: int = 0
    likes: int = 0
    bookmarks: int = 0
