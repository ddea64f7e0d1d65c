"""Port for revoked access tokens."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class TokenBlacklist(Protocol):
    """
    Set of revoked access token ids, each entry living only as long as the
    token it protects against.

    Methods are idempotent.
    """

    def block(self, token_id: str, expires_at: datetime) -> None:
        """
        Revoke ``token_id`` until ``expires_at``.

        A no-op when ``expires_at`` is already in the past: the token is
        rejected on expiry alone.
        """
        ...

    def is_blocked(self, token_id: str) -> bool:
        """``True`` while ``token_id`` is revoked and not yet past its expiry."""
        ...
