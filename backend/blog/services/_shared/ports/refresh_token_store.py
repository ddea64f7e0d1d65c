"""Port for server-side refresh token bookkeeping."""

from __future__ import annotations

from typing import Protocol


class RefreshTokenStore(Protocol):
    """
    Key-value store mapping an issued refresh token to its account.

    TTL is enforced by the store: once it elapses, lookups behave exactly as
    if the token had never been stored. Callers never poll for expiry.
    """

    def put(self, token: str, subject: str, ttl_seconds: int) -> None:
        """Remember ``token`` as belonging to ``subject`` for ``ttl_seconds``."""
        ...

    def get(self, token: str) -> str | None:
        """Return the owning subject, or ``None`` if unknown or expired."""
        ...

    def delete(self, token: str) -> None:
        """Forget ``token``; a no-op when it is not stored."""
        ...

    def consume(self, token: str) -> str | None:
        """
        Atomically read and delete ``token``.

        Of several concurrent callers presenting the same token, at most one
        receives the subject; the others get ``None``.
        """
        ...

    def delete_all_for_subject(self, subject: str) -> int:
        """Forget every live token of ``subject``; returns how many were removed."""
        ...
