"""Port for signing and verifying bearer tokens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol


class TokenError(Exception):
    """Base class for token verification failures.

    ``reason`` is a short stable label callers can surface or log without
    echoing library messages.
    """

    reason = "invalid"


class TokenExpiredError(TokenError):
    """Signature is valid but the ``exp`` claim lies in the past."""

    reason = "expired"


class TokenMalformedError(TokenError):
    """Token is not structurally a token of the expected kind."""

    reason = "malformed"


class TokenSignatureError(TokenError):
    """Signature does not match the payload under the shared secret."""

    reason = "bad_signature"


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """Verified claim set of a token.

    :ivar subject: Account email the token was issued for.
    :ivar jti: Unique token identifier.
    :ivar token_type: ``"access"`` or ``"refresh"``.
    :ivar expires_at: Absolute expiry (aware, UTC).
    """

    subject: str
    jti: str
    token_type: str
    expires_at: datetime


class TokenCodec(Protocol):
    """Stateless issuer/verifier of signed tokens.

    Implementations must check the signature before trusting any embedded
    claim, and must distinguish expiry from structural or cryptographic
    failures.
    """

    def issue(self, subject: str, ttl: timedelta, *, token_type: str = "access") -> str:
        """Sign a token for ``subject`` expiring ``ttl`` from now."""
        ...

    def verify(self, token: str, *, expected_type: str | None = None) -> str:
        """Return the token's subject.

        :raises TokenExpiredError: If the token has expired.
        :raises TokenSignatureError: If the signature does not match.
        :raises TokenMalformedError: For any other decoding failure, or a
            token type other than ``expected_type``.
        """
        ...

    def claims(self, token: str, *, expected_type: str | None = None) -> TokenClaims:
        """Like :meth:`verify` but return the full verified claim set."""
        ...
