"""
blog.services._shared.ports
===========================

*Ports* (hexagonal interfaces) the authentication core depends on.

Modules
-------
- :mod:`token_codec`:
    :class:`~.TokenCodec` plus its error hierarchy
    (:class:`~.TokenExpiredError`, :class:`~.TokenMalformedError`,
    :class:`~.TokenSignatureError`).
- :mod:`refresh_token_store`:
    :class:`~.RefreshTokenStore` for refresh token rotation.
- :mod:`token_blacklist`:
    :class:`~.TokenBlacklist` for logged-out access tokens.
- :mod:`rate_limiter`:
    :class:`~.RateLimiter`, the fixed-window limiter guarding auth routes.

Concrete adapters live under ``blog.infra``: ``memory`` (process-local,
lost on restart, single instance only) and ``redis`` (shared, TTL-native).
:mod:`blog.wiring` picks one family at startup.
"""

from __future__ import annotations

from .rate_limiter import RateLimiter
from .refresh_token_store import RefreshTokenStore
from .token_blacklist import TokenBlacklist
from .token_codec import (
    TokenClaims,
    TokenCodec,
    TokenError,
    TokenExpiredError,
    TokenMalformedError,
    TokenSignatureError,
)

__all__ = [
    "RateLimiter",
    "RefreshTokenStore",
    "TokenBlacklist",
    "TokenClaims",
    "TokenCodec",
    "TokenError",
    "TokenExpiredError",
    "TokenMalformedError",
    "TokenSignatureError",
]
