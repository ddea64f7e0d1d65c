# blog/services/auth/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SignupIn:
    """
    Input DTO for account registration.

    :param email: Login email (normalized by the model).
    :param password: Raw password; only its hash is persisted.
    :param nickname: Display name.
    """

    email: str
    password: str
    nickname: str


@dataclass(frozen=True, slots=True)
class LoginIn:
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param token: Access token, optionally prefixed with ``"Bearer "``.
    :param all_sessions: Also revoke every refresh token of the account.
    """

    token: str | None
    all_sessions: bool = False


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SignupOut:
    user_id: int


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :param refresh_token: Encoded refresh JWT.
    :param expires_in: Access token lifetime in seconds.
    """

    access_token: str
    refresh_token: str
    expires_in: int


@dataclass(frozen=True, slots=True)
class LogoutOut:
    revoked_sessions: int = 0


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_expires: Access token lifetime.
    :param refresh_expires: Lifetime embedded in refresh tokens.
    :param refresh_store_ttl: Seconds the refresh token store keeps a token.
    """

    access_expires: timedelta = timedelta(hours=1)
    refresh_expires: timedelta = timedelta(days=14)
    refresh_store_ttl: int = 1_209_600

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> AuthTokenConfig:
        """Build from a Flask config mapping (``JWT_*_EXPIRES`` and friends)."""
        return cls(
            access_expires=config["JWT_ACCESS_TOKEN_EXPIRES"],
            refresh_expires=config["JWT_REFRESH_TOKEN_EXPIRES"],
            refresh_store_ttl=int(config["REFRESH_TOKEN_TTL_SECONDS"]),
        )
