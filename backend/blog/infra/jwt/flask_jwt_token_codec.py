"""Token codec backed by Flask-JWT-Extended (PyJWT underneath)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast

import jwt as pyjwt
from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException

from blog.services._shared.ports import (
    TokenClaims,
    TokenCodec,
    TokenExpiredError,
    TokenMalformedError,
    TokenSignatureError,
)


@dataclass(slots=True)
class FlaskJWTTokenCodec(TokenCodec):
    """
    HS256 codec using the application's ``JWT_SECRET_KEY``.

    Every token gets a random ``jti`` from Flask-JWT-Extended, so two tokens
    minted for the same subject in the same second still differ.

    .. note::
       Requires an active Flask app context.
    """

    def issue(self, subject: str, ttl: timedelta, *, token_type: str = "access") -> str:
        if token_type == "refresh":
            return cast(str, create_refresh_token(identity=subject, expires_delta=ttl))
        return cast(str, create_access_token(identity=subject, expires_delta=ttl))

    def verify(self, token: str, *, expected_type: str | None = None) -> str:
        return self.claims(token, expected_type=expected_type).subject

    def claims(self, token: str, *, expected_type: str | None = None) -> TokenClaims:
        payload = self._decode(token)
        token_type = str(payload.get("type", ""))
        if expected_type is not None and token_type != expected_type:
            raise TokenMalformedError(f"expected a {expected_type} token")
        try:
            return TokenClaims(
                subject=str(payload["sub"]),
                jti=str(payload["jti"]),
                token_type=token_type,
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TokenMalformedError("token is missing required claims") from exc

    @staticmethod
    def _decode(token: str) -> dict[str, Any]:
        # PyJWT checks the signature before any registered claim, so an
        # expired but forged token reports a bad signature.
        try:
            return cast(dict[str, Any], decode_token(token))
        except pyjwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("token has expired") from exc
        except pyjwt.InvalidSignatureError as exc:
            raise TokenSignatureError("token signature mismatch") from exc
        except (pyjwt.InvalidTokenError, JWTExtendedException) as exc:
            raise TokenMalformedError("token could not be decoded") from exc
