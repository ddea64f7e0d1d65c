"""Composition root: builds the auth and engagement components per app.

Every component is constructed explicitly here and stored in
``app.extensions["blog.auth"]``. Redis-backed stores are used when
``REDIS_URL`` is configured; otherwise process-local stores are used and a
warning is logged, since sessions are then lost on restart and not shared
between workers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from flask import Flask, current_app

from blog.core.errors import problem_response
from blog.core.extensions import get_redis, jwt
from blog.infra.jwt import FlaskJWTTokenCodec
from blog.infra.memory import (
    InMemoryRateLimiter,
    InMemoryRefreshTokenStore,
    InMemoryTokenBlacklist,
)
from blog.infra.redis import RedisRateLimiter, RedisRefreshTokenStore, RedisTokenBlacklist
from blog.services._shared.ports import (
    RateLimiter,
    RefreshTokenStore,
    TokenBlacklist,
    TokenCodec,
)
from blog.services.articles import ArticleService
from blog.services.auth import AuthService, AuthTokenConfig
from blog.services.comments import CommentService
from blog.services.engagement import BookmarkService, LikeService
from blog.services.identity import IdentityService

log = logging.getLogger(__name__)

EXTENSION_KEY = "blog.auth"


@dataclass(slots=True)
class Components:
    """Everything the HTTP layer needs, built once per application."""

    token_codec: TokenCodec
    refresh_store: RefreshTokenStore
    blacklist: TokenBlacklist
    rate_limiter: RateLimiter
    auth: AuthService
    identity: IdentityService
    likes: LikeService
    bookmarks: BookmarkService
    articles: ArticleService
    comments: CommentService


def build_components(app: Flask) -> Components:
    cfg = app.config
    if cfg.get("REDIS_URL"):
        r = get_redis()
        refresh_store: RefreshTokenStore = RedisRefreshTokenStore(r)
        blacklist: TokenBlacklist = RedisTokenBlacklist(r)
        rate_limiter: RateLimiter = RedisRateLimiter(r)
        backend = "redis"
    else:
        refresh_store = InMemoryRefreshTokenStore()
        blacklist = InMemoryTokenBlacklist()
        rate_limiter = InMemoryRateLimiter()
        backend = "memory"
        if not cfg.get("TESTING"):
            log.warning(
                "REDIS_URL is not set; using in-memory token stores. Sessions are "
                "lost on restart and not shared between workers.",
                extra={"event": "wiring.memory_stores"},
            )

    codec = FlaskJWTTokenCodec()
    toggle_opts = {
        "max_attempts": int(cfg.get("TOGGLE_MAX_ATTEMPTS", 3)),
        "base_delay": float(cfg.get("TOGGLE_RETRY_BASE_DELAY", 0.01)),
    }
    components = Components(
        token_codec=codec,
        refresh_store=refresh_store,
        blacklist=blacklist,
        rate_limiter=rate_limiter,
        auth=AuthService(
            token_codec=codec,
            refresh_store=refresh_store,
            blacklist=blacklist,
            token_cfg=AuthTokenConfig.from_config(cfg),
        ),
        identity=IdentityService(),
        likes=LikeService(**toggle_opts),
        bookmarks=BookmarkService(**toggle_opts),
        articles=ArticleService(),
        comments=CommentService(),
    )
    log.debug("wiring.ready", extra={"event": "wiring.ready", "backend": backend})
    return components


def get_components() -> Components:
    """Return the components of the current application."""
    components = current_app.extensions.get(EXTENSION_KEY)
    if components is None:
        raise RuntimeError("Components are not wired. Call blog.wiring.init_app() first.")
    return components


# --------------------------------------------------------------------------- #
# Flask-JWT-Extended callbacks
# --------------------------------------------------------------------------- #


def _unauthorized(code: str, message: str):
    return problem_response(401, code=code, message=message)


def _register_jwt_callbacks() -> None:
    @jwt.token_in_blocklist_loader
    def _is_revoked(jwt_header, jwt_payload) -> bool:
        return get_components().auth.is_revoked(str(jwt_payload.get("jti", "")))

    @jwt.revoked_token_loader
    def _revoked(jwt_header, jwt_payload):
        return _unauthorized("token_revoked", "Token has been revoked")

    @jwt.expired_token_loader
    def _expired(jwt_header, jwt_payload):
        return _unauthorized("token_expired", "Token has expired")

    @jwt.invalid_token_loader
    def _invalid(reason: str):
        return _unauthorized("invalid_token", "Token is invalid")

    @jwt.unauthorized_loader
    def _missing(reason: str):
        return _unauthorized("missing_token", "Authorization header is missing")


def init_app(app: Flask) -> None:
    """Build components for ``app`` and hook the JWT blocklist into them."""
    app.extensions[EXTENSION_KEY] = build_components(app)
    _register_jwt_callbacks()
