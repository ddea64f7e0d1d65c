from __future__ import annotations

import math
from collections.abc import Callable
from datetime import UTC, datetime
from typing import cast

import redis


class RedisTokenBlacklist:
    """
    Revoked access token ids stored as ``blacklist:{token_id}`` markers.

    Each marker carries a TTL equal to the token's remaining lifetime, so
    Redis evicts it exactly when the token would have expired anyway.
    """

    def __init__(self, r: redis.Redis, *, now: Callable[[], datetime] | None = None) -> None:
        self.r = r
        self._now = now or (lambda: datetime.now(UTC))

    @staticmethod
    def _k(token_id: str) -> str:
        return f"blacklist:{token_id}"

    def block(self, token_id: str, expires_at: datetime) -> None:
        remaining = expires_at.timestamp() - self._now().timestamp()
        if remaining <= 0:
            return
        # Round up so the marker never expires before the token does.
        self.r.set(self._k(token_id), "1", ex=max(1, math.ceil(remaining)))

    def is_blocked(self, token_id: str) -> bool:
        return cast(int, self.r.exists(self._k(token_id))) == 1
