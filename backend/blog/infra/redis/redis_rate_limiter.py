from __future__ import annotations

import redis


class RedisRateLimiter:
    """
    Fixed-window limiter over ``rate_limit:{identifier}`` counters.

    The first hit creates the counter with ``SET NX EX window``, so the key's
    TTL is the window and Redis resets it. Later hits read the counter and
    ``INCR`` while it is below the limit. The read and the increment are
    separate round trips, so a burst can overshoot by a few requests.
    """

    def __init__(self, r: redis.Redis) -> None:
        self.r = r

    @staticmethod
    def _k(identifier: str) -> str:
        return f"rate_limit:{identifier}"

    def allow(self, identifier: str, max_attempts: int, window_seconds: int) -> bool:
        if max_attempts < 1 or window_seconds < 1:
            raise ValueError("max_attempts and window_seconds must be positive")
        key = self._k(identifier)
        if self.r.set(key, 1, ex=window_seconds, nx=True):
            return True
        raw = self.r.get(key)
        if raw is None:
            # Window expired between SET NX and GET: open a new one.
            self.r.set(key, 1, ex=window_seconds)
            return True
        if int(raw) >= max_attempts:
            return False
        self.r.incr(key)
        return True

    def reset(self, identifier: str) -> None:
        self.r.delete(self._k(identifier))
