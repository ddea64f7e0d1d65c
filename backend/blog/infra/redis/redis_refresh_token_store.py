from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import redis

from blog.services._shared.ports import RefreshTokenStore


def _s(value: bytes | str | None) -> str | None:
    if value is None:
        return None
    return value.decode() if isinstance(value, bytes | bytearray) else str(value)


@dataclass(slots=True)
class RedisRefreshTokenStore(RefreshTokenStore):
    """
    Redis-backed refresh token store.

    Layout:

    - ``refresh_token:{token}`` → subject, with ``EX`` set to the token TTL.
    - ``refresh_token:subject:{subject}`` → set of that subject's tokens, so
      every session of an account can be revoked at once. Members whose key
      already expired are skipped harmlessly.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis

    @staticmethod
    def _k(token: str) -> str:
        return f"refresh_token:{token}"

    @staticmethod
    def _ks(subject: str) -> str:
        return f"refresh_token:subject:{subject}"

    def put(self, token: str, subject: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        with self.r.pipeline(transaction=True) as p:
            p.set(self._k(token), subject, ex=ttl_seconds)
            p.sadd(self._ks(subject), token)
            # The index lives as long as the newest token it lists.
            p.expire(self._ks(subject), ttl_seconds)
            p.execute()

    def get(self, token: str) -> str | None:
        return _s(self.r.get(self._k(token)))

    def delete(self, token: str) -> None:
        subject = self.get(token)
        with self.r.pipeline(transaction=True) as p:
            p.delete(self._k(token))
            if subject is not None:
                p.srem(self._ks(subject), token)
            p.execute()

    def consume(self, token: str) -> str | None:
        """GET and DEL inside one MULTI block; only the caller whose DEL hit wins."""
        with self.r.pipeline(transaction=True) as p:
            p.get(self._k(token))
            p.delete(self._k(token))
            raw, deleted = cast(list, p.execute())
        subject = _s(raw)
        if subject is None or not deleted:
            return None
        self.r.srem(self._ks(subject), token)
        return subject

    def delete_all_for_subject(self, subject: str) -> int:
        index = self._ks(subject)
        tokens = [_s(member) for member in self.r.smembers(index)]
        if not tokens:
            return 0
        with self.r.pipeline(transaction=True) as p:
            for token in tokens:
                p.delete(self._k(cast(str, token)))
            p.delete(index)
            results = cast(list[int], p.execute())
        # Last result is the index DEL; the rest count live tokens removed.
        return sum(int(n) for n in results[:-1])
