from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from blog.services._shared.ports import RefreshTokenStore


@dataclass(frozen=True, slots=True)
class _Entry:
    subject: str
    expires_at: float


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    Dict-backed refresh token store with expiry.

    A single lock guards both the token map and the per-subject index, which
    makes :meth:`consume` atomic across request threads. Expired entries are
    dropped when read, and :meth:`put` sweeps the whole map at most once per
    ``sweep_interval`` so tokens that are never presented again are freed too.

    :param clock: Source of the current epoch time in seconds.
    :param sweep_interval: Minimum seconds between two full sweeps.
    """

    def __init__(
        self, clock: Callable[[], float] = time.time, *, sweep_interval: float = 60.0
    ) -> None:
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._last_sweep = clock()
        self._by_token: dict[str, _Entry] = {}
        self._by_subject: dict[str, set[str]] = {}
        self._lock = threading.Lock()

    # ------------------------- helpers -------------------------

    def _live(self, token: str) -> _Entry | None:
        entry = self._by_token.get(token)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            self._drop(token, entry)
            return None
        return entry

    def _drop(self, token: str, entry: _Entry) -> None:
        self._by_token.pop(token, None)
        tokens = self._by_subject.get(entry.subject)
        if tokens is not None:
            tokens.discard(token)
            if not tokens:
                del self._by_subject[entry.subject]

    # -------------------------- API ----------------------------

    def put(self, token: str, subject: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self._sweep_interval:
                self._sweep(now)
            self._by_token[token] = _Entry(subject, now + ttl_seconds)
            self._by_subject.setdefault(subject, set()).add(token)

    def get(self, token: str) -> str | None:
        with self._lock:
            entry = self._live(token)
            return entry.subject if entry else None

    def delete(self, token: str) -> None:
        with self._lock:
            entry = self._by_token.get(token)
            if entry is not None:
                self._drop(token, entry)

    def consume(self, token: str) -> str | None:
        with self._lock:
            entry = self._live(token)
            if entry is None:
                return None
            self._drop(token, entry)
            return entry.subject

    def delete_all_for_subject(self, subject: str) -> int:
        with self._lock:
            tokens = self._by_subject.pop(subject, set())
            for token in tokens:
                self._by_token.pop(token, None)
            return len(tokens)

    def sweep(self) -> int:
        """Remove every expired token; returns how many were dropped."""
        with self._lock:
            return self._sweep(self._clock())

    def _sweep(self, now: float) -> int:
        self._last_sweep = now
        expired = [(t, e) for t, e in self._by_token.items() if e.expires_at <= now]
        for token, entry in expired:
            self._drop(token, entry)
        return len(expired)

    def __len__(self) -> int:
        return len(self._by_token)
