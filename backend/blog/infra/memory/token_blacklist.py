from __future__ import annotations

import threading
import time
from collections.abc import Callable
from datetime import datetime

from blog.services._shared.ports import TokenBlacklist


class InMemoryTokenBlacklist(TokenBlacklist):
    """
    Revoked access token ids mapped to their expiry (epoch seconds).

    Entries are removed when read after expiry, and in bulk by :meth:`sweep`,
    which :meth:`block` also runs at most once per ``sweep_interval``.

    :param clock: Source of the current epoch time in seconds.
    :param sweep_interval: Minimum seconds between two full sweeps.
    """

    def __init__(
        self, clock: Callable[[], float] = time.time, *, sweep_interval: float = 60.0
    ) -> None:
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._last_sweep = clock()
        self._entries: dict[str, float] = {}
        self._lock = threading.Lock()

    def block(self, token_id: str, expires_at: datetime) -> None:
        expiry = expires_at.timestamp()
        now = self._clock()
        if expiry <= now:
            return
        with self._lock:
            if now - self._last_sweep >= self._sweep_interval:
                self._sweep(now)
            # Keep the later expiry if the token is blocked twice.
            self._entries[token_id] = max(expiry, self._entries.get(token_id, 0.0))

    def is_blocked(self, token_id: str) -> bool:
        with self._lock:
            expiry = self._entries.get(token_id)
            if expiry is None:
                return False
            if expiry <= self._clock():
                del self._entries[token_id]
                return False
            return True

    def sweep(self) -> int:
        """Remove every expired entry; returns how many were dropped."""
        with self._lock:
            return self._sweep(self._clock())

    def _sweep(self, now: float) -> int:
        self._last_sweep = now
        expired = [k for k, exp in self._entries.items() if exp <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
