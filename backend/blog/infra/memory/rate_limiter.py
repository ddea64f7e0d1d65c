from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from blog.services._shared.ports import RateLimiter


@dataclass(slots=True)
class RateWindow:
    """Counter state of one client: when its window opened and hits so far."""

    started_at: float
    count: int
    window_seconds: int

    def expired(self, now: float) -> bool:
        return now - self.started_at >= self.window_seconds


class InMemoryRateLimiter(RateLimiter):
    """
    Fixed-window limiter keeping one :class:`RateWindow` per identifier.

    Stale windows are swept once the table grows past ``max_entries`` so an
    address scan cannot grow it without bound.

    :param clock: Source of the current time in seconds.
    :param max_entries: Size that triggers a sweep of elapsed windows.
    """

    def __init__(
        self, clock: Callable[[], float] = time.monotonic, *, max_entries: int = 10_000
    ) -> None:
        self._clock = clock
        self._max_entries = max_entries
        self._windows: dict[str, RateWindow] = {}
        self._lock = threading.Lock()

    def allow(self, identifier: str, max_attempts: int, window_seconds: int) -> bool:
        if max_attempts < 1 or window_seconds < 1:
            raise ValueError("max_attempts and window_seconds must be positive")
        now = self._clock()
        with self._lock:
            window = self._windows.get(identifier)
            if window is None or window.expired(now):
                if len(self._windows) >= self._max_entries:
                    self._sweep(now)
                self._windows[identifier] = RateWindow(now, 1, window_seconds)
                return True
            if window.count >= max_attempts:
                return False
            window.count += 1
            return True

    def reset(self, identifier: str) -> None:
        with self._lock:
            self._windows.pop(identifier, None)

    def _sweep(self, now: float) -> None:
        for key in [k for k, w in self._windows.items() if w.expired(now)]:
            del self._windows[key]
