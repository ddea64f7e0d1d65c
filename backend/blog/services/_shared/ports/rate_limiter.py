"""Port for the fixed-window request limiter."""

from __future__ import annotations

from typing import Protocol


class RateLimiter(Protocol):
    """
    Fixed-window counter per client identifier.

    The first request of a window opens it with a count of 1. Later requests
    in the same window are allowed while ``count < max_attempts`` and bump
    the count; once it reaches ``max_attempts`` they are denied. When
    ``window_seconds`` have elapsed since the window opened, the next request
    opens a fresh window. Bursts around window boundaries are accepted.
    """

    def allow(self, identifier: str, max_attempts: int, window_seconds: int) -> bool: ...

    def reset(self, identifier: str) -> None:
        """Drop the current window of ``identifier``."""
        ...
