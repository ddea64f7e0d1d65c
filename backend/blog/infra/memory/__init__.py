"""Process-local adapters.

State lives in this process only: it is lost on restart and not shared
between gunicorn workers, so these suit tests and single-instance
deployments.
"""

from .rate_limiter import InMemoryRateLimiter, RateWindow
from .refresh_token_store import InMemoryRefreshTokenStore
from .token_blacklist import InMemoryTokenBlacklist

__all__ = [
    "InMemoryRateLimiter",
    "InMemoryRefreshTokenStore",
    "InMemoryTokenBlacklist",
    "RateWindow",
]
