"""Redis-backed adapters; state is shared across workers and survives restarts."""

from .redis_rate_limiter import RedisRateLimiter
from .redis_refresh_token_store import RedisRefreshTokenStore
from .redis_token_blacklist import RedisTokenBlacklist

__all__ = ["RedisRateLimiter", "RedisRefreshTokenStore", "RedisTokenBlacklist"]
