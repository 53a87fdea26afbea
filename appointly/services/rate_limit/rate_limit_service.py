# ===== appointly/services/rate_limit/rate_limit_service.py =====
import logging
import time
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from appointly.config.redis import RedisKeys

logger = logging.getLogger(__name__)


class RateLimitService:
    """
    Fixed-window request counter kept in Redis.

    Each (client, window) pair gets its own key that expires with the
    window, so counters reset without any process-local state.
    """

    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client

    async def hit(self, client: str, limit: int, window_seconds: int = 60, now: Optional[float] = None) -> bool:
        """Count one request; False once the client exceeded the limit."""
        window = int((now if now is not None else time.time()) // window_seconds)
        key = RedisKeys.RATE_LIMIT_BOOKING.format(client=client, window=window)

        try:
            count = await self.redis.incr(key)
            if count == 1:
                await self.redis.expire(key, window_seconds)
        except RedisError as e:
            logger.warning(f"Rate limit store unavailable, allowing request from {client}: {e}")
            return True

        if count > limit:
            logger.info(f"Rate limit exceeded for {client}: {count}/{limit}")
            return False
        return True
