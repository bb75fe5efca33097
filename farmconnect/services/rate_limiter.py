# farmconnect/services/rate_limiter.py
import time
from typing import NamedTuple

import redis
from redis.exceptions import RedisError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from farmconnect.utils.settings import REDIS_URL, RATE_LIMIT_MAX_REQUESTS, RATE_LIMIT_WINDOW_SECONDS
from farmconnect.utils.logging import get_logger

logger = get_logger(__name__)

# INCR and EXPIRE in one atomic step, the TTL is only set by the first hit of the window
_HIT_LUA = """
local current = redis.call('INCR', KEYS[1])
if current == 1 then
    redis.call('EXPIRE', KEYS[1], ARGV[1])
end
return current
"""


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(RedisError),
    )


class RateLimitResult(NamedTuple):
    allowed: bool
    remaining: int
    retry_after: int


class RedisRateLimiter:
    """
    Fixed window request counter shared by every API instance.
    Key: ratelimit:{client}:{window_start}
    """

    def __init__(
        self,
        url: str | None = None,
        max_requests: int = RATE_LIMIT_MAX_REQUESTS,
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
    ):
        self.redis = redis.Redis.from_url(url or REDIS_URL, decode_responses=True)
        self.max_requests = max_requests
        self.window_seconds = window_seconds

    @redis_retry()
    def _incr(self, key: str) -> int:
        return int(self.redis.eval(_HIT_LUA, 1, key, self.window_seconds))

    def hit(self, client: str) -> RateLimitResult:
        now = int(time.time())
        window_start = now - now % self.window_seconds
        key = f"ratelimit:{client}:{window_start}"

        count = self._incr(key)
        allowed = count <= self.max_requests
        if not allowed:
            logger.warning(f"Rate limit exceeded for {client} ({count}/{self.max_requests})")

        return RateLimitResult(
            allowed=allowed,
            remaining=max(0, self.max_requests - count),
            retry_after=window_start + self.window_seconds - now,
        )
