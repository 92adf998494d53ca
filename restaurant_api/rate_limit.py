"""Rate limiting for public guest endpoints.

Guest feedback is anonymous, so submissions are throttled per client address
with a sliding window. Counters live in Redis when REDIS_URL is set, so every
worker shares them; otherwise each process keeps its own in memory, which
multiplies the allowance by the number of workers.

We use threading.Lock rather than asyncio.Lock because the critical section
is a few dict operations and never awaits.
"""

import time
from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock

import redis
from redis.exceptions import RedisError

from restaurant_api.config import settings
from restaurant_api.logger import get_logger

logger = get_logger(__name__)


@dataclass
class RateLimitConfig:
    """Rate limit configuration."""

    max_requests: int = 5  # Maximum requests in window
    window_seconds: int = 60  # Time window in seconds
    block_seconds: int = 300  # Block duration after exceeding limit


@dataclass
class RateLimitState:
    """State for a single client key (in-memory)."""

    requests: list[float] = field(default_factory=list)
    blocked_until: float = 0.0


class RateLimiter:
    """Sliding-window limiter backed by Redis, or process memory when Redis is absent."""

    def __init__(self, config: RateLimitConfig | None = None, *, namespace: str = "rl") -> None:
        self.config = config or RateLimitConfig()
        self.namespace = namespace
        self._local_state: dict[str, RateLimitState] = defaultdict(RateLimitState)
        self._lock = Lock()
        self._redis: redis.Redis | None = None

        if settings.redis_url:
            try:
                self._redis = redis.from_url(settings.redis_url, decode_responses=True)
                self._redis.ping()
            except RedisError as exc:
                logger.warning("Redis unavailable, rate limiting in memory", error=str(exc))
                self._redis = None

    def is_allowed(self, key: str) -> tuple[bool, int]:
        """Record a request for key; returns (allowed, retry_after_seconds)."""
        if self._redis:
            return self._is_allowed_redis(key)
        return self._is_allowed_local(key)

    def _is_allowed_redis(self, key: str) -> tuple[bool, int]:
        """Sorted set of request timestamps per key, pruned to the window."""
        now = time.time()
        rl_key = f"{self.namespace}:{key}"
        block_key = f"{self.namespace}_block:{key}"

        try:
            blocked_until = self._redis.get(block_key)
            if blocked_until:
                remaining = int(float(blocked_until) - now)
                if remaining > 0:
                    return False, remaining

            pipe = self._redis.pipeline()
            pipe.zremrangebyscore(rl_key, 0, now - self.config.window_seconds)
            pipe.zcard(rl_key)
            results = pipe.execute()

            if results[1] >= self.config.max_requests:
                block_val = str(now + self.config.block_seconds)
                self._redis.setex(block_key, self.config.block_seconds, block_val)
                return False, self.config.block_seconds

            pipe = self._redis.pipeline()
            pipe.zadd(rl_key, {str(now): now})
            pipe.expire(rl_key, self.config.window_seconds * 2)
            pipe.execute()
            return True, 0
        except RedisError as exc:
            logger.warning("Redis error during rate limiting, falling back to memory", error=str(exc))
            return self._is_allowed_local(key)

    def _is_allowed_local(self, key: str) -> tuple[bool, int]:
        now = time.time()
        with self._lock:
            state = self._local_state[key]
            if state.blocked_until > now:
                return False, int(state.blocked_until - now)

            window_start = now - self.config.window_seconds
            state.requests = [ts for ts in state.requests if ts >= window_start]

            if len(state.requests) >= self.config.max_requests:
                state.blocked_until = now + self.config.block_seconds
                return False, self.config.block_seconds

            state.requests.append(now)
            return True, 0

    def reset(self, key: str | None = None) -> None:
        """Forget one key, or every key when key is None."""
        if self._redis:
            try:
                if key is None:
                    stale = list(self._redis.scan_iter(f"{self.namespace}*"))
                    if stale:
                        self._redis.delete(*stale)
                else:
                    self._redis.delete(f"{self.namespace}:{key}", f"{self.namespace}_block:{key}")
            except RedisError as exc:
                logger.warning("Redis error during reset, ignoring", error=str(exc))

        with self._lock:
            if key is None:
                self._local_state.clear()
            else:
                self._local_state.pop(key, None)

    def close(self) -> None:
        """Close Redis connection."""
        if self._redis:
            self._redis.close()


feedback_rate_limiter = RateLimiter(
    RateLimitConfig(
        max_requests=settings.feedback_max_per_window,
        window_seconds=settings.feedback_window_seconds,
        block_seconds=settings.feedback_window_seconds,
    ),
    namespace="rl_feedback",
)
