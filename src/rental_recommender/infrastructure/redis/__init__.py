"""Redis result cache with graceful degradation."""

import time

import orjson
import redis.asyncio as aioredis
import structlog
from pydantic import ValidationError

from rental_recommender.config import get_settings
from rental_recommender.services.records import PageRequest
from rental_recommender.services.views import RecommendationResult
from shared.constants import RECOMMENDATION_CACHE_PREFIX, REDIS_RETRY_BACKOFF_SECONDS

logger = structlog.get_logger()

_redis_client: aioredis.Redis | None = None
_retry_at: float = 0.0


async def get_redis_client() -> aioredis.Redis | None:
    """Get or create the global async Redis client.

    After a failed connection attempt, returns None without reconnecting
    until the back-off window has passed.
    """
    global _redis_client, _retry_at
    if _redis_client is None and time.monotonic() >= _retry_at:
        settings = get_settings()
        try:
            _redis_client = aioredis.from_url(
                settings.redis_url,
                decode_responses=False,
                socket_connect_timeout=2,
                socket_timeout=2,
                retry_on_timeout=True,
            )
            await _redis_client.ping()
            logger.info("Redis connection established")
        except Exception as e:
            logger.warning(
                "Redis unavailable, caching disabled",
                error=str(e),
                retry_in_seconds=REDIS_RETRY_BACKOFF_SECONDS,
            )
            _redis_client = None
            _retry_at = time.monotonic() + REDIS_RETRY_BACKOFF_SECONDS
    return _redis_client


async def close_redis() -> None:
    """Close the Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


def recommendation_cache_key(user_id: int, page: PageRequest) -> str:
    return f"{RECOMMENDATION_CACHE_PREFIX}:{user_id}:{page.page}:{page.size}"


class RecommendationCache:
    """Caches recommendation results. No-ops if Redis is unavailable or ttl is 0."""

    def __init__(self, client: aioredis.Redis | None, ttl_seconds: int = 60):
        self.client = client
        self.ttl_seconds = ttl_seconds

    @property
    def enabled(self) -> bool:
        return self.client is not None and self.ttl_seconds > 0

    async def get(self, user_id: int, page: PageRequest) -> RecommendationResult | None:
        if not self.enabled:
            return None
        key = recommendation_cache_key(user_id, page)
        try:
            data = await self.client.get(key)
            if data:
                return RecommendationResult.model_validate(orjson.loads(data))
        except (aioredis.RedisError, orjson.JSONDecodeError, ValidationError) as e:
            logger.warning("Cache get failed", key=key, error=str(e))
        return None

    async def set(self, user_id: int, page: PageRequest, result: RecommendationResult) -> None:
        if not self.enabled:
            return
        key = recommendation_cache_key(user_id, page)
        try:
            payload = orjson.dumps(result.model_dump(mode="json"))
            await self.client.set(key, payload, ex=self.ttl_seconds)
        except aioredis.RedisError as e:
            logger.warning("Cache set failed", key=key, error=str(e))

    async def health_check(self) -> bool:
        if not self.client:
            return False
        try:
            return await self.client.ping()
        except aioredis.RedisError:
            return False
