"""Redis caching service."""
import logging
from typing import Optional, Type, TypeVar
import redis
from pydantic import BaseModel
from app.config import get_settings

logger = logging.getLogger(__name__)
T = TypeVar("T", bound=BaseModel)


class RedisCache:
    """Redis caching service with Pydantic model support."""

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0,
                 client: Optional[redis.Redis] = None):
        self.client = client or redis.Redis(
            host=host,
            port=port,
            db=db,
            decode_responses=True
        )

    async def health_check(self) -> tuple[bool, Optional[str]]:
        """Check if Redis connection is healthy."""
        try:
            self.client.ping()
            return True, None
        except Exception as e:
            return False, str(e)

    def get(self, key: str, model: Type[T]) -> Optional[T]:
        """Get cached item and deserialize to Pydantic model."""
        try:
            data = self.client.get(key)
            if data:
                return model.model_validate_json(data)
            return None
        except Exception as e:
            logger.warning(f"Cache get error for {key}: {e}")
            return None

    def set(self, key: str, value: BaseModel, ttl_seconds: int) -> bool:
        """Cache Pydantic model with TTL."""
        try:
            self.client.setex(key, ttl_seconds, value.model_dump_json())
            return True
        except Exception as e:
            logger.warning(f"Cache set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Invalidate cache entry."""
        try:
            return bool(self.client.delete(key))
        except Exception as e:
            logger.warning(f"Cache delete error for {key}: {e}")
            return False

    def get_int(self, key: str) -> int:
        """Read an integer counter; missing or unreadable counts as 0."""
        try:
            value = self.client.get(key)
            return int(value) if value else 0
        except Exception as e:
            logger.warning(f"Cache get error for {key}: {e}")
            return 0

    def incr(self, key: str, ttl_seconds: int) -> int:
        """Increment a counter, setting its expiry on first write."""
        try:
            count = int(self.client.incr(key))
            if count == 1:
                self.client.expire(key, ttl_seconds)
            return count
        except Exception as e:
            logger.warning(f"Cache incr error for {key}: {e}")
            return 0

    def decr(self, key: str) -> int:
        """Decrement a counter, leaving its expiry untouched."""
        try:
            return int(self.client.decr(key))
        except Exception as e:
            logger.warning(f"Cache decr error for {key}: {e}")
            return 0


# Cache key prefixes
class CacheKeys:
    """Cache key constants and builders."""
    SESSION = "session"
    REPORT_COUNT = "report_count"

    @staticmethod
    def session(session_id: str) -> str:
        return f"session:{session_id}"

    @staticmethod
    def report_count(email: str, day: str) -> str:
        return f"report_count:{day}:{email.strip().lower()}"


# Singleton instance
_redis_cache: Optional[RedisCache] = None


def get_redis_cache() -> RedisCache:
    """Get or create Redis cache singleton."""
    global _redis_cache
    if _redis_cache is None:
        settings = get_settings()
        _redis_cache = RedisCache(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db
        )
    return _redis_cache
