"""Redis cache for model responses used by the puzzle judge."""

import json
import logging
from typing import Any, Dict, Optional
import redis

from ..config import settings

logger = logging.getLogger(__name__)


class CacheManager:
    """Redis-backed JSON cache.

    Every failure is logged and reported as a miss; the cache is never allowed
    to fail a judgment.
    """

    def __init__(self, redis_url: str = None, redis_client: Optional[redis.Redis] = None):
        """Initialize Redis connection."""
        self.redis_url = redis_url or settings.redis_url
        self.redis_client = redis_client or redis.from_url(self.redis_url, decode_responses=False)
        self.default_ttl = settings.cache_ttl_seconds

    def set_json(self, key: str, value: Dict[str, Any], ttl: Optional[int] = None) -> bool:
        """Set a JSON-serializable value in the cache."""
        try:
            ttl = ttl or self.default_ttl
            json_value = json.dumps(value)
            result = self.redis_client.setex(key, ttl, json_value)
            return bool(result)

        except (redis.RedisError, TypeError, ValueError) as e:
            logger.error(f"Error setting JSON cache key {key}: {e}")
            return False

    def get_json(self, key: str) -> Optional[Dict[str, Any]]:
        """Get a JSON value from the cache."""
        try:
            json_value = self.redis_client.get(key)

            if json_value is None:
                return None

            # Decode if bytes
            if isinstance(json_value, bytes):
                json_value = json_value.decode('utf-8')

            return json.loads(json_value)

        except (redis.RedisError, UnicodeDecodeError, ValueError) as e:
            logger.error(f"Error getting JSON cache key {key}: {e}")
            return None

    def cache_llm_response(self, cache_key: str, response: Dict[str, Any], ttl: Optional[int] = None) -> bool:
        """Cache a model response (text plus usage metadata)."""
        return self.set_json(f"llm_response:{cache_key}", response, ttl)

    def get_cached_llm_response(self, cache_key: str) -> Optional[Dict[str, Any]]:
        """Get a cached model response."""
        return self.get_json(f"llm_response:{cache_key}")

    def health_check(self) -> bool:
        """Check if Redis connection is healthy."""
        try:
            self.redis_client.ping()
            return True
        except redis.RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    def close(self):
        """Close Redis connection."""
        try:
            self.redis_client.close()
        except redis.RedisError as e:
            logger.error(f"Error closing Redis connection: {e}")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
