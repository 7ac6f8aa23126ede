"""
Cache adapter implementations.

Backs CachePort with Django's cache framework (RedisCache in deployment).
"""

import logging
from typing import Any, Optional

from asgiref.sync import sync_to_async
from django.core.cache import cache

from core.infrastructure.cache import CachePort
from core.metrics import cache_hits_total, cache_misses_total

logger = logging.getLogger(__name__)


class DjangoCacheAdapter(CachePort):
    """
    Django cache adapter implementing CachePort.

    Cache outages degrade to misses; they never fail the caller.
    """

    def __init__(self, namespace: str = "omnisme"):
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    @staticmethod
    def _metric_label(key: str) -> str:
        return key.split(":", 1)[0]

    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        try:
            value = await sync_to_async(cache.get)(self._key(key))
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error getting from cache: %s", e, exc_info=True)
            return None

        if value is not None:
            cache_hits_total.labels(cache_key=self._metric_label(key)).inc()
            logger.debug("Cache hit: %s", key)
        else:
            cache_misses_total.labels(cache_key=self._metric_label(key)).inc()
            logger.debug("Cache miss: %s", key)
        return value

    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """
        Set a value in cache.

        Args:
            key: Cache key
            value: Value to cache
            timeout: Timeout in seconds
        """
        try:
            await sync_to_async(cache.set)(self._key(key), value, timeout=timeout)
            logger.debug("Cache set: %s (timeout=%s)", key, timeout)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error setting cache: %s", e, exc_info=True)

    async def delete(self, key: str) -> None:
        """
        Delete a value from cache.

        Args:
            key: Cache key
        """
        try:
            await sync_to_async(cache.delete)(self._key(key))
            logger.debug("Cache delete: %s", key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error deleting from cache: %s", e, exc_info=True)


# Global cache instance
cache_adapter = DjangoCacheAdapter()
