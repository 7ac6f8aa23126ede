"""
Cache abstraction (port).

Application services depend on this interface so the backing store
(Redis in deployment, local memory under test) stays an infrastructure detail.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional


class CachePort(ABC):
    """Abstract async cache."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """

    @abstractmethod
    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """
        Set a value in cache.

        Args:
            key: Cache key
            value: Value to cache
            timeout: Timeout in seconds (None uses the backend default)
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Delete a value from cache.

        Args:
            key: Cache key
        """
