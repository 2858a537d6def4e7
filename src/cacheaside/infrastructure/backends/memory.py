"""In-memory cache backend implementation."""

import time
from collections.abc import Callable
from typing import Any

from cachetools import TTLCache  # type: ignore[import-untyped]


class InMemoryCacheBackend:
    """In-memory cache backend with per-entry TTL.

    Suitable for single-process deployments. Uses cachetools
    TTLCache, so every write restarts the entry's expiration clock
    and expired entries are never returned.
    """

    def __init__(
        self,
        ttl: float,
        maxsize: float = 10000,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the in-memory cache backend.

        Args:
            ttl: Time-to-live in seconds for every entry.
            maxsize: Maximum number of items before LRU eviction.
            timer: Clock used to compute expiration.
        """
        self._ttl = ttl
        self._maxsize = maxsize
        self._cache: TTLCache[str, Any] = TTLCache(
            maxsize=maxsize,
            ttl=ttl,
            timer=timer,
        )

    @property
    def is_available(self) -> bool:
        """In-process storage is always available."""
        return True

    async def get(self, key: str) -> Any | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value, or None if not found or expired.
        """
        return self._cache.get(key)

    async def set(self, key: str, value: Any) -> None:
        """Store value, restarting its TTL.

        Args:
            key: The cache key.
            value: The value to store.
        """
        self._cache[key] = value

    async def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        try:
            del self._cache[key]
            return True
        except KeyError:
            return False

    async def keys(self, prefix: str = "") -> list[str]:
        """List live keys starting with prefix."""
        self._cache.expire()
        return [key for key in self._cache if key.startswith(prefix)]

    async def clear(self, prefix: str = "") -> int:
        """Delete live keys starting with prefix.

        Args:
            prefix: Key prefix to filter on. Empty clears everything.

        Returns:
            Number of keys deleted.
        """
        self._cache.expire()

        if not prefix:
            count = len(self._cache)
            self._cache.clear()
            return count

        keys_to_delete = [key for key in self._cache if key.startswith(prefix)]

        count = 0
        for key in keys_to_delete:
            try:
                del self._cache[key]
                count += 1
            except KeyError:
                pass

        return count

    async def close(self) -> None:
        """Nothing to release for in-process storage."""

    def __len__(self) -> int:
        """Return the number of items in the cache, expired ones included."""
        return len(self._cache)

    @property
    def ttl(self) -> float:
        """Return the entry time-to-live in seconds."""
        return self._ttl

    @property
    def maxsize(self) -> float:
        """Return the maximum size of the cache."""
        return self._maxsize
