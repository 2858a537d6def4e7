"""Cache service - the cache-aside facade over a backend."""

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar, Union

from cacheaside.core.entities.cache_config import CacheConfig
from cacheaside.core.exceptions import MissingArgumentError
from cacheaside.core.interfaces.cache_backend import ICacheBackend

logger = logging.getLogger(__name__)

T = TypeVar("T")

Fallback = Union[Callable[[], Union[T, Awaitable[T]]], Awaitable[T]]

KEY_SEPARATOR = "-"


class CacheService:
    """Domain service implementing the cache-aside protocol.

    Namespaces keys with the configured prefix, validates arguments,
    and serves cached values or computes, stores and returns them
    through a caller-supplied fallback.

    Prefixes are not hierarchical: the namespace of prefix ``a`` is
    every key starting with ``a-``, so it also sees and clears the keys
    of prefix ``a-b``. Avoid prefixes that extend another prefix with
    ``-``.
    """

    def __init__(self, backend: ICacheBackend, config: CacheConfig) -> None:
        """Initialize the cache service.

        Args:
            backend: The cache backend to use for storage.
            config: The validated cache configuration.
        """
        self._backend = backend
        self._config = config

        # Statistics
        self._hits = 0
        self._misses = 0

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def backend(self) -> ICacheBackend:
        """Get the cache backend."""
        return self._backend

    @property
    def cache_ttl(self) -> float:
        """Get the entry time-to-live in seconds."""
        return self._config.cache_ttl

    @property
    def key_prefix(self) -> str:
        """Get the key namespace prefix."""
        return self._config.key_prefix

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, and total requests.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "total": self._hits + self._misses,
        }

    def is_enabled(self) -> bool:
        """Return whether the cache is currently in use.

        False when disabled by configuration, or while the backend
        reports itself unavailable (e.g. a lost Redis connection).
        """
        return self._config.cache_enable and self._backend.is_available

    async def get(self, key: str, fallback: Fallback[T] | None = None) -> Any | None:
        """Get value by key, computing and storing it on a miss.

        The fallback runs only on a miss and at most once. Errors it
        raises propagate unchanged and nothing is stored. Falsy results
        are returned but never stored.

        Args:
            key: The cache key.
            fallback: Optional callable, coroutine function or awaitable
                producing the value on a miss.

        Returns:
            The cached or computed value, or None.
        """
        self._require_key(key)

        if not self.is_enabled():
            return await self._resolve_fallback(fallback)

        cached = await self._backend.get(self._make_key(key))

        if cached is not None:
            self._hits += 1
            if inspect.iscoroutine(fallback):
                fallback.close()
            return cached

        self._misses += 1
        result = await self._resolve_fallback(fallback)

        if result:
            await self.set(key, result)

        return result

    async def set(self, key: str, value: Any) -> None:
        """Store value under key, restarting its TTL.

        Args:
            key: The cache key.
            value: The value to store.
        """
        self._require_key(key)

        if not self.is_enabled():
            return

        await self._backend.set(self._make_key(key), value)

    async def delete(self, key: str) -> None:
        """Delete the entry for key if present.

        Args:
            key: The cache key.
        """
        self._require_key(key)

        if not self.is_enabled():
            return

        await self._backend.delete(self._make_key(key))

    async def clear(self) -> None:
        """Remove every entry in this instance's namespace."""
        if not self.is_enabled():
            return

        count = await self._backend.clear(self._namespace())
        self._hits = 0
        self._misses = 0
        logger.debug(
            "Cleared %d cache entries for prefix %r", count, self.key_prefix
        )

    async def get_keys(self) -> list[str]:
        """Return the live keys in this namespace, prefix stripped."""
        if not self.is_enabled():
            return []

        namespace = self._namespace()
        keys = await self._backend.keys(namespace)
        return [key[len(namespace):] for key in keys]

    async def close(self) -> None:
        """Release the backend."""
        await self._backend.close()

    def _namespace(self) -> str:
        if self.key_prefix:
            return self.key_prefix + KEY_SEPARATOR
        return ""

    def _make_key(self, key: str) -> str:
        return self._namespace() + key

    @staticmethod
    def _require_key(key: str) -> None:
        if key is None or key == "":
            raise MissingArgumentError("key")

    @staticmethod
    async def _resolve_fallback(fallback: Fallback[T] | None) -> Any | None:
        """Run the fallback, awaiting its result when needed.

        Args:
            fallback: Callable, coroutine function or awaitable.

        Returns:
            The fallback's result, or None without a fallback.
        """
        if fallback is None:
            return None

        result = fallback() if callable(fallback) else fallback

        if inspect.isawaitable(result):
            result = await result

        return result
