"""Instance registry - one cache service per configuration fingerprint."""

import asyncio
import logging
from collections.abc import Hashable, Mapping
from typing import Any

from cacheaside.core.entities.cache_config import BackendType, CacheConfig
from cacheaside.core.exceptions import UnrecognizedBackendError
from cacheaside.core.interfaces.cache_backend import ICacheBackend
from cacheaside.core.services.cache_service import CacheService
from cacheaside.infrastructure.backends.memory import InMemoryCacheBackend

logger = logging.getLogger(__name__)

# Connection options the in-memory backend understands; the rest are ignored.
IN_MEMORY_OPTIONS = frozenset({"maxsize", "timer"})


class CacheRegistry:
    """Memoizes cache services by configuration fingerprint.

    Equivalent configurations (same backend, TTL and key prefix) share
    one CacheService and therefore one backend connection. Construction
    for a fingerprint is serialized, so concurrent first requests never
    open duplicate connections. Instances live until ``close()`` or
    ``reset()`` is called.
    """

    def __init__(self) -> None:
        self._instances: dict[Hashable, CacheService] = {}
        self._locks: dict[Hashable, asyncio.Lock] = {}

    async def get_instance(self, config: CacheConfig) -> CacheService:
        """Return the cache service for config, building it if needed.

        Args:
            config: The cache configuration.

        Returns:
            The shared CacheService for the configuration's fingerprint.

        Raises:
            BackendConnectionError: If the remote backend cannot connect.
        """
        fingerprint = config.fingerprint

        instance = self._instances.get(fingerprint)
        if instance is not None:
            logger.debug("Returning existing cache instance %s", fingerprint)
            return instance

        lock = self._locks.setdefault(fingerprint, asyncio.Lock())
        async with lock:
            instance = self._instances.get(fingerprint)
            if instance is not None:
                return instance

            logger.debug("Creating cache instance %s", fingerprint)
            backend = await create_backend(config)
            instance = CacheService(backend=backend, config=config)
            self._instances[fingerprint] = instance

        return instance

    def instances(self) -> list[Hashable]:
        """List the fingerprints of all registered instances."""
        return list(self._instances.keys())

    async def close(self) -> None:
        """Close every registered instance and empty the registry."""
        instances = list(self._instances.items())
        self.reset()

        for fingerprint, instance in instances:
            await instance.close()
            logger.info("Closed cache instance %s", fingerprint)

    def reset(self) -> None:
        """Drop every instance reference without closing it.

        Intended for tests. Use ``close()`` to release connections.
        """
        self._instances.clear()
        self._locks.clear()


async def create_backend(config: CacheConfig) -> ICacheBackend:
    """Build the backend selected by config.

    Args:
        config: The cache configuration.

    Returns:
        A ready backend.

    Raises:
        UnrecognizedBackendError: If the backend kind is unsupported.
        BackendConnectionError: If the remote backend cannot connect.
    """
    options = dict(config.backend_options)

    if config.backend is BackendType.IN_MEMORY:
        ignored = sorted(k for k in options if k not in IN_MEMORY_OPTIONS)
        if ignored:
            logger.debug("Ignoring options %s for in-memory backend", ignored)
        return InMemoryCacheBackend(
            ttl=config.cache_ttl,
            **{k: v for k, v in options.items() if k in IN_MEMORY_OPTIONS},
        )

    if config.backend is BackendType.REMOTE:
        from cacheaside.infrastructure.backends.redis import RedisCacheBackend

        return await RedisCacheBackend.build(
            ttl=config.cache_ttl,
            options=options,
            connect=config.cache_enable,
        )

    raise UnrecognizedBackendError(config.backend)


_registry = CacheRegistry()


def get_registry() -> CacheRegistry:
    """Return the process-wide registry."""
    return _registry


async def get_cache_instance(
    config: CacheConfig | Mapping[str, Any] | None = None, **options: Any
) -> CacheService:
    """Get the shared cache service for a configuration.

    Args:
        config: The cache configuration, or an options mapping such as
            ``{"type": "in-memory", "cacheTtl": 60, "cacheEnable": True}``.
            When omitted, one is built from ``options``.
        **options: Configuration options, used when config is None.

    Returns:
        The shared CacheService.

    Raises:
        TypeError: If both config and keyword options are given.

    Example:
        cache = await get_cache_instance(
            backend="in-memory", cache_ttl=60, cache_enable=True
        )
        user = await cache.get("user:1", lambda: load_user(1))
    """
    if config is not None and options:
        raise TypeError(
            "get_cache_instance() takes a config or keyword options, not both"
        )
    if config is None:
        config = CacheConfig.from_options(options)
    elif isinstance(config, Mapping):
        config = CacheConfig.from_options(config)
    return await _registry.get_instance(config)


async def close_cache_instances() -> None:
    """Close every instance of the process-wide registry."""
    await _registry.close()


def reset_cache_registry() -> None:
    """Forget every instance of the process-wide registry without closing."""
    _registry.reset()


def list_cache_instances() -> list[Hashable]:
    """List the fingerprints registered in the process-wide registry."""
    return _registry.instances()
