"""cacheaside - backend-agnostic cache-aside for asyncio.

Ask for a value by key and supply a fallback; the cached value is
served when present, otherwise the fallback runs and its result is
stored with the configured TTL. Backends: an in-process TTL map and
Redis (values stored as type-tagged strings).

Example:
    from cacheaside import get_cache_instance

    cache = await get_cache_instance(
        backend="in-memory",
        cache_ttl=300,
        cache_enable=True,
        key_prefix="users",
    )

    async def load_user():
        return await db.fetch_user(42)

    user = await cache.get("42", load_user)  # miss: runs load_user
    user = await cache.get("42", load_user)  # hit: load_user not called

Redis:
    cache = await get_cache_instance(
        backend="remote",
        cache_ttl=60,
        cache_enable=True,
        backend_options={"url": "redis://localhost:6379/0"},
    )
"""

from cacheaside.core.entities import BackendType, CacheConfig
from cacheaside.core.exceptions import (
    ArgumentError,
    BackendConnectionError,
    BackendError,
    CacheAsideError,
    MissingArgumentError,
    SerializationError,
    TypeArgumentError,
    UnrecognizedBackendError,
    UnrecognizedEncodingError,
    UnsupportedTypeError,
)
from cacheaside.core.interfaces import ICacheBackend, ISerializer
from cacheaside.core.services import (
    CacheRegistry,
    CacheService,
    close_cache_instances,
    get_cache_instance,
    get_registry,
    list_cache_instances,
    reset_cache_registry,
)
from cacheaside.decorators import cached
from cacheaside.infrastructure import InMemoryCacheBackend, TaggedStringSerializer

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "BackendType",
    "CacheConfig",
    # Core interfaces
    "ICacheBackend",
    "ISerializer",
    # Core services
    "CacheService",
    "CacheRegistry",
    "get_cache_instance",
    "close_cache_instances",
    "reset_cache_registry",
    "list_cache_instances",
    "get_registry",
    # Infrastructure implementations
    "InMemoryCacheBackend",
    "TaggedStringSerializer",
    # Decorators
    "cached",
    # Errors
    "CacheAsideError",
    "ArgumentError",
    "MissingArgumentError",
    "TypeArgumentError",
    "UnrecognizedBackendError",
    "BackendError",
    "BackendConnectionError",
    "SerializationError",
    "UnsupportedTypeError",
    "UnrecognizedEncodingError",
]
