"""Domain entities for cacheaside."""

from cacheaside.core.entities.cache_config import BackendType, CacheConfig

__all__ = [
    "BackendType",
    "CacheConfig",
]
