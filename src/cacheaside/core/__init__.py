"""Core domain layer for cacheaside."""

from cacheaside.core.entities import BackendType, CacheConfig
from cacheaside.core.interfaces import ICacheBackend, ISerializer
from cacheaside.core.services import CacheRegistry, CacheService

__all__ = [
    # Entities
    "BackendType",
    "CacheConfig",
    # Interfaces
    "ICacheBackend",
    "ISerializer",
    # Services
    "CacheService",
    "CacheRegistry",
]
