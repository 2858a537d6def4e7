"""Domain services for cacheaside."""

from cacheaside.core.services.cache_service import CacheService
from cacheaside.core.services.registry import (
    CacheRegistry,
    close_cache_instances,
    get_cache_instance,
    get_registry,
    list_cache_instances,
    reset_cache_registry,
)

__all__ = [
    "CacheService",
    "CacheRegistry",
    "get_cache_instance",
    "close_cache_instances",
    "reset_cache_registry",
    "list_cache_instances",
    "get_registry",
]
