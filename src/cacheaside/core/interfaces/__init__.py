"""Core interfaces (Protocol classes) for cacheaside."""

from cacheaside.core.interfaces.cache_backend import ICacheBackend
from cacheaside.core.interfaces.serializer import ISerializer

__all__ = [
    "ICacheBackend",
    "ISerializer",
]
