"""Infrastructure layer implementations for cacheaside."""

from cacheaside.infrastructure.backends import InMemoryCacheBackend
from cacheaside.infrastructure.serializers import TaggedStringSerializer

__all__ = [
    "InMemoryCacheBackend",
    "TaggedStringSerializer",
]
