"""Cache backend implementations.

The Redis backend is imported lazily by the registry so the
in-memory backend works without a Redis client installed.
"""

from cacheaside.infrastructure.backends.memory import InMemoryCacheBackend

__all__ = ["InMemoryCacheBackend"]
