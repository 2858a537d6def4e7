"""Cache backend interface."""

from typing import Any, Protocol


class ICacheBackend(Protocol):
    """Contract for cache storage backends.

    Backends receive fully prefixed keys and know nothing about
    namespaces beyond the prefix filters of ``keys`` and ``clear``.
    Every entry is stored with the backend's TTL.
    """

    @property
    def is_available(self) -> bool:
        """Whether the backend can currently serve requests."""
        ...

    async def get(self, key: str) -> Any | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value, or None if not found or expired.
        """
        ...

    async def set(self, key: str, value: Any) -> None:
        """Store value, restarting its TTL.

        Args:
            key: The cache key.
            value: The value to store.
        """
        ...

    async def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        ...

    async def keys(self, prefix: str = "") -> list[str]:
        """List live keys starting with prefix.

        Args:
            prefix: Key prefix to filter on. Empty matches every key.

        Returns:
            The matching keys, unordered.
        """
        ...

    async def clear(self, prefix: str = "") -> int:
        """Delete live keys starting with prefix.

        Args:
            prefix: Key prefix to filter on. Empty matches every key.

        Returns:
            Number of keys deleted.
        """
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...
