"""Redis cache backend implementation."""

import contextlib
import logging
import re
from collections.abc import AsyncIterator, Iterator, Mapping
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from cacheaside.core.exceptions import BackendConnectionError, BackendError
from cacheaside.core.interfaces.serializer import ISerializer
from cacheaside.infrastructure.backends.connection import ConnectionMonitor
from cacheaside.infrastructure.serializers.tagged import TaggedStringSerializer

logger = logging.getLogger(__name__)

_GLOB_SPECIAL_RE = re.compile(r"([\\*?\[\]])")


def escape_glob(value: str) -> str:
    """Escape Redis glob metacharacters so value matches literally."""
    return _GLOB_SPECIAL_RE.sub(r"\\\1", value)


class RedisCacheBackend:
    """Redis cache backend for distributed deployments.

    Values are stored as tagged strings so their Python type survives
    the round trip. Every write is followed by a PEXPIRE carrying the
    backend TTL. Connection failures flip the backend to unavailable
    until a background probe reaches the server again.
    """

    def __init__(
        self,
        client: Redis,
        ttl: float,
        serializer: ISerializer | None = None,
        reconnect_interval: float = 5.0,
        scan_count: int = 100,
    ) -> None:
        """Initialize the Redis cache backend.

        Args:
            client: The asyncio Redis client.
            ttl: Time-to-live in seconds for every entry.
            serializer: Value serializer. Defaults to TaggedStringSerializer.
            reconnect_interval: Seconds between probes after a connection loss.
            scan_count: COUNT hint for SCAN batches.
        """
        self._client = client
        self._ttl = ttl
        self._serializer = serializer or TaggedStringSerializer()
        self._scan_count = scan_count
        self._monitor = ConnectionMonitor(
            probe=client.ping,
            interval=reconnect_interval,
            probe_errors=(RedisError, OSError),
        )

    @classmethod
    async def build(
        cls,
        ttl: float,
        options: Mapping[str, Any] | None = None,
        connect: bool = True,
    ) -> "RedisCacheBackend":
        """Create a client from connection options and optionally connect.

        Options are passed to ``redis.asyncio.Redis``, or to
        ``Redis.from_url`` when a ``url`` is given. ``reconnect_interval``
        and ``scan_count`` are consumed by the backend itself.

        Args:
            ttl: Time-to-live in seconds for every entry.
            options: Client connection options.
            connect: Whether to verify the connection with a PING.

        Returns:
            The backend.

        Raises:
            BackendConnectionError: If connect is True and the server
                cannot be reached.
        """
        client_options = dict(options or {})
        reconnect_interval = client_options.pop("reconnect_interval", 5.0)
        scan_count = client_options.pop("scan_count", 100)
        url = client_options.pop("url", None)
        client_options.setdefault("decode_responses", True)

        if url:
            client = Redis.from_url(url, **client_options)
        else:
            client = Redis(**client_options)

        if connect:
            try:
                await client.ping()
            except (RedisError, OSError) as e:
                await client.aclose()
                raise BackendConnectionError(f"RedisCacheError: {e}") from e
            logger.debug("Connected to Redis cache backend")

        return cls(
            client,
            ttl,
            reconnect_interval=reconnect_interval,
            scan_count=scan_count,
        )

    @property
    def is_available(self) -> bool:
        """Whether the connection is currently considered healthy."""
        return self._monitor.is_connected

    @property
    def monitor(self) -> ConnectionMonitor:
        """Return the connection state machine."""
        return self._monitor

    @property
    def client(self) -> Redis:
        """Return the underlying Redis client."""
        return self._client

    async def get(self, key: str) -> Any | None:
        """Retrieve and decode cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The decoded value, or None if not found or expired.
        """
        with self._translate_errors("GET", key):
            data = await self._client.get(key)

        if data is None:
            return None
        return self._serializer.deserialize(data)

    async def set(self, key: str, value: Any) -> None:
        """Encode and store value, then apply the TTL.

        The store and the expire are separate round trips. If the
        expire fails the error propagates and the key may be left
        without a TTL.

        Args:
            key: The cache key.
            value: The value to store.
        """
        payload = self._serializer.serialize(value)

        with self._translate_errors("SET", key):
            await self._client.set(key, payload)

        with self._translate_errors("PEXPIRE", key):
            await self._client.pexpire(key, int(self._ttl * 1000))

    async def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        with self._translate_errors("DEL", key):
            result = await self._client.delete(key)
        return result > 0

    async def keys(self, prefix: str = "") -> list[str]:
        """List keys starting with prefix using SCAN."""
        found: list[str] = []
        async for batch in self._scan(prefix):
            found.extend(batch)
        return found

    async def clear(self, prefix: str = "") -> int:
        """Delete keys starting with prefix.

        Uses SCAN instead of KEYS for production safety. With an empty
        prefix every key in the selected database is removed.

        Args:
            prefix: Key prefix to filter on.

        Returns:
            Number of keys deleted.
        """
        count = 0
        async for batch in self._scan(prefix):
            if batch:
                with self._translate_errors("DEL", prefix):
                    count += await self._client.delete(*batch)
        return count

    async def close(self) -> None:
        """Stop the recovery probe and close the Redis connection."""
        await self._monitor.close()
        await self._client.aclose()
        logger.info("Closed Redis cache backend")

    async def _scan(self, prefix: str) -> AsyncIterator[list[str]]:
        """Yield batches of keys matching prefix.

        Args:
            prefix: Literal key prefix.

        Yields:
            Lists of decoded keys.
        """
        pattern = escape_glob(prefix) + "*"
        cursor = 0

        while True:
            with self._translate_errors("SCAN", pattern):
                cursor, keys = await self._client.scan(
                    cursor, match=pattern, count=self._scan_count
                )

            yield [
                key.decode() if isinstance(key, bytes) else key
                for key in keys
            ]

            if cursor == 0:
                break

    @contextlib.contextmanager
    def _translate_errors(self, command: str, key: str) -> Iterator[None]:
        """Wrap Redis errors, tracking connection loss.

        Args:
            command: The Redis command being issued.
            key: The key or pattern it targets.

        Raises:
            BackendConnectionError: On connection or timeout errors.
            BackendError: On any other Redis error.
        """
        try:
            yield
        except (RedisConnectionError, RedisTimeoutError) as e:
            self._monitor.mark_disconnected(e)
            raise BackendConnectionError(
                f"RedisCacheError: {command} {key!r} failed: {e}"
            ) from e
        except RedisError as e:
            raise BackendError(
                f"RedisCacheError: {command} {key!r} failed: {e}"
            ) from e
