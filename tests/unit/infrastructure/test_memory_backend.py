"""Tests for InMemoryCacheBackend."""

import pytest

from cacheaside.infrastructure.backends.memory import InMemoryCacheBackend


class TestInMemoryCacheBackend:
    """Tests for InMemoryCacheBackend."""

    @pytest.fixture
    def backend(self, clock) -> InMemoryCacheBackend:
        """Create a backend with a 5 second TTL on a fake clock."""
        return InMemoryCacheBackend(ttl=5, timer=clock)

    @pytest.mark.asyncio
    async def test_set_and_get(self, backend: InMemoryCacheBackend) -> None:
        """Test basic set and get operations keep the Python object."""
        value = {"id": 1, "tags": ["a"]}
        await backend.set("key1", value)
        assert await backend.get("key1") is value

    @pytest.mark.asyncio
    async def test_get_missing_key(self, backend: InMemoryCacheBackend) -> None:
        """Test getting a missing key returns None."""
        assert await backend.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_entry_expires(self, backend: InMemoryCacheBackend, clock) -> None:
        """Test entries are gone once the TTL has elapsed."""
        await backend.set("key1", "value1")

        clock.advance(4.9)
        assert await backend.get("key1") == "value1"

        clock.advance(0.2)
        assert await backend.get("key1") is None

    @pytest.mark.asyncio
    async def test_set_restarts_ttl(self, backend: InMemoryCacheBackend, clock) -> None:
        """Test overwriting an entry restarts its expiration clock."""
        await backend.set("key1", "old")
        clock.advance(4)
        await backend.set("key1", "new")
        clock.advance(4)

        assert await backend.get("key1") == "new"

    @pytest.mark.asyncio
    async def test_delete(self, backend: InMemoryCacheBackend) -> None:
        """Test deleting a key."""
        await backend.set("key1", "value1")

        assert await backend.delete("key1") is True
        assert await backend.get("key1") is None
        assert await backend.delete("key1") is False

    @pytest.mark.asyncio
    async def test_keys_by_prefix(self, backend: InMemoryCacheBackend) -> None:
        """Test listing keys filtered by prefix."""
        await backend.set("user-1", "alice")
        await backend.set("user-2", "bob")
        await backend.set("post-1", "hello")

        assert sorted(await backend.keys("user-")) == ["user-1", "user-2"]
        assert sorted(await backend.keys()) == ["post-1", "user-1", "user-2"]

    @pytest.mark.asyncio
    async def test_keys_skip_expired(
        self, backend: InMemoryCacheBackend, clock
    ) -> None:
        """Test expired entries are not listed."""
        await backend.set("old", 1)
        clock.advance(3)
        await backend.set("fresh", 2)
        clock.advance(3)

        assert await backend.keys() == ["fresh"]

    @pytest.mark.asyncio
    async def test_clear_by_prefix(self, backend: InMemoryCacheBackend) -> None:
        """Test clearing only keys with a prefix."""
        await backend.set("user-1", "alice")
        await backend.set("user-2", "bob")
        await backend.set("post-1", "hello")

        assert await backend.clear("user-") == 2
        assert await backend.get("user-1") is None
        assert await backend.get("post-1") == "hello"

    @pytest.mark.asyncio
    async def test_clear_all(self, backend: InMemoryCacheBackend) -> None:
        """Test clearing all keys."""
        await backend.set("key1", "value1")
        await backend.set("key2", "value2")

        assert await backend.clear() == 2
        assert len(backend) == 0

    @pytest.mark.asyncio
    async def test_lru_eviction(self, clock) -> None:
        """Test LRU eviction when maxsize is reached."""
        backend = InMemoryCacheBackend(ttl=300, maxsize=2, timer=clock)

        await backend.set("key1", "value1")
        await backend.set("key2", "value2")
        await backend.get("key1")
        await backend.set("key3", "value3")

        assert await backend.get("key1") == "value1"
        assert await backend.get("key2") is None
        assert await backend.get("key3") == "value3"

    def test_always_available(self, backend: InMemoryCacheBackend) -> None:
        """Test the in-process backend never reports itself unavailable."""
        assert backend.is_available is True

    def test_properties(self) -> None:
        """Test ttl and maxsize properties."""
        backend = InMemoryCacheBackend(ttl=30, maxsize=500)
        assert backend.ttl == 30
        assert backend.maxsize == 500

    def test_default_maxsize(self) -> None:
        """Test the entry limit defaults to 10000."""
        assert InMemoryCacheBackend(ttl=30).maxsize == 10000
