"""Pytest configuration for cacheaside tests."""

import re
from typing import Any

import pytest

import cacheaside.infrastructure.backends.redis as redis_backend
from cacheaside.core.services.registry import reset_cache_registry


@pytest.fixture(autouse=True)
def reset_registry():
    """Start and finish every test with an empty process-wide registry."""
    reset_cache_registry()
    yield
    reset_cache_registry()


def _glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate the subset of Redis glob syntax the backend emits."""
    parts: list[str] = []
    chars = iter(pattern)
    for char in chars:
        if char == "\\":
            parts.append(re.escape(next(chars, "\\")))
        elif char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("^" + "".join(parts) + "$")


class FakeRedisServer:
    """Shared state behind FakeRedis clients.

    ``fail_on`` maps a command name to the exception it should raise.
    """

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.expirations: dict[str, int] = {}
        self.fail_on: dict[str, Exception] = {}
        self.clients: list["FakeRedis"] = []
        self.calls: list[str] = []

    def client(self, **options: Any) -> "FakeRedis":
        client = FakeRedis(self, **options)
        self.clients.append(client)
        return client

    def from_url(self, url: str, **options: Any) -> "FakeRedis":
        return self.client(url=url, **options)

    def __call__(self, **options: Any) -> "FakeRedis":
        return self.client(**options)


class FakeRedis:
    """Minimal asyncio Redis client double backed by a FakeRedisServer."""

    def __init__(self, server: FakeRedisServer, **options: Any) -> None:
        self.server = server
        self.options = options
        self.closed = False

    def _command(self, name: str) -> None:
        self.server.calls.append(name)
        error = self.server.fail_on.get(name)
        if error is not None:
            raise error

    async def ping(self) -> bool:
        self._command("ping")
        return True

    async def get(self, key: str) -> str | None:
        self._command("get")
        return self.server.store.get(key)

    async def set(self, key: str, value: str) -> bool:
        self._command("set")
        self.server.store[key] = value
        self.server.expirations.pop(key, None)
        return True

    async def pexpire(self, key: str, milliseconds: int) -> bool:
        self._command("pexpire")
        if key not in self.server.store:
            return False
        self.server.expirations[key] = milliseconds
        return True

    async def delete(self, *keys: str) -> int:
        self._command("delete")
        count = 0
        for key in keys:
            if self.server.store.pop(key, None) is not None:
                self.server.expirations.pop(key, None)
                count += 1
        return count

    async def scan(
        self, cursor: int = 0, match: str = "*", count: int = 10
    ) -> tuple[int, list[str]]:
        self._command("scan")
        regex = _glob_to_regex(match)
        return 0, [key for key in list(self.server.store) if regex.match(key)]

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def redis_server(monkeypatch: pytest.MonkeyPatch) -> FakeRedisServer:
    """Replace the Redis client class with FakeRedis clients on one server."""
    server = FakeRedisServer()
    monkeypatch.setattr(redis_backend, "Redis", server)
    return server


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Provide a manually advanced clock."""
    return FakeClock()
