"""Tests for cache configuration entities."""

import pytest

from cacheaside.core.entities import BackendType, CacheConfig
from cacheaside.core.exceptions import TypeArgumentError, UnrecognizedBackendError


class TestCacheConfig:
    """Tests for CacheConfig."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = CacheConfig(backend="in-memory", cache_ttl=5)

        assert config.backend is BackendType.IN_MEMORY
        assert config.cache_enable is True
        assert config.key_prefix == ""
        assert config.backend_options == {}

    def test_redis_alias(self) -> None:
        """Test "redis" selects the remote backend."""
        assert CacheConfig(backend="redis", cache_ttl=5).backend is BackendType.REMOTE

    def test_float_ttl(self) -> None:
        """Test fractional TTLs are accepted."""
        assert CacheConfig(backend="remote", cache_ttl=0.5).cache_ttl == 0.5

    @pytest.mark.parametrize("value", ["asdf", 1, None])
    def test_cache_enable_must_be_bool(self, value: object) -> None:
        """Test a non-bool cache_enable raises TypeArgumentError."""
        with pytest.raises(
            TypeArgumentError,
            match="cache_enable parameter must be type bool",
        ) as exc_info:
            CacheConfig(backend="in-memory", cache_ttl=5, cache_enable=value)

        assert exc_info.value.argument == "cache_enable"

    @pytest.mark.parametrize("value", ["5", None, True])
    def test_cache_ttl_must_be_number(self, value: object) -> None:
        """Test a non-numeric cache_ttl raises TypeArgumentError."""
        with pytest.raises(
            TypeArgumentError,
            match="cache_ttl parameter must be type number",
        ) as exc_info:
            CacheConfig(backend="in-memory", cache_ttl=value)

        assert exc_info.value.argument == "cache_ttl"

    def test_type_checked_before_backend(self) -> None:
        """Test type errors win over an unknown backend."""
        with pytest.raises(TypeArgumentError):
            CacheConfig(backend="memcached", cache_ttl="5")

    def test_unrecognized_backend(self) -> None:
        """Test an unknown backend raises UnrecognizedBackendError."""
        with pytest.raises(UnrecognizedBackendError, match="memcached"):
            CacheConfig(backend="memcached", cache_ttl=5)

    def test_fingerprint_ignores_options(self) -> None:
        """Test connection options are not part of identity."""
        first = CacheConfig(
            backend="remote", cache_ttl=5, backend_options={"host": "a"}
        )
        second = CacheConfig(
            backend="redis", cache_ttl=5, backend_options={"host": "b"}
        )

        assert first.fingerprint == second.fingerprint
        assert first == second
        assert hash(first) == hash(second)

    def test_fingerprint_differs_by_prefix_and_ttl(self) -> None:
        """Test prefix and TTL distinguish configurations."""
        base = CacheConfig(backend="in-memory", cache_ttl=5)

        assert base.fingerprint != CacheConfig(
            backend="in-memory", cache_ttl=5, key_prefix="x"
        ).fingerprint
        assert base.fingerprint != CacheConfig(
            backend="in-memory", cache_ttl=6
        ).fingerprint

    def test_is_immutable(self) -> None:
        """Test configs cannot be modified."""
        config = CacheConfig(backend="in-memory", cache_ttl=5)

        with pytest.raises(AttributeError):
            config.cache_ttl = 10  # type: ignore[misc]

    def test_from_options_camel_case(self) -> None:
        """Test building from camelCase option names."""
        config = CacheConfig.from_options(
            {
                "type": "redis",
                "cacheTtl": 10,
                "cacheEnable": False,
                "keyPrefix": "test",
                "backendConnectionOptions": {"url": "redis://localhost"},
            }
        )

        assert config.backend is BackendType.REMOTE
        assert config.cache_ttl == 10
        assert config.cache_enable is False
        assert config.key_prefix == "test"
        assert config.backend_options == {"url": "redis://localhost"}

    def test_from_options_snake_case(self) -> None:
        """Test building from field names."""
        config = CacheConfig.from_options(
            {"backend": "in-memory", "cache_ttl": 1, "cache_enable": True}
        )

        assert config == CacheConfig(backend="in-memory", cache_ttl=1)

    def test_from_options_missing_enable(self) -> None:
        """Test a missing cacheEnable is a type error."""
        with pytest.raises(TypeArgumentError):
            CacheConfig.from_options({"type": "in-memory", "cacheTtl": 5})
