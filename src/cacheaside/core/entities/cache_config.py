"""Cache configuration entity."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cacheaside.core.exceptions import TypeArgumentError, UnrecognizedBackendError


class BackendType(str, Enum):
    """Supported cache backends.

    IN_MEMORY: Single-process TTL map.
    REMOTE: Redis server, values stored as tagged strings.
    """

    IN_MEMORY = "in-memory"
    REMOTE = "remote"

    @classmethod
    def _missing_(cls, value: object) -> "BackendType | None":
        if value == "redis":
            return cls.REMOTE
        return None


@dataclass(frozen=True)
class CacheConfig:
    """Immutable cache configuration.

    Validated on construction, before any backend connection is
    attempted. ``backend_options`` is handed to the backend as-is and
    takes no part in equality or in the registry fingerprint.

    Attributes:
        backend: Backend kind, "in-memory" or "remote" ("redis" is an alias).
        cache_ttl: Time-to-live in seconds for every stored entry.
        cache_enable: When False nothing is ever stored.
        key_prefix: Namespace prepended to keys as "<prefix>-<key>".
        backend_options: Backend-specific connection options.
    """

    backend: BackendType | str
    cache_ttl: float
    cache_enable: bool = True
    key_prefix: str = ""
    backend_options: Mapping[str, Any] = field(
        default_factory=dict, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        """Validate field types and normalize the backend kind."""
        if not isinstance(self.cache_enable, bool):
            raise TypeArgumentError("cache_enable", "bool")

        if isinstance(self.cache_ttl, bool) or not isinstance(
            self.cache_ttl, (int, float)
        ):
            raise TypeArgumentError("cache_ttl", "number")

        try:
            backend = BackendType(self.backend)
        except ValueError:
            raise UnrecognizedBackendError(self.backend) from None
        object.__setattr__(self, "backend", backend)

        if self.key_prefix is None:
            object.__setattr__(self, "key_prefix", "")

    @property
    def fingerprint(self) -> tuple[BackendType | str, float, str]:
        """Identity used by the registry to reuse instances."""
        return (self.backend, self.cache_ttl, self.key_prefix)

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "CacheConfig":
        """Build a config from an options mapping.

        Accepts both the camelCase names (``type``, ``cacheTtl``,
        ``cacheEnable``, ``keyPrefix``, ``backendConnectionOptions``)
        and the snake_case field names.

        Args:
            options: The options mapping.

        Returns:
            A validated CacheConfig.
        """

        def pick(*names: str, default: Any = None) -> Any:
            for name in names:
                if name in options:
                    return options[name]
            return default

        return cls(
            backend=pick("type", "backend"),
            cache_ttl=pick("cacheTtl", "cache_ttl"),
            cache_enable=pick("cacheEnable", "cache_enable"),
            key_prefix=pick("keyPrefix", "key_prefix", default="") or "",
            backend_options=pick(
                "backendConnectionOptions", "backend_options", default={}
            )
            or {},
        )
