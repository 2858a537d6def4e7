"""Cache-aside decorator for functions.

Wraps a function so that its result is served from a CacheService
and only computed on a miss.
"""

import functools
import inspect
import re
from collections.abc import Callable
from typing import Any, TypeVar

from cacheaside.core.services.cache_service import CacheService
from cacheaside.utils.hashing import hash_value

F = TypeVar("F", bound=Callable[..., Any])


def cached(
    cache: CacheService,
    key: str | Callable[..., str] | None = None,
) -> Callable[[F], F]:
    """Decorator caching a function's result through ``cache.get``.

    The decorated function may be sync or async; the wrapper is always
    a coroutine function. Exceptions raised by the function propagate
    and nothing is cached. Falsy results are not cached.

    Args:
        cache: The cache service to use.
        key: Custom cache key or function to generate key.
            If string, supports {arg_name} interpolation from the bound
            call arguments. If callable, receives (*args, **kwargs) and
            returns the key. If None, the key is built from the
            function's module, qualified name and a hash of its arguments.

    Returns:
        Decorated function.

    Example:
        @cached(cache, key="user:{id}")
        async def get_user(id: str) -> dict:
            return await db.get_user(id)
    """

    def decorator(func: F) -> F:
        signature = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            cache_key = _build_cache_key(func, signature, args, kwargs, key)
            return await cache.get(cache_key, lambda: func(*args, **kwargs))

        return wrapper  # type: ignore

    return decorator


def build_call_key(
    func: Callable[..., Any],
    arguments: dict[str, Any],
) -> str:
    """Build the default cache key for a function call.

    Args:
        func: The function being cached.
        arguments: Bound call arguments by parameter name.

    Returns:
        ``<module>:<qualname>:<arguments hash>``.
    """
    module = func.__module__ or "default"
    return ":".join([module, func.__qualname__, hash_value(arguments or None)])


def _build_cache_key(
    func: Callable[..., Any],
    signature: inspect.Signature,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    custom_key: str | Callable[..., str] | None,
) -> str:
    """Build cache key for a function call.

    Args:
        func: The function being cached.
        signature: The function's signature.
        args: Positional arguments.
        kwargs: Keyword arguments.
        custom_key: Custom key or key builder function.

    Returns:
        The cache key string.
    """
    if callable(custom_key):
        return custom_key(*args, **kwargs)

    bound = signature.bind(*args, **kwargs)
    bound.apply_defaults()

    if custom_key is not None:
        return _interpolate_string(custom_key, bound.arguments)

    return build_call_key(func, dict(bound.arguments))


def _interpolate_string(template: str, arguments: dict[str, Any]) -> str:
    """Interpolate {arg_name} placeholders in string.

    Args:
        template: String with {arg_name} placeholders.
        arguments: Bound arguments for interpolation.

    Returns:
        Interpolated string. Unknown placeholders are kept as-is.
    """
    pattern = r"\{(\w+)\}"

    def replacer(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in arguments:
            return str(arguments[name])
        return match.group(0)

    return re.sub(pattern, replacer, template)
