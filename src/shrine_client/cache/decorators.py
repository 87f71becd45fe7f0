"""Declarative cache invalidation for mutating operations."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any, TypeVar

from shrine_client.cache.ports.outbound import ResponseCache

F = TypeVar("F", bound=Callable[..., Any])


def invalidates(
    backend: ResponseCache | str,
    prefix: str = "",
    all_entries: bool = False,
) -> Callable[[F], F]:
    """Invalidate cached entries after an async mutation succeeds.

    The invalidation runs after the wrapped coroutine returns and before
    its result is handed back, so any read issued afterwards misses. If
    the mutation raises, the cache is left untouched.

    ``prefix`` supports format-string interpolation with the function's
    argument names, e.g. ``prefix="/gallery/admin/{item_id}"``.

    Args:
        backend: The cache, or the name of an attribute holding the cache
            on the method's ``self`` (for per-instance caches).
        prefix: Key prefix template to invalidate.
        all_entries: When ``True``, clear the entire cache instead.
    """

    def decorator(func: F) -> F:
        sig = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = await func(*args, **kwargs)

            cache = getattr(args[0], backend) if isinstance(backend, str) else backend
            if all_entries:
                cache.clear()
            else:
                bound = sig.bind(*args, **kwargs)
                bound.apply_defaults()
                cache.invalidate_prefix(prefix.format(**bound.arguments))
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
