"""Deterministic cache keys for API requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode


def _param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def fingerprint(endpoint: str, params: Mapping[str, Any] | None = None) -> str:
    """Build the cache key for *endpoint* called with *params*.

    Parameters are sorted by name and ``None`` values are dropped, so the
    same logical request always maps to the same key:

        >>> fingerprint("/gallery/public", {"limit": 12, "category": None})
        '/gallery/public?limit=12'
    """
    if not params:
        return endpoint
    pairs = sorted((name, _param_value(value)) for name, value in params.items() if value is not None)
    if not pairs:
        return endpoint
    return f"{endpoint}?{urlencode(pairs)}"
