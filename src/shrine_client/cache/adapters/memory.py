# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""In-memory response cache with a per-instance TTL."""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any

import structlog

from shrine_client.cache.types import CacheEntry

logger = structlog.get_logger("shrine_client.cache")


class InMemoryResponseCache:
    """In-memory response cache keyed by request fingerprint.

    Entries carry their fetch time. get serves an entry only while
    now - fetched_at < ttl; older entries stay stored for
    get_stale until invalidated or cleared. There is no size bound:
    keys come from the small set of endpoint and parameter combinations
    the client issues.

    Args:
        ttl: Freshness window for this cache instance.
        clock: Wall-clock source in seconds, time.time by default.
        name: Label used in log events.
    """

    def __init__(
        self,
        ttl: timedelta = timedelta(minutes=5),
        clock: Callable[[], float] = time.time,
        name: str = "default",
    ) -> None:
        self._ttl = ttl.total_seconds()
        self._clock = clock
        self._name = name
        self._store: dict[str, CacheEntry] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def name(self) -> str:
        return self._name

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry if it is still fresh, else None."""
        entry = self._store.get(key)
        if entry is None:
            return None
        if not entry.is_fresh(self._clock(), self._ttl):
            return None
        return entry

    def get_stale(self, key: str) -> CacheEntry | None:
        """Return the most recent entry regardless of age."""
        return self._store.get(key)

    def set(self, key: str, payload: Any) -> CacheEntry:
        """Store or overwrite the entry for *key*, stamped with the current time."""
        entry = CacheEntry(key=key, payload=payload, fetched_at=self._clock())
        self._store[key] = entry
        return entry

    def invalidate_prefix(self, prefix: str) -> int:
        """Remove every entry whose key starts with *prefix*.

        Returns the number of entries removed.
        """
        doomed = [key for key in self._store if key.startswith(prefix)]
        for key in doomed:
            del self._store[key]
        if doomed:
            logger.debug("cache_invalidated", cache=self._name, prefix=prefix, removed=len(doomed))
        return len(doomed)

    def clear(self) -> None:
        """Remove all entries."""
        self._store.clear()
        logger.debug("cache_cleared", cache=self._name)

    def keys(self) -> list[str]:
        return list(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store
