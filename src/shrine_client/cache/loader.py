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
"""ResourceLoader — cache-first reads with in-flight collapsing and stale fallback."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from shrine_client.cache.ports.outbound import ResponseCache
from shrine_client.client.retry import RetryPolicy
from shrine_client.kernel.exceptions import NetworkError, ServerError

logger = structlog.get_logger("shrine_client.cache")

Fetch = Callable[[], Awaitable[Any]]


def successful_envelope(payload: Any) -> bool:
    """Accept payloads unless they are an envelope reporting success: false."""
    if isinstance(payload, dict):
        return payload.get("success", True) is not False
    return True


class ResourceLoader:
    """Reads a resource through a ResponseCache.

    load serves a fresh entry without touching the network. Otherwise
    it runs *fetch*, sharing one in-flight fetch among all callers that ask
    for the same key meanwhile. Accepted payloads are stored. When the
    fetch fails with one of *fallback_on* (network and server failures by
    default) the last stored payload is served instead, and the error is
    raised only if nothing was ever stored for the key. Auth and
    validation errors always propagate.

    A fetch keeps running if its callers go away (e.g. were cancelled),
    so its result still lands in the cache for the next reader.

    Args:
        cache: Where payloads are stored.
        retry: Optional caller-side retry around each fetch.
        accept: Decides which payloads are worth caching.
        fallback_on: Exception types that may be answered from a stale entry.
    """

    def __init__(
        self,
        cache: ResponseCache,
        retry: RetryPolicy | None = None,
        accept: Callable[[Any], bool] = successful_envelope,
        fallback_on: tuple[type[Exception], ...] = (NetworkError, ServerError),
    ) -> None:
        self._cache = cache
        self._retry = retry
        self._accept = accept
        self._fallback_on = fallback_on
        self._in_flight: dict[str, asyncio.Future[Any]] = {}

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    def in_flight(self, key: str) -> bool:
        return key in self._in_flight

    async def load(self, key: str, fetch: Fetch) -> Any:
        entry = self._cache.get(key)
        if entry is not None:
            logger.debug("cache_hit", key=key)
            return entry.payload

        future = self._in_flight.get(key)
        if future is None:
            logger.debug("cache_miss", key=key)
            future = asyncio.ensure_future(self._fetch_and_store(key, fetch))
            self._in_flight[key] = future
            future.add_done_callback(lambda done, k=key: self._forget(k, done))
        else:
            logger.debug("joining_in_flight_fetch", key=key)

        try:
            return await asyncio.shield(future)
        except self._fallback_on as exc:
            stale = self._cache.get_stale(key)
            if stale is None:
                raise
            logger.warning("serving_stale", key=key, fetched_at=stale.fetched_at, error=str(exc))
            return stale.payload

    async def _fetch_and_store(self, key: str, fetch: Fetch) -> Any:
        if self._retry is not None:
            payload = await self._retry.execute(fetch)
        else:
            payload = await fetch()

        if self._accept(payload):
            self._cache.set(key, payload)
        else:
            logger.debug("payload_not_cached", key=key)
        return payload

    def _forget(self, key: str, done: asyncio.Future[Any]) -> None:
        if not done.cancelled():
            # Mark the outcome retrieved even when every caller has gone.
            done.exception()
        if self._in_flight.get(key) is done:
            del self._in_flight[key]
