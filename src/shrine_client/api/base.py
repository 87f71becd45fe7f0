"""Shared plumbing for the resource API clients."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from shrine_client.cache.fingerprint import fingerprint
from shrine_client.cache.loader import ResourceLoader
from shrine_client.cache.ports.outbound import ResponseCache
from shrine_client.client.retry import RetryPolicy
from shrine_client.client.transport import ApiTransport


class ResourceApi:
    """Base for API clients that read through a response cache.

    Reads return the decoded response envelope (``{success, message,
    data}``) and raise the client error taxonomy on failure, unless a
    cached read can fall back to an earlier payload.
    """

    def __init__(
        self,
        transport: ApiTransport,
        cache: ResponseCache,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._transport = transport
        self._cache = cache
        self._loader = ResourceLoader(cache, retry=retry)

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    async def _cached_get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        loader: ResourceLoader | None = None,
    ) -> Any:
        loader = loader or self._loader

        async def fetch() -> Any:
            return await self._get(path, params)

        return await loader.load(fingerprint(path, params), fetch)

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        response = await self._transport.get(path, params=params)
        return response.raise_for_error().body

    async def _send(
        self,
        method: str,
        path: str,
        body: Any = None,
        timeout: timedelta | None = None,
    ) -> Any:
        response = await self._transport.request(method, path, body=body, timeout=timeout)
        return response.raise_for_error().body
