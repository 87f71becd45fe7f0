"""Livestream API client and active-stream poller."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any

import structlog

from shrine_client.api.base import ResourceApi
from shrine_client.cache.decorators import invalidates
from shrine_client.kernel.exceptions import ShrineClientException

logger = structlog.get_logger("shrine_client.api.livestream")

PUBLIC_PREFIX = "/livestream/"
ADMIN_PATH = "/livestream/admin"


class LivestreamApi(ResourceApi):
    """Livestream reads and admin control.

    Public reads go through a short-lived cache so frequent polling does
    not hit the server on every tick; admin actions invalidate it.
    """

    async def active(self) -> Any:
        return await self._cached_get("/livestream/active")

    async def upcoming(self) -> Any:
        return await self._cached_get("/livestream/upcoming")

    async def recent(self, limit: int = 5) -> Any:
        return await self._cached_get("/livestream/recent", {"limit": limit})

    async def get_stream(self, stream_id: int) -> Any:
        return await self._get(f"/livestream/{stream_id}")

    async def all_streams(self) -> Any:
        return await self._get(f"{ADMIN_PATH}/all")

    @invalidates("_cache", PUBLIC_PREFIX)
    async def create(self, stream: dict[str, Any]) -> Any:
        return await self._send("POST", f"{ADMIN_PATH}/create", stream)

    @invalidates("_cache", PUBLIC_PREFIX)
    async def update(self, stream_id: int, changes: dict[str, Any]) -> Any:
        return await self._send("PUT", f"{ADMIN_PATH}/{stream_id}", changes)

    @invalidates("_cache", PUBLIC_PREFIX)
    async def start(self, stream_id: int) -> Any:
        return await self._send("POST", f"{ADMIN_PATH}/{stream_id}/start")

    @invalidates("_cache", PUBLIC_PREFIX)
    async def end(self, stream_id: int) -> Any:
        return await self._send("POST", f"{ADMIN_PATH}/{stream_id}/end")

    async def update_viewer_count(self, stream_id: int, count: int) -> Any:
        return await self._send("POST", f"{ADMIN_PATH}/{stream_id}/viewers", {"count": count})

    @invalidates("_cache", PUBLIC_PREFIX)
    async def delete(self, stream_id: int) -> Any:
        return await self._send("DELETE", f"{ADMIN_PATH}/{stream_id}")

    async def poll_active(
        self,
        on_update: Callable[[Any], Awaitable[None] | None],
        interval: timedelta = timedelta(seconds=30),
        stop: asyncio.Event | None = None,
    ) -> None:
        """Read the active stream every *interval* and hand it to *on_update*.

        Runs until *stop* is set (or forever). A failed read with nothing
        cached is logged and retried on the next tick.
        """
        stop = stop or asyncio.Event()
        while not stop.is_set():
            try:
                payload = await self.active()
            except ShrineClientException as exc:
                logger.warning("livestream_poll_failed", error=str(exc))
            else:
                result = on_update(payload)
                if asyncio.iscoroutine(result):
                    await result

            try:
                await asyncio.wait_for(stop.wait(), timeout=interval.total_seconds())
            except asyncio.TimeoutError:
                pass
