"""Gallery API client."""

from __future__ import annotations

import asyncio
from typing import Any

import structlog

from shrine_client.api.base import ResourceApi
from shrine_client.cache.decorators import invalidates
from shrine_client.cache.loader import ResourceLoader
from shrine_client.cache.ports.outbound import ResponseCache
from shrine_client.client.retry import RetryPolicy
from shrine_client.client.transport import ApiTransport

logger = structlog.get_logger("shrine_client.api.gallery")

PUBLIC_PATH = "/gallery/public"
ADMIN_PATH = "/gallery/admin"
UPLOAD_PATH = "/gallery/admin/upload"
STATS_PATH = "/gallery/admin/stats"


class GalleryApi(ResourceApi):
    """Public gallery reads, admin gallery management and statistics.

    Public listings are cached in ``cache``; statistics live in their own
    shorter-lived ``stats_cache``. Every mutation drops the public
    listings and the statistics before returning. Admin listings are
    never cached.
    """

    def __init__(
        self,
        transport: ApiTransport,
        cache: ResponseCache,
        stats_cache: ResponseCache,
        retry: RetryPolicy | None = None,
    ) -> None:
        super().__init__(transport, cache, retry=retry)
        self._stats_cache = stats_cache
        self._stats_loader = ResourceLoader(stats_cache, retry=retry)

    async def public_gallery(self, category: str | None = None, limit: int | None = None) -> Any:
        return await self._cached_get(PUBLIC_PATH, {"category": category, "limit": limit})

    async def stats(self) -> Any:
        return await self._cached_get(STATS_PATH, loader=self._stats_loader)

    async def admin_gallery(self, category: str | None = None) -> Any:
        return await self._get(ADMIN_PATH, {"category": category})

    @invalidates("_stats_cache", all_entries=True)
    @invalidates("_cache", PUBLIC_PATH)
    async def create(self, item: dict[str, Any]) -> Any:
        return await self._send("POST", ADMIN_PATH, item)

    @invalidates("_stats_cache", all_entries=True)
    @invalidates("_cache", PUBLIC_PATH)
    async def update(self, item_id: int, item: dict[str, Any]) -> Any:
        return await self._send("PUT", f"{ADMIN_PATH}/{item_id}", item)

    @invalidates("_stats_cache", all_entries=True)
    @invalidates("_cache", PUBLIC_PATH)
    async def delete(self, item_id: int) -> Any:
        return await self._send("DELETE", f"{ADMIN_PATH}/{item_id}")

    @invalidates("_stats_cache", all_entries=True)
    @invalidates("_cache", PUBLIC_PATH)
    async def toggle_active(self, item_id: int) -> Any:
        return await self._send("PATCH", f"{ADMIN_PATH}/{item_id}/toggle-active")

    @invalidates("_stats_cache", all_entries=True)
    @invalidates("_cache", PUBLIC_PATH)
    async def toggle_featured(self, item_id: int) -> Any:
        return await self._send("PATCH", f"{ADMIN_PATH}/{item_id}/toggle-featured")

    async def upload_image(
        self,
        image_data: str,
        image_name: str,
        image_type: str,
        image_size: int | None = None,
    ) -> Any:
        """Upload an already-encoded image (data URL / base64) with the write timeout."""
        body = {
            "image_data": image_data,
            "image_name": image_name,
            "image_type": image_type,
            "image_size": image_size if image_size is not None else len(image_data),
        }
        return await self._send("POST", UPLOAD_PATH, body)

    def clear_public_cache(self) -> int:
        return self._cache.invalidate_prefix(PUBLIC_PATH)

    def clear_admin_cache(self) -> None:
        """Drop cached admin-only reads (statistics)."""
        self._stats_cache.clear()

    def clear_all_cache(self) -> None:
        self._cache.clear()
        self._stats_cache.clear()

    async def preload(self) -> None:
        """Warm the first gallery page and the featured strip."""
        results = await asyncio.gather(
            self.public_gallery(limit=12),
            self.public_gallery(limit=3),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, Exception):
                logger.warning("gallery_preload_failed", error=str(result))
