"""Management team API client."""

from __future__ import annotations

from typing import Any

from shrine_client.api.base import ResourceApi
from shrine_client.cache.decorators import invalidates
from shrine_client.kernel.exceptions import ValidationError

ACTIVE_PATH = "/management/active"
FEATURED_PATH = "/management/featured"
ADMIN_PATH = "/management/admin"
PUBLIC_PREFIX = "/management/"


def _require_member_fields(member: dict[str, Any]) -> None:
    if not member.get("name") or not member.get("position"):
        raise ValidationError("Name and position are required", code="MISSING_FIELDS")


class ManagementApi(ResourceApi):
    """Management team listings (cached) and their admin maintenance."""

    async def active_members(self) -> Any:
        return await self._cached_get(ACTIVE_PATH)

    async def featured_members(self, limit: int = 4) -> Any:
        return await self._cached_get(FEATURED_PATH, {"limit": limit})

    async def all_members(self) -> Any:
        return await self._get(f"{ADMIN_PATH}/all")

    async def stats(self) -> Any:
        return await self._get(f"{ADMIN_PATH}/stats")

    async def get_member(self, member_id: int) -> Any:
        return await self._get(f"{ADMIN_PATH}/{member_id}")

    @invalidates("_cache", PUBLIC_PREFIX)
    async def create(self, member: dict[str, Any]) -> Any:
        _require_member_fields(member)
        return await self._send("POST", ADMIN_PATH, member)

    @invalidates("_cache", PUBLIC_PREFIX)
    async def update(self, member_id: int, member: dict[str, Any]) -> Any:
        _require_member_fields(member)
        return await self._send("PUT", f"{ADMIN_PATH}/{member_id}", member)

    @invalidates("_cache", PUBLIC_PREFIX)
    async def delete(self, member_id: int) -> Any:
        return await self._send("DELETE", f"{ADMIN_PATH}/{member_id}")

    @invalidates("_cache", PUBLIC_PREFIX)
    async def toggle_active(self, member_id: int) -> Any:
        return await self._send("PATCH", f"{ADMIN_PATH}/{member_id}/toggle-active")

    @invalidates("_cache", PUBLIC_PREFIX)
    async def update_display_order(self, member_id: int, display_order: int) -> Any:
        return await self._send(
            "PATCH", f"{ADMIN_PATH}/{member_id}/display-order", {"display_order": display_order}
        )

    def clear_cache(self) -> None:
        self._cache.clear()
