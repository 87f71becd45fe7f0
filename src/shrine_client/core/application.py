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
"""ShrineClient — composition root wiring transport, session, caches and APIs."""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import timedelta
from pathlib import Path
from types import TracebackType

import httpx

from shrine_client.api.gallery import GalleryApi
from shrine_client.api.livestream import LivestreamApi
from shrine_client.api.management import ManagementApi
from shrine_client.cache.adapters.memory import InMemoryResponseCache
from shrine_client.client.transport import ApiTransport
from shrine_client.config.properties.cache import CacheProperties
from shrine_client.config.properties.client import ClientProperties
from shrine_client.config.properties.session import SessionProperties
from shrine_client.core.config import Config
from shrine_client.logging.structlog_adapter import StructlogAdapter
from shrine_client.session.adapters.file import JsonFileTokenStore
from shrine_client.session.adapters.memory import InMemoryTokenStore
from shrine_client.session.manager import SessionManager
from shrine_client.session.ports.outbound import TokenStore
from shrine_client.session.state import SessionState


class ShrineClient:
    """Everything a page needs, built from one Config.

    Each instance owns its own transport, session and caches; nothing is
    shared through module globals, so independent clients (and tests) do
    not see each other's state.

        async with ShrineClient.from_file("shrine.yaml") as client:
            gallery = await client.gallery.public_gallery(limit=12)
            await client.session.login("admin", "secret")

    Startup sequence:
    1. Configure logging (from shrine.logging)
    2. Build the transport (shrine.client)
    3. Open the token store and the session manager (shrine.session)
    4. Build per-resource caches with their TTLs (shrine.cache)
    5. ``start()`` verifies a stored token, if any

    Cached admin-only reads are dropped whenever the session ends.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
        store: TokenStore | None = None,
        clock: Callable[[], float] = time.time,
        configure_logging: bool = True,
    ) -> None:
        self.config = config or Config.from_file()

        if configure_logging:
            self._logging = StructlogAdapter()
            self._logging.configure(self.config)

        client_props = self.config.bind(ClientProperties)
        builder = (
            ApiTransport.rest()
            .base_url(client_props.base_url)
            .read_timeout(timedelta(seconds=client_props.read_timeout))
            .write_timeout(timedelta(seconds=client_props.write_timeout))
        )
        if http_transport is not None:
            builder = builder.http_transport(http_transport)
        self.transport = builder.build()

        self.session = SessionManager(self.transport, store or self._open_store())

        cache_props = self.config.bind(CacheProperties)
        ttl = timedelta(seconds=cache_props.ttl)
        self.gallery = GalleryApi(
            self.transport,
            cache=InMemoryResponseCache(ttl, clock=clock, name="gallery"),
            stats_cache=InMemoryResponseCache(timedelta(seconds=cache_props.stats_ttl), clock=clock, name="gallery-stats"),
        )
        self.management = ManagementApi(
            self.transport,
            cache=InMemoryResponseCache(ttl, clock=clock, name="management"),
        )
        self.livestream = LivestreamApi(
            self.transport,
            cache=InMemoryResponseCache(timedelta(seconds=cache_props.livestream_ttl), clock=clock, name="livestream"),
        )
        self.session.add_listener(self._on_session_change)

    @classmethod
    def from_file(cls, path: str | Path, **kwargs: object) -> ShrineClient:
        return cls(Config.from_file(path), **kwargs)  # type: ignore[arg-type]

    def _open_store(self) -> TokenStore:
        props = self.config.bind(SessionProperties)
        if props.store == "file":
            return JsonFileTokenStore(props.store_path)
        return InMemoryTokenStore()

    def _on_session_change(self, old: SessionState, new: SessionState) -> None:
        if new is SessionState.ANONYMOUS:
            self.gallery.clear_admin_cache()

    async def start(self) -> bool:
        """Verify a stored session token; returns whether a session is active."""
        return await self.session.start()

    def clear_caches(self) -> None:
        self.gallery.clear_all_cache()
        self.management.clear_cache()
        self.livestream.cache.clear()

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self) -> ShrineClient:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
