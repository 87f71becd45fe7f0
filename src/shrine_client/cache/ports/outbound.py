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
"""Response cache protocol."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from shrine_client.cache.types import CacheEntry


@runtime_checkable
class ResponseCache(Protocol):
    """Abstract response cache interface.

    Expiry is soft: get hides stale entries, get_stale still
    returns them. Entries are only removed by invalidate_prefix and
    clear.
    """

    @property
    def ttl(self) -> float: ...

    def get(self, key: str) -> CacheEntry | None: ...

    def get_stale(self, key: str) -> CacheEntry | None: ...

    def set(self, key: str, payload: Any) -> CacheEntry: ...

    def invalidate_prefix(self, prefix: str) -> int: ...

    def clear(self) -> None: ...
