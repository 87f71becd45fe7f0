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
"""Token store protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

TOKEN_KEY = "shrine_admin_token"
PRINCIPAL_KEY = "shrine_admin_user"


@runtime_checkable
class TokenStore(Protocol):
    """Durable string key/value store for the session token and principal.

    The session manager keeps exactly two keys here, TOKEN_KEY and
    PRINCIPAL_KEY (a JSON document).
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...
