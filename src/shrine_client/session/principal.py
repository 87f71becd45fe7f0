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
"""Principal — snapshot of the authenticated admin."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Principal:
    """Identity and profile data returned by the server at login/verification.

    attributes keeps the full record as received, so fields the client
    does not model are not lost when the snapshot is persisted.
    """

    id: Any = None
    username: str | None = None
    email: str | None = None
    full_name: str | None = None
    role: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Principal:
        return cls(
            id=data.get("id"),
            username=data.get("username"),
            email=data.get("email"),
            full_name=data.get("full_name"),
            role=data.get("role"),
            attributes=dict(data),
        )

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.attributes)
        for name in ("id", "username", "email", "full_name", "role"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data

    @property
    def display_name(self) -> str:
        return self.full_name or self.username or str(self.id or "")
