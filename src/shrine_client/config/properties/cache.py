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
"""Response cache configuration properties."""

from __future__ import annotations

from pydantic import BaseModel, Field

from shrine_client.core.config import config_properties


@config_properties(prefix="shrine.cache")
class CacheProperties(BaseModel):
    """Per-cache time-to-live values in seconds (shrine.cache.*)."""

    ttl: float = Field(default=300.0, gt=0)
    stats_ttl: float = Field(default=60.0, gt=0)
    livestream_ttl: float = Field(default=30.0, gt=0)
