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
"""HTTP client configuration properties."""

from __future__ import annotations

from pydantic import BaseModel, Field

from shrine_client.core.config import config_properties


@config_properties(prefix="shrine.client")
class ClientProperties(BaseModel):
    """Configuration for the API transport (shrine.client.*).

    Reads use read_timeout; mutations and uploads use the longer
    write_timeout. Both are in seconds.
    """

    base_url: str = "http://localhost:5000/api"
    read_timeout: float = Field(default=10.0, gt=0)
    write_timeout: float = Field(default=30.0, gt=0)
