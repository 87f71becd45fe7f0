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
"""httpx-based HTTP client adapter."""

from __future__ import annotations

import json
from datetime import timedelta
from typing import Any

import httpx

from shrine_client.client.types import ApiRequest, ApiResponse
from shrine_client.kernel.exceptions import NetworkError, RequestTimeoutError


class HttpxClientAdapter:
    """HTTP client adapter backed by httpx.AsyncClient.

    Every received response is returned as an ApiResponse regardless of
    status. Transport failures become NetworkError, timeouts
    RequestTimeoutError.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: timedelta = timedelta(seconds=10),
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout.total_seconds(),
            headers={"Content-Type": "application/json", **(headers or {})},
            transport=transport,
        )

    async def send(self, request: ApiRequest) -> ApiResponse:
        kwargs: dict[str, Any] = {"headers": request.headers}
        if request.body is not None:
            kwargs["json"] = request.body
        if request.params:
            kwargs["params"] = {k: v for k, v in request.params.items() if v is not None}
        if request.timeout is not None:
            kwargs["timeout"] = request.timeout

        context = {"method": request.method, "path": request.path}
        try:
            response = await self._client.request(request.method, request.path, **kwargs)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(
                f"{request.method} {request.path} timed out", code="TIMEOUT", context=context
            ) from exc
        except httpx.TransportError as exc:
            raise NetworkError(
                "Network error. Please check your connection.", code="NETWORK", context=context
            ) from exc

        return self._to_api_response(response)

    @staticmethod
    def _to_api_response(response: httpx.Response) -> ApiResponse:
        if not response.content:
            return ApiResponse(status=response.status_code)
        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return ApiResponse(status=response.status_code, malformed=True)
        return ApiResponse(status=response.status_code, body=body)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
