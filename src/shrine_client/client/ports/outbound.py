"""Outbound ports: HTTP client and transport interceptor interfaces."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from shrine_client.client.types import ApiRequest, ApiResponse


@runtime_checkable
class HttpClientPort(Protocol):
    """Abstract HTTP client interface.

    ``send`` returns an ApiResponse for every received HTTP response,
    whatever its status, and raises NetworkError when nothing was received.
    """

    async def send(self, request: ApiRequest) -> ApiResponse: ...

    async def close(self) -> None: ...


@runtime_checkable
class TransportInterceptor(Protocol):
    """Hook run by ApiTransport around every request."""

    def before_request(self, request: ApiRequest) -> None: ...

    def after_response(self, request: ApiRequest, response: ApiResponse) -> None: ...
