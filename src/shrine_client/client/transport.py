"""API transport with a shared interceptor chain."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import httpx
import structlog

from shrine_client.client.adapters.httpx_adapter import HttpxClientAdapter
from shrine_client.client.ports.outbound import HttpClientPort, TransportInterceptor
from shrine_client.client.types import ApiRequest, ApiResponse
from shrine_client.kernel.exceptions import NetworkError

logger = structlog.get_logger("shrine_client.client")


class ApiTransport:
    """Sends API requests through a chain of interceptors.

    Every interceptor sees every request before it is sent and every
    response after it arrives, so cross-cutting concerns (bearer tokens,
    401 handling) live in one place instead of at each call site:

        transport = (ApiTransport.rest()
            .base_url("https://shrine.example.org/api")
            .read_timeout(timedelta(seconds=10))
            .write_timeout(timedelta(seconds=30))
            .build())

        response = await transport.get("/gallery/public", params={"limit": 12})

    Mutations (POST/PUT/PATCH/DELETE) use the write timeout, reads the
    read timeout, unless a request sets its own.
    """

    def __init__(
        self,
        client: HttpClientPort,
        read_timeout: timedelta = timedelta(seconds=10),
        write_timeout: timedelta = timedelta(seconds=30),
    ) -> None:
        self._client = client
        self._read_timeout = read_timeout.total_seconds()
        self._write_timeout = write_timeout.total_seconds()
        self._interceptors: list[TransportInterceptor] = []

    def add_interceptor(self, interceptor: TransportInterceptor) -> None:
        self._interceptors.append(interceptor)

    def remove_interceptor(self, interceptor: TransportInterceptor) -> None:
        if interceptor in self._interceptors:
            self._interceptors.remove(interceptor)

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: timedelta | None = None,
    ) -> ApiResponse:
        """Send a request and return the response, whatever its status.

        Raises:
            NetworkError: No response was received (including timeouts).
        """
        request = ApiRequest(
            method=method.upper(),
            path=path,
            body=body,
            params=params,
            headers=dict(headers or {}),
        )
        if timeout is not None:
            request.timeout = timeout.total_seconds()
        else:
            request.timeout = self._write_timeout if request.is_mutation else self._read_timeout

        for interceptor in self._interceptors:
            interceptor.before_request(request)

        try:
            response = await self._client.send(request)
        except NetworkError as exc:
            logger.warning("request_failed", method=request.method, path=path, error=str(exc))
            raise

        logger.debug("request_completed", method=request.method, path=path, status=response.status)
        for interceptor in list(self._interceptors):
            interceptor.after_response(request, response)
        return response

    async def get(self, path: str, **kwargs: Any) -> ApiResponse:
        """Send a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> ApiResponse:
        """Send a POST request."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> ApiResponse:
        """Send a PUT request."""
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> ApiResponse:
        """Send a PATCH request."""
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> ApiResponse:
        """Send a DELETE request."""
        return await self.request("DELETE", path, **kwargs)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()

    @staticmethod
    def rest() -> ApiTransportBuilder:
        """Create a builder for an httpx-backed transport."""
        return ApiTransportBuilder()


class ApiTransportBuilder:
    """Fluent builder for ApiTransport."""

    def __init__(self) -> None:
        self._base_url: str = ""
        self._read_timeout: timedelta = timedelta(seconds=10)
        self._write_timeout: timedelta = timedelta(seconds=30)
        self._headers: dict[str, str] = {}
        self._transport: httpx.AsyncBaseTransport | None = None

    def base_url(self, url: str) -> ApiTransportBuilder:
        """Set the base URL for all requests."""
        self._base_url = url
        return self

    def read_timeout(self, timeout: timedelta) -> ApiTransportBuilder:
        """Set the timeout for reads."""
        self._read_timeout = timeout
        return self

    def write_timeout(self, timeout: timedelta) -> ApiTransportBuilder:
        """Set the timeout for mutations and uploads."""
        self._write_timeout = timeout
        return self

    def header(self, name: str, value: str) -> ApiTransportBuilder:
        """Add a default header."""
        self._headers[name] = value
        return self

    def http_transport(self, transport: httpx.AsyncBaseTransport) -> ApiTransportBuilder:
        """Use a custom httpx transport (e.g. ``httpx.MockTransport``)."""
        self._transport = transport
        return self

    def build(self) -> ApiTransport:
        """Build the ApiTransport."""
        client = HttpxClientAdapter(
            base_url=self._base_url,
            timeout=self._read_timeout,
            headers=self._headers,
            transport=self._transport,
        )
        return ApiTransport(
            client=client,
            read_timeout=self._read_timeout,
            write_timeout=self._write_timeout,
        )
