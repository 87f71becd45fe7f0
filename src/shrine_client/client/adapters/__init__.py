"""Client adapters — concrete HTTP client implementations."""

from shrine_client.client.adapters.httpx_adapter import HttpxClientAdapter

__all__ = ["HttpxClientAdapter"]
