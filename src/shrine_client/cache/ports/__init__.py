"""Cache ports."""

from shrine_client.cache.ports.outbound import ResponseCache

__all__ = ["ResponseCache"]
