"""Shrine client cache — response cache with soft TTL and prefix invalidation."""

from shrine_client.cache.adapters.memory import InMemoryResponseCache
from shrine_client.cache.decorators import invalidates
from shrine_client.cache.fingerprint import fingerprint
from shrine_client.cache.loader import ResourceLoader
from shrine_client.cache.ports.outbound import ResponseCache
from shrine_client.cache.types import CacheEntry

__all__ = [
    "CacheEntry",
    "InMemoryResponseCache",
    "ResourceLoader",
    "ResponseCache",
    "fingerprint",
    "invalidates",
]
