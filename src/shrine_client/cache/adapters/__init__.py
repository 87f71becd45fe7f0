"""Cache adapters — concrete cache implementations."""

from shrine_client.cache.adapters.memory import InMemoryResponseCache

__all__ = ["InMemoryResponseCache"]
