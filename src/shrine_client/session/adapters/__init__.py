"""Session adapters — concrete token stores."""

from shrine_client.session.adapters.file import JsonFileTokenStore
from shrine_client.session.adapters.memory import InMemoryTokenStore

__all__ = ["InMemoryTokenStore", "JsonFileTokenStore"]
