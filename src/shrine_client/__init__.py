"""shrine-client — cached, session-aware client for the shrine web site API."""

from shrine_client.cache import InMemoryResponseCache, ResourceLoader, fingerprint, invalidates
from shrine_client.client import ApiResponse, ApiTransport
from shrine_client.core import Config, ShrineClient
from shrine_client.kernel import (
    AuthError,
    NetworkError,
    RequestTimeoutError,
    ServerError,
    ShrineClientException,
    ValidationError,
)
from shrine_client.session import LoginResult, Principal, SessionManager, SessionState

__version__ = "0.1.0"

__all__ = [
    "ApiResponse",
    "ApiTransport",
    "AuthError",
    "Config",
    "InMemoryResponseCache",
    "LoginResult",
    "NetworkError",
    "Principal",
    "RequestTimeoutError",
    "ResourceLoader",
    "ServerError",
    "SessionManager",
    "SessionState",
    "ShrineClient",
    "ShrineClientException",
    "ValidationError",
    "fingerprint",
    "invalidates",
]
