"""Unified exception hierarchy for the shrine client.

All client errors inherit from ShrineClientException so callers can catch
the whole family at once, or a specific subclass for targeted handling.

Categories:
- NetworkError: no response was received (connection failure, timeout)
- ServerError: 5xx responses or bodies that could not be decoded
- AuthError: 401 responses and rejected credentials
- ValidationError: other 4xx responses carrying the server's message
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class ShrineClientException(Exception):
    """Base exception for all shrine client errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "AUTH_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.context: dict = context if context is not None else {}

    @property
    def status(self) -> int | None:
        """HTTP status that produced the error, if any."""
        return self.context.get("status")


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class NetworkError(ShrineClientException):
    """No response was received from the API."""


class RequestTimeoutError(NetworkError):
    """The request exceeded its allowed time limit."""


class ServerError(ShrineClientException):
    """The API answered with a 5xx status or a malformed body."""


# =============================================================================
# Client Exceptions
# =============================================================================


class AuthError(ShrineClientException):
    """Authentication is required, was rejected, or has expired."""


class ValidationError(ShrineClientException):
    """The API rejected the request with a structured 4xx message."""
