"""Request and response values exchanged with the API transport."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from shrine_client.kernel.exceptions import (
    AuthError,
    ServerError,
    ShrineClientException,
    ValidationError,
)

MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


@dataclass
class ApiRequest:
    """A single call to the API: ``(method, path, body?, headers?)``."""

    method: str
    path: str
    body: Any = None
    params: dict[str, Any] | None = None
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float | None = None

    @property
    def is_mutation(self) -> bool:
        return self.method.upper() in MUTATING_METHODS


@dataclass(frozen=True)
class ApiResponse:
    """Outcome of a request that received an HTTP response.

    ``body`` is the decoded JSON document, or ``None`` when the response had
    no body or could not be decoded (``malformed`` is then ``True`` if there
    was content).
    """

    status: int
    body: Any = None
    malformed: bool = False

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def message(self) -> str | None:
        if isinstance(self.body, dict):
            message = self.body.get("message")
            return str(message) if message is not None else None
        return None

    @property
    def data(self) -> Any:
        """The ``data`` member of the standard ``{success, message, data}`` envelope."""
        if isinstance(self.body, dict):
            return self.body.get("data")
        return None

    @property
    def succeeded(self) -> bool:
        """True for a 2xx response whose envelope does not report ``success: false``."""
        if not self.ok or self.malformed:
            return False
        if isinstance(self.body, dict):
            return self.body.get("success", True) is not False
        return True

    def to_error(self) -> ShrineClientException:
        """Map this response onto the client error taxonomy."""
        context = {"status": self.status}
        if self.status == 401:
            return AuthError(self.message or "Authentication required", code="AUTH_401", context=context)
        if self.status >= 500:
            return ServerError(self.message or f"Server error ({self.status})", code="SERVER_ERROR", context=context)
        if self.malformed:
            return ServerError("Malformed response body", code="MALFORMED_BODY", context=context)
        if 400 <= self.status < 500:
            return ValidationError(self.message or f"Request rejected ({self.status})", code="REJECTED", context=context)
        return ValidationError(self.message or "Request was not successful", code="UNSUCCESSFUL", context=context)

    def raise_for_error(self) -> ApiResponse:
        """Raise the mapped error unless the call succeeded; return self otherwise."""
        if not self.succeeded:
            raise self.to_error()
        return self
