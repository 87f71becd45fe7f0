"""Session states and login outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from shrine_client.kernel.exceptions import (
    AuthError,
    NetworkError,
    ServerError,
    ShrineClientException,
    ValidationError,
)
from shrine_client.session.principal import Principal


class SessionState(StrEnum):
    ANONYMOUS = "anonymous"
    VERIFYING = "verifying"
    AUTHENTICATED = "authenticated"
    EXPIRED = "expired"


class LoginFailureReason(StrEnum):
    INVALID_CREDENTIALS = "invalid_credentials"
    REJECTED = "rejected"
    NETWORK_ERROR = "network_error"
    SERVER_ERROR = "server_error"


@dataclass(frozen=True)
class LoginResult:
    """Outcome of SessionManager.login.

    Exactly one of ``principal`` (on success) and ``error`` (on failure)
    is set.
    """

    principal: Principal | None = None
    error: ShrineClientException | None = None

    @property
    def ok(self) -> bool:
        return self.principal is not None

    @property
    def reason(self) -> LoginFailureReason | None:
        if self.error is None:
            return None
        if isinstance(self.error, AuthError):
            return LoginFailureReason.INVALID_CREDENTIALS
        if isinstance(self.error, ValidationError):
            return LoginFailureReason.REJECTED
        if isinstance(self.error, NetworkError):
            return LoginFailureReason.NETWORK_ERROR
        if isinstance(self.error, ServerError):
            return LoginFailureReason.SERVER_ERROR
        return LoginFailureReason.SERVER_ERROR

    @property
    def message(self) -> str | None:
        return self.error.message if self.error is not None else None

    @classmethod
    def success(cls, principal: Principal) -> LoginResult:
        return cls(principal=principal)

    @classmethod
    def failure(cls, error: ShrineClientException) -> LoginResult:
        return cls(error=error)
