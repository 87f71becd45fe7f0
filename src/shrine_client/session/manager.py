# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""SessionManager — admin token and principal lifecycle."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import structlog

from shrine_client.client.transport import ApiTransport
from shrine_client.client.types import ApiRequest, ApiResponse
from shrine_client.kernel.exceptions import (
    AuthError,
    NetworkError,
    ServerError,
    ShrineClientException,
)
from shrine_client.session.ports.outbound import PRINCIPAL_KEY, TOKEN_KEY, TokenStore
from shrine_client.session.principal import Principal
from shrine_client.session.state import LoginResult, SessionState

logger = structlog.get_logger("shrine_client.session")

LOGIN_PATH = "/admin/login"
VERIFY_PATH = "/admin/verify-token"
LOGOUT_PATH = "/admin/logout"
CHANGE_PASSWORD_PATH = "/admin/change-password"
PROFILE_PATH = "/admin/profile"

StateListener = Callable[[SessionState, SessionState], None]


class SessionManager:
    """Owns the admin session: token, principal and state.

    The manager registers itself as an interceptor on the transport it is
    given. From then on it attaches ``Authorization: Bearer <token>`` to
    every outgoing request and watches every response: a 401 on any call
    made while a session is held moves the state to EXPIRED and then
    ANONYMOUS, wiping the stored token and principal.

    A manager built over a store that already holds a token starts in
    VERIFYING; call :meth:`start` to confirm the token with the server.

    Args:
        transport: The shared API transport.
        store: Durable store for the token and principal snapshot.
    """

    def __init__(self, transport: ApiTransport, store: TokenStore) -> None:
        self._transport = transport
        self._store = store
        self._listeners: list[StateListener] = []
        self._principal: Principal | None = None
        self._last_error: ShrineClientException | None = None

        self._token = store.get(TOKEN_KEY)
        self._state = SessionState.VERIFYING if self._token else SessionState.ANONYMOUS

        transport.add_interceptor(self)

    # -- observable state -----------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_verifying(self) -> bool:
        """True while a login or token verification is in progress."""
        return self._state is SessionState.VERIFYING

    @property
    def last_error(self) -> ShrineClientException | None:
        """The failure that ended the last login or verification, if any."""
        return self._last_error

    def is_authenticated(self) -> bool:
        return self._state is SessionState.AUTHENTICATED

    def current_principal(self) -> Principal | None:
        return self._principal

    def add_listener(self, listener: StateListener) -> None:
        """Call *listener(old, new)* on every state transition."""
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # -- lifecycle ------------------------------------------------------------

    async def start(self) -> bool:
        """Verify a previously stored token, if there is one."""
        if self._token is None:
            return False
        return await self.verify()

    async def login(self, username: str, password: str) -> LoginResult:
        """Exchange credentials for a session.

        Rejected credentials, network failures and server errors are
        reported in the returned LoginResult, never raised.
        """
        self._last_error = None
        self._principal = None
        self._set_state(SessionState.VERIFYING)

        try:
            response = await self._transport.post(
                LOGIN_PATH, body={"username": username, "password": password}
            )
        except NetworkError as exc:
            return self._login_failed(exc)

        if not response.succeeded:
            return self._login_failed(self._login_error(response))

        data = response.data if isinstance(response.data, dict) else {}
        token = data.get("token")
        admin = data.get("admin")
        if not token or not isinstance(admin, dict):
            return self._login_failed(
                ServerError(
                    "Login response did not include a token and admin record",
                    code="MALFORMED_BODY",
                    context={"status": response.status},
                )
            )

        principal = Principal.from_dict(admin)
        self._token = str(token)
        self._principal = principal
        self._store.set(TOKEN_KEY, self._token)
        self._store.set(PRINCIPAL_KEY, json.dumps(principal.to_dict()))
        self._set_state(SessionState.AUTHENTICATED)
        logger.info("login_succeeded", username=principal.username)
        return LoginResult.success(principal)

    async def verify(self) -> bool:
        """Re-validate the stored token and refresh the principal.

        Any failure (rejected token, network error, server error) clears
        the session; the failure is kept in :attr:`last_error`.
        """
        if self._token is None:
            self._set_state(SessionState.ANONYMOUS)
            return False

        self._principal = None
        self._set_state(SessionState.VERIFYING)
        try:
            response = await self._transport.get(VERIFY_PATH)
        except NetworkError as exc:
            return self._verify_failed(exc)

        if not response.succeeded:
            return self._verify_failed(response.to_error())

        data = response.data if isinstance(response.data, dict) else {}
        admin = data.get("admin")
        if not isinstance(admin, dict):
            return self._verify_failed(
                ServerError("Verification response did not include an admin record", code="MALFORMED_BODY")
            )
        if self._token is None:
            # Session was cleared while the call was in flight.
            return False

        self._principal = Principal.from_dict(admin)
        self._store.set(PRINCIPAL_KEY, json.dumps(self._principal.to_dict()))
        self._last_error = None
        self._set_state(SessionState.AUTHENTICATED)
        return True

    async def logout(self) -> None:
        """End the session locally, telling the server on a best-effort basis.

        Local state is cleared whatever happens to the server call.
        """
        token = self._token
        try:
            if token is not None:
                response = await self._transport.post(
                    LOGOUT_PATH, headers={"Authorization": f"Bearer {token}"}
                )
                if not response.ok:
                    logger.warning("logout_rejected", status=response.status)
        except ShrineClientException as exc:
            logger.warning("logout_request_failed", error=str(exc))
        finally:
            self._clear()
            logger.info("logged_out")

    # -- authenticated admin calls --------------------------------------------

    async def change_password(self, current_password: str, new_password: str) -> Any:
        self._require_session()
        response = await self._transport.post(
            CHANGE_PASSWORD_PATH,
            body={"current_password": current_password, "new_password": new_password},
        )
        return response.raise_for_error().body

    async def get_profile(self) -> Principal:
        self._require_session()
        response = await self._transport.get(PROFILE_PATH)
        data = response.raise_for_error().data
        admin = data.get("admin", data) if isinstance(data, dict) else None
        if not isinstance(admin, dict):
            raise ServerError("Profile response did not include an admin record", code="MALFORMED_BODY")
        return Principal.from_dict(admin)

    # -- transport interceptor ------------------------------------------------

    def before_request(self, request: ApiRequest) -> None:
        if self._token is not None and "Authorization" not in request.headers:
            request.headers["Authorization"] = f"Bearer {self._token}"

    def after_response(self, request: ApiRequest, response: ApiResponse) -> None:
        if response.status == 401 and self._token is not None:
            logger.info("session_expired", method=request.method, path=request.path)
            self._set_state(SessionState.EXPIRED)
            self._clear()

    # -- internals ------------------------------------------------------------

    def _require_session(self) -> None:
        if self._token is None:
            raise AuthError("Not logged in", code="NO_SESSION")

    @staticmethod
    def _login_error(response: ApiResponse) -> ShrineClientException:
        if response.ok and not response.malformed:
            # 2xx envelope with success: false
            return AuthError(
                response.message or "Invalid username or password",
                code="INVALID_CREDENTIALS",
                context={"status": response.status},
            )
        return response.to_error()

    def _login_failed(self, error: ShrineClientException) -> LoginResult:
        self._last_error = error
        self._clear()
        logger.info("login_failed", error=error.message, code=error.code)
        return LoginResult.failure(error)

    def _verify_failed(self, error: ShrineClientException) -> bool:
        self._last_error = error
        self._clear()
        logger.info("verification_failed", error=error.message, code=error.code)
        return False

    def _clear(self) -> None:
        self._token = None
        self._principal = None
        self._store.delete(TOKEN_KEY)
        self._store.delete(PRINCIPAL_KEY)
        self._set_state(SessionState.ANONYMOUS)

    def _set_state(self, new: SessionState) -> None:
        old = self._state
        if new is old:
            return
        self._state = new
        logger.debug("session_state_changed", old=str(old), new=str(new))
        for listener in list(self._listeners):
            listener(old, new)
