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
"""Tests for SessionManager: login, verify, logout and the global 401 hook."""

import json

import httpx
import pytest

from shrine_client.kernel.exceptions import AuthError, NetworkError, ServerError
from shrine_client.session.manager import SessionManager
from shrine_client.session.ports.outbound import PRINCIPAL_KEY, TOKEN_KEY
from shrine_client.session.state import LoginFailureReason, SessionState

ADMIN = {"id": 1, "username": "admin", "email": "admin@shrine.test", "full_name": "Shrine Admin", "role": "superadmin"}


def install_admin_api(fake_api, token: str = "tok-1") -> None:
    def login(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if body == {"username": "admin", "password": "correct"}:
            return httpx.Response(200, json={"success": True, "data": {"token": token, "admin": ADMIN}})
        return httpx.Response(401, json={"success": False, "message": "Invalid credentials"})

    def verify(request: httpx.Request) -> httpx.Response:
        if request.headers.get("Authorization") == f"Bearer {token}":
            return httpx.Response(200, json={"success": True, "data": {"admin": {**ADMIN, "full_name": "Renamed"}}})
        return httpx.Response(401, json={"success": False, "message": "Invalid token"})

    fake_api.route_handler("POST", "/admin/login", login)
    fake_api.route_handler("GET", "/admin/verify-token", verify)
    fake_api.route("POST", "/admin/logout", json={"success": True})


def record_states(session: SessionManager) -> list[SessionState]:
    states = [session.state]
    session.add_listener(lambda old, new: states.append(new))
    return states


class TestInitialState:
    def test_anonymous_without_stored_token(self, transport, store):
        session = SessionManager(transport, store)
        assert session.state is SessionState.ANONYMOUS
        assert not session.is_authenticated()
        assert session.current_principal() is None
        assert not session.is_verifying

    def test_verifying_with_stored_token(self, transport, store):
        store.set(TOKEN_KEY, "tok-1")
        session = SessionManager(transport, store)
        assert session.state is SessionState.VERIFYING
        assert session.is_verifying
        assert session.current_principal() is None

    @pytest.mark.asyncio
    async def test_start_verifies_stored_token(self, transport, store, fake_api):
        install_admin_api(fake_api)
        store.set(TOKEN_KEY, "tok-1")
        session = SessionManager(transport, store)

        assert await session.start() is True
        assert session.is_authenticated()
        assert session.current_principal().full_name == "Renamed"

    @pytest.mark.asyncio
    async def test_start_without_token_makes_no_call(self, transport, store, fake_api):
        session = SessionManager(transport, store)
        assert await session.start() is False
        assert fake_api.calls == []


class TestLogin:
    @pytest.mark.asyncio
    async def test_valid_credentials(self, transport, store, fake_api):
        install_admin_api(fake_api)
        session = SessionManager(transport, store)
        states = record_states(session)

        result = await session.login("admin", "correct")

        assert result.ok
        assert result.reason is None
        assert result.principal.username == "admin"
        assert states == [SessionState.ANONYMOUS, SessionState.VERIFYING, SessionState.AUTHENTICATED]
        assert session.is_authenticated()
        assert session.token == "tok-1"
        assert store.get(TOKEN_KEY) == "tok-1"
        assert json.loads(store.get(PRINCIPAL_KEY))["username"] == "admin"

    @pytest.mark.asyncio
    async def test_wrong_password(self, transport, store, fake_api):
        install_admin_api(fake_api)
        session = SessionManager(transport, store)
        states = record_states(session)

        result = await session.login("admin", "wrong")

        assert not result.ok
        assert isinstance(result.error, AuthError)
        assert result.reason is LoginFailureReason.INVALID_CREDENTIALS
        assert result.message == "Invalid credentials"
        assert session.state is SessionState.ANONYMOUS
        assert SessionState.AUTHENTICATED not in states
        assert SessionState.EXPIRED not in states
        assert store.get(TOKEN_KEY) is None

    @pytest.mark.asyncio
    async def test_unsuccessful_envelope_is_invalid_credentials(self, transport, store, fake_api):
        fake_api.route("POST", "/admin/login", json={"success": False, "message": "Account disabled"})
        session = SessionManager(transport, store)

        result = await session.login("admin", "correct")

        assert result.reason is LoginFailureReason.INVALID_CREDENTIALS
        assert result.message == "Account disabled"

    @pytest.mark.asyncio
    async def test_network_error_is_reported_not_raised(self, transport, store, fake_api):
        fake_api.offline = True
        session = SessionManager(transport, store)

        result = await session.login("admin", "correct")

        assert isinstance(result.error, NetworkError)
        assert result.reason is LoginFailureReason.NETWORK_ERROR
        assert session.state is SessionState.ANONYMOUS

    @pytest.mark.asyncio
    async def test_server_error_is_reported(self, transport, store, fake_api):
        fake_api.route("POST", "/admin/login", status=500, json={"success": False, "message": "db down"})
        session = SessionManager(transport, store)

        result = await session.login("admin", "correct")

        assert isinstance(result.error, ServerError)
        assert result.reason is LoginFailureReason.SERVER_ERROR

    @pytest.mark.asyncio
    async def test_bad_request_is_rejected(self, transport, store, fake_api):
        fake_api.route("POST", "/admin/login", status=400, json={"success": False, "message": "Username is required"})
        session = SessionManager(transport, store)

        result = await session.login("", "x")

        assert result.reason is LoginFailureReason.REJECTED

    @pytest.mark.asyncio
    async def test_response_without_token_is_server_error(self, transport, store, fake_api):
        fake_api.route("POST", "/admin/login", json={"success": True, "data": {}})
        session = SessionManager(transport, store)

        result = await session.login("admin", "correct")

        assert result.reason is LoginFailureReason.SERVER_ERROR
        assert not session.is_authenticated()


class TestVerify:
    @pytest.mark.asyncio
    async def test_refreshes_principal(self, transport, store, fake_api):
        install_admin_api(fake_api)
        session = SessionManager(transport, store)
        await session.login("admin", "correct")

        assert await session.verify() is True
        assert session.current_principal().full_name == "Renamed"
        assert json.loads(store.get(PRINCIPAL_KEY))["full_name"] == "Renamed"
        assert fake_api.last("GET", "/admin/verify-token").headers["Authorization"] == "Bearer tok-1"

    @pytest.mark.asyncio
    async def test_revoked_token_clears_session(self, transport, store, fake_api):
        install_admin_api(fake_api)
        store.set(TOKEN_KEY, "revoked")
        session = SessionManager(transport, store)

        assert await session.verify() is False
        assert session.state is SessionState.ANONYMOUS
        assert isinstance(session.last_error, AuthError)
        assert store.get(TOKEN_KEY) is None

    @pytest.mark.asyncio
    async def test_network_failure_clears_session(self, transport, store, fake_api):
        install_admin_api(fake_api)
        session = SessionManager(transport, store)
        await session.login("admin", "correct")
        fake_api.offline = True

        assert await session.verify() is False
        assert not session.is_authenticated()
        assert isinstance(session.last_error, NetworkError)

    @pytest.mark.asyncio
    async def test_without_token(self, transport, store, fake_api):
        session = SessionManager(transport, store)
        assert await session.verify() is False
        assert fake_api.calls == []


class TestUnauthorizedHook:
    @pytest.mark.asyncio
    async def test_401_on_any_request_clears_session(self, transport, store, fake_api):
        install_admin_api(fake_api)
        fake_api.route("GET", "/gallery/admin", status=401, json={"success": False, "message": "Token expired"})
        session = SessionManager(transport, store)
        await session.login("admin", "correct")
        states = record_states(session)

        response = await transport.get("/gallery/admin")

        assert response.status == 401
        assert session.is_authenticated() is False
        assert session.current_principal() is None
        assert states == [SessionState.AUTHENTICATED, SessionState.EXPIRED, SessionState.ANONYMOUS]
        assert store.get(TOKEN_KEY) is None
        assert store.get(PRINCIPAL_KEY) is None

    @pytest.mark.asyncio
    async def test_bearer_token_attached_to_other_calls(self, transport, store, fake_api):
        install_admin_api(fake_api)
        fake_api.route("GET", "/gallery/admin", json={"success": True, "data": []})
        session = SessionManager(transport, store)
        await session.login("admin", "correct")

        await transport.get("/gallery/admin")

        assert fake_api.last("GET", "/gallery/admin").headers["Authorization"] == "Bearer tok-1"

    @pytest.mark.asyncio
    async def test_no_header_when_anonymous(self, transport, store, fake_api):
        fake_api.route("GET", "/gallery/public", json={"success": True, "data": []})
        SessionManager(transport, store)
        await transport.get("/gallery/public")
        assert "Authorization" not in fake_api.last("GET", "/gallery/public").headers

    @pytest.mark.asyncio
    async def test_other_errors_keep_session(self, transport, store, fake_api):
        install_admin_api(fake_api)
        fake_api.route("GET", "/gallery/admin", status=403, json={"success": False})
        session = SessionManager(transport, store)
        await session.login("admin", "correct")

        await transport.get("/gallery/admin")

        assert session.is_authenticated()


class TestLogout:
    @pytest.mark.asyncio
    async def test_logout_calls_server_and_clears(self, transport, store, fake_api):
        install_admin_api(fake_api)
        session = SessionManager(transport, store)
        await session.login("admin", "correct")

        await session.logout()

        assert fake_api.last("POST", "/admin/logout").headers["Authorization"] == "Bearer tok-1"
        assert not session.is_authenticated()
        assert session.token is None
        assert store.get(TOKEN_KEY) is None

    @pytest.mark.asyncio
    async def test_logout_while_offline_still_clears(self, transport, store, fake_api):
        install_admin_api(fake_api)
        session = SessionManager(transport, store)
        await session.login("admin", "correct")
        fake_api.offline = True

        await session.logout()

        assert session.is_authenticated() is False
        assert session.current_principal() is None

    @pytest.mark.asyncio
    async def test_logout_when_server_errors_still_clears(self, transport, store, fake_api):
        install_admin_api(fake_api)
        fake_api.route("POST", "/admin/logout", status=500)
        session = SessionManager(transport, store)
        await session.login("admin", "correct")

        await session.logout()

        assert session.state is SessionState.ANONYMOUS

    @pytest.mark.asyncio
    async def test_logout_when_anonymous_makes_no_call(self, transport, store, fake_api):
        session = SessionManager(transport, store)
        await session.logout()
        assert fake_api.calls == []


class TestAdminCalls:
    @pytest.mark.asyncio
    async def test_change_password(self, transport, store, fake_api):
        install_admin_api(fake_api)
        fake_api.route("POST", "/admin/change-password", json={"success": True, "message": "Password updated"})
        session = SessionManager(transport, store)
        await session.login("admin", "correct")

        body = await session.change_password("correct", "better")

        assert body["message"] == "Password updated"
        sent = json.loads(fake_api.last("POST", "/admin/change-password").content)
        assert sent == {"current_password": "correct", "new_password": "better"}

    @pytest.mark.asyncio
    async def test_get_profile(self, transport, store, fake_api):
        install_admin_api(fake_api)
        fake_api.route("GET", "/admin/profile", json={"success": True, "data": {"admin": ADMIN}})
        session = SessionManager(transport, store)
        await session.login("admin", "correct")

        profile = await session.get_profile()

        assert profile.email == "admin@shrine.test"

    @pytest.mark.asyncio
    async def test_requires_session(self, transport, store):
        session = SessionManager(transport, store)
        with pytest.raises(AuthError):
            await session.get_profile()
