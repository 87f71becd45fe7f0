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
"""Shrine client session — admin token lifecycle with pluggable token stores.

Import concrete store types from the adapter package::

    from shrine_client.session.adapters.memory import InMemoryTokenStore
    from shrine_client.session.adapters.file import JsonFileTokenStore
"""

from shrine_client.session.manager import SessionManager
from shrine_client.session.ports.outbound import PRINCIPAL_KEY, TOKEN_KEY, TokenStore
from shrine_client.session.principal import Principal
from shrine_client.session.state import LoginFailureReason, LoginResult, SessionState

__all__ = [
    "PRINCIPAL_KEY",
    "TOKEN_KEY",
    "LoginFailureReason",
    "LoginResult",
    "Principal",
    "SessionManager",
    "SessionState",
    "TokenStore",
]
