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
"""Tests for token stores."""

import os
import stat

import pytest

from shrine_client.session.adapters.file import JsonFileTokenStore
from shrine_client.session.adapters.memory import InMemoryTokenStore
from shrine_client.session.ports.outbound import TOKEN_KEY, TokenStore
from shrine_client.session.principal import Principal


class TestInMemoryTokenStore:
    def test_set_get_delete(self):
        store = InMemoryTokenStore()
        store.set(TOKEN_KEY, "abc")
        assert store.get(TOKEN_KEY) == "abc"
        store.delete(TOKEN_KEY)
        assert store.get(TOKEN_KEY) is None

    def test_delete_missing_is_noop(self):
        InMemoryTokenStore().delete("missing")

    def test_protocol_compliance(self):
        assert isinstance(InMemoryTokenStore(), TokenStore)


class TestJsonFileTokenStore:
    def test_survives_new_instance(self, tmp_path):
        path = tmp_path / "nested" / "session.json"
        JsonFileTokenStore(path).set(TOKEN_KEY, "abc")
        assert JsonFileTokenStore(path).get(TOKEN_KEY) == "abc"

    def test_delete(self, tmp_path):
        store = JsonFileTokenStore(tmp_path / "session.json")
        store.set(TOKEN_KEY, "abc")
        store.set("other", "x")
        store.delete(TOKEN_KEY)
        assert store.get(TOKEN_KEY) is None
        assert store.get("other") == "x"

    def test_missing_file_reads_empty(self, tmp_path):
        assert JsonFileTokenStore(tmp_path / "none.json").get(TOKEN_KEY) is None

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{not json")
        store = JsonFileTokenStore(path)
        assert store.get(TOKEN_KEY) is None
        store.set(TOKEN_KEY, "fresh")
        assert store.get(TOKEN_KEY) == "fresh"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_file_is_private_to_owner(self, tmp_path):
        path = tmp_path / "session.json"
        store = JsonFileTokenStore(path)
        store.set(TOKEN_KEY, "abc")
        store.delete(TOKEN_KEY)
        store.set(TOKEN_KEY, "def")
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_protocol_compliance(self, tmp_path):
        assert isinstance(JsonFileTokenStore(tmp_path / "s.json"), TokenStore)


class TestPrincipal:
    def test_round_trip_keeps_unknown_fields(self):
        principal = Principal.from_dict({"id": 1, "username": "admin", "last_login": "2025-01-01"})
        assert principal.to_dict()["last_login"] == "2025-01-01"
        assert principal.display_name == "admin"
