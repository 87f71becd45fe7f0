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
"""Tests for ManagementApi."""

from datetime import timedelta

import pytest

from shrine_client.api.management import ManagementApi
from shrine_client.cache.adapters.memory import InMemoryResponseCache
from shrine_client.kernel.exceptions import ValidationError

MEMBERS = {"success": True, "data": [{"id": 1, "name": "Ana", "position": "Chair"}]}


@pytest.fixture
def management(transport, clock, fake_api):
    fake_api.route("GET", "/management/active", json=MEMBERS)
    fake_api.route("GET", "/management/featured", json=MEMBERS)
    return ManagementApi(transport, cache=InMemoryResponseCache(timedelta(minutes=5), clock=clock))


@pytest.mark.asyncio
async def test_listings_are_cached(management, fake_api):
    await management.active_members()
    await management.active_members()
    await management.featured_members()
    await management.featured_members()
    assert fake_api.count("GET", "/management/active") == 1
    assert fake_api.count("GET", "/management/featured") == 1
    assert fake_api.last("GET", "/management/featured").url.params["limit"] == "4"


@pytest.mark.asyncio
async def test_create_requires_name_and_position(management, fake_api):
    with pytest.raises(ValidationError) as exc_info:
        await management.create({"name": "Ben"})
    assert exc_info.value.code == "MISSING_FIELDS"
    assert fake_api.count("POST", "/management/admin") == 0


@pytest.mark.asyncio
async def test_mutation_invalidates_all_public_listings(management, fake_api):
    fake_api.route("POST", "/management/admin", status=201, json={"success": True, "data": {"id": 2}})
    await management.active_members()
    await management.featured_members()

    await management.create({"name": "Ben", "position": "Treasurer"})

    assert len(management.cache) == 0


@pytest.mark.asyncio
async def test_display_order_sends_new_position(management, fake_api):
    fake_api.route("PATCH", "/management/admin/3/display-order", json={"success": True})
    await management.active_members()

    await management.update_display_order(3, 1)

    assert len(management.cache) == 0


@pytest.mark.asyncio
async def test_rejected_update_keeps_cache(management, fake_api):
    fake_api.route("PUT", "/management/admin/3", status=404, json={"success": False, "message": "Not found"})
    await management.active_members()

    with pytest.raises(ValidationError):
        await management.update(3, {"name": "Ben", "position": "Treasurer"})

    assert len(management.cache) == 1


@pytest.mark.asyncio
async def test_admin_reads_bypass_cache(management, fake_api):
    fake_api.route("GET", "/management/admin/all", json=MEMBERS)
    await management.all_members()
    await management.all_members()
    assert fake_api.count("GET", "/management/admin/all") == 2
