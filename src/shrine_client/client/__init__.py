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
"""Shrine client HTTP layer — httpx adapter, interceptor transport, retry."""

from shrine_client.client.adapters.httpx_adapter import HttpxClientAdapter
from shrine_client.client.ports.outbound import HttpClientPort, TransportInterceptor
from shrine_client.client.retry import RetryPolicy
from shrine_client.client.transport import ApiTransport, ApiTransportBuilder
from shrine_client.client.types import ApiRequest, ApiResponse

__all__ = [
    "ApiRequest",
    "ApiResponse",
    "ApiTransport",
    "ApiTransportBuilder",
    "HttpClientPort",
    "HttpxClientAdapter",
    "RetryPolicy",
    "TransportInterceptor",
]
