"""Client ports."""

from shrine_client.client.ports.outbound import HttpClientPort, TransportInterceptor

__all__ = ["HttpClientPort", "TransportInterceptor"]
