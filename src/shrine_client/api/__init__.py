"""Resource API clients built on the response cache and the session transport."""

from shrine_client.api.base import ResourceApi
from shrine_client.api.gallery import GalleryApi
from shrine_client.api.livestream import LivestreamApi
from shrine_client.api.management import ManagementApi

__all__ = ["GalleryApi", "LivestreamApi", "ManagementApi", "ResourceApi"]
