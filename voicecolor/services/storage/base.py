"""
Abstract base class for object storage buckets.

Snapshot uploads go through this interface so the relay does not care
where the bytes end up.
"""

from abc import ABC, abstractmethod


class BaseObjectStore(ABC):
    """Interface that every bucket implementation must implement."""

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str) -> None:
        """Store ``data`` under ``key``.

        Args:
            key: Object name inside the bucket.
            data: Object payload.
            content_type: MIME type the object must be served with.
        """

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Return the public URL an object is reachable at."""
