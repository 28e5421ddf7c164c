"""
Storage module - Object storage for shared snapshot images.
"""

from .base import BaseObjectStore
from .local import LocalBucket

__all__ = ["BaseObjectStore", "LocalBucket", "create_object_store"]


def create_object_store(provider: str = "local", **kwargs) -> BaseObjectStore:
    """Factory function to create an object store instance.

    Args:
        provider: Bucket backend name ("local")
        **kwargs: Backend-specific configuration (root, public_base_url)

    Returns:
        BaseObjectStore implementation instance

    Raises:
        ValueError: If provider is unknown
    """
    if provider == "local":
        return LocalBucket(**kwargs)
    raise ValueError(f"Unknown object store provider: {provider}")
