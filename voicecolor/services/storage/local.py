"""
Filesystem-backed bucket.

Objects are plain files under ``bucket_dir``; the relay can serve that
directory as static files, so the public URL is simply the configured base
URL joined with the object key. Writes run in ``asyncio.to_thread()``.
"""

import asyncio
import logging
import mimetypes
from pathlib import Path

from voicecolor.core.config import get_settings
from voicecolor.core.exceptions import StorageError
from voicecolor.services.storage.base import BaseObjectStore

logger = logging.getLogger(__name__)


class LocalBucket(BaseObjectStore):
    """Bucket stored as files in a local directory.

    Static file servers derive ``Content-Type`` from the file extension, so
    a key whose extension disagrees with the requested content type is
    rejected.
    """

    def __init__(self, root: str | Path | None = None, public_base_url: str | None = None) -> None:
        settings = get_settings()
        self._root = Path(root or settings.bucket_dir)
        self._public_base_url = (public_base_url or settings.public_base_url).rstrip("/")

    @property
    def root(self) -> Path:
        return self._root

    def _path_for(self, key: str) -> Path:
        path = (self._root / key).resolve()
        if self._root.resolve() not in path.parents:
            raise StorageError(f"Invalid object key: {key}")
        return path

    async def put(self, key: str, data: bytes, content_type: str) -> None:
        guessed, _ = mimetypes.guess_type(key)
        if guessed != content_type:
            raise StorageError(
                f"Object key '{key}' does not match content type '{content_type}'"
            )
        path = self._path_for(key)

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)

        try:
            await asyncio.to_thread(_write)
        except OSError as exc:
            logger.error("Failed to write %s: %s", path, exc)
            raise StorageError(f"Failed to store object: {exc}") from exc
        logger.info("Stored %s (%d bytes, %s)", key, len(data), content_type)

    def public_url(self, key: str) -> str:
        return f"{self._public_base_url}/{key}"
