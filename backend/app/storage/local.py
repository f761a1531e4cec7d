"""Filesystem object store for development and single-host deployments.

Objects are written to ``<root>/<key>`` and served back by the
``GET /files/{key}`` route, so ``public_base_url`` should point at that
route on this service.
"""
import logging
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from .base import ObjectStore, StorageError, StoredObject

logger = logging.getLogger(__name__)


class LocalObjectStore(ObjectStore):
    """Object store that keeps each object as a file below ``root_dir``."""

    def __init__(self, root_dir: str, public_base_url: str = "http://localhost:8000/files") -> None:
        self._root = Path(root_dir)
        self._public_base = public_base_url.rstrip("/")
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def name(self) -> str:
        return "local"

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, key: str) -> Path:
        root = self._root.resolve()
        try:
            path = (root / key).resolve()
        except (OSError, ValueError) as exc:
            raise StorageError(f"Invalid key {key!r}: {exc}", key=key) from exc
        if path == root or root not in path.parents:
            raise StorageError(f"Key escapes storage root: {key!r}", key=key)
        return path

    def store(
        self,
        key: str,
        content: bytes,
        content_type: str,
        public_read: bool = True,
    ) -> StoredObject:
        # Local files carry no ACL or content type; the serving route infers
        # the media type from the key's extension.
        path = self._resolve(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except (OSError, ValueError) as exc:
            logger.error("[storage/local] write failed for %r: %s", key, exc)
            raise StorageError(f"Failed to store {key!r}: {exc}", key=key) from exc

        logger.info("Saved file: %s (%d bytes)", path, len(content))
        return StoredObject(key=key, url=f"{self._public_base}/{quote(key)}")

    def open(self, key: str) -> Optional[Path]:
        """Return the on-disk path for ``key``, or None if it does not exist."""
        try:
            path = self._resolve(key)
        except StorageError:
            return None
        if not path.is_file():
            return None
        return path
