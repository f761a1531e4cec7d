"""In-memory object store.

Keeps objects in a dict in insertion order. Used for local experiments and
as the substitute store in tests; ``fail_on`` makes the n-th store call
(1-based) raise ``StorageError``.
"""
import logging
import threading
from typing import Dict, List, Optional, Tuple

from .base import ObjectStore, StorageError, StoredObject

logger = logging.getLogger(__name__)


class InMemoryObjectStore(ObjectStore):

    def __init__(self, bucket: str = "photo-uploads", fail_on: Optional[int] = None) -> None:
        self._bucket = bucket
        self._objects: Dict[str, Tuple[bytes, str, bool]] = {}
        self._lock = threading.Lock()
        self.fail_on = fail_on
        self.calls = 0

    @property
    def name(self) -> str:
        return "memory"

    @property
    def keys(self) -> List[str]:
        return list(self._objects)

    def get(self, key: str) -> Optional[bytes]:
        entry = self._objects.get(key)
        return entry[0] if entry else None

    def content_type(self, key: str) -> Optional[str]:
        entry = self._objects.get(key)
        return entry[1] if entry else None

    def store(
        self,
        key: str,
        content: bytes,
        content_type: str,
        public_read: bool = True,
    ) -> StoredObject:
        with self._lock:
            self.calls += 1
            if self.fail_on is not None and self.calls == self.fail_on:
                raise StorageError(f"Injected fault on store call {self.calls}", key=key)
            self._objects[key] = (bytes(content), content_type, public_read)
        logger.debug("[storage/memory] stored %s (%d bytes)", key, len(content))
        return StoredObject(key=key, url=f"memory://{self._bucket}/{key}")
