"""UploadService: stores a batch of files and reports where they went.

Files are stored one after another in submission order; each store call
runs in the default executor so the blocking storage client does not stall
the event loop. A module-level singleton is built lazily from config and
can be replaced with ``set_upload_service`` (tests inject an in-memory store).
"""
import asyncio
import logging
from typing import List, Optional, Sequence

from app.storage import ObjectStore, StorageError

from .keys import StorageKeyGenerator
from .schemas import IncomingFile, UploadedFile

logger = logging.getLogger(__name__)


class NoFilesError(ValueError):
    """The batch contained no files."""


class UploadFailedError(Exception):
    """A storage fault aborted the batch.

    Attributes:
        stored_keys: Keys persisted earlier in the same batch. They are not
            rolled back.
    """

    def __init__(self, message: str, stored_keys: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.stored_keys = list(stored_keys)


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_service: Optional["UploadService"] = None


def get_upload_service() -> "UploadService":
    """Return the global UploadService, building it from config on first use."""
    global _service
    if _service is None:
        from app.config import get_config  # local import to avoid circular deps
        from app.storage import build_object_store

        _service = UploadService(build_object_store(get_config()))
    return _service


def set_upload_service(service: Optional["UploadService"]) -> None:
    """Set (or replace) the global UploadService instance."""
    global _service
    _service = service


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class UploadService:
    """Persists upload batches through an ObjectStore.

    Args:
        store: Object store that receives every file.
        key_generator: Source of storage keys.  Defaults to a fresh
            ``StorageKeyGenerator``.
    """

    def __init__(
        self,
        store: ObjectStore,
        key_generator: Optional[StorageKeyGenerator] = None,
    ) -> None:
        self._store = store
        self._keys = key_generator or StorageKeyGenerator()

    @property
    def store(self) -> ObjectStore:
        return self._store

    async def upload_batch(self, files: Sequence[IncomingFile]) -> List[UploadedFile]:
        """Store every file of a batch, in order.

        Args:
            files: Files in submission order.

        Returns:
            One UploadedFile per input file, same order.

        Raises:
            NoFilesError: If ``files`` is empty.  Nothing is stored.
            UploadFailedError: If the store fails on any file.  Files stored
                before the failure stay in the store.
        """
        if not files:
            raise NoFilesError("No files uploaded")

        loop = asyncio.get_event_loop()
        saved: List[UploadedFile] = []
        stored_keys: List[str] = []

        for index, incoming in enumerate(files, start=1):
            key = self._keys.next_key(incoming.filename)
            try:
                stored = await loop.run_in_executor(
                    None,
                    lambda: self._store.store(
                        key,
                        incoming.content,
                        incoming.content_type,
                        public_read=True,
                    ),
                )
            except StorageError as exc:
                logger.error(
                    "Storage failed on file %d/%d (%s); %d file(s) already stored "
                    "and left in place: %s",
                    index, len(files), key, len(stored_keys), stored_keys,
                )
                raise UploadFailedError(str(exc), stored_keys=stored_keys) from exc

            stored_keys.append(stored.key)
            saved.append(
                UploadedFile(
                    name=incoming.filename,
                    path=stored.url,
                    size=incoming.size,
                    type=incoming.content_type,
                )
            )

        logger.info(
            "Stored %d file(s) via backend=%s", len(saved), self._store.name,
        )
        return saved
