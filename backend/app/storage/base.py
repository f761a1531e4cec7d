"""Abstract ObjectStore interface.

Every storage back-end (S3, local filesystem, in-memory) must implement this
interface so the upload service stays backend-agnostic.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass


class StorageError(Exception):
    """Raised by an object store when a key could not be persisted."""

    def __init__(self, message: str, key: str = "") -> None:
        super().__init__(message)
        self.key = key


@dataclass(frozen=True)
class StoredObject:
    """Location of an object after a successful store."""
    key: str
    url: str


class ObjectStore(ABC):
    """Durable key -> bytes service that hands back public URLs.

    Distinct keys never overwrite each other. Nothing else is assumed about
    replication, consistency or collision handling.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short backend identifier used in logs (``"s3"``, ``"local"``, …)."""

    @abstractmethod
    def store(
        self,
        key: str,
        content: bytes,
        content_type: str,
        public_read: bool = True,
    ) -> StoredObject:
        """Persist ``content`` under ``key``.

        Args:
            key: Storage key, unique per object.
            content: Raw bytes to store.
            content_type: MIME type recorded with the object.
            public_read: Grant anonymous read access to the object.

        Returns:
            StoredObject carrying the publicly resolvable URL.

        Raises:
            StorageError: On any underlying fault.
        """
