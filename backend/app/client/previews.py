"""Local preview references for staged files.

A preview reference is an opaque ``blob:preview/<uuid>`` string that lets a
view render a file before it is uploaded. References must be revoked once
the file leaves the staging list; an unrevoked reference keeps the file's
bytes alive.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)

PREVIEW_SCHEME = "blob:preview/"


@dataclass(frozen=True)
class LocalFile:
    """A file picked on the client, before upload."""
    name: str
    content: bytes
    content_type: str = ""

    @property
    def size(self) -> int:
        return len(self.content)


class PreviewRegistry:
    """Allocates and releases preview references."""

    def __init__(self) -> None:
        self._previews: Dict[str, LocalFile] = {}

    @property
    def active(self) -> int:
        """Number of references not yet revoked."""
        return len(self._previews)

    def create(self, file: LocalFile) -> str:
        ref = f"{PREVIEW_SCHEME}{uuid.uuid4()}"
        self._previews[ref] = file
        return ref

    def resolve(self, ref: str) -> Optional[LocalFile]:
        return self._previews.get(ref)

    def revoke(self, ref: str) -> None:
        # Revoking twice is harmless, like URL.revokeObjectURL.
        if self._previews.pop(ref, None) is None:
            logger.debug("Preview %s already revoked", ref)

    def revoke_all(self) -> None:
        self._previews.clear()
