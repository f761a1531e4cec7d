"""PhotoUploader: client-side state of the photo upload page.

Holds the staged files with their preview references, submits them as one
multipart batch to ``POST /api/upload`` and swaps the staged view for the
records the server returns. User-facing outcomes are reported as
``Notice`` objects (the page shows them as toasts).

Usage:
    import httpx
    from app.client import LocalFile, PhotoUploader

    with httpx.Client(base_url="http://localhost:8000") as http:
        uploader = PhotoUploader(http)
        uploader.select_files([LocalFile("cat.png", data, "image/png")])
        uploader.upload()
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

import httpx

from app.config import AppConfig
from app.uploads.schemas import (
    DEFAULT_CONTENT_TYPE,
    FORM_FIELD,
    UPLOAD_PATH,
    UploadedFile,
    UploadResponse,
)

from .previews import LocalFile, PreviewRegistry

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0

# Picker hint only; the server accepts any file.
ACCEPT = "image/*"

MAX_NAME_LENGTH = 15
TRUNCATED_NAME_LENGTH = 12


class NoticeVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notice:
    title: str
    description: str
    variant: NoticeVariant = NoticeVariant.DEFAULT


@dataclass(frozen=True)
class StagedFile:
    """A selected file and the preview reference allocated for it."""
    file: LocalFile
    preview: str


def short_name(name: str) -> str:
    """Name as shown on a thumbnail caption."""
    if len(name) > MAX_NAME_LENGTH:
        return name[:TRUNCATED_NAME_LENGTH] + "..."
    return name


class PhotoUploader:
    """Staging list, batch submit and uploaded gallery.

    Args:
        http: Client pointed at the upload service (``base_url`` set).
            ``fastapi.testclient.TestClient`` works as well.
        upload_path: Path of the upload endpoint.
        field_name: Multipart field every file is sent under.
        timeout: Seconds to wait for the upload response.
    """

    def __init__(
        self,
        http: httpx.Client,
        upload_path: str = UPLOAD_PATH,
        field_name: str = FORM_FIELD,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._http = http
        self._upload_path = upload_path
        self._field_name = field_name
        self._timeout = timeout
        self._previews = PreviewRegistry()
        self._staged: List[StagedFile] = []
        self._uploaded: List[UploadedFile] = []
        self.notices: List[Notice] = []
        self.uploading = False

    @classmethod
    def from_config(cls, http: httpx.Client, config: AppConfig) -> "PhotoUploader":
        """Build an uploader that matches the server's ``uploads`` settings."""
        return cls(
            http,
            upload_path=config.uploads.path,
            field_name=config.uploads.field_name,
            timeout=config.uploads.client_timeout_seconds,
        )

    # -----------------------------------------------------------------------
    # View state
    # -----------------------------------------------------------------------

    @property
    def staged(self) -> List[StagedFile]:
        return list(self._staged)

    @property
    def uploaded(self) -> List[UploadedFile]:
        return list(self._uploaded)

    @property
    def previews(self) -> PreviewRegistry:
        return self._previews

    @property
    def can_upload(self) -> bool:
        return bool(self._staged) and not self.uploading

    @property
    def show_empty_state(self) -> bool:
        return not self._staged and not self.uploading and not self._uploaded

    # -----------------------------------------------------------------------
    # Actions
    # -----------------------------------------------------------------------

    def select_files(self, files: Iterable[LocalFile]) -> None:
        """Stage picked files, each with a fresh preview reference."""
        if self.uploading:
            return
        for file in files:
            self._staged.append(StagedFile(file=file, preview=self._previews.create(file)))

    def remove_file(self, index: int) -> None:
        """Drop one staged file and release its preview.

        Raises:
            IndexError: If ``index`` is not a position in the staging list.
        """
        if self.uploading:
            return
        if not 0 <= index < len(self._staged):
            raise IndexError(f"No staged file at index {index}")
        staged = self._staged.pop(index)
        self._previews.revoke(staged.preview)

    def upload(self) -> bool:
        """Submit every staged file in one request.

        Returns:
            True if the batch was stored and the gallery replaced.
        """
        if self.uploading:
            return False

        if not self._staged:
            self._notify(
                "No photos selected",
                "Please select at least one photo to upload",
                NoticeVariant.DESTRUCTIVE,
            )
            return False

        self.uploading = True
        try:
            parts = [
                (self._field_name, (s.file.name, s.file.content, s.file.content_type or DEFAULT_CONTENT_TYPE))
                for s in self._staged
            ]
            response = self._http.post(self._upload_path, files=parts, timeout=self._timeout)
            response.raise_for_status()
            result = UploadResponse.model_validate(response.json())
            uploaded = list(result.files)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error uploading photos: %s", exc)
            self._notify(
                "Upload failed",
                "There was an error uploading your photos",
                NoticeVariant.DESTRUCTIVE,
            )
            return False
        finally:
            self.uploading = False

        self._uploaded = uploaded
        for staged in self._staged:
            self._previews.revoke(staged.preview)
        self._staged = []

        self._notify("Upload successful", f"Successfully uploaded {len(uploaded)} photos")
        return True

    def close(self) -> None:
        """Release every outstanding preview (page teardown)."""
        self._previews.revoke_all()

    def _notify(self, title: str, description: str, variant: NoticeVariant = NoticeVariant.DEFAULT) -> None:
        self.notices.append(Notice(title=title, description=description, variant=variant))
