"""Client side of the photo upload page.

Keeps the user's staged photos with local preview references, sends them
to the upload endpoint as one batch and shows the returned records as the
uploaded gallery.
"""
from .previews import LocalFile, PreviewRegistry
from .uploader import ACCEPT, Notice, NoticeVariant, PhotoUploader, StagedFile, short_name

__all__ = [
    "ACCEPT",
    "LocalFile",
    "Notice",
    "NoticeVariant",
    "PhotoUploader",
    "PreviewRegistry",
    "StagedFile",
    "short_name",
]
