"""Pydantic schemas for photo upload functionality.

This module defines the data models of the upload endpoint:
- IncomingFile: one file part of a batch, decoupled from multipart parsing
- UploadedFile: record returned to the client for each stored file
- UploadResponse: API response after a successful batch
- ErrorResponse: JSON body of 400/500 responses
"""
from typing import List

from pydantic import BaseModel, Field

FORM_FIELD = "files"
UPLOAD_PATH = "/api/upload"

DEFAULT_FILENAME     = "unnamed"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

SUCCESS_MESSAGE = "Files uploaded successfully"
NO_FILES_ERROR  = "No files uploaded"
UPLOAD_FAILED_ERROR = "Failed to upload files"


class IncomingFile(BaseModel):
    """A file part of an upload batch.

    The router builds these from the multipart form in submission order;
    the service only ever sees this ordered sequence.
    """
    filename: str = Field(..., description="Original filename as sent by the client")
    content: bytes = Field(..., description="Raw file bytes")
    content_type: str = Field(DEFAULT_CONTENT_TYPE, description="Declared MIME type")

    @property
    def size(self) -> int:
        return len(self.content)


class UploadedFile(BaseModel):
    """Metadata for a stored file.

    ``path`` is the public URL returned by the object store, not a local
    filesystem path.
    """
    name: str = Field(..., description="Original filename")
    path: str = Field(..., description="Public URL of the stored file")
    size: int = Field(..., description="File size in bytes")
    type: str = Field(..., description="Declared MIME type")


class UploadResponse(BaseModel):
    """Response after a successful batch upload."""
    message: str = Field(SUCCESS_MESSAGE, description="Human-readable status")
    files: List[UploadedFile] = Field(default_factory=list, description="One record per file, in submission order")


class ErrorResponse(BaseModel):
    """Error body for rejected or failed uploads."""
    error: str
