"""FastAPI router for photo upload endpoints.

Responses of ``POST /api/upload``
---------------------------------
- 200 ``{"message": "...", "files": [{name, path, size, type}, ...]}``
- 400 ``{"error": "No files uploaded"}`` when the form carries no file parts
  under the upload field (text values under that name do not count).
- 500 ``{"error": "Failed to upload files"}`` when the object store fails.
  Files stored before the failure are kept.

The upload path and form field name come from the ``uploads`` settings, so
the router is built per app with ``build_upload_router``.
"""
import logging
from typing import List

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse, JSONResponse
from starlette.datastructures import UploadFile

from app.storage import LocalObjectStore

from .schemas import (
    DEFAULT_CONTENT_TYPE,
    DEFAULT_FILENAME,
    FORM_FIELD,
    NO_FILES_ERROR,
    SUCCESS_MESSAGE,
    UPLOAD_FAILED_ERROR,
    UPLOAD_PATH,
    ErrorResponse,
    IncomingFile,
    UploadResponse,
)
from .service import NoFilesError, get_upload_service

logger = logging.getLogger(__name__)


async def _read_parts(parts: List[UploadFile]) -> List[IncomingFile]:
    """Turn multipart file parts into IncomingFile records, keeping order."""
    incoming = []
    for part in parts:
        content = await part.read()
        incoming.append(
            IncomingFile(
                filename=part.filename or DEFAULT_FILENAME,
                content=content,
                content_type=part.content_type or DEFAULT_CONTENT_TYPE,
            )
        )
    return incoming


def _multipart_schema(field_name: str) -> dict:
    return {
        "requestBody": {
            "content": {
                "multipart/form-data": {
                    "schema": {
                        "type": "object",
                        "properties": {
                            field_name: {
                                "type": "array",
                                "items": {"type": "string", "format": "binary"},
                            }
                        },
                    }
                }
            },
        }
    }


def build_upload_router(
    upload_path: str = UPLOAD_PATH,
    field_name: str = FORM_FIELD,
) -> APIRouter:
    """Return an APIRouter with the upload and local file-serving routes.

    Args:
        upload_path: Path of the batch upload endpoint.
        field_name:  Multipart field whose file parts make up the batch.
    """
    router = APIRouter(tags=["uploads"])

    @router.post(
        upload_path,
        response_model=UploadResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
        openapi_extra=_multipart_schema(field_name),
    )
    async def upload_files(request: Request):
        """Upload a batch of photos.

        Every file part under the upload field is stored in the configured
        object store under ``<millisecond timestamp>-<filename>``, one after
        another.

        Example::

            POST /api/upload
            Content-Type: multipart/form-data; boundary=...

            200 OK
            {
                "message": "Files uploaded successfully",
                "files": [
                    {"name": "cat.png", "path": "https://.../1718000000000-cat.png",
                     "size": 1000, "type": "image/png"}
                ]
            }
        """
        try:
            form = await request.form()
        except Exception as exc:
            logger.warning("Could not parse upload form: %s", exc)
            return JSONResponse({"error": NO_FILES_ERROR}, status_code=400)

        parts = [p for p in form.getlist(field_name) if isinstance(p, UploadFile)]
        incoming = await _read_parts(parts)
        service = get_upload_service()

        try:
            saved = await service.upload_batch(incoming)
        except NoFilesError:
            logger.info("Rejected upload request without files")
            return JSONResponse({"error": NO_FILES_ERROR}, status_code=400)
        except Exception as exc:
            logger.exception("Error uploading files: %s", exc)
            return JSONResponse({"error": UPLOAD_FAILED_ERROR}, status_code=500)

        logger.info(
            "Uploaded %d file(s) (%d bytes)",
            len(saved), sum(f.size for f in saved),
        )
        return UploadResponse(message=SUCCESS_MESSAGE, files=saved)

    @router.get("/files/{key:path}")
    async def download_file(key: str):
        """Serve an object written by the local filesystem store.

        Raises:
            HTTPException 404: If the key is unknown or the active store is
                not the local one.
        """
        store = get_upload_service().store
        if not isinstance(store, LocalObjectStore):
            raise HTTPException(status_code=404, detail="File not found")

        path = store.open(key)
        if path is None:
            raise HTTPException(status_code=404, detail="File not found")

        return FileResponse(path=path)

    return router
