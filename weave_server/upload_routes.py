"""API routes for image uploads."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel

from weave_server.identity import get_owner_id
from weave_server.upload_store import PUBLIC_URL, UPLOAD_DIR, LocalImageStorage

logger = logging.getLogger(__name__)

router = APIRouter()

_storage: LocalImageStorage | None = None


def get_storage() -> LocalImageStorage:
    global _storage
    if _storage is None:
        _storage = LocalImageStorage(UPLOAD_DIR, PUBLIC_URL)
    return _storage


class UploadRequest(BaseModel):
    """request body for uploading an image."""

    image: str | None = None  # data URL


class UploadResponse(BaseModel):
    success: bool = True
    url: str


@router.post("/uploads")
def upload_image(
    request: UploadRequest,
    owner_id: str = Depends(get_owner_id),
    storage: LocalImageStorage = Depends(get_storage),
) -> UploadResponse:
    """store an inline image and return a durable URL for it."""
    if not request.image:
        raise HTTPException(status_code=400, detail="No image provided")
    try:
        url = storage.save(request.image)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    logger.info("Stored upload for %s at %s", owner_id, url)
    return UploadResponse(url=url)


@router.get("/uploads/{filename}")
def get_upload(filename: str, storage: LocalImageStorage = Depends(get_storage)) -> FileResponse:
    """serve a stored upload. Upload URLs are capability links and need no identity."""
    path = storage.resolve(filename)
    if path is None:
        raise HTTPException(status_code=404, detail="Upload not found")
    return FileResponse(path)
