"""
Admin media endpoints - list / upload / delete files in R2
"""
import base64
import binascii
from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from pydantic import BaseModel

from portfolio.app.core.config import MEDIA_DEFAULT_FOLDER, MEDIA_FOLDER_MAX_KEYS, MEDIA_LIST_MAX_KEYS
from portfolio.app.core.dependencies import get_current_admin
from portfolio.app.core.logging_config import get_logger
from portfolio.app.models.admin_user import AdminUser
from portfolio.app.services import storage_service

logger = get_logger("api.admin.media")
router = APIRouter()


class ChunkedUpload(BaseModel):
    key: str = ""
    chunks: List[str] = []  # base64
    contentType: str = "application/octet-stream"


class MediaDelete(BaseModel):
    key: str = ""


def _storage_failure(action: str, e: Exception) -> HTTPException:
    logger.error("Media %s error=%s", action, str(e))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"{action.capitalize()} failed",
    )


@router.get("")
def list_media(
    prefix: str = Query(""),
    mode: str = Query("flat"),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """List objects. **mode=folder** returns `{folders, files}` one level under **prefix**."""
    try:
        if mode == "folder":
            return storage_service.list_folder(prefix, MEDIA_FOLDER_MAX_KEYS)
        return storage_service.list_objects(prefix, MEDIA_LIST_MAX_KEYS)
    except (RuntimeError, ValueError) as e:
        raise _storage_failure("list", e)


@router.post("")
async def upload_media(
    file: UploadFile = File(...),
    folder: str = Form(MEDIA_DEFAULT_FOLDER),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """Upload a single file under **folder**; key is `folder/{ms}-{safe name}`."""
    contents = await file.read()
    suffix = Path(file.filename or "").suffix.lstrip(".") or "bin"
    key = storage_service.build_upload_key(folder or MEDIA_DEFAULT_FOLDER, file.filename or "file")
    try:
        url = storage_service.upload_file(key, contents, file.content_type or f"application/{suffix}")
    except (RuntimeError, ValueError) as e:
        raise _storage_failure("upload", e)
    return {"url": url, "key": key}


@router.put("")
def complete_chunked_upload(
    payload: ChunkedUpload,
    current_admin: AdminUser = Depends(get_current_admin),
):
    """Reassemble base64 **chunks** in order and store them under **key**."""
    if not payload.key or not payload.chunks:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing key or chunks")
    try:
        body = b"".join(base64.b64decode(chunk, validate=True) for chunk in payload.chunks)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid chunk encoding")
    try:
        url = storage_service.upload_file(payload.key, body, payload.contentType)
    except (RuntimeError, ValueError) as e:
        raise _storage_failure("upload", e)
    return {"url": url, "key": payload.key}


@router.delete("")
def delete_media(
    payload: MediaDelete,
    current_admin: AdminUser = Depends(get_current_admin),
):
    if not payload.key:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Key required")
    try:
        storage_service.delete_file(payload.key)
    except (RuntimeError, ValueError) as e:
        raise _storage_failure("delete", e)
    return {"success": True}
