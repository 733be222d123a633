# app/services/file_storage.py
"""
Local filesystem storage for uploaded attachments.

Saves to:  {UPLOAD_DIR}/{destination}/{epoch_ms}-{token}-{original_name}
UPLOAD_DIR is the running app's setting (get_upload_dir); callers outside a
request fall back to the global settings.
The returned document record is {name, type, size, url}; url is the
storage path and is what delete_stored_file() takes back.

A batch is all-or-nothing: every file is checked before any is written.
"""

import os
import time
import uuid
from typing import Optional

from fastapi import HTTPException, Request, UploadFile

from app.config import settings
from app.utils.logger import get_logger

logger = get_logger(__name__)


def get_upload_dir(request: Request) -> str:
    """FastAPI dependency — upload root of the app serving the request."""
    return request.app.state.settings.UPLOAD_DIR


class FileIntake:
    """
    Validates and stores the files of one multipart field.
    One instance per entity router, e.g.
        FileIntake("contracts", field_name="documents", max_files=10)
    Size and extension limits default to the UPLOAD settings.
    """

    def __init__(self, destination: str, allowed_extensions: Optional[list] = None,
                 max_bytes: Optional[int] = None, field_name: str = "documents",
                 max_files: Optional[int] = None):
        self.destination = destination
        self.allowed_extensions = allowed_extensions
        self.max_bytes = max_bytes
        self.field_name = field_name
        self.max_files = max_files

    def directory(self, root: Optional[str] = None) -> str:
        return os.path.join(root or settings.UPLOAD_DIR, self.destination)

    def _extensions(self) -> list:
        exts = self.allowed_extensions or settings.ALLOWED_UPLOAD_EXTENSIONS
        return [e.lower().lstrip(".") for e in exts]

    def _limit(self) -> int:
        return self.max_bytes or settings.MAX_UPLOAD_BYTES

    def _check(self, upload: UploadFile, size: int):
        filename = upload.filename or ""
        ext = os.path.splitext(filename)[1].lower().lstrip(".")
        if ext not in self._extensions():
            raise HTTPException(
                status_code=400,
                detail=f"{self.field_name}: file type not allowed ({filename})",
            )
        if size > self._limit():
            raise HTTPException(
                status_code=400,
                detail=f"{self.field_name}: {filename} exceeds {self._limit()} bytes",
            )

    def _write(self, upload: UploadFile, content: bytes, root: Optional[str]) -> dict:
        directory = self.directory(root)
        os.makedirs(directory, exist_ok=True)
        original = os.path.basename(upload.filename).replace(" ", "_")
        stored_name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{original}"
        filepath = os.path.join(directory, stored_name)
        with open(filepath, "wb") as f:
            f.write(content)

        url = filepath.replace("\\", "/")
        logger.info(f"[UPLOAD] Saved {url} ({len(content)} bytes)")
        return {
            "name": upload.filename,
            "type": upload.content_type or "application/octet-stream",
            "size": len(content),
            "url": url,
        }

    def save(self, upload: UploadFile, root: Optional[str] = None) -> dict:
        """Validate and write one file. Raises HTTPException(400) if rejected."""
        content = upload.file.read()
        self._check(upload, len(content))
        return self._write(upload, content, root)

    def save_all(self, uploads: Optional[list], root: Optional[str] = None) -> list:
        """
        Store every file of the field, in upload order. None/empty → [].
        Nothing is written unless every file passes the checks.
        """
        uploads = [u for u in (uploads or []) if u is not None and u.filename]
        if self.max_files and len(uploads) > self.max_files:
            raise HTTPException(
                status_code=400,
                detail=f"{self.field_name}: at most {self.max_files} files per request",
            )
        batch = [(u, u.file.read()) for u in uploads]
        for upload, content in batch:
            self._check(upload, len(content))

        saved = []
        try:
            for upload, content in batch:
                saved.append(self._write(upload, content, root))
        except OSError:
            delete_stored_files(saved)
            raise
        return saved


def delete_stored_file(url: Optional[str]) -> bool:
    """
    Best-effort removal of a stored file. Failures are logged, never raised.
    Returns True if a file was removed.
    """
    if not url:
        return False
    try:
        os.remove(url)
        logger.info(f"[UPLOAD] Deleted {url}")
        return True
    except FileNotFoundError:
        logger.warning(f"[UPLOAD] File already gone: {url}")
    except OSError as e:
        logger.error(f"[UPLOAD] Failed to delete {url}: {e}")
    return False


def delete_stored_files(documents: Optional[list]) -> int:
    """delete_stored_file() for every document record; returns how many were removed."""
    removed = 0
    for doc in documents or []:
        url = doc.get("url") if isinstance(doc, dict) else doc
        if delete_stored_file(url):
            removed += 1
    return removed
