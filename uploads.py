"""
Disk storage for uploaded images and videos.

Files land in a fixed subdirectory of the upload root chosen by the caller
(``images``, ``videos``, ``news`` or ``partners``) and are renamed to
``<epoch-ms>-<random><ext>`` so concurrent uploads never collide. The value
handed back to clients is the path relative to the upload root, which is also
what the ``/uploads`` static mount serves.
"""

import logging
import mimetypes
import os
import random
import time
from pathlib import Path
from typing import Iterable, Optional

from fastapi import HTTPException, UploadFile

from config import get_settings

logger = logging.getLogger(__name__)

SUBDIRECTORIES = ("images", "videos", "news", "partners")
CHUNK_SIZE = 1024 * 1024


def unique_filename(original_name: Optional[str], content_type: Optional[str] = None) -> str:
    ext = os.path.splitext(original_name or "")[1].lower()
    if content_type:
        guessed = mimetypes.guess_type(f"file{ext}")[0] or ""
        # extension must agree with the declared media type
        if guessed.split("/")[0] != content_type.split("/")[0]:
            ext = mimetypes.guess_extension(content_type) or ""
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"


class UploadStore:
    def __init__(self, root, max_image_bytes: int, max_video_bytes: int):
        self.root = Path(root)
        self.max_image_bytes = max_image_bytes
        self.max_video_bytes = max_video_bytes

    def ensure_directories(self) -> None:
        for name in SUBDIRECTORIES:
            (self.root / name).mkdir(parents=True, exist_ok=True)

    def _size_limit(self, content_type: str) -> int:
        if content_type.startswith("video/"):
            return self.max_video_bytes
        return self.max_image_bytes

    async def save(self, upload: UploadFile, subdir: str, allowed: Iterable[str]) -> str:
        """Persist ``upload`` below ``subdir`` and return its relative path.

        ``allowed`` lists accepted MIME prefixes such as ``("image/",)``.
        """
        if subdir not in SUBDIRECTORIES:
            raise ValueError(f"Unknown upload directory: {subdir}")
        content_type = upload.content_type or ""
        allowed = tuple(allowed)
        if not content_type.startswith(allowed):
            kinds = ", ".join(prefix.rstrip("/") for prefix in allowed)
            raise HTTPException(status_code=400, detail=f"Invalid file type. Allowed: {kinds}")

        target_dir = self.root / subdir
        target_dir.mkdir(parents=True, exist_ok=True)
        filename = unique_filename(upload.filename, content_type)
        target = target_dir / filename
        limit = self._size_limit(content_type)

        written = 0
        with open(target, "wb") as out:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > limit:
                    out.close()
                    target.unlink()
                    raise HTTPException(
                        status_code=413,
                        detail=f"File too large, limit is {limit // (1024 * 1024)}MB",
                    )
                out.write(chunk)

        relative_path = f"{subdir}/{filename}"
        logger.info(
            "Stored upload %s (%s, %d bytes) as %s",
            upload.filename, content_type, written, relative_path,
        )
        return relative_path

    def delete(self, relative_path: str) -> bool:
        """Remove a previously stored file; external URLs are ignored."""
        if not relative_path or relative_path.startswith(("http://", "https://")):
            return False
        cleaned = relative_path.lstrip("/")
        if cleaned.startswith("uploads/"):
            cleaned = cleaned[len("uploads/"):]
        path = (self.root / cleaned).resolve()
        if self.root.resolve() not in path.parents or not path.is_file():
            return False
        path.unlink()
        logger.info("Removed stored file %s", relative_path)
        return True


def get_upload_store() -> UploadStore:
    settings = get_settings()
    return UploadStore(
        settings.UPLOAD_DIR,
        max_image_bytes=settings.MAX_IMAGE_SIZE_MB * 1024 * 1024,
        max_video_bytes=settings.MAX_VIDEO_SIZE_MB * 1024 * 1024,
    )
