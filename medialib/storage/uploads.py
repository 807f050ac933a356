# Upload preconditions and filesystem writes.
# Files land under <media_root>/uploads[/videos] and are referenced by their
# public path ("/uploads/...").

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Awaitable, Optional, Protocol, Tuple

import aiofiles
import aiofiles.os
from loguru import logger

from medialib.exceptions import UploadRejectedError
from medialib.settings import settings

CHUNK_SIZE = 1024 * 1024


class AsyncReader(Protocol):
    def read(self, size: int = -1) -> Awaitable[bytes]: ...


ALLOWED_VIDEO_TYPES = (
    "video/mp4",
    "video/mpeg",
    "video/quicktime",
    "video/webm",
    "video/ogg",
)

VIDEO_EXTENSIONS = {
    "video/mp4": "mp4",
    "video/mpeg": "mpeg",
    "video/quicktime": "mov",
    "video/webm": "webm",
    "video/ogg": "ogv",
}

AUDIO_SUBDIR = ""
VIDEO_SUBDIR = "videos"


def require_fields(filename: Optional[str], title: Optional[str], artist: Optional[str]) -> None:
    if not filename or not (title or "").strip() or not (artist or "").strip():
        raise UploadRejectedError("Missing required fields")


def _too_large(max_size: int) -> UploadRejectedError:
    return UploadRejectedError(f"File too large. Maximum size is {max_size // (1024 * 1024)}MB.")


def validate_video_upload(content_type: Optional[str], size: Optional[int], max_size: Optional[int] = None) -> None:
    """Check type and declared size before any payload is read; `size=None` defers the size check to the write."""
    max_size = settings.MAX_VIDEO_SIZE if max_size is None else max_size
    if content_type not in ALLOWED_VIDEO_TYPES:
        raise UploadRejectedError(
            "Invalid file type. Only MP4, MPEG, MOV, WebM, and OGG videos are allowed."
        )
    if size is not None and size > max_size:
        raise _too_large(max_size)


def video_extension(mime_type: Optional[str]) -> str:
    return VIDEO_EXTENSIONS.get(mime_type or "", "mp4")


async def store_upload(
    source: AsyncReader,
    filename: str,
    subdir: str = AUDIO_SUBDIR,
    media_root: Optional[str] = None,
    max_size: Optional[int] = None,
) -> Tuple[str, int]:
    """
    Stream `source` into the uploads folder in chunks.
    Returns (public path, bytes written). Past `max_size` the partial file is
    removed and the upload rejected.
    """
    media_root = media_root or settings.MEDIA_ROOT
    target_dir = Path(media_root) / "uploads" / subdir
    target_dir.mkdir(parents=True, exist_ok=True)

    # basename only; never trust client-supplied directories
    safe_name = f"{int(time.time() * 1000)}_{os.path.basename(filename)}"
    dest_path = target_dir / safe_name

    written = 0
    async with aiofiles.open(dest_path, "wb") as dst:
        while chunk := await source.read(CHUNK_SIZE):
            written += len(chunk)
            if max_size is not None and written > max_size:
                break
            await dst.write(chunk)

    if max_size is not None and written > max_size:
        await aiofiles.os.remove(dest_path)
        raise _too_large(max_size)

    logger.info(f"Stored upload {safe_name} ({written} bytes) in {target_dir}")
    public = "/".join(p for p in ("uploads", subdir, safe_name) if p)
    return f"/{public}", written


def resolve_public_path(public_path: str, media_root: Optional[str] = None) -> Path:
    """Map a stored "/uploads/..." path back onto the filesystem."""
    media_root = media_root or settings.MEDIA_ROOT
    return Path(media_root) / public_path.lstrip("/")
