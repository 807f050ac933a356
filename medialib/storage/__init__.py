# Storage collaborators: SQLite catalog and upload file handling.

from .library import MediaLibrary
from .uploads import resolve_public_path, store_upload, validate_video_upload, video_extension

__all__ = [
    "MediaLibrary",
    "store_upload",
    "resolve_public_path",
    "validate_video_upload",
    "video_extension",
]
