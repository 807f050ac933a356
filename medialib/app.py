# ============================================================
# Media Library FastAPI App
# ------------------------------------------------------------
# This app wires everything together:
#   - SQLite catalog of tracks and videos
#   - Upload / download of media files under MEDIA_ROOT
#   - Smart search (keyword, semantic, hybrid) over the catalog
# ============================================================

import asyncio

from fastapi import Depends, FastAPI, File, Form, UploadFile
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel
from typing import Any, Dict, Iterator, List, Literal, Optional

from loguru import logger

# --- Local imports ---
from medialib.settings import settings
from medialib.logging_config import setup_logging
from medialib.exceptions import MediaNotFoundError, UploadRejectedError
from medialib.search import SmartSearch, SearchQuery
from medialib.storage import (
    MediaLibrary,
    resolve_public_path,
    store_upload,
    validate_video_upload,
    video_extension,
)
from medialib.storage.uploads import VIDEO_SUBDIR, require_fields

setup_logging(settings.LOG_LEVEL)

smart_search = SmartSearch(limit=settings.SEARCH_RESULT_LIMIT)

# ------------------------------------------------------------
# 🧩 Dependencies
# ------------------------------------------------------------
def get_library() -> Iterator[MediaLibrary]:
    # one catalog connection per request, closed on teardown
    library = MediaLibrary(db_path=settings.DB_PATH)
    try:
        yield library
    finally:
        library.close()

def get_media_root() -> str:
    return settings.MEDIA_ROOT

# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
app = FastAPI(title=settings.APP_NAME, version="0.1")

# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class SearchFilters(BaseModel):
    mediaType: Optional[Literal["audio", "video", "all"]] = None
    dateRange: Optional[Literal["today", "week", "month", "year"]] = None
    duration: Optional[str] = None  # accepted, not applied

class SmartSearchRequest(BaseModel):
    query: str = ""
    type: Literal["semantic", "keyword", "hybrid"] = "hybrid"
    filters: Optional[SearchFilters] = None

def _failure(error: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": error}, status_code=status_code)

# ------------------------------------------------------------
# 🔎 Smart search
# ------------------------------------------------------------
@app.post("/api/search/smart")
def smart_search_endpoint(req: SmartSearchRequest, library: MediaLibrary = Depends(get_library)):
    if not req.query.strip():
        return []
    try:
        filters = req.filters or SearchFilters()
        query = SearchQuery(
            text=req.query,
            mode=req.type,
            media_kind=filters.mediaType or "all",
            date_range=filters.dateRange,
        )
        corpus = library.list_media_items()
        results = smart_search.search(corpus, query)
        return [r.to_dict() for r in results]
    except Exception:
        logger.exception("Smart search error")
        return _failure("Search failed", 500)

# ------------------------------------------------------------
# 🎵 Catalog listings
# ------------------------------------------------------------
@app.get("/api/tracks")
def list_tracks(library: MediaLibrary = Depends(get_library)) -> List[Dict[str, Any]]:
    return [t.to_dict() for t in library.list_tracks()]

@app.get("/api/videos")
def list_videos(library: MediaLibrary = Depends(get_library)) -> List[Dict[str, Any]]:
    return [v.to_dict() for v in library.list_videos()]

# ------------------------------------------------------------
# ⬆️ Uploads
# ------------------------------------------------------------
@app.post("/api/upload")
async def upload_track(
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    artist: Optional[str] = Form(None),
    library: MediaLibrary = Depends(get_library),
    media_root: str = Depends(get_media_root),
):
    try:
        require_fields(file.filename if file else None, title, artist)
        public_path, _ = await store_upload(file, file.filename, media_root=media_root)
        # sqlite commit runs off the event loop
        track = await asyncio.to_thread(
            library.add_track, title=title.strip(), artist=artist.strip(), file_path=public_path
        )
        return {"success": True, "track": track.to_dict()}
    except UploadRejectedError as e:
        return {"success": False, "error": str(e)}
    except Exception:
        logger.exception("Track upload error")
        return {"success": False, "error": "Failed to upload track"}

@app.post("/api/videos/upload")
async def upload_video(
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    artist: Optional[str] = Form(None),
    library: MediaLibrary = Depends(get_library),
    media_root: str = Depends(get_media_root),
):
    try:
        require_fields(file.filename if file else None, title, artist)
        # type and declared size are checked before the body is touched
        validate_video_upload(file.content_type, file.size)
        public_path, size = await store_upload(
            file,
            file.filename,
            subdir=VIDEO_SUBDIR,
            media_root=media_root,
            max_size=settings.MAX_VIDEO_SIZE,
        )
        video = await asyncio.to_thread(
            library.add_video,
            title=title.strip(),
            artist=artist.strip(),
            file_path=public_path,
            file_size=size,
            mime_type=file.content_type,
        )
        return {"success": True, "video": video.to_dict()}
    except UploadRejectedError as e:
        return {"success": False, "error": str(e)}
    except Exception:
        logger.exception("Video upload error")
        return {"success": False, "error": "Failed to upload video"}

# ------------------------------------------------------------
# ⬇️ Downloads
# ------------------------------------------------------------
@app.get("/api/download/{track_id}")
def download_track(
    track_id: str,
    library: MediaLibrary = Depends(get_library),
    media_root: str = Depends(get_media_root),
):
    try:
        track = library.require_track(track_id)
    except MediaNotFoundError:
        return _failure("Track not found", 404)

    path = resolve_public_path(track.file_path, media_root=media_root)
    if not path.exists():
        return _failure("Track file not found", 404)

    return FileResponse(path, media_type="audio/mpeg", filename=f"{track.title}.mp3")

@app.get("/api/videos/download/{video_id}")
def download_video(
    video_id: str,
    library: MediaLibrary = Depends(get_library),
    media_root: str = Depends(get_media_root),
):
    try:
        video = library.require_video(video_id)
        path = resolve_public_path(video.file_path, media_root=media_root)
        if not path.exists():
            return _failure("Video file not found", 404)

        return FileResponse(
            path,
            media_type=video.mime_type or "video/mp4",
            filename=f"{video.title}.{video_extension(video.mime_type)}",
            headers={"Cache-Control": "public, max-age=31536000"},
        )
    except MediaNotFoundError:
        return _failure("Video not found", 404)
    except Exception:
        logger.exception("Video download error")
        return _failure("Failed to download video", 500)

# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@app.get("/healthz")
def healthz():
    return {
        "ok": True,
        "env": settings.ENV,
        "debug": settings.DEBUG,
        "app": settings.APP_NAME,
    }

@app.get("/health")
def health():
    return {"status": "ok", "env": settings.ENV}

@app.get("/")
def hello():
    return {"message": f"{settings.APP_NAME} service running."}
