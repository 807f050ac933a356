# Media catalog backed by SQLite.
# Two tables (tracks, videos) with independent id spaces; list_media_items()
# merges both into the corpus the search engine consumes.

from __future__ import annotations

import os
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from loguru import logger

from medialib.exceptions import CorpusUnavailableError, MediaNotFoundError
from medialib.search.types import AudioTrack, MediaItem, Video

_SCHEMA = """
CREATE TABLE IF NOT EXISTS tracks (
    id          TEXT PRIMARY KEY,
    title       TEXT NOT NULL,
    artist      TEXT NOT NULL,
    file_path   TEXT NOT NULL,
    created_at  TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS videos (
    id          TEXT PRIMARY KEY,
    title       TEXT NOT NULL,
    artist      TEXT NOT NULL,
    file_path   TEXT NOT NULL,
    file_size   INTEGER,
    mime_type   TEXT,
    created_at  TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_tracks_created_at ON tracks(created_at);
CREATE INDEX IF NOT EXISTS idx_videos_created_at ON videos(created_at);
"""


def _parse_ts(value: str) -> datetime:
    ts = datetime.fromisoformat(value)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def _track_from_row(row: sqlite3.Row) -> AudioTrack:
    return AudioTrack(
        id=row["id"],
        title=row["title"],
        artist=row["artist"],
        file_path=row["file_path"],
        created_at=_parse_ts(row["created_at"]),
    )


def _video_from_row(row: sqlite3.Row) -> Video:
    return Video(
        id=row["id"],
        title=row["title"],
        artist=row["artist"],
        file_path=row["file_path"],
        file_size=row["file_size"],
        mime_type=row["mime_type"],
        created_at=_parse_ts(row["created_at"]),
    )


class MediaLibrary:
    def __init__(self, db_path: str):
        self.db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None

    # -------------------------
    # Connections
    # -------------------------
    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            if self.db_path != ":memory:":
                os.makedirs(os.path.dirname(os.path.abspath(self.db_path)), exist_ok=True)
            # a request's library may be opened and closed on different worker threads
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.executescript(_SCHEMA)
            conn.commit()
            self._conn = conn
        return self._conn

    # -------------------------
    # Reads
    # -------------------------
    def list_tracks(self) -> List[AudioTrack]:
        rows = self._get_conn().execute(
            "SELECT * FROM tracks ORDER BY created_at DESC;"
        ).fetchall()
        return [_track_from_row(r) for r in rows]

    def list_videos(self) -> List[Video]:
        rows = self._get_conn().execute(
            "SELECT * FROM videos ORDER BY created_at DESC;"
        ).fetchall()
        return [_video_from_row(r) for r in rows]

    def list_media_items(self) -> List[MediaItem]:
        """Tracks then videos, each newest first: the searchable corpus."""
        try:
            return [*self.list_tracks(), *self.list_videos()]
        except sqlite3.Error as e:
            raise CorpusUnavailableError(f"Failed to load media catalog: {e}") from e

    def get_track(self, track_id: str) -> Optional[AudioTrack]:
        row = self._get_conn().execute(
            "SELECT * FROM tracks WHERE id = ? LIMIT 1;", (track_id,)
        ).fetchone()
        return _track_from_row(row) if row else None

    def get_video(self, video_id: str) -> Optional[Video]:
        row = self._get_conn().execute(
            "SELECT * FROM videos WHERE id = ? LIMIT 1;", (video_id,)
        ).fetchone()
        return _video_from_row(row) if row else None

    def require_track(self, track_id: str) -> AudioTrack:
        track = self.get_track(track_id)
        if track is None:
            raise MediaNotFoundError("Track", track_id)
        return track

    def require_video(self, video_id: str) -> Video:
        video = self.get_video(video_id)
        if video is None:
            raise MediaNotFoundError("Video", video_id)
        return video

    # -------------------------
    # Writes
    # -------------------------
    def add_track(
        self,
        title: str,
        artist: str,
        file_path: str,
        created_at: Optional[datetime] = None,
    ) -> AudioTrack:
        track = AudioTrack(
            id=uuid.uuid4().hex,
            title=title,
            artist=artist,
            file_path=file_path,
            created_at=created_at or datetime.now(timezone.utc),
        )
        conn = self._get_conn()
        conn.execute(
            "INSERT INTO tracks(id, title, artist, file_path, created_at) VALUES (?, ?, ?, ?, ?);",
            (track.id, track.title, track.artist, track.file_path, track.created_at.isoformat()),
        )
        conn.commit()
        logger.info(f"Track added: {track.id} ({track.title!r} by {track.artist!r})")
        return track

    def add_video(
        self,
        title: str,
        artist: str,
        file_path: str,
        file_size: Optional[int] = None,
        mime_type: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> Video:
        video = Video(
            id=uuid.uuid4().hex,
            title=title,
            artist=artist,
            file_path=file_path,
            file_size=file_size,
            mime_type=mime_type,
            created_at=created_at or datetime.now(timezone.utc),
        )
        conn = self._get_conn()
        conn.execute(
            "INSERT INTO videos(id, title, artist, file_path, file_size, mime_type, created_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?);",
            (
                video.id,
                video.title,
                video.artist,
                video.file_path,
                video.file_size,
                video.mime_type,
                video.created_at.isoformat(),
            ),
        )
        conn.commit()
        logger.info(f"Video added: {video.id} ({video.title!r}, {video.file_size} bytes)")
        return video

    # -------------------------
    # Cleanup
    # -------------------------
    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
