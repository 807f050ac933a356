# Data models for the search layer.
# Media items are what the catalog hands to the engine; queries and results
# live for a single request.

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Dict, Optional, Tuple

from medialib.exceptions import QueryValidationError

SEARCH_MODES = ("keyword", "semantic", "hybrid")
MEDIA_KINDS = ("audio", "video", "all")
DATE_RANGES = ("today", "week", "month", "year")


def _iso(ts: datetime) -> str:
    return ts.isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class MediaItem:
    """Shared read-only projection of a catalog record."""
    id: str
    title: str
    artist: str
    created_at: datetime
    file_path: str = ""

    kind: ClassVar[str] = ""

    @property
    def key(self) -> str:
        # ids come from separate tables, so identity is scoped by kind
        return f"{self.kind}:{self.id}"

    @property
    def item_text(self) -> str:
        return f"{self.title} {self.artist}".lower()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "artist": self.artist,
            "filePath": self.file_path,
            "createdAt": _iso(self.created_at),
            "type": self.kind,
        }


@dataclass(frozen=True)
class AudioTrack(MediaItem):
    kind: ClassVar[str] = "audio"


@dataclass(frozen=True)
class Video(MediaItem):
    file_size: Optional[int] = None
    mime_type: Optional[str] = None

    kind: ClassVar[str] = "video"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["fileSize"] = self.file_size
        data["mimeType"] = self.mime_type
        return data


@dataclass(frozen=True)
class SearchQuery:
    """One search request: free text, match mode and structural filters."""
    text: str
    mode: str = "hybrid"
    media_kind: str = "all"
    date_range: Optional[str] = None

    def __post_init__(self):
        if self.mode not in SEARCH_MODES:
            raise QueryValidationError(f"Unknown search mode: {self.mode!r}")
        if self.media_kind not in MEDIA_KINDS:
            raise QueryValidationError(f"Unknown media type filter: {self.media_kind!r}")
        if self.date_range is not None and self.date_range not in DATE_RANGES:
            raise QueryValidationError(f"Unknown date range filter: {self.date_range!r}")

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()

    @property
    def semantic(self) -> bool:
        return self.mode in ("semantic", "hybrid")


@dataclass(frozen=True)
class SearchResult:
    """A matched item with its relevance score and descriptive tags."""
    item: MediaItem
    relevance: int
    tags: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        data = self.item.to_dict()
        data["tags"] = list(self.tags)
        data["relevance"] = self.relevance
        return data
