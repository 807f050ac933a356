# Makes the folder importable as a package.
# Exports the search engine and its data types for convenience.

from .engine import SmartSearch, search
from .taxonomy import Taxonomy, load_taxonomy
from .types import AudioTrack, MediaItem, SearchQuery, SearchResult, Video

__all__ = [
    "SmartSearch",
    "search",
    "Taxonomy",
    "load_taxonomy",
    "MediaItem",
    "AudioTrack",
    "Video",
    "SearchQuery",
    "SearchResult",
]
