class MediaLibError(Exception):
    """Base error for the media library."""


class QueryValidationError(MediaLibError):
    """Raised when a search query carries an unknown mode or filter value."""


class CorpusUnavailableError(MediaLibError):
    """Raised when the media catalog cannot be read."""


class UploadRejectedError(MediaLibError):
    """Raised when an upload fails its preconditions (fields, type, size)."""


class MediaNotFoundError(MediaLibError):
    """Raised when a track or video id has no record."""

    def __init__(self, kind: str, media_id: str):
        super().__init__(f"{kind} not found: {media_id}")
        self.kind = kind
        self.media_id = media_id
