# Personal media library: catalog, uploads and smart search.

from .exceptions import (
    CorpusUnavailableError,
    MediaLibError,
    MediaNotFoundError,
    QueryValidationError,
    UploadRejectedError,
)

__all__ = [
    "MediaLibError",
    "QueryValidationError",
    "CorpusUnavailableError",
    "UploadRejectedError",
    "MediaNotFoundError",
]
