"""Domain entities for the Visual Memory client."""

from .screenshot import Screenshot, SearchResult
from .preview import Preview, PreviewSource, PreviewCache
from .search_filters import SearchFilters, SortBy
from .local_file import LocalImageFile
from .gallery_state import (
    GalleryState,
    Notice,
    NoticeSeverity,
    OperationStatus,
    SelectedImage
)

__all__ = [
    "Screenshot",
    "SearchResult",
    "Preview",
    "PreviewSource",
    "PreviewCache",
    "SearchFilters",
    "SortBy",
    "LocalImageFile",
    "GalleryState",
    "Notice",
    "NoticeSeverity",
    "OperationStatus",
    "SelectedImage"
]
