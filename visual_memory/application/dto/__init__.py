"""Application DTOs."""

from .gallery_dto import (
    LoadScreenshotsResponse,
    UploadScreenshotsResponse,
    SearchRequest,
    SearchResponse,
    DeleteScreenshotResponse,
    MigrationResponse
)

__all__ = [
    "LoadScreenshotsResponse",
    "UploadScreenshotsResponse",
    "SearchRequest",
    "SearchResponse",
    "DeleteScreenshotResponse",
    "MigrationResponse"
]
