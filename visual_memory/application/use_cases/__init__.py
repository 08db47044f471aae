"""Application use cases."""

from .load_screenshots import LoadScreenshotsUseCase
from .upload_screenshots import UploadScreenshotsUseCase
from .search_screenshots import SearchScreenshotsUseCase
from .delete_screenshot import DeleteScreenshotUseCase
from .migrate_screenshots import MigrateScreenshotsUseCase

__all__ = [
    "LoadScreenshotsUseCase",
    "UploadScreenshotsUseCase",
    "SearchScreenshotsUseCase",
    "DeleteScreenshotUseCase",
    "MigrateScreenshotsUseCase"
]
