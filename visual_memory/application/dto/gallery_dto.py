"""Data Transfer Objects for gallery operations."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ...domain.entities import Preview, Screenshot, SearchFilters, SearchResult


@dataclass
class LoadScreenshotsResponse:
    """Response from loading the screenshot list."""
    success: bool
    screenshots: List[Screenshot] = field(default_factory=list)
    previews: Dict[str, Preview] = field(default_factory=dict)  # Only entries the cache lacks
    error_message: Optional[str] = None


@dataclass
class UploadScreenshotsResponse:
    """Response from uploading screenshots."""
    success: bool
    results: List[Screenshot] = field(default_factory=list)
    uploaded: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)  # Non-image files left out
    error_message: Optional[str] = None


@dataclass
class SearchRequest:
    """Request to search screenshots."""
    query: str
    filters: SearchFilters = field(default_factory=SearchFilters)
    max_results: int = 5


@dataclass
class SearchResponse:
    """Response from a screenshot search."""
    query: str
    success: bool
    results: List[SearchResult] = field(default_factory=list)  # Filtered and sorted
    total_matches: int = 0  # Before client-side filtering
    previews: Dict[str, Preview] = field(default_factory=dict)
    search_time_ms: Optional[float] = None
    error_message: Optional[str] = None


@dataclass
class DeleteScreenshotResponse:
    """Response from deleting a screenshot."""
    filename: str
    success: bool
    error_message: Optional[str] = None


@dataclass
class MigrationResponse:
    """Response from migrating existing screenshots."""
    success: bool
    processed: int = 0
    error_message: Optional[str] = None
