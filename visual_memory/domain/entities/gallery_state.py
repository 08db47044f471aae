"""Gallery state entity owned by the controller."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .local_file import LocalImageFile
from .preview import PreviewCache
from .screenshot import Screenshot, SearchResult
from .search_filters import SearchFilters


class NoticeSeverity(str, Enum):
    """How a user-visible notice should be styled."""

    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """User-visible message describing the outcome of the last operation."""

    text: str
    severity: NoticeSeverity = NoticeSeverity.INFO

    @property
    def is_error(self) -> bool:
        return self.severity == NoticeSeverity.ERROR


@dataclass
class OperationStatus:
    """In-flight flags, one per operation type."""

    uploading: bool = False
    searching: bool = False
    loading: bool = False
    deleting: Optional[str] = None  # Filename being deleted
    migrating: bool = False

    @property
    def is_idle(self) -> bool:
        """Check if no operation is in flight."""
        return not (self.uploading or self.searching or self.loading
                    or self.deleting is not None or self.migrating)


@dataclass(frozen=True)
class SelectedImage:
    """Image picked for enlarged display."""

    filename: str
    src: str


@dataclass
class GalleryState:
    """Canonical in-memory model rendered by the view."""

    screenshots: List[Screenshot] = field(default_factory=list)
    search_results: List[SearchResult] = field(default_factory=list)
    previews: PreviewCache = field(default_factory=PreviewCache)
    uploaded_files: Dict[str, LocalImageFile] = field(default_factory=dict)
    status: OperationStatus = field(default_factory=OperationStatus)
    query: str = ""
    filters: SearchFilters = field(default_factory=SearchFilters)
    suggestions: List[str] = field(default_factory=list)
    notice: Optional[Notice] = None
    selected_image: Optional[SelectedImage] = None

    @property
    def show_suggestions(self) -> bool:
        """Check if the suggestion dropdown should be visible."""
        return bool(self.query.strip()) and bool(self.suggestions)

    def find_screenshot(self, filename: str) -> Optional[Screenshot]:
        """Look up a screenshot by its filename."""
        return next((s for s in self.screenshots if s.filename == filename), None)
