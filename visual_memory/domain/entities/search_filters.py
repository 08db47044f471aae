"""Search filter entity."""

from dataclasses import dataclass
from enum import Enum


class SortBy(str, Enum):
    """Client-side ordering applied to search results."""

    RELEVANCE = "relevance"  # Backend order
    DATE = "date"
    FILENAME = "filename"
    CONFIDENCE = "confidence"


@dataclass(frozen=True)
class SearchFilters:
    """Filters applied to a result set after the backend responds."""

    min_confidence: float = 0.0
    sort_by: str = SortBy.RELEVANCE.value

    def __post_init__(self):
        if not 0.0 <= self.min_confidence <= 1.0:
            raise ValueError("Minimum confidence must be between 0 and 1")

    def with_changes(self, **changes) -> "SearchFilters":
        """Return a copy with the given fields replaced."""
        values = {"min_confidence": self.min_confidence, "sort_by": self.sort_by}
        values.update(changes)
        return SearchFilters(**values)
