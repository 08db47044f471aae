"""Screenshot domain entities."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Screenshot:
    """A stored screenshot known to the visual memory backend."""

    filename: str  # Unique key within the user's collection
    upload_time: Optional[datetime] = None
    text_content: Optional[str] = None  # OCR text extracted by the backend
    image_data: Optional[str] = None  # Base64 bytes, only when sent inline

    @property
    def has_image_data(self) -> bool:
        """Check if the backend sent the image bytes inline."""
        return bool(self.image_data)


@dataclass(frozen=True)
class SearchResult(Screenshot):
    """A scored match for a search query."""

    confidence_score: float = 0.0
    visual_description: str = ""
