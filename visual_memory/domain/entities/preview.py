"""Preview cache entities."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional

logger = logging.getLogger(__name__)


class PreviewSource(str, Enum):
    """Where a preview's pixels came from."""

    SERVER = "server"  # Decoded from image_data sent by the backend
    LOCAL_FILE = "local_file"  # Read from a file the user just uploaded
    PLACEHOLDER = "placeholder"  # Synthesized stand-in


@dataclass(frozen=True)
class Preview:
    """Displayable image reference for a screenshot."""

    data_uri: str
    source: PreviewSource

    @property
    def is_placeholder(self) -> bool:
        """Check if this preview is a synthesized stand-in."""
        return self.source == PreviewSource.PLACEHOLDER

    @property
    def is_real(self) -> bool:
        """Check if this preview shows the actual screenshot bytes."""
        return not self.is_placeholder


class PreviewCache:
    """Filename-keyed previews that are never downgraded.

    A real preview is written once and kept. A placeholder only fills a gap
    and is replaced as soon as a real preview for the same filename arrives.
    """

    def __init__(self, entries: Optional[Dict[str, Preview]] = None):
        self._entries: Dict[str, Preview] = dict(entries or {})

    def offer(self, filename: str, preview: Preview) -> bool:
        """Merge a preview, returning True if the cache changed."""
        existing = self._entries.get(filename)
        if existing is None:
            self._entries[filename] = preview
            return True
        if existing.is_placeholder and preview.is_real:
            logger.debug(f"Upgrading placeholder preview for {filename} ({preview.source.value})")
            self._entries[filename] = preview
            return True
        return False

    def merge(self, previews: Dict[str, Preview]) -> int:
        """Offer several previews, returning how many were written."""
        return sum(1 for filename, preview in previews.items() if self.offer(filename, preview))

    def needs_preview(self, filename: str, real: bool = False) -> bool:
        """Check if offering a preview of the given fidelity would change the cache."""
        existing = self._entries.get(filename)
        if existing is None:
            return True
        return real and existing.is_placeholder

    def get(self, filename: str) -> Optional[Preview]:
        return self._entries.get(filename)

    def remove(self, filename: str) -> Optional[Preview]:
        """Drop the preview for a deleted screenshot."""
        return self._entries.pop(filename, None)

    def __contains__(self, filename: object) -> bool:
        return filename in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
