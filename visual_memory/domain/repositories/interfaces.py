"""Repository interfaces for domain layer."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities import LocalImageFile, Screenshot, SearchResult


class CredentialProvider(ABC):
    """Interface for retrieving the bearer token of the current session."""

    @abstractmethod
    def get_token(self) -> Optional[str]:
        """Return the session token, or None when the user is signed out."""
        pass


class ScreenshotRepository(ABC):
    """Interface for the remote visual memory backend."""

    @abstractmethod
    def ensure_authenticated(self) -> None:
        """Raise MissingCredentialsError if no token is available."""
        pass

    @abstractmethod
    async def list_screenshots(self) -> List[Screenshot]:
        """Get every screenshot stored for the user."""
        pass

    @abstractmethod
    async def upload_screenshots(self, files: List[LocalImageFile]) -> List[Screenshot]:
        """Upload image files and return the backend's analysis results."""
        pass

    @abstractmethod
    async def search(self, text: str, max_results: int = 5) -> List[SearchResult]:
        """Run a natural-language search."""
        pass

    @abstractmethod
    async def delete_screenshot(self, filename: str) -> None:
        """Delete a stored screenshot by filename."""
        pass

    @abstractmethod
    async def migrate_existing_screenshots(self) -> int:
        """Backfill image data for old screenshots, returning how many were processed."""
        pass


class PlaceholderRenderer(ABC):
    """Interface for synthesizing stand-in preview images."""

    @abstractmethod
    def render(self, filename: str) -> str:
        """Render a placeholder for the filename as a data URI."""
        pass
