"""
Pytest configuration and fixtures for the Visual Memory client tests.
"""

import asyncio
import base64
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

from visual_memory.application.controller import GalleryController
from visual_memory.domain.entities import LocalImageFile, Screenshot, SearchResult
from visual_memory.domain.exceptions import MissingCredentialsError, RemoteServiceError
from visual_memory.domain.repositories import PlaceholderRenderer, ScreenshotRepository


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def png_b64() -> str:
    return base64.b64encode(PNG_BYTES).decode("ascii")


def at(hour: int) -> datetime:
    return datetime(2024, 5, 1, hour, 0, tzinfo=timezone.utc)


def make_result(filename: str, confidence: float, hour: int = 12, image_data: Optional[str] = None) -> SearchResult:
    return SearchResult(
        filename=filename,
        upload_time=at(hour),
        text_content=f"text of {filename}",
        image_data=image_data,
        confidence_score=confidence,
        visual_description=f"description of {filename}"
    )


class FakeRenderer(PlaceholderRenderer):
    """Placeholder renderer that records what it drew."""

    def __init__(self):
        self.rendered: List[str] = []

    def render(self, filename: str) -> str:
        self.rendered.append(filename)
        return f"data:image/svg+xml;base64,placeholder-{filename}"


class FakeRepository(ScreenshotRepository):
    """In-memory backend with scriptable responses and failures."""

    def __init__(self):
        self.token: Optional[str] = "test-token"
        self.screenshots: List[Screenshot] = []
        self.search_results: Dict[str, List[SearchResult]] = {}
        self.migrated = 0
        self.migrated_screenshots: Optional[List[Screenshot]] = None
        self.errors: Dict[str, Exception] = {}
        self.gates: Dict[str, asyncio.Event] = {}  # search query -> release event
        self.calls: List[tuple] = []

    def ensure_authenticated(self) -> None:
        if not self.token:
            raise MissingCredentialsError()

    def _check(self, operation: str) -> None:
        if operation in self.errors:
            raise self.errors[operation]

    async def list_screenshots(self) -> List[Screenshot]:
        self.calls.append(("list",))
        self._check("list")
        return list(self.screenshots)

    async def upload_screenshots(self, files: List[LocalImageFile]) -> List[Screenshot]:
        self.calls.append(("upload", [f.name for f in files]))
        self._check("upload")
        results = [Screenshot(filename=f.name, upload_time=at(12), text_content="uploaded") for f in files]
        self.screenshots.extend(results)
        return results

    async def search(self, text: str, max_results: int = 5) -> List[SearchResult]:
        self.calls.append(("search", text, max_results))
        if text in self.gates:
            await self.gates[text].wait()
        self._check("search")
        return list(self.search_results.get(text, []))

    async def delete_screenshot(self, filename: str) -> None:
        self.calls.append(("delete", filename))
        self._check("delete")
        if not any(s.filename == filename for s in self.screenshots):
            raise RemoteServiceError("Request failed with status code 404", 404, "Screenshot not found")
        self.screenshots = [s for s in self.screenshots if s.filename != filename]

    async def migrate_existing_screenshots(self) -> int:
        self.calls.append(("migrate",))
        self._check("migrate")
        if self.migrated_screenshots is not None:
            self.screenshots = list(self.migrated_screenshots)
        return self.migrated

    def operations(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def repository() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def confirmations() -> List[str]:
    """Prompts shown to the user; every prompt is answered yes."""
    return []


@pytest.fixture
def controller(repository, renderer, confirmations) -> GalleryController:
    def confirm(prompt: str) -> bool:
        confirmations.append(prompt)
        return True

    return GalleryController(repository, renderer, confirm=confirm)
