"""Builds previews for screenshots and local files."""

import asyncio
import base64
import binascii
import logging
from typing import Dict, Iterable

from ...domain.entities import LocalImageFile, Preview, PreviewCache, PreviewSource, Screenshot
from ...domain.exceptions import PreviewDecodeError
from ...domain.repositories import PlaceholderRenderer

logger = logging.getLogger(__name__)

# Leading bytes of the formats the backend stores
_SIGNATURES = [
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
]


def sniff_mime_type(data: bytes, default: str = "image/jpeg") -> str:
    """Guess an image MIME type from its leading bytes."""
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    for signature, mime_type in _SIGNATURES:
        if data.startswith(signature):
            return mime_type
    return default


def server_image_to_data_uri(image_data: str) -> str:
    """Build a data URI from base64 image data sent by the backend."""
    try:
        raw = base64.b64decode(image_data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise PreviewDecodeError(f"Invalid image data: {e}") from e
    if not raw:
        raise PreviewDecodeError("Empty image data")
    return f"data:{sniff_mime_type(raw)};base64,{image_data}"


def file_to_data_uri(file: LocalImageFile) -> str:
    encoded = base64.b64encode(file.content).decode("ascii")
    return f"data:{file.content_type};base64,{encoded}"


class PreviewBuilder:
    """Creates previews, only doing work the cache would actually accept."""

    def __init__(self, renderer: PlaceholderRenderer):
        self.renderer = renderer

    def placeholder(self, filename: str) -> Preview:
        return Preview(self.renderer.render(filename), PreviewSource.PLACEHOLDER)

    def from_server(self, screenshot: Screenshot) -> Preview:
        """Decode inline image data; raises PreviewDecodeError on bad data."""
        return Preview(server_image_to_data_uri(screenshot.image_data), PreviewSource.SERVER)

    def for_listing(
        self,
        screenshots: Iterable[Screenshot],
        cache: PreviewCache
    ) -> Dict[str, Preview]:
        """Previews for a loaded list: real image when sent, placeholder otherwise."""
        previews: Dict[str, Preview] = {}
        for screenshot in screenshots:
            filename = screenshot.filename
            if filename in previews:
                continue
            if screenshot.has_image_data:
                if cache.needs_preview(filename, real=True):
                    previews[filename] = self.from_server(screenshot)
            elif cache.needs_preview(filename):
                logger.debug(f"Creating placeholder for {filename} (no image data)")
                previews[filename] = self.placeholder(filename)
        return previews

    def for_results(
        self,
        screenshots: Iterable[Screenshot],
        cache: PreviewCache
    ) -> Dict[str, Preview]:
        """Real previews from inline data only; results never add placeholders."""
        previews: Dict[str, Preview] = {}
        for screenshot in screenshots:
            filename = screenshot.filename
            if screenshot.has_image_data and filename not in previews and cache.needs_preview(filename, real=True):
                previews[filename] = self.from_server(screenshot)
        return previews

    async def from_local_file(self, file: LocalImageFile) -> Preview:
        """Encode a local file off the event loop."""
        data_uri = await asyncio.to_thread(file_to_data_uri, file)
        return Preview(data_uri, PreviewSource.LOCAL_FILE)
