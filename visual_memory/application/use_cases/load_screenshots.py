"""Use case for loading the screenshot list."""

import logging

from ...domain.entities import PreviewCache
from ...domain.exceptions import describe_error
from ...domain.repositories import ScreenshotRepository
from ..dto import LoadScreenshotsResponse
from ..services import PreviewBuilder

logger = logging.getLogger(__name__)


class LoadScreenshotsUseCase:
    """Fetches the authoritative list and the previews it is missing."""

    def __init__(self, repository: ScreenshotRepository, preview_builder: PreviewBuilder):
        self.repository = repository
        self.preview_builder = preview_builder

    async def execute(self, cache: PreviewCache) -> LoadScreenshotsResponse:
        """Load screenshots; previews are built against the given cache.

        Decoding errors in inline image data fail the whole load so that the
        caller never applies a partial result.
        """
        try:
            screenshots = await self.repository.list_screenshots()
            previews = self.preview_builder.for_listing(screenshots, cache)

            logger.info(f"Loaded {len(screenshots)} screenshots, {len(previews)} new previews")
            return LoadScreenshotsResponse(
                success=True,
                screenshots=screenshots,
                previews=previews
            )

        except Exception as e:
            logger.error(f"Failed to load screenshots: {e}")
            return LoadScreenshotsResponse(
                success=False,
                error_message=describe_error(e, "Failed to load screenshots")
            )
