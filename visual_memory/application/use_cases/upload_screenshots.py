"""Use case for uploading screenshots."""

import logging
from typing import List

from ...domain.entities import LocalImageFile
from ...domain.exceptions import describe_error
from ...domain.repositories import ScreenshotRepository
from ..dto import UploadScreenshotsResponse

logger = logging.getLogger(__name__)


def split_image_files(files: List[LocalImageFile]):
    """Separate image files from everything else, keeping selection order."""
    images = [f for f in files if f.is_image]
    skipped = [f.name for f in files if not f.is_image]
    return images, skipped


class UploadScreenshotsUseCase:
    """Use case for sending image files to the backend for analysis."""

    def __init__(self, repository: ScreenshotRepository):
        self.repository = repository

    async def execute(self, files: List[LocalImageFile]) -> UploadScreenshotsResponse:
        """Upload the image files of a selection in one request."""
        images, skipped = split_image_files(files)
        if skipped:
            logger.info(f"Skipping {len(skipped)} non-image files: {skipped}")

        if not images:
            return UploadScreenshotsResponse(success=True, skipped=skipped)

        try:
            results = await self.repository.upload_screenshots(images)

            logger.info(f"Backend processed {len(results)} of {len(images)} uploaded files")
            return UploadScreenshotsResponse(
                success=True,
                results=results,
                uploaded=[f.name for f in images],
                skipped=skipped
            )

        except Exception as e:
            logger.error(f"Failed to upload screenshots: {e}")
            return UploadScreenshotsResponse(
                success=False,
                uploaded=[f.name for f in images],
                skipped=skipped,
                error_message=describe_error(e, "Upload failed. Please try again.")
            )
