"""Use case for deleting a screenshot."""

import logging

from ...domain.exceptions import describe_error
from ...domain.repositories import ScreenshotRepository
from ..dto import DeleteScreenshotResponse

logger = logging.getLogger(__name__)


class DeleteScreenshotUseCase:
    """Use case for removing a stored screenshot from the backend."""

    def __init__(self, repository: ScreenshotRepository):
        self.repository = repository

    async def execute(self, filename: str) -> DeleteScreenshotResponse:
        try:
            await self.repository.delete_screenshot(filename)
            return DeleteScreenshotResponse(filename=filename, success=True)

        except Exception as e:
            logger.error(f"Failed to delete screenshot {filename}: {e}")
            return DeleteScreenshotResponse(
                filename=filename,
                success=False,
                error_message=describe_error(e, "Failed to delete screenshot. Please try again.")
            )
