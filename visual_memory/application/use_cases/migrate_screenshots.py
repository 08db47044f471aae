"""Use case for backfilling image data of old screenshots."""

import logging

from ...domain.exceptions import describe_error
from ...domain.repositories import ScreenshotRepository
from ..dto import MigrationResponse

logger = logging.getLogger(__name__)


class MigrateScreenshotsUseCase:
    """Asks the backend to attach image bytes to screenshots stored without them."""

    def __init__(self, repository: ScreenshotRepository):
        self.repository = repository

    async def execute(self) -> MigrationResponse:
        try:
            processed = await self.repository.migrate_existing_screenshots()
            logger.info(f"Migration finished, {processed} screenshots updated")
            return MigrationResponse(success=True, processed=processed)

        except Exception as e:
            logger.error(f"Migration failed: {e}")
            return MigrationResponse(
                success=False,
                error_message=describe_error(e, "Migration failed. Please try again.")
            )
