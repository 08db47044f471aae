"""Gallery and search controller."""

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Iterable, Optional, Set, Union

from ..domain.entities import (
    GalleryState,
    LocalImageFile,
    Notice,
    NoticeSeverity,
    SelectedImage
)
from ..domain.exceptions import MissingCredentialsError, QueryValidationError, PreviewDecodeError
from ..domain.repositories import PlaceholderRenderer, ScreenshotRepository
from .dto import (
    DeleteScreenshotResponse,
    MigrationResponse,
    SearchRequest,
    SearchResponse,
    UploadScreenshotsResponse
)
from .services import PreviewBuilder, generate_suggestions, server_image_to_data_uri
from .use_cases import (
    DeleteScreenshotUseCase,
    LoadScreenshotsUseCase,
    MigrateScreenshotsUseCase,
    SearchScreenshotsUseCase,
    UploadScreenshotsUseCase
)
from .use_cases.search_screenshots import validate_query
from .use_cases.upload_screenshots import split_image_files

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str], Union[bool, Awaitable[bool]]]

NO_RESULTS_MESSAGE = "No screenshots found matching your criteria. Try adjusting your search or filters."
NO_IMAGES_MESSAGE = "No image files selected. Only image files can be uploaded."
NO_MIGRATION_MESSAGE = "No screenshots needed migration. All screenshots already have image data."


class GalleryController:
    """Owns the gallery state and keeps it consistent with the backend.

    Every public coroutine issues at most one remote call and merges the
    outcome into ``state``. Failures never leave a partial merge behind;
    they only set ``state.notice``.
    """

    def __init__(
        self,
        repository: ScreenshotRepository,
        placeholder_renderer: PlaceholderRenderer,
        confirm: Optional[ConfirmCallback] = None,
        max_results: int = 5,
        state: Optional[GalleryState] = None
    ):
        self.repository = repository
        self.confirm = confirm
        self.max_results = max_results
        self.state = state or GalleryState()
        self.preview_builder = PreviewBuilder(placeholder_renderer)

        self.load_use_case = LoadScreenshotsUseCase(repository, self.preview_builder)
        self.upload_use_case = UploadScreenshotsUseCase(repository)
        self.search_use_case = SearchScreenshotsUseCase(repository, self.preview_builder)
        self.delete_use_case = DeleteScreenshotUseCase(repository)
        self.migrate_use_case = MigrateScreenshotsUseCase(repository)

        self._search_sequence = 0
        self._preview_tasks: Set[asyncio.Task] = set()

    # Notices

    def _notify(self, text: str, severity: NoticeSeverity = NoticeSeverity.INFO) -> None:
        if severity == NoticeSeverity.ERROR:
            logger.warning(text)
        else:
            logger.info(text)
        self.state.notice = Notice(text, severity)

    def _clear_transient_notice(self) -> None:
        """Clear errors and search hints, keep completed-operation messages."""
        notice = self.state.notice
        if notice is not None and notice.severity != NoticeSeverity.SUCCESS:
            self.state.notice = None

    def _has_credentials(self) -> bool:
        try:
            self.repository.ensure_authenticated()
        except MissingCredentialsError as e:
            self._notify(str(e), NoticeSeverity.ERROR)
            return False
        return True

    # List loading

    async def load_screenshots(self) -> bool:
        """Replace the screenshot list with the backend's and fill preview gaps."""
        status = self.state.status
        if status.loading:
            logger.info("Screenshot list already loading, ignoring request")
            return False
        if not self._has_credentials():
            return False

        status.loading = True
        try:
            response = await self.load_use_case.execute(self.state.previews)
            if not response.success:
                self._notify(f"Failed to load screenshots: {response.error_message}", NoticeSeverity.ERROR)
                return False

            self.state.screenshots = list(response.screenshots)
            written = self.state.previews.merge(response.previews)
            logger.info(
                f"Gallery has {len(self.state.screenshots)} screenshots, "
                f"{written} previews added ({len(self.state.previews)} total)"
            )
            return True
        finally:
            status.loading = False

    # Uploading

    async def upload_files(self, files: Iterable[LocalImageFile]) -> Optional[UploadScreenshotsResponse]:
        """Upload the image files of a selection; other files are skipped."""
        files = list(files)
        status = self.state.status
        if not files:
            return None
        if status.uploading:
            logger.info("Upload already in progress, ignoring request")
            return None
        if not self._has_credentials():
            return None

        status.uploading = True
        self.state.notice = None
        try:
            images, _ = split_image_files(files)
            for file in images:
                self.state.uploaded_files[file.name] = file
                self._schedule_local_preview(file)

            response = await self.upload_use_case.execute(files)
            if not response.success:
                self._notify(f"Error: {response.error_message}", NoticeSeverity.ERROR)
            elif not response.uploaded:
                self._notify(NO_IMAGES_MESSAGE)
            else:
                self.state.screenshots = self.state.screenshots + list(response.results)
                self._notify(
                    f"Successfully processed {len(response.results)} screenshots",
                    NoticeSeverity.SUCCESS
                )
            return response
        finally:
            status.uploading = False

    def _schedule_local_preview(self, file: LocalImageFile) -> None:
        task = asyncio.create_task(self._generate_local_preview(file))
        self._preview_tasks.add(task)
        task.add_done_callback(self._preview_tasks.discard)

    async def _generate_local_preview(self, file: LocalImageFile) -> None:
        try:
            preview = await self.preview_builder.from_local_file(file)
        except Exception as e:
            logger.warning(f"Could not build local preview for {file.name}: {e}")
            return
        self.state.previews.offer(file.name, preview)

    async def wait_for_previews(self) -> None:
        """Wait until every scheduled local preview has been merged."""
        if self._preview_tasks:
            await asyncio.gather(*list(self._preview_tasks))

    # Searching

    async def search(self, query: Optional[str] = None) -> Optional[SearchResponse]:
        """Search with the current (or given) query and filters.

        Searches are numbered; only the response to the most recently issued
        search is applied, older responses are dropped on arrival.
        """
        if query is not None:
            self.state.query = query
        try:
            text = validate_query(self.state.query)
        except QueryValidationError as e:
            self._notify(str(e), NoticeSeverity.ERROR)
            return None
        if not self._has_credentials():
            return None

        self._search_sequence += 1
        sequence = self._search_sequence
        self.state.status.searching = True
        self._clear_transient_notice()
        self.state.search_results = []

        request = SearchRequest(query=text, filters=self.state.filters, max_results=self.max_results)
        try:
            response = await self.search_use_case.execute(request, self.state.previews)
        finally:
            if sequence == self._search_sequence:
                self.state.status.searching = False

        if sequence != self._search_sequence:
            logger.info(f"Discarding stale response for search {sequence} ({text!r})")
            return None

        if not response.success:
            self.state.search_results = []
            self._notify(response.error_message, NoticeSeverity.ERROR)
            return response

        self.state.search_results = list(response.results)
        self.state.previews.merge(response.previews)
        if not response.results:
            self._notify(NO_RESULTS_MESSAGE)
        else:
            self._clear_transient_notice()
        return response

    def set_query(self, value: str) -> None:
        """Track the query as it is typed."""
        self.state.query = value
        self.state.suggestions = generate_suggestions(value)
        if value.strip():
            self._clear_transient_notice()
        else:
            self.state.search_results = []

    async def select_suggestion(self, suggestion: str) -> Optional[SearchResponse]:
        """Replace the query with a suggestion and search for it."""
        self.state.query = suggestion
        self.state.suggestions = []
        return await self.search()

    def clear_search(self) -> None:
        self.state.query = ""
        self.state.search_results = []
        self.state.suggestions = []
        self._clear_transient_notice()

    def set_filters(self, min_confidence: Optional[float] = None, sort_by: Optional[str] = None) -> None:
        """Change the filters applied to the next search."""
        changes = {}
        if min_confidence is not None:
            changes["min_confidence"] = min_confidence
        if sort_by is not None:
            changes["sort_by"] = sort_by
        self.state.filters = self.state.filters.with_changes(**changes)

    # Deleting

    async def _ask(self, prompt: str) -> bool:
        if self.confirm is None:
            logger.warning("No confirmation handler configured, declining delete")
            return False
        answer = self.confirm(prompt)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)

    async def delete_screenshot(self, filename: str) -> Optional[DeleteScreenshotResponse]:
        """Delete a screenshot after the user confirms.

        The target is looked up by filename once confirmed, so a list reloaded
        while the prompt was open cannot make us remove the wrong entry.
        """
        status = self.state.status
        if status.deleting is not None:
            logger.info(f"Delete of {status.deleting} in progress, ignoring request for {filename}")
            return None

        prompt = f'Are you sure you want to delete "{filename}"? This action cannot be undone.'
        if not await self._ask(prompt):
            logger.info(f"Delete of {filename} cancelled")
            return None
        if status.deleting is not None:
            logger.info(f"Delete of {status.deleting} started while confirming, ignoring request for {filename}")
            return None

        if self.state.find_screenshot(filename) is None:
            message = f'Screenshot "{filename}" not found'
            self._notify(message, NoticeSeverity.ERROR)
            return DeleteScreenshotResponse(filename=filename, success=False, error_message=message)
        if not self._has_credentials():
            return None

        status.deleting = filename
        self._clear_transient_notice()
        try:
            response = await self.delete_use_case.execute(filename)
            if not response.success:
                self._notify(response.error_message, NoticeSeverity.ERROR)
                return response

            self._forget(filename)
            self._notify(f'Screenshot "{filename}" deleted successfully.', NoticeSeverity.SUCCESS)
            return response
        finally:
            status.deleting = None

    def _forget(self, filename: str) -> None:
        state = self.state
        state.screenshots = [s for s in state.screenshots if s.filename != filename]
        state.search_results = [r for r in state.search_results if r.filename != filename]
        state.previews.remove(filename)
        state.uploaded_files.pop(filename, None)
        if state.selected_image is not None and state.selected_image.filename == filename:
            state.selected_image = None

    # Migration

    async def migrate(self) -> Optional[MigrationResponse]:
        """Backfill image data on the backend, reloading if anything changed."""
        status = self.state.status
        if status.migrating:
            logger.info("Migration already in progress, ignoring request")
            return None
        if not self._has_credentials():
            return None

        status.migrating = True
        self._clear_transient_notice()
        try:
            response = await self.migrate_use_case.execute()
            if not response.success:
                self._notify(response.error_message, NoticeSeverity.ERROR)
            elif response.processed > 0:
                self._notify(
                    f"Migration completed! {response.processed} screenshots updated with real images.",
                    NoticeSeverity.SUCCESS
                )
                if not await self.load_screenshots():
                    logger.warning("Screenshot list was not reloaded after migration")
            else:
                self._notify(NO_MIGRATION_MESSAGE)
            return response
        finally:
            status.migrating = False

    # Image modal

    def select_image(self, filename: str) -> Optional[SelectedImage]:
        """Pick an image for enlarged display."""
        preview = self.state.previews.get(filename)
        src = preview.data_uri if preview else None
        if src is None:
            result = next(
                (r for r in self.state.search_results if r.filename == filename and r.has_image_data),
                None
            )
            if result is not None:
                try:
                    src = server_image_to_data_uri(result.image_data)
                except PreviewDecodeError as e:
                    logger.warning(f"Cannot display {filename}: {e}")
        if src is None:
            return None
        self.state.selected_image = SelectedImage(filename=filename, src=src)
        return self.state.selected_image

    def close_image(self) -> None:
        self.state.selected_image = None
