"""Use case for searching screenshots."""

import logging
import time

from ...domain.entities import PreviewCache
from ...domain.exceptions import QueryValidationError, describe_error
from ...domain.repositories import ScreenshotRepository
from ..dto import SearchRequest, SearchResponse
from ..services import PreviewBuilder, process_results

logger = logging.getLogger(__name__)

EMPTY_QUERY_MESSAGE = "Please enter a search query"
SEARCH_FAILED_MESSAGE = "Enhanced search failed. Please try again."


def validate_query(query: str) -> str:
    """Return the trimmed query, raising QueryValidationError if blank."""
    text = query.strip()
    if not text:
        raise QueryValidationError(EMPTY_QUERY_MESSAGE)
    return text


class SearchScreenshotsUseCase:
    """Runs a remote search and post-processes the results client-side."""

    def __init__(self, repository: ScreenshotRepository, preview_builder: PreviewBuilder):
        self.repository = repository
        self.preview_builder = preview_builder

    async def execute(self, request: SearchRequest, cache: PreviewCache) -> SearchResponse:
        """Execute a search.

        The backend is trusted to honour max_results; results are filtered by
        confidence and sorted here, never truncated.
        """
        start_time = time.time()

        try:
            text = validate_query(request.query)
            logger.info(f"Starting enhanced search for {text!r}")

            raw_results = await self.repository.search(text, max_results=request.max_results)
            results = process_results(raw_results, request.filters)
            previews = self.preview_builder.for_results(results, cache)

            search_time_ms = (time.time() - start_time) * 1000
            logger.info(
                f"Search {text!r} returned {len(raw_results)} results, "
                f"{len(results)} after filtering in {search_time_ms:.2f}ms"
            )
            return SearchResponse(
                query=request.query,
                success=True,
                results=results,
                total_matches=len(raw_results),
                previews=previews,
                search_time_ms=search_time_ms
            )

        except Exception as e:
            logger.error(f"Search for {request.query!r} failed: {e}")
            return SearchResponse(
                query=request.query,
                success=False,
                error_message=describe_error(e, SEARCH_FAILED_MESSAGE)
            )
