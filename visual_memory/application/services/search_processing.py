"""Client-side post-processing of search results."""

import logging
from datetime import datetime, timezone
from typing import List

from ...domain.entities import SearchFilters, SearchResult, SortBy

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _timestamp(result: SearchResult) -> datetime:
    if result.upload_time is None:
        return _OLDEST
    if result.upload_time.tzinfo is None:
        return result.upload_time.replace(tzinfo=timezone.utc)
    return result.upload_time


def filter_by_confidence(results: List[SearchResult], min_confidence: float) -> List[SearchResult]:
    """Drop results scoring below the minimum confidence."""
    return [r for r in results if r.confidence_score >= min_confidence]


def sort_results(results: List[SearchResult], sort_by: str) -> List[SearchResult]:
    """Order results; relevance and unknown keys keep backend order."""
    if sort_by == SortBy.DATE:
        # Newest first, results without a timestamp last
        return sorted(results, key=_timestamp, reverse=True)
    if sort_by == SortBy.FILENAME:
        return sorted(results, key=lambda r: r.filename)
    if sort_by == SortBy.CONFIDENCE:
        return sorted(results, key=lambda r: r.confidence_score, reverse=True)
    if sort_by != SortBy.RELEVANCE:
        logger.debug(f"Unknown sort key {sort_by!r}, keeping backend order")
    return list(results)


def process_results(results: List[SearchResult], filters: SearchFilters) -> List[SearchResult]:
    """Filter, then sort, a raw result set."""
    return sort_results(filter_by_confidence(results, filters.min_confidence), filters.sort_by)
