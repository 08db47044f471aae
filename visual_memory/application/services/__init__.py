"""Application services shared by the use cases and the controller."""

from .preview_builder import PreviewBuilder, server_image_to_data_uri, sniff_mime_type
from .search_processing import filter_by_confidence, sort_results, process_results
from .suggestions import SUGGESTION_TABLE, MAX_SUGGESTIONS, generate_suggestions

__all__ = [
    "PreviewBuilder",
    "server_image_to_data_uri",
    "sniff_mime_type",
    "filter_by_confidence",
    "sort_results",
    "process_results",
    "SUGGESTION_TABLE",
    "MAX_SUGGESTIONS",
    "generate_suggestions"
]
