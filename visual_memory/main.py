"""Command line entry point for the Visual Memory client."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from visual_memory.application.controller import GalleryController
from visual_memory.application.services import generate_suggestions
from visual_memory.domain.entities import LocalImageFile, SortBy
from visual_memory.infrastructure.api.visual_memory_client import VisualMemoryClient
from visual_memory.infrastructure.auth.credentials import create_credential_provider
from visual_memory.infrastructure.config import Settings, get_settings
from visual_memory.infrastructure.rendering.placeholder import RasterPlaceholderRenderer
from visual_memory.presentation.console import GalleryView

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def confidence_value(value: str) -> float:
    """Argument type for --min-confidence; rejects values outside 0-1."""
    try:
        confidence = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid confidence value: {value!r}")
    if not 0.0 <= confidence <= 1.0:
        raise argparse.ArgumentTypeError(f"confidence must be between 0 and 1, got {value}")
    return confidence


def setup_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="visual-memory",
        description="Upload screenshots and find them again with natural-language search."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="Show every stored screenshot.")

    search = subparsers.add_parser("search", help="Search screenshots.")
    search.add_argument("query", help="What the screenshot shows.")
    search.add_argument("--min-confidence", type=confidence_value, default=0.0,
                        help="Hide results scoring below this value (0-1).")
    search.add_argument("--sort-by", default=SortBy.RELEVANCE.value,
                        choices=[s.value for s in SortBy], help="Result ordering.")

    upload = subparsers.add_parser("upload", help="Upload image files for analysis.")
    upload.add_argument("paths", nargs="+", help="Files to upload; non-images are skipped.")

    delete = subparsers.add_parser("delete", help="Delete a stored screenshot.")
    delete.add_argument("filename")
    delete.add_argument("--yes", action="store_true", help="Do not ask for confirmation.")

    subparsers.add_parser("migrate", help="Backfill image data for old screenshots.")

    suggest = subparsers.add_parser("suggest", help="Show query suggestions.")
    suggest.add_argument("query")

    return parser


async def run(args: argparse.Namespace, settings: Settings, view: GalleryView) -> int:
    """Execute one command against the backend; returns the exit code."""
    client = VisualMemoryClient(settings, create_credential_provider(settings))
    confirm = (lambda prompt: True) if getattr(args, "yes", False) else view.confirm
    controller = GalleryController(
        client,
        RasterPlaceholderRenderer(),
        confirm=confirm,
        max_results=settings.search_max_results
    )

    try:
        if args.command == "list":
            await controller.load_screenshots()
        elif args.command == "search":
            controller.set_filters(min_confidence=args.min_confidence, sort_by=args.sort_by)
            await controller.search(args.query)
        elif args.command == "upload":
            files = [LocalImageFile.from_path(path) for path in args.paths]
            await controller.upload_files(files)
            await controller.wait_for_previews()
        elif args.command == "delete":
            # Deletion is resolved against the current list
            if await controller.load_screenshots():
                await controller.delete_screenshot(args.filename)
        elif args.command == "migrate":
            await controller.migrate()
    finally:
        await client.cleanup()

    view.render(controller.state)
    notice = controller.state.notice
    return 1 if notice is not None and notice.is_error else 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = setup_arg_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level)
    view = GalleryView(title=settings.app_name)

    if args.command == "suggest":
        for suggestion in generate_suggestions(args.query):
            view.console.print(suggestion)
        return 0

    try:
        return asyncio.run(run(args, settings, view))
    except OSError as e:
        logger.error(f"Could not read input file: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
