"""Rich console rendering of the gallery state."""

from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from ..domain.entities import GalleryState, NoticeSeverity
from .formatting import (
    confidence_level,
    format_confidence,
    format_file_size,
    format_upload_time,
    truncate
)

NOTICE_STYLES = {
    NoticeSeverity.INFO: "bold blue",
    NoticeSeverity.SUCCESS: "bold green",
    NoticeSeverity.ERROR: "bold red",
}

CONFIDENCE_STYLES = {
    "high": "green",
    "medium": "yellow",
    "low": "dark_orange",
    "weak": "red",
}


class GalleryView:
    """Renders a GalleryState to the terminal."""

    def __init__(self, console: Optional[Console] = None, title: str = "Visual Memory Search"):
        self.console = console or Console()
        self.title = title

    def confirm(self, prompt: str) -> bool:
        """Ask the user a yes/no question; used as the delete confirmation."""
        return Confirm.ask(prompt, console=self.console, default=False)

    def render_stats(self, state: GalleryState) -> None:
        stats = Table.grid(padding=(0, 4))
        stats.add_row(
            f"[bold blue]{len(state.screenshots)}[/bold blue] Total Screenshots",
            f"[bold green]{len(state.search_results)}[/bold green] Search Results",
        )
        self.console.print(Panel(stats, title=self.title))

    def render_notice(self, state: GalleryState) -> None:
        if state.notice is not None:
            style = NOTICE_STYLES[state.notice.severity]
            self.console.print(f"[{style}]{state.notice.text}[/{style}]")

    def render_suggestions(self, state: GalleryState) -> None:
        if state.show_suggestions:
            self.console.print("[bold]Suggestions:[/bold] " + ", ".join(state.suggestions))

    def render_results(self, state: GalleryState) -> None:
        if not state.search_results:
            return

        table = Table(title=f"Search Results ({len(state.search_results)})")
        table.add_column("Screenshot", style="cyan")
        table.add_column("Match", justify="right")
        table.add_column("Text")
        table.add_column("Visual Description")

        for result in state.search_results:
            style = CONFIDENCE_STYLES[confidence_level(result.confidence_score)]
            table.add_row(
                result.filename,
                f"[{style}]{format_confidence(result.confidence_score)}[/{style}]",
                truncate(result.text_content, 150),
                truncate(result.visual_description, 100),
            )
        self.console.print(table)

    def render_gallery(self, state: GalleryState, now: Optional[datetime] = None) -> None:
        table = Table(title=f"Your Screenshots ({len(state.screenshots)})")
        table.add_column("Filename", style="cyan")
        table.add_column("Uploaded")
        table.add_column("Text")
        table.add_column("Size", justify="right")
        table.add_column("Preview")

        for screenshot in state.screenshots:
            local_file = state.uploaded_files.get(screenshot.filename)
            preview = state.previews.get(screenshot.filename)
            table.add_row(
                screenshot.filename,
                format_upload_time(screenshot.upload_time, now),
                truncate(screenshot.text_content, 100),
                format_file_size(local_file.size) if local_file else "",
                preview.source.value if preview else "none",
            )
        self.console.print(table)

    def render(self, state: GalleryState, now: Optional[datetime] = None) -> None:
        self.render_stats(state)
        self.render_notice(state)
        self.render_suggestions(state)
        self.render_results(state)
        self.render_gallery(state, now)
