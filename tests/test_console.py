from datetime import datetime, timezone
from io import StringIO

import pytest
from rich.console import Console

from visual_memory.domain.entities import (
    GalleryState,
    LocalImageFile,
    Notice,
    NoticeSeverity,
    Preview,
    PreviewSource,
    Screenshot
)
from visual_memory.main import main, setup_arg_parser
from visual_memory.presentation.console import GalleryView

from conftest import make_result

NOW = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


def render(state: GalleryState) -> str:
    output = StringIO()
    view = GalleryView(Console(file=output, width=160, color_system=None))
    view.render(state, now=NOW)
    return output.getvalue()


def test_view_renders_gallery_results_and_notice():
    state = GalleryState(
        screenshots=[Screenshot(filename="login.png", upload_time=NOW, text_content="Sign in")],
        search_results=[make_result("login.png", 0.9)],
        uploaded_files={"login.png": LocalImageFile("login.png", "image/png", b"x" * 2 * 1024 * 1024)},
        notice=Notice("Successfully processed 1 screenshots", NoticeSeverity.SUCCESS),
    )
    state.previews.offer("login.png", Preview("data:x", PreviewSource.LOCAL_FILE))

    text = render(state)

    assert "Total Screenshots" in text
    assert "Successfully processed 1 screenshots" in text
    assert "90% match" in text
    assert "Just now" in text
    assert "2.0 MB" in text
    assert "local_file" in text


def test_view_shows_suggestions_only_for_non_blank_query():
    state = GalleryState(query="login", suggestions=["login form"])
    assert "login form" in render(state)

    state.query = " "
    assert "Suggestions" not in render(state)


def test_arg_parser_search_options():
    args = setup_arg_parser().parse_args(["search", "error dialog", "--min-confidence", "0.5", "--sort-by", "date"])
    assert args.command == "search"
    assert args.query == "error dialog"
    assert args.min_confidence == 0.5
    assert args.sort_by == "date"


def test_suggest_command_prints_suggestions(capsys):
    assert main(["suggest", "button"]) == 0
    out = capsys.readouterr().out
    assert "submit button" in out


@pytest.mark.parametrize("value", ["2", "-0.1", "high"])
def test_search_rejects_confidence_outside_range(value, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["search", "login", "--min-confidence", value])

    assert exc_info.value.code == 2
    assert "--min-confidence" in capsys.readouterr().err


def test_view_uses_configured_title():
    output = StringIO()
    view = GalleryView(Console(file=output, width=160, color_system=None), title="Team Screenshots")

    view.render_stats(GalleryState())

    assert "Team Screenshots" in output.getvalue()
