import base64
from io import BytesIO

from PIL import Image

from visual_memory.infrastructure.rendering.placeholder import (
    RasterPlaceholderRenderer,
    SvgPlaceholderRenderer
)


def decode(data_uri: str) -> bytes:
    header, payload = data_uri.split(",", 1)
    assert header.endswith(";base64")
    return base64.b64decode(payload)


class BrokenRasterRenderer(RasterPlaceholderRenderer):
    def _render_png(self, filename: str) -> str:
        raise OSError("no drawing surface")


def test_raster_placeholder_is_png_of_fixed_size():
    data_uri = RasterPlaceholderRenderer().render("login-page.png")

    assert data_uri.startswith("data:image/png;base64,")
    image = Image.open(BytesIO(decode(data_uri)))
    assert image.format == "PNG"
    assert image.size == (300, 200)


def test_raster_placeholder_is_deterministic():
    renderer = RasterPlaceholderRenderer()
    assert renderer.render("a.png") == renderer.render("a.png")
    assert renderer.render("a.png") != renderer.render("b.png")


def test_raster_failure_falls_back_to_svg():
    data_uri = BrokenRasterRenderer().render("a.png")

    assert data_uri.startswith("data:image/svg+xml;base64,")
    assert b"a.png" in decode(data_uri)


def test_svg_placeholder_layout():
    svg = decode(SvgPlaceholderRenderer().render("dashboard.png")).decode("utf-8")

    assert 'width="300" height="200"' in svg
    assert ">Screenshot</text>" in svg
    assert ">dashboard.png</text>" in svg
    for color in ("#ef4444", "#f59e0b", "#10b981"):
        assert color in svg


def test_svg_placeholder_escapes_and_shortens_filename():
    svg = decode(SvgPlaceholderRenderer().render("<b>&" + "x" * 40)).decode("utf-8")

    assert "&lt;b&gt;&amp;" + "x" * 21 + "</text>" in svg
    assert "<b>" not in svg
