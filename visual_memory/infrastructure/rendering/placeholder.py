"""Placeholder preview renderers."""

import base64
import logging
from io import BytesIO
from typing import Optional, Tuple
from xml.sax.saxutils import escape

from PIL import Image, ImageDraw, ImageFont

from ...domain.repositories import PlaceholderRenderer

logger = logging.getLogger(__name__)

WIDTH = 300
HEIGHT = 200
BAR_HEIGHT = 30
LABEL = "Screenshot"
MAX_FILENAME_CHARS = 25

# Diagonal background gradient stops (offset, colour)
GRADIENT_STOPS = [(0.0, "#f8fafc"), (0.5, "#e2e8f0"), (1.0, "#cbd5e0")]
BORDER_COLOR = "#e2e8f0"
BAR_COLOR = "#f1f5f9"
BUTTON_COLORS = ["#ef4444", "#f59e0b", "#10b981"]
LABEL_COLOR = "#475569"
FILENAME_COLOR = "#64748b"
ICON_COLOR = "#94a3b8"


def _hex_to_rgb(value: str) -> Tuple[int, int, int]:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def _gradient_color(t: float) -> Tuple[int, int, int]:
    """Interpolate the background gradient at position t in [0, 1]."""
    for (start, start_hex), (end, end_hex) in zip(GRADIENT_STOPS, GRADIENT_STOPS[1:]):
        if t <= end:
            ratio = (t - start) / (end - start)
            a, b = _hex_to_rgb(start_hex), _hex_to_rgb(end_hex)
            return tuple(round(a[i] + (b[i] - a[i]) * ratio) for i in range(3))
    return _hex_to_rgb(GRADIENT_STOPS[-1][1])


def _short_name(filename: str) -> str:
    return filename[:MAX_FILENAME_CHARS]


class SvgPlaceholderRenderer(PlaceholderRenderer):
    """Vector rendering of the placeholder layout."""

    def render(self, filename: str) -> str:
        stops = "".join(
            f'<stop offset="{int(offset * 100)}%" style="stop-color:{color};stop-opacity:1"/>'
            for offset, color in GRADIENT_STOPS
        )
        buttons = "".join(
            f'<circle cx="{20 + 20 * i}" cy="15" r="6" fill="{color}"/>'
            for i, color in enumerate(BUTTON_COLORS)
        )
        svg = (
            f'<svg width="{WIDTH}" height="{HEIGHT}" xmlns="http://www.w3.org/2000/svg">'
            f'<defs><linearGradient id="grad" x1="0%" y1="0%" x2="100%" y2="100%">{stops}</linearGradient></defs>'
            f'<rect width="{WIDTH}" height="{HEIGHT}" fill="url(#grad)" stroke="{BORDER_COLOR}" stroke-width="1"/>'
            f'<rect x="0" y="0" width="{WIDTH}" height="{BAR_HEIGHT}" fill="{BAR_COLOR}" stroke="{BORDER_COLOR}" stroke-width="1"/>'
            f'{buttons}'
            f'<text x="150" y="80" font-family="Arial" font-size="14" font-weight="bold" '
            f'text-anchor="middle" fill="{LABEL_COLOR}">{LABEL}</text>'
            f'<text x="150" y="100" font-family="Arial" font-size="12" '
            f'text-anchor="middle" fill="{FILENAME_COLOR}">{escape(_short_name(filename))}</text>'
            f'<g fill="{ICON_COLOR}">'
            f'<rect x="138" y="122" width="24" height="17" rx="3"/>'
            f'<rect x="144" y="119" width="8" height="4" rx="1"/>'
            f'<circle cx="150" cy="130" r="5" fill="{BAR_COLOR}"/>'
            f'</g>'
            f'</svg>'
        )
        encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
        return f"data:image/svg+xml;base64,{encoded}"


class RasterPlaceholderRenderer(PlaceholderRenderer):
    """Pillow rendering of the placeholder layout as PNG.

    Any failure while drawing falls back to the vector renderer, so callers
    always get a usable data URI.
    """

    def __init__(self, fallback: Optional[PlaceholderRenderer] = None):
        self.fallback = fallback or SvgPlaceholderRenderer()
        self._background: Optional[Image.Image] = None

    def render(self, filename: str) -> str:
        try:
            return self._render_png(filename)
        except Exception as e:
            logger.warning(f"Raster placeholder failed for {filename}, using SVG fallback: {e}")
            return self.fallback.render(filename)

    def _get_background(self) -> Image.Image:
        if self._background is None:
            image = Image.new("RGB", (WIDTH, HEIGHT))
            norm = WIDTH * WIDTH + HEIGHT * HEIGHT
            image.putdata([
                _gradient_color((x * WIDTH + y * HEIGHT) / norm)
                for y in range(HEIGHT)
                for x in range(WIDTH)
            ])
            self._background = image
        return self._background

    @staticmethod
    def _draw_centered(draw: ImageDraw.ImageDraw, y: int, text: str, font, fill: str) -> None:
        left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
        x = (WIDTH - (right - left)) / 2 - left
        draw.text((x, y - (bottom - top)), text, font=font, fill=fill)

    def _render_png(self, filename: str) -> str:
        image = self._get_background().copy()
        draw = ImageDraw.Draw(image)

        draw.rectangle([0, 0, WIDTH - 1, HEIGHT - 1], outline=BORDER_COLOR)
        draw.rectangle([0, 0, WIDTH - 1, BAR_HEIGHT], fill=BAR_COLOR)
        draw.line([0, BAR_HEIGHT, WIDTH, BAR_HEIGHT], fill=BORDER_COLOR)
        for i, color in enumerate(BUTTON_COLORS):
            cx = 20 + 20 * i
            draw.ellipse([cx - 6, 9, cx + 6, 21], fill=color)

        self._draw_centered(draw, 80, LABEL, ImageFont.load_default(size=14), LABEL_COLOR)
        self._draw_centered(draw, 100, _short_name(filename), ImageFont.load_default(size=12), FILENAME_COLOR)

        # Camera icon
        draw.rounded_rectangle([138, 122, 162, 139], radius=3, fill=ICON_COLOR)
        draw.rounded_rectangle([144, 119, 152, 123], radius=1, fill=ICON_COLOR)
        draw.ellipse([145, 125, 155, 135], fill=BAR_COLOR)

        buffer = BytesIO()
        image.save(buffer, format="PNG")
        encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
        return f"data:image/png;base64,{encoded}"
