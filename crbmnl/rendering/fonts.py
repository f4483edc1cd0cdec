"""Glyph rendering for the status image.

The layout engine only talks to the ``GlyphRenderer`` protocol, so it can be
tested with a fake that returns deterministic widths. ``FontBook`` is the
Pillow/FreeType implementation used by the server; it reads the font files
once at startup and hands out sized fonts from memory.
"""

from __future__ import annotations

import io
import logging
import math
from enum import Enum
from pathlib import Path
from typing import Protocol, Union

from PIL import ImageFont
from PIL.ImageFont import FreeTypeFont
from PIL.ImageFont import ImageFont as BuiltinFont

from .canvas import BLACK, Canvas

logger = logging.getLogger(__name__)

DEFAULT_FONT_DIR = Path(__file__).resolve().parent.parent / "fonts"
NORMAL_FONT_FILE = "Roboto-Light.ttf"
BOLD_FONT_FILE = "Roboto-Bold.ttf"

AnyFont = Union[FreeTypeFont, BuiltinFont]


class FontStyle(str, Enum):
    NORMAL = "normal"
    BOLD = "bold"


class GlyphRenderer(Protocol):
    """Measures and draws single lines of text."""

    def measure_text(self, size: float, style: FontStyle, text: str) -> int:
        """Width in pixels of ``text`` drawn at ``size`` in ``style``."""
        ...

    def draw_text(
        self, canvas: Canvas, x: int, y: int, size: float, style: FontStyle, text: str
    ) -> None:
        """Draw ``text`` in black with its top-left corner at (x, y)."""
        ...


class FontBook:
    """Pillow implementation of ``GlyphRenderer``.

    Font file contents are kept in memory per style; a sized FreeType font is
    created on first use and cached. When a style has no font file the
    bundled Pillow default font is used instead.
    """

    def __init__(self, font_data: dict[FontStyle, bytes | None]):
        self._font_data = font_data
        self._fonts: dict[tuple[FontStyle, float], AnyFont] = {}

    @classmethod
    def load(cls, font_dir: str | Path | None = None) -> FontBook:
        """Read the normal and bold font files from ``font_dir``.

        Args:
            font_dir: directory containing Roboto-Light.ttf and Roboto-Bold.ttf;
                defaults to the fonts/ directory shipped with the package

        Returns:
            FontBook ready for measuring and drawing
        """
        directory = Path(font_dir) if font_dir else DEFAULT_FONT_DIR
        data: dict[FontStyle, bytes | None] = {}
        for style, filename in ((FontStyle.NORMAL, NORMAL_FONT_FILE), (FontStyle.BOLD, BOLD_FONT_FILE)):
            path = directory / filename
            if path.exists():
                data[style] = path.read_bytes()
                logger.debug("Loaded %s font from %s", style.value, path)
            else:
                logger.warning("Font %s not found, using Pillow default font for %s text", path, style.value)
                data[style] = None
        return cls(data)

    def font(self, size: float, style: FontStyle) -> AnyFont:
        key = (FontStyle(style), float(size))
        font = self._fonts.get(key)
        if font is None:
            raw = self._font_data.get(key[0])
            if raw is not None:
                font = ImageFont.truetype(io.BytesIO(raw), size=key[1])
            else:
                font = ImageFont.load_default(size=key[1])
            self._fonts[key] = font
        return font

    def measure_text(self, size: float, style: FontStyle, text: str) -> int:
        if not text:
            return 0
        return math.ceil(self.font(size, style).getlength(text))

    def draw_text(
        self, canvas: Canvas, x: int, y: int, size: float, style: FontStyle, text: str
    ) -> None:
        canvas.draw_text(x, y, text, self.font(size, style), value=BLACK)
