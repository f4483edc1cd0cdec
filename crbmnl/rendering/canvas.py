"""8-bit grayscale canvas the status image is drawn on."""

from __future__ import annotations

import numpy as np
from PIL import Image, ImageDraw, ImageFont

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 480

WHITE = 255
BLACK = 0


class Canvas:
    """Mutable grid of gray samples (0 = black, 255 = white).

    The Pillow image is private to the canvas; drawing goes through the
    methods below and reads go through ``get_sample``/``to_array`` which
    return copies.
    """

    def __init__(self, width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT, fill: int = WHITE):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self._image = Image.new("L", (width, height), fill)
        self._draw = ImageDraw.Draw(self._image)

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    def fill(self, value: int) -> None:
        self.fill_rect(0, 0, self.width, self.height, value)

    def fill_rect(self, x: int, y: int, width: int, height: int, value: int) -> None:
        """Fill the ``width`` x ``height`` rectangle whose top-left corner is (x, y)."""
        if width <= 0 or height <= 0:
            return
        # Pillow rectangles are inclusive of the far corner
        self._draw.rectangle((x, y, x + width - 1, y + height - 1), fill=value)

    def draw_text(
        self,
        x: int,
        y: int,
        text: str,
        font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
        value: int = BLACK,
    ) -> None:
        """Draw ``text`` with its top-left at (x, y)."""
        self._draw.text((x, y), text, font=font, fill=value)

    def flip_vertical(self) -> None:
        """Mirror the rows in place: row i swaps with row height-1-i."""
        self._image = self._image.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
        self._draw = ImageDraw.Draw(self._image)

    def get_sample(self, x: int, y: int) -> int:
        return int(self._image.getpixel((x, y)))

    def to_array(self) -> np.ndarray:
        """Copy of the samples as a (height, width) uint8 array."""
        return np.array(self._image, dtype=np.uint8)

    def to_image(self) -> Image.Image:
        """Copy of the canvas as a Pillow image (for debugging and previews)."""
        return self._image.copy()
