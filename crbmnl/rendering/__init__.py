"""Composition and encoding of the status image."""

from .bitmap import PackedImage, decode_bitmap_header, encode_bitmap, pack_monochrome
from .canvas import CANVAS_HEIGHT, CANVAS_WIDTH, Canvas
from .fonts import FontBook, FontStyle, GlyphRenderer
from .layout import LayoutEngine, group_events_by_date, line_height

__all__ = [
    "CANVAS_HEIGHT",
    "CANVAS_WIDTH",
    "Canvas",
    "FontBook",
    "FontStyle",
    "GlyphRenderer",
    "LayoutEngine",
    "PackedImage",
    "decode_bitmap_header",
    "encode_bitmap",
    "group_events_by_date",
    "line_height",
    "pack_monochrome",
]
