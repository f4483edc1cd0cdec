"""Monochrome packing and BMP encoding.

The display firmware expects an uncompressed 1-bit BMP with a two-entry
palette (0 = black, 1 = white). The grayscale canvas is thresholded, packed
eight pixels per byte (first pixel in the most significant bit) and wrapped
in a BITMAPFILEHEADER + BITMAPINFOHEADER computed from the real dimensions.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass

import numpy as np

from ..exceptions import EncodingPreconditionError
from .canvas import Canvas

logger = logging.getLogger(__name__)

THRESHOLD = 128

FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
PALETTE = bytes((0x00, 0x00, 0x00, 0x00, 0xFF, 0xFF, 0xFF, 0x00))  # black, white (B, G, R, 0)
PIXEL_DATA_OFFSET = FILE_HEADER_SIZE + INFO_HEADER_SIZE + len(PALETTE)  # 62

_FILE_HEADER = struct.Struct("<2sIHHI")
_INFO_HEADER = struct.Struct("<IiiHHIIiiII")


@dataclass(frozen=True)
class PackedImage:
    """1-bit-per-pixel rows, ``width // 8`` bytes each, top row first."""

    data: bytes
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width % 8:
            raise EncodingPreconditionError(f"Width {self.width} is not a multiple of 8")
        expected = self.row_bytes * self.height
        if len(self.data) != expected:
            raise EncodingPreconditionError(
                f"Packed data is {len(self.data)} bytes, expected {expected} "
                f"for {self.width}x{self.height}"
            )

    @property
    def row_bytes(self) -> int:
        return self.width // 8


@dataclass(frozen=True)
class BitmapHeader:
    """Fields of the file and info headers, as stored in the file."""

    magic: bytes
    file_size: int
    reserved: int
    pixel_data_offset: int
    info_header_size: int
    width: int
    height: int
    planes: int
    bits_per_pixel: int
    compression: int
    image_size: int
    x_resolution: int
    y_resolution: int
    palette_colors: int
    important_colors: int


def pack_monochrome(canvas: Canvas, threshold: int = THRESHOLD) -> PackedImage:
    """Threshold the canvas to 1 bit per pixel and pack 8 pixels per byte.

    A sample brighter than ``threshold`` becomes bit 1 (white in the palette).

    Raises:
        EncodingPreconditionError: if the canvas width is not a multiple of 8
    """
    if canvas.width % 8:
        raise EncodingPreconditionError(f"Canvas width {canvas.width} is not a multiple of 8")

    bits = canvas.to_array() > threshold
    packed = np.packbits(bits, axis=1, bitorder="big")
    return PackedImage(data=packed.tobytes(), width=canvas.width, height=canvas.height)


def _row_stride(row_bytes: int) -> int:
    # BMP rows are padded to a multiple of 4 bytes
    return (row_bytes + 3) & ~3


def build_bitmap_header(width: int, height: int, image_size: int) -> bytes:
    """File header, info header and palette for a 1-bit uncompressed bitmap."""
    file_header = _FILE_HEADER.pack(
        b"BM",
        PIXEL_DATA_OFFSET + image_size,  # file size
        0,  # reserved
        0,  # reserved
        PIXEL_DATA_OFFSET,
    )
    info_header = _INFO_HEADER.pack(
        INFO_HEADER_SIZE,
        width,
        height,  # positive: rows stored bottom-up
        1,  # color planes
        1,  # bits per pixel
        0,  # compression (none)
        image_size,
        0,  # horizontal resolution (ignored)
        0,  # vertical resolution (ignored)
        2,  # palette colors
        2,  # important colors
    )
    return file_header + info_header + PALETTE


def encode_bitmap(packed: PackedImage) -> bytes:
    """Wrap packed rows into a complete BMP file.

    Rows are written in the order given; callers flip the canvas beforehand
    since BMP stores the bottom row first.
    """
    stride = _row_stride(packed.row_bytes)
    if stride == packed.row_bytes:
        pixel_data = packed.data
    else:
        padding = bytes(stride - packed.row_bytes)
        pixel_data = b"".join(
            packed.data[offset : offset + packed.row_bytes] + padding
            for offset in range(0, len(packed.data), packed.row_bytes)
        )

    header = build_bitmap_header(packed.width, packed.height, len(pixel_data))
    encoded = header + pixel_data
    logger.debug(
        "Encoded %dx%d bitmap: %d bytes (%d pixel bytes)",
        packed.width,
        packed.height,
        len(encoded),
        len(pixel_data),
    )
    return encoded


def decode_bitmap_header(data: bytes) -> BitmapHeader:
    """Parse the header fields of a bitmap produced by ``encode_bitmap``."""
    if len(data) < PIXEL_DATA_OFFSET:
        raise ValueError(f"Bitmap is {len(data)} bytes, shorter than its header")
    magic, file_size, reserved1, reserved2, offset = _FILE_HEADER.unpack_from(data, 0)
    fields = _INFO_HEADER.unpack_from(data, FILE_HEADER_SIZE)
    return BitmapHeader(
        magic,
        file_size,
        reserved1 | (reserved2 << 16),
        offset,
        *fields,
    )
