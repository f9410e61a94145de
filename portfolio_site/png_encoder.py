"""
Default Open Graph Image (hand-rolled PNG)

Builds the 1200x630 social preview card written to dist/assets/og.png without an
imaging library: raw RGBA scanlines, zlib level 9, and IHDR/IDAT/IEND chunks with
their CRC-32 trailers.

Design:
 - Dark navy background
 - Accent blue diagonal band on the left
 - Near-white highlight block in the top-right corner
"""
from __future__ import annotations

import struct
import zlib
from typing import List, Optional, Tuple

WIDTH, HEIGHT = 1200, 630

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

BACKGROUND = (0x0F, 0x17, 0x2A, 0xFF)
ACCENT = (0x60, 0xA5, 0xFA, 0xFF)
HIGHLIGHT = (0xF9, 0xFA, 0xFB, 0xFF)

Color = Tuple[int, int, int, int]


def _build_crc32_table() -> List[int]:
    table = []
    for n in range(256):
        value = n
        for _ in range(8):
            value = 0xEDB88320 ^ (value >> 1) if value & 1 else value >> 1
        table.append(value)
    return table


CRC32_TABLE = _build_crc32_table()


def crc32(data: bytes) -> int:
    """Reflected CRC-32 (poly 0xEDB88320, seed and final XOR 0xFFFFFFFF)"""
    crc = 0xFFFFFFFF
    for byte in data:
        crc = CRC32_TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ 0xFFFFFFFF


def build_png_chunk(chunk_type: str, data: Optional[bytes] = None) -> bytes:
    """Length + type + data + CRC over (type + data)"""
    type_bytes = chunk_type.encode("ascii")
    payload = bytes(data or b"")
    return (
        struct.pack(">I", len(payload))
        + type_bytes
        + payload
        + struct.pack(">I", crc32(type_bytes + payload))
    )


def pixel_color(
    x: int,
    y: int,
    width: int,
    height: int,
    band: float = 0.18,
    highlight_x: float = 0.72,
    highlight_y: float = 0.22,
) -> Color:
    """Colour of a single pixel; the highlight check runs last and wins."""
    color = BACKGROUND
    if x - y * 0.9 < width * band:
        color = ACCENT
    if x > width * highlight_x and y < height * highlight_y:
        color = HIGHLIGHT
    return color


_COLOR_BYTES = {color: bytes(color) for color in (BACKGROUND, ACCENT, HIGHLIGHT)}


def build_raw_scanlines(width: int, height: int, **thresholds) -> bytes:
    rows = []
    for y in range(height):
        pixels = b"".join(
            _COLOR_BYTES[pixel_color(x, y, width, height, **thresholds)] for x in range(width)
        )
        rows.append(b"\x00" + pixels)  # filter: none
    return b"".join(rows)


def build_default_og_png(width: int = WIDTH, height: int = HEIGHT, **thresholds) -> bytes:
    """
    Encode the default social preview card as a PNG byte string.

    Args:
        width: Image width in pixels (values below 1 fall back to the default)
        height: Image height in pixels (values below 1 fall back to the default)
        **thresholds: Optional ``band``, ``highlight_x``, ``highlight_y`` fractions

    Returns:
        Complete PNG file contents
    """
    width = max(1, int(width or WIDTH))
    height = max(1, int(height or HEIGHT))

    ihdr = struct.pack(
        ">IIBBBBB",
        width,
        height,
        8,  # bit depth
        6,  # colour type: RGBA
        0,  # compression
        0,  # filter
        0,  # interlace
    )
    compressed = zlib.compress(build_raw_scanlines(width, height, **thresholds), 9)

    return b"".join(
        [
            PNG_SIGNATURE,
            build_png_chunk("IHDR", ihdr),
            build_png_chunk("IDAT", compressed),
            build_png_chunk("IEND"),
        ]
    )
