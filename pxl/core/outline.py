"""Sprite outlines."""

from pxl.core.canvas import BYTES_PER_PIXEL
from pxl.core.color import Color

NEIGHBORS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def add_outline(buffer, width: int, height: int, color: Color) -> bytearray:
    """Return a copy with transparent pixels next to opaque ones set to ``color``."""
    out = bytearray(buffer)
    fill = bytes(color)
    for y in range(height):
        for x in range(width):
            offset = (y * width + x) * BYTES_PER_PIXEL
            if buffer[offset + 3] != 0:
                continue
            for dx, dy in NEIGHBORS:
                nx, ny = x + dx, y + dy
                if 0 <= nx < width and 0 <= ny < height:
                    if buffer[(ny * width + nx) * BYTES_PER_PIXEL + 3] > 0:
                        out[offset:offset + 4] = fill
                        break
    return out
