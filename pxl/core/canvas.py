"""Flat RGBA pixel buffers.

A canvas is ``width * height`` pixels stored row-major, four bytes per pixel
(R, G, B, A). ``get_pixel``/``set_pixel`` work on the raw buffer so drawing
loops can run against any bytearray, layer buffers included.
"""

from dataclasses import dataclass, field

from pxl.core.color import Color
from pxl.errors import BufferSizeError, OutOfBoundsError, ValidationError

BYTES_PER_PIXEL = 4


@dataclass
class Canvas:
    width: int
    height: int
    buffer: bytearray = field(default=None, repr=False)

    def __post_init__(self):
        expected = self.width * self.height * BYTES_PER_PIXEL
        if self.buffer is None:
            self.buffer = bytearray(expected)
        elif not isinstance(self.buffer, bytearray):
            self.buffer = bytearray(self.buffer)
        if len(self.buffer) != expected:
            raise BufferSizeError(
                f"Buffer length {len(self.buffer)} does not match "
                f"{self.width}x{self.height} (expected {expected})"
            )

    def clone(self) -> "Canvas":
        return Canvas(self.width, self.height, bytearray(self.buffer))

    def get(self, x: int, y: int) -> Color:
        return get_pixel(self.buffer, self.width, x, y)

    def set(self, x: int, y: int, color: Color):
        set_pixel(self.buffer, self.width, x, y, *color)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height


def create_canvas(width: int, height: int) -> Canvas:
    """Fully transparent canvas."""
    if width <= 0 or height <= 0:
        raise ValidationError(
            f"Invalid dimensions: width and height must be positive, got {width}x{height}"
        )
    return Canvas(width, height)


def _offset(buffer, width: int, x: int, y: int) -> int:
    if x < 0 or y < 0 or x >= width:
        raise OutOfBoundsError(f"Pixel ({x}, {y}) out of bounds")
    offset = (y * width + x) * BYTES_PER_PIXEL
    if offset + 3 >= len(buffer):
        raise OutOfBoundsError(f"Pixel ({x}, {y}) out of bounds")
    return offset


def check_pixel(buffer, width: int, x: int, y: int):
    """Raise OutOfBoundsError unless (x, y) addresses a pixel inside the buffer."""
    _offset(buffer, width, x, y)


def get_pixel(buffer, width: int, x: int, y: int) -> Color:
    offset = _offset(buffer, width, x, y)
    return Color(buffer[offset], buffer[offset + 1], buffer[offset + 2], buffer[offset + 3])


def set_pixel(buffer, width: int, x: int, y: int, r: int, g: int, b: int, a: int):
    """Write one pixel in place. Values are not clamped."""
    offset = _offset(buffer, width, x, y)
    buffer[offset:offset + 4] = bytes((r, g, b, a))


def in_bounds(width: int, height: int, x: int, y: int) -> bool:
    return 0 <= x < width and 0 <= y < height
