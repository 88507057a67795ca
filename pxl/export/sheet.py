"""Sprite sheet packing.

Frames share a cell size equal to the largest frame's width and height.
Smaller frames sit at the top-left of their cell; nothing is scaled.
"""

import math
from dataclasses import dataclass, field
from enum import Enum

from pxl.core.canvas import Canvas, get_pixel, set_pixel
from pxl.errors import ValidationError


class SheetLayout(str, Enum):
    GRID = "grid"
    STRIP_HORIZONTAL = "strip-horizontal"
    STRIP_VERTICAL = "strip-vertical"


def parse_layout(value) -> SheetLayout:
    if isinstance(value, SheetLayout):
        return value
    try:
        return SheetLayout(value)
    except ValueError:
        valid = ", ".join(layout.value for layout in SheetLayout)
        raise ValidationError(f"Unknown layout: {value}. Valid layouts: {valid}") from None


@dataclass
class Frame:
    buffer: bytearray = field(repr=False)
    width: int
    height: int
    name: str | None = None


@dataclass
class PackedSheet:
    width: int
    height: int
    buffer: bytearray = field(repr=False)
    frames: list = field(default_factory=list)
    tile_width: int = 0
    tile_height: int = 0

    @property
    def canvas(self) -> Canvas:
        return Canvas(self.width, self.height, self.buffer)

    @property
    def metadata(self) -> dict:
        return {
            "frames": [dict(frame) for frame in self.frames],
            "tileWidth": self.tile_width,
            "tileHeight": self.tile_height,
        }


def _grid_shape(count: int, layout: SheetLayout) -> tuple[int, int]:
    if layout is SheetLayout.STRIP_HORIZONTAL:
        return count, 1
    if layout is SheetLayout.STRIP_VERTICAL:
        return 1, count
    cols = math.ceil(math.sqrt(count))
    rows = math.ceil(count / cols)
    return cols, rows


def pack_sheet(frames: list[Frame], layout="grid", padding: int = 0) -> PackedSheet:
    layout = parse_layout(layout)
    if padding < 0:
        raise ValidationError(f"Invalid padding: {padding}. Must be a non-negative number")
    if not frames:
        return PackedSheet(0, 0, bytearray())

    tile_w = max(frame.width for frame in frames)
    tile_h = max(frame.height for frame in frames)
    cols, rows = _grid_shape(len(frames), layout)
    width = cols * tile_w + (cols - 1) * padding
    height = rows * tile_h + (rows - 1) * padding
    sheet = Canvas(width, height)

    placements = []
    for i, frame in enumerate(frames):
        col, row = i % cols, i // cols
        ox = col * (tile_w + padding)
        oy = row * (tile_h + padding)
        for y in range(frame.height):
            for x in range(frame.width):
                color = get_pixel(frame.buffer, frame.width, x, y)
                set_pixel(sheet.buffer, width, ox + x, oy + y, *color)
        placements.append({
            "name": frame.name or f"frame_{i}",
            "x": ox,
            "y": oy,
            "w": frame.width,
            "h": frame.height,
        })

    return PackedSheet(width, height, sheet.buffer, placements, tile_w, tile_h)


def generate_tiled_metadata(sheet: PackedSheet, image_path: str) -> dict:
    """Sheet metadata wrapped with the image reference Tiled-style importers expect."""
    data = sheet.metadata
    data["image"] = image_path
    data["imageWidth"] = sheet.width
    data["imageHeight"] = sheet.height
    return data
