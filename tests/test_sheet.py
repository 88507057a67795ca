"""Tests for sprite sheet packing."""

import pytest

from pxl.core.color import Color
from pxl.errors import ValidationError
from pxl.export.sheet import Frame, SheetLayout, generate_tiled_metadata, pack_sheet, parse_layout


def solid_frame(width, height, value, name=None):
    color = Color(value, value, value, 255)
    return Frame(bytearray(bytes(color) * width * height), width, height, name)


class TestPackSheet:
    """Tests for pack_sheet."""

    def test_grid_of_four(self):
        frames = [solid_frame(16, 16, i * 10) for i in range(4)]
        sheet = pack_sheet(frames, "grid", 0)
        assert (sheet.width, sheet.height) == (32, 32)
        assert [(f["x"], f["y"]) for f in sheet.frames] == [(0, 0), (16, 0), (0, 16), (16, 16)]

    def test_pixels_copied(self):
        frames = [solid_frame(16, 16, i * 10) for i in range(4)]
        sheet = pack_sheet(frames, "grid", 0)
        assert sheet.canvas.get(16, 16) == Color(30, 30, 30, 255)
        assert sheet.canvas.get(15, 0) == Color(0, 0, 0, 255)

    def test_horizontal_strip_with_padding(self):
        frames = [solid_frame(16, 16, 50) for _ in range(3)]
        sheet = pack_sheet(frames, "strip-horizontal", 2)
        assert (sheet.width, sheet.height) == (52, 16)
        assert [f["x"] for f in sheet.frames] == [0, 18, 36]
        assert sheet.canvas.get(16, 0).a == 0

    def test_vertical_strip(self):
        frames = [solid_frame(4, 4, 1) for _ in range(3)]
        sheet = pack_sheet(frames, SheetLayout.STRIP_VERTICAL, 1)
        assert (sheet.width, sheet.height) == (4, 14)
        assert [f["y"] for f in sheet.frames] == [0, 5, 10]

    def test_grid_shape_rounds_up(self):
        frames = [solid_frame(2, 2, 1) for _ in range(8)]
        sheet = pack_sheet(frames, "grid")
        assert (sheet.width, sheet.height) == (6, 6)

    def test_mixed_sizes_use_largest_cell(self):
        frames = [solid_frame(4, 2, 1, "wide"), solid_frame(2, 6, 1, "tall")]
        sheet = pack_sheet(frames, "strip-horizontal")
        assert (sheet.tile_width, sheet.tile_height) == (4, 6)
        assert (sheet.width, sheet.height) == (8, 6)
        assert sheet.frames[1] == {"name": "tall", "x": 4, "y": 0, "w": 2, "h": 6}

    def test_default_frame_names(self):
        sheet = pack_sheet([solid_frame(1, 1, 1), solid_frame(1, 1, 1, "b")])
        assert [f["name"] for f in sheet.frames] == ["frame_0", "b"]

    def test_empty(self):
        sheet = pack_sheet([])
        assert (sheet.width, sheet.height) == (0, 0)
        assert sheet.frames == []

    def test_negative_padding(self):
        with pytest.raises(ValidationError, match="Invalid padding"):
            pack_sheet([solid_frame(1, 1, 1)], padding=-1)

    def test_unknown_layout(self):
        with pytest.raises(ValidationError, match=
                           "Unknown layout: diagonal. Valid layouts: grid, strip-horizontal, strip-vertical"):
            parse_layout("diagonal")


class TestMetadata:
    def test_metadata_shape(self):
        sheet = pack_sheet([solid_frame(8, 8, 1, "idle")])
        assert sheet.metadata == {
            "frames": [{"name": "idle", "x": 0, "y": 0, "w": 8, "h": 8}],
            "tileWidth": 8,
            "tileHeight": 8,
        }

    def test_tiled_metadata(self):
        sheet = pack_sheet([solid_frame(8, 8, 1)] * 2, "strip-horizontal", 1)
        data = generate_tiled_metadata(sheet, "hero-sheet.png")
        assert data["image"] == "hero-sheet.png"
        assert (data["imageWidth"], data["imageHeight"]) == (17, 8)
        assert len(data["frames"]) == 2
