"""Tests for drawing primitives and outlines."""

import pytest

from pxl.core.canvas import create_canvas
from pxl.core.color import TRANSPARENT, Color
from pxl.core.draw import draw_circle, draw_line, draw_rect, flood_fill, replace_color
from pxl.core.outline import add_outline
from pxl.errors import OutOfBoundsError


def painted(canvas):
    return {
        (x, y)
        for y in range(canvas.height)
        for x in range(canvas.width)
        if canvas.get(x, y).a > 0
    }


class TestDrawLine:
    """Tests for draw_line."""

    def test_horizontal_includes_endpoints(self, blank_canvas, red):
        draw_line(blank_canvas.buffer, 4, 0, 1, 3, 1, red)
        assert painted(blank_canvas) == {(0, 1), (1, 1), (2, 1), (3, 1)}

    def test_diagonal(self, blank_canvas, red):
        draw_line(blank_canvas.buffer, 4, 3, 3, 0, 0, red)
        assert painted(blank_canvas) == {(0, 0), (1, 1), (2, 2), (3, 3)}

    def test_single_point(self, blank_canvas, red):
        draw_line(blank_canvas.buffer, 4, 2, 2, 2, 2, red)
        assert painted(blank_canvas) == {(2, 2)}

    def test_out_of_range_endpoint_leaves_buffer_untouched(self, blank_canvas, red):
        with pytest.raises(OutOfBoundsError):
            draw_line(blank_canvas.buffer, 4, 0, 0, 4, 0, red)
        assert blank_canvas.buffer == bytearray(64)


class TestDrawRect:
    """Tests for draw_rect."""

    def test_filled(self, blank_canvas, red):
        draw_rect(blank_canvas.buffer, 4, 1, 1, 2, 2, red)
        assert painted(blank_canvas) == {(1, 1), (2, 1), (1, 2), (2, 2)}

    def test_outline_skips_interior(self, blank_canvas, red):
        draw_rect(blank_canvas.buffer, 4, 0, 0, 3, 3, red, filled=False)
        assert len(painted(blank_canvas)) == 12
        assert blank_canvas.get(1, 1) == TRANSPARENT

    def test_corners_are_normalised(self, blank_canvas, red):
        draw_rect(blank_canvas.buffer, 4, 2, 2, 1, 1, red)
        assert painted(blank_canvas) == {(1, 1), (2, 1), (1, 2), (2, 2)}

    def test_out_of_range_corner_leaves_buffer_untouched(self, blank_canvas, red):
        with pytest.raises(OutOfBoundsError):
            draw_rect(blank_canvas.buffer, 4, 0, 0, 1, 5, red)
        assert blank_canvas.buffer == bytearray(64)

    def test_negative_corner_rejected(self, blank_canvas, red):
        with pytest.raises(OutOfBoundsError):
            draw_rect(blank_canvas.buffer, 4, -1, 0, 2, 2, red, filled=False)
        assert blank_canvas.buffer == bytearray(64)


class TestDrawCircle:
    """Tests for draw_circle."""

    def test_radius_zero_is_one_pixel(self, blank_canvas, red):
        draw_circle(blank_canvas.buffer, 4, 4, 1, 1, 0, red)
        assert painted(blank_canvas) == {(1, 1)}

    def test_ring(self, red):
        canvas = create_canvas(5, 5)
        draw_circle(canvas.buffer, 5, 5, 2, 2, 1, red)
        assert painted(canvas) == {(2, 1), (1, 2), (3, 2), (2, 3)}
        assert canvas.get(2, 2) == TRANSPARENT

    def test_filled_covers_center(self, red):
        canvas = create_canvas(5, 5)
        draw_circle(canvas.buffer, 5, 5, 2, 2, 2, red, filled=True)
        assert canvas.get(2, 2) == red
        assert canvas.get(0, 2) == red
        assert canvas.get(0, 0) == TRANSPARENT

    def test_clipped_at_edges(self, blank_canvas, red):
        """Parts of the circle off the buffer are silently dropped."""
        draw_circle(blank_canvas.buffer, 4, 4, 0, 0, 3, red, filled=True)
        assert blank_canvas.get(0, 0) == red


class TestFloodFill:
    """Tests for flood_fill."""

    def test_fills_whole_empty_canvas(self, blank_canvas, red):
        assert flood_fill(blank_canvas.buffer, 4, 4, 0, 0, red) == 16

    def test_same_color_is_noop(self, blank_canvas):
        assert flood_fill(blank_canvas.buffer, 4, 4, 0, 0, TRANSPARENT) == 0

    def test_stops_at_boundary(self, blank_canvas, red, blue):
        draw_line(blank_canvas.buffer, 4, 2, 0, 2, 3, blue)
        assert flood_fill(blank_canvas.buffer, 4, 4, 0, 0, red) == 8
        assert blank_canvas.get(3, 0) == TRANSPARENT

    def test_four_connected_only(self, red, blue):
        """Diagonal gaps do not leak."""
        canvas = create_canvas(2, 2)
        canvas.set(1, 0, blue)
        canvas.set(0, 1, blue)
        assert flood_fill(canvas.buffer, 2, 2, 0, 0, red) == 1


class TestReplaceColor:
    def test_exact_rgba_match(self, blank_canvas, red, blue):
        blank_canvas.set(0, 0, red)
        blank_canvas.set(1, 0, red)
        blank_canvas.set(2, 0, Color(255, 0, 0, 254))
        assert replace_color(blank_canvas.buffer, red, blue) == 2
        assert blank_canvas.get(0, 0) == blue
        assert blank_canvas.get(2, 0) == Color(255, 0, 0, 254)


class TestAddOutline:
    """Tests for add_outline."""

    def test_outlines_four_neighbours(self, red, blue):
        canvas = create_canvas(3, 3)
        canvas.set(1, 1, red)
        out = add_outline(canvas.buffer, 3, 3, blue)
        outlined = create_canvas(3, 3)
        outlined.buffer[:] = out
        assert painted(outlined) == {(1, 0), (0, 1), (1, 1), (2, 1), (1, 2)}
        assert outlined.get(1, 0) == blue
        assert outlined.get(1, 1) == red

    def test_input_untouched(self, red, blue):
        canvas = create_canvas(3, 3)
        canvas.set(1, 1, red)
        before = bytes(canvas.buffer)
        add_outline(canvas.buffer, 3, 3, blue)
        assert bytes(canvas.buffer) == before
