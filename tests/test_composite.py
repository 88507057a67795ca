"""Tests for alpha compositing and layer flattening."""

from types import SimpleNamespace

import pytest

from pxl.core.blend import BlendMode
from pxl.core.canvas import Canvas
from pxl.core.color import TRANSPARENT, Color
from pxl.core.composite import alpha_blend, composite_buffer, composite_onto, flatten_layers
from pxl.core.layer import Layer, LayeredCanvas
from pxl.errors import BufferSizeError


class TestAlphaBlend:
    """Tests for alpha_blend."""

    @pytest.mark.parametrize("dst", [
        [0, 0, 0, 0],
        [10, 20, 30, 200],
        [255, 255, 255, 255],
    ])
    def test_opaque_normal_overwrites(self, dst):
        """An opaque source at full opacity replaces any destination."""
        dst = bytearray(dst)
        alpha_blend(dst, bytearray([1, 2, 3, 255]))
        assert list(dst) == [1, 2, 3, 255]

    def test_transparent_source_is_noop(self):
        """Source alpha 0 leaves the destination byte-for-byte unchanged."""
        dst = bytearray([9, 8, 7, 6])
        alpha_blend(dst, bytearray([255, 255, 255, 0]))
        assert list(dst) == [9, 8, 7, 6]

    def test_zero_opacity_is_noop(self):
        dst = bytearray([9, 8, 7, 6])
        alpha_blend(dst, bytearray([255, 255, 255, 255]), opacity=0)
        assert list(dst) == [9, 8, 7, 6]

    def test_half_red_over_opaque_blue(self):
        dst = bytearray([0, 0, 255, 255])
        alpha_blend(dst, bytearray([255, 0, 0, 128]))
        assert list(dst) == [128, 0, 127, 255]

    def test_half_red_over_transparent(self):
        """Over nothing, the source color survives and its alpha becomes the result."""
        dst = bytearray(4)
        alpha_blend(dst, bytearray([255, 0, 0, 128]))
        assert list(dst) == [255, 0, 0, 128]

    def test_opacity_scales_source_alpha(self):
        dst = bytearray(4)
        alpha_blend(dst, bytearray([255, 0, 0, 255]), opacity=128)
        assert list(dst) == [255, 0, 0, 128]

    def test_multiply_over_opaque(self):
        dst = bytearray([200, 100, 50, 255])
        alpha_blend(dst, bytearray([128, 128, 128, 255]), mode=BlendMode.MULTIPLY)
        assert list(dst) == [100, 50, 25, 255]

    def test_short_buffer_rejected(self):
        with pytest.raises(BufferSizeError):
            alpha_blend(bytearray(3), bytearray(4))

    @pytest.mark.parametrize("mode", list(BlendMode))
    def test_mode_never_changes_alpha(self, mode):
        """Translucent src over translucent dst at partial opacity: only colour depends on mode."""
        dst = bytearray([40, 80, 120, 100])
        alpha_blend(dst, bytearray([200, 100, 50, 128]), opacity=180, mode=mode)
        reference = bytearray([40, 80, 120, 100])
        alpha_blend(reference, bytearray([200, 100, 50, 128]), opacity=180)
        assert dst[3] == reference[3] == 155


class TestCompositeBuffer:
    """Tests for whole-buffer compositing."""

    def test_size_mismatch(self):
        with pytest.raises(BufferSizeError):
            composite_buffer(bytearray(8), bytearray(4))

    def test_blends_each_pixel(self):
        dst = bytearray([0, 0, 0, 0, 0, 0, 255, 255])
        composite_buffer(dst, bytearray([255, 0, 0, 255, 0, 0, 0, 0]))
        assert list(dst) == [255, 0, 0, 255, 0, 0, 255, 255]


class TestCompositeOnto:
    """Tests for positioned, clipped compositing."""

    def test_clips_at_edges(self, red):
        dst = Canvas(3, 3)
        src = Canvas(2, 2, bytes(red) * 4)
        composite_onto(dst, src, 2, 2)
        assert dst.get(2, 2) == red
        assert dst.get(1, 1) == TRANSPARENT

    def test_negative_offset(self, red):
        dst = Canvas(3, 3)
        src = Canvas(2, 2, bytes(red) * 4)
        composite_onto(dst, src, -1, -1)
        assert dst.get(0, 0) == red
        assert dst.get(1, 0) == TRANSPARENT


class TestFlattenLayers:
    """Tests for flatten_layers."""

    def test_single_visible_opaque_layer_wins(self, red, green):
        """With one visible opaque layer the output is exactly that layer."""
        canvas = LayeredCanvas(2, 2)
        canvas.add_layer("hidden", buffer=bytearray(bytes(green) * 4), visible=False)
        canvas.add_layer("shown", buffer=bytearray(bytes(red) * 4))
        canvas.add_layer("hidden too", buffer=bytearray(bytes(green) * 4), visible=False)
        assert flatten_layers(canvas).buffer == bytearray(bytes(red) * 4)

    def test_top_layer_over_bottom(self, red, blue):
        canvas = LayeredCanvas(1, 1)
        canvas.add_layer("bottom", buffer=bytearray(bytes(red)))
        canvas.add_layer("top", buffer=bytearray(bytes(blue)))
        assert flatten_layers(canvas).get(0, 0) == blue

    def test_layer_opacity_applies(self, red):
        canvas = LayeredCanvas(1, 1)
        canvas.add_layer("faded", opacity=128, buffer=bytearray(bytes(red)))
        assert flatten_layers(canvas).get(0, 0) == Color(255, 0, 0, 128)

    def test_layers_are_not_modified(self, red, blue):
        canvas = LayeredCanvas(1, 1)
        canvas.add_layer("bottom", buffer=bytearray(bytes(red)))
        canvas.add_layer("top", opacity=100, buffer=bytearray(bytes(blue)))
        flatten_layers(canvas)
        assert canvas.layers[0].buffer == bytearray(bytes(red))
        assert canvas.layers[1].buffer == bytearray(bytes(blue))

    def test_empty_stack_is_transparent(self):
        assert flatten_layers(LayeredCanvas(2, 1)).buffer == bytearray(8)

    def test_wrong_size_layer(self):
        stack = SimpleNamespace(width=2, height=2, layers=[Layer("bad", bytearray(4))])
        with pytest.raises(BufferSizeError):
            flatten_layers(stack)
