"""Tests for layer stacks."""

import pytest

from pxl.core.blend import BlendMode
from pxl.core.color import Color
from pxl.core.layer import (DEFAULT_LAYER_NAME, FLATTENED_LAYER_NAME, Layer, LayeredCanvas,
                            create_layered_canvas)
from pxl.errors import BufferSizeError, ValidationError


class TestCreateLayeredCanvas:
    """Tests for new layer stacks."""

    def test_starts_with_one_default_layer(self):
        canvas = create_layered_canvas(3, 2)
        assert canvas.layer_names() == [DEFAULT_LAYER_NAME]
        layer = canvas.layers[0]
        assert layer.opacity == 255
        assert layer.visible
        assert layer.blend is BlendMode.NORMAL
        assert layer.buffer == bytearray(3 * 2 * 4)

    def test_rejects_bad_size(self):
        with pytest.raises(ValidationError):
            create_layered_canvas(0, 2)


class TestLayerValidation:
    """Tests for Layer and add_layer checks."""

    def test_blend_name_is_parsed(self):
        layer = Layer("x", bytearray(4), blend="screen")
        assert layer.blend is BlendMode.SCREEN

    def test_invalid_blend(self):
        with pytest.raises(ValidationError, match="Invalid blend mode"):
            Layer("x", bytearray(4), blend="dodge")

    @pytest.mark.parametrize("opacity", [-1, 256])
    def test_invalid_opacity(self, opacity):
        with pytest.raises(ValidationError, match="Invalid opacity"):
            Layer("x", bytearray(4), opacity=opacity)

    def test_wrong_buffer_size(self):
        canvas = create_layered_canvas(2, 2)
        with pytest.raises(BufferSizeError):
            canvas.add_layer("small", buffer=bytearray(4))


class TestLayerOperations:
    """Tests for find, remove, move, opacity and visibility."""

    def test_find_missing_lists_layers(self, two_layer_canvas):
        with pytest.raises(ValidationError) as exc:
            two_layer_canvas.find_layer("nope")
        assert str(exc.value) == 'Layer "nope" not found. Available layers: Layer 0, top'

    def test_remove(self, two_layer_canvas):
        removed = two_layer_canvas.remove_layer("top")
        assert removed.name == "top"
        assert two_layer_canvas.layer_names() == [DEFAULT_LAYER_NAME]

    def test_cannot_remove_last_layer(self):
        canvas = create_layered_canvas(1, 1)
        with pytest.raises(ValidationError, match="Cannot remove the last layer"):
            canvas.remove_layer(DEFAULT_LAYER_NAME)

    def test_move(self, two_layer_canvas):
        two_layer_canvas.move_layer("top", 0)
        assert two_layer_canvas.layer_names() == ["top", DEFAULT_LAYER_NAME]

    def test_move_out_of_range(self, two_layer_canvas):
        with pytest.raises(ValidationError, match="Invalid index 2"):
            two_layer_canvas.move_layer("top", 2)

    def test_set_opacity_and_visibility(self, two_layer_canvas):
        two_layer_canvas.set_opacity("top", 10)
        two_layer_canvas.set_visible("top", False)
        layer = two_layer_canvas.find_layer("top")
        assert layer.opacity == 10
        assert not layer.visible

    def test_set_opacity_out_of_range(self, two_layer_canvas):
        with pytest.raises(ValidationError):
            two_layer_canvas.set_opacity("top", 300)

    def test_clone_is_deep(self, two_layer_canvas):
        copy = two_layer_canvas.clone()
        copy.layers[0].buffer[0] = 1
        assert two_layer_canvas.layers[0].buffer[0] == 255


class TestMergeAndFlatten:
    """Tests for merge_layers and flatten."""

    def test_merge_composites_top_over_bottom(self, two_layer_canvas, blue):
        top = two_layer_canvas.find_layer("top")
        top.buffer[0:4] = bytes(blue)
        merged = two_layer_canvas.merge_layers(DEFAULT_LAYER_NAME, "top")

        assert merged.name == "Layer 0 + top"
        assert two_layer_canvas.layer_names() == ["Layer 0 + top"]
        assert merged.buffer[0:4] == bytes(blue)
        assert merged.buffer[4:8] == bytes((255, 0, 0, 255))

    def test_merge_keeps_lower_opacity_and_visibility(self, two_layer_canvas):
        two_layer_canvas.set_opacity("top", 40)
        two_layer_canvas.set_visible("top", False)
        merged = two_layer_canvas.merge_layers("top", DEFAULT_LAYER_NAME)
        assert merged.name == "top + Layer 0"
        assert merged.opacity == 40
        assert not merged.visible

    def test_merge_with_itself(self, two_layer_canvas):
        with pytest.raises(ValidationError, match="itself"):
            two_layer_canvas.merge_layers("top", "top")

    def test_flatten_collapses_to_one_layer(self, two_layer_canvas, red):
        hidden = two_layer_canvas.find_layer("top")
        hidden.buffer[:] = bytes(Color(0, 255, 0)) * 4
        hidden.visible = False

        layer = two_layer_canvas.flatten()
        assert two_layer_canvas.layer_names() == [FLATTENED_LAYER_NAME]
        assert layer.buffer == bytearray(bytes(red) * 4)
        assert layer.blend is BlendMode.NORMAL


class TestLayeredCanvasInit:
    def test_layer_sizes_checked(self):
        with pytest.raises(BufferSizeError):
            LayeredCanvas(2, 2, [Layer("x", bytearray(4))])
