"""Layer stacks for multi-layer sprites.

Layers are ordered bottom-to-top; every layer buffer has the canvas's size.
"""

from dataclasses import dataclass, field

from pxl.core.blend import BlendMode, parse_blend_mode
from pxl.core.canvas import BYTES_PER_PIXEL
from pxl.core.composite import composite_buffer, flatten_layers
from pxl.errors import BufferSizeError, ValidationError

DEFAULT_LAYER_NAME = "Layer 0"
FLATTENED_LAYER_NAME = "Flattened"


@dataclass
class Layer:
    name: str
    buffer: bytearray = field(repr=False)
    opacity: int = 255
    visible: bool = True
    blend: BlendMode = BlendMode.NORMAL

    def __post_init__(self):
        self.blend = parse_blend_mode(self.blend)
        validate_opacity(self.opacity)
        if not isinstance(self.buffer, bytearray):
            self.buffer = bytearray(self.buffer)

    def clone(self) -> "Layer":
        return Layer(self.name, bytearray(self.buffer), self.opacity, self.visible, self.blend)


@dataclass
class LayeredCanvas:
    width: int
    height: int
    layers: list = field(default_factory=list)

    def __post_init__(self):
        for layer in self.layers:
            self._check_size(layer)

    @property
    def buffer_size(self) -> int:
        return self.width * self.height * BYTES_PER_PIXEL

    def _check_size(self, layer: Layer):
        if len(layer.buffer) != self.buffer_size:
            raise BufferSizeError(
                f"Layer '{layer.name}' has {len(layer.buffer)} bytes, "
                f"expected {self.buffer_size} for {self.width}x{self.height}"
            )

    def layer_names(self) -> list[str]:
        return [layer.name for layer in self.layers]

    def index_of(self, name: str) -> int:
        for i, layer in enumerate(self.layers):
            if layer.name == name:
                return i
        raise ValidationError(
            f'Layer "{name}" not found. Available layers: {", ".join(self.layer_names())}'
        )

    def find_layer(self, name: str) -> Layer:
        return self.layers[self.index_of(name)]

    def add_layer(self, name: str, opacity: int = 255, visible: bool = True,
                  blend=BlendMode.NORMAL, buffer=None) -> Layer:
        """Append a layer on top. Without ``buffer`` the layer is fully transparent."""
        if buffer is None:
            buffer = bytearray(self.buffer_size)
        layer = Layer(name, buffer, opacity, visible, blend)
        self._check_size(layer)
        self.layers.append(layer)
        return layer

    def remove_layer(self, name: str) -> Layer:
        index = self.index_of(name)
        if len(self.layers) == 1:
            raise ValidationError(
                "Cannot remove the last layer. A sprite must have at least one layer."
            )
        return self.layers.pop(index)

    def move_layer(self, name: str, index: int):
        if index < 0 or index >= len(self.layers):
            raise ValidationError(
                f"Invalid index {index}. Must be between 0 and {len(self.layers) - 1}"
            )
        layer = self.layers.pop(self.index_of(name))
        self.layers.insert(index, layer)

    def set_opacity(self, name: str, opacity: int):
        validate_opacity(opacity)
        self.find_layer(name).opacity = opacity

    def set_visible(self, name: str, visible: bool):
        self.find_layer(name).visible = visible

    def merge_layers(self, keep: str, other: str) -> Layer:
        """Composite two layers into ``keep`` and drop ``other``.

        The higher layer is blended over the lower one with its own opacity
        and blend mode, whichever of the two is kept.
        """
        if keep == other:
            raise ValidationError("Cannot merge a layer with itself")
        keep_index = self.index_of(keep)
        other_index = self.index_of(other)
        kept = self.layers[keep_index]
        dropped = self.layers[other_index]
        bottom, top = (kept, dropped) if keep_index < other_index else (dropped, kept)

        merged = bytearray(bottom.buffer)
        composite_buffer(merged, top.buffer, top.opacity, top.blend)

        kept.buffer = merged
        kept.name = f"{keep} + {other}"
        kept.opacity = min(kept.opacity, dropped.opacity)
        kept.visible = kept.visible and dropped.visible
        self.layers.pop(other_index)
        return kept

    def flatten(self) -> Layer:
        """Collapse the stack into one normal-mode layer."""
        flat = flatten_layers(self)
        layer = Layer(FLATTENED_LAYER_NAME, flat.buffer)
        self.layers = [layer]
        return layer

    def clone(self) -> "LayeredCanvas":
        return LayeredCanvas(self.width, self.height, [layer.clone() for layer in self.layers])


def validate_opacity(opacity: int):
    if not isinstance(opacity, int) or isinstance(opacity, bool) or not 0 <= opacity <= 255:
        raise ValidationError(f"Invalid opacity: {opacity} (must be 0-255)")


def create_layered_canvas(width: int, height: int) -> LayeredCanvas:
    """One transparent, visible, normal-mode layer named 'Layer 0'."""
    if width <= 0 or height <= 0:
        raise ValidationError(
            f"Invalid dimensions: width and height must be positive, got {width}x{height}"
        )
    canvas = LayeredCanvas(width, height)
    canvas.add_layer(DEFAULT_LAYER_NAME)
    return canvas
