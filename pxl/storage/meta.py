"""Layered sprites on disk.

A sprite stored at base path ``hero`` is made of:

    hero.meta.json      width, height and per-layer name/opacity/visible/blend
    hero.layer-0.png    one PNG per layer, bottom first
    hero.png            the flattened composite
"""

import json
import logging
from pathlib import Path

from pxl.core.blend import BLEND_MODES
from pxl.core.canvas import Canvas
from pxl.core.composite import flatten_layers
from pxl.core.layer import Layer, LayeredCanvas
from pxl.errors import BufferSizeError, ValidationError
from pxl.storage.png import read_png, write_png

logger = logging.getLogger(__name__)


def _base(path) -> Path:
    """Accept 'hero', 'hero.png' or 'hero.meta.json' for the same sprite."""
    path = Path(path)
    name = path.name
    for suffix in (".meta.json", ".png"):
        if name.endswith(suffix):
            return path.with_name(name[: -len(suffix)])
    return path


def meta_path(path) -> Path:
    base = _base(path)
    return base.with_name(base.name + ".meta.json")


def layer_path(path, index: int) -> Path:
    base = _base(path)
    return base.with_name(f"{base.name}.layer-{index}.png")


def flat_path(path) -> Path:
    base = _base(path)
    return base.with_name(base.name + ".png")


def is_layered(path) -> bool:
    return meta_path(path).exists()


def validate_meta(data) -> dict:
    if (not isinstance(data, dict)
            or not isinstance(data.get("width"), int)
            or not isinstance(data.get("height"), int)
            or not isinstance(data.get("layers"), list)):
        raise ValidationError("Invalid meta file format: missing width, height, or layers")
    for layer in data["layers"]:
        if (not isinstance(layer, dict)
                or not isinstance(layer.get("name"), str)
                or not isinstance(layer.get("opacity"), int)
                or not isinstance(layer.get("visible"), bool)
                or not isinstance(layer.get("blend"), str)):
            raise ValidationError("Invalid meta file format: invalid layer structure")
        if layer["blend"] not in BLEND_MODES:
            raise ValidationError(f"Invalid blend mode: {layer['blend']}")
        if not 0 <= layer["opacity"] <= 255:
            raise ValidationError(f"Invalid opacity: {layer['opacity']} (must be 0-255)")
    return data


def read_meta(path) -> dict:
    path = meta_path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Failed to read meta file {path}: {e}") from e
    return validate_meta(data)


def write_meta(path, data: dict):
    path = meta_path(path)
    validate_meta(data)
    with open(path, "w", newline="\n") as f:
        json.dump(data, f, indent=2)
        f.write("\n")


def read_layered_sprite(path) -> LayeredCanvas:
    meta = read_meta(path)
    canvas = LayeredCanvas(meta["width"], meta["height"])
    for i, info in enumerate(meta["layers"]):
        image = read_png(layer_path(path, i))
        if (image.width, image.height) != (canvas.width, canvas.height):
            raise BufferSizeError(
                f"Layer {i} is {image.width}x{image.height}, "
                f"expected {canvas.width}x{canvas.height}"
            )
        canvas.add_layer(info["name"], info["opacity"], info["visible"], info["blend"],
                         buffer=image.buffer)
    logger.debug("read layered sprite %s (%d layers)", _base(path), len(canvas.layers))
    return canvas


def write_layered_sprite(path, canvas: LayeredCanvas):
    """Write metadata, every layer PNG and the flattened PNG; drop stale layer files."""
    _base(path).parent.mkdir(parents=True, exist_ok=True)
    meta = {
        "width": canvas.width,
        "height": canvas.height,
        "layers": [_layer_meta(layer) for layer in canvas.layers],
    }
    write_meta(path, meta)
    for i, layer in enumerate(canvas.layers):
        write_png(Canvas(canvas.width, canvas.height, layer.buffer), layer_path(path, i))
    write_png(flatten_layers(canvas), flat_path(path))

    stale = len(canvas.layers)
    while layer_path(path, stale).exists():
        layer_path(path, stale).unlink()
        logger.debug("removed stale %s", layer_path(path, stale))
        stale += 1


def _layer_meta(layer: Layer) -> dict:
    return {
        "name": layer.name,
        "opacity": layer.opacity,
        "visible": layer.visible,
        "blend": layer.blend.value,
    }
