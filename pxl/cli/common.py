"""Shared CLI helpers: error exit, argument parsing and sprite loading."""

import json
import re
import sys
from pathlib import Path

from pxl.core.canvas import Canvas
from pxl.core.color import Color, parse_hex
from pxl.core.composite import flatten_layers
from pxl.errors import ValidationError
from pxl.storage.meta import is_layered, read_layered_sprite, write_layered_sprite
from pxl.storage.png import read_png, write_png
from pxl.storage.project import read_project

SIZE_PATTERN = re.compile(r"^(\d+)x(\d+)$")
POINT_PATTERN = re.compile(r"^(-?\d+),(-?\d+)$")


def die(msg):
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(1)


def print_json(data):
    print(json.dumps(data, indent=2))


def write_json(path, data):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="\n") as f:
        json.dump(data, f, indent=2)
        f.write("\n")


def parse_size(text: str) -> tuple[int, int]:
    match = SIZE_PATTERN.match(text)
    if not match:
        raise ValidationError(
            f'Invalid size format: "{text}". Expected format: WIDTHxHEIGHT (e.g., 8x6)'
        )
    width, height = int(match.group(1)), int(match.group(2))
    if width <= 0 or height <= 0:
        raise ValidationError(
            f"Invalid dimensions: width and height must be positive numbers, got {width}x{height}"
        )
    return width, height


def parse_point(text: str) -> tuple[int, int]:
    match = POINT_PATTERN.match(text.strip())
    if not match:
        raise ValidationError(f'Invalid coordinates: "{text}". Expected format: X,Y (e.g., 3,4)')
    return int(match.group(1)), int(match.group(2))


def parse_color(text: str) -> Color:
    return parse_hex(text)


def parse_bool(text: str) -> bool:
    lowered = text.lower()
    if lowered not in ("true", "false"):
        raise ValidationError(f'Must be "true" or "false", got "{text}"')
    return lowered == "true"


def open_drawable(path, layer_name: str | None = None):
    """Load a sprite for editing. Returns (canvas, save).

    Layered sprites edit the named layer (top layer by default); plain PNGs
    edit the image itself. ``save()`` writes the change back.
    """
    if is_layered(path):
        sprite = read_layered_sprite(path)
        layer = sprite.find_layer(layer_name) if layer_name else sprite.layers[-1]
        canvas = Canvas(sprite.width, sprite.height, layer.buffer)
        return canvas, lambda: write_layered_sprite(path, sprite)

    if layer_name:
        raise ValidationError(f"{path} is not a layered sprite; --layer needs a .meta.json")
    path = Path(path)
    if not path.exists():
        raise ValidationError(f"PNG file not found: {path}")
    canvas = read_png(path)
    return canvas, lambda: write_png(canvas, path)


def load_canvas(path) -> Canvas:
    """Flattened pixels of a plain or layered sprite."""
    if is_layered(path):
        return flatten_layers(read_layered_sprite(path))
    path = Path(path)
    if not path.exists():
        raise ValidationError(f"PNG file not found: {path}")
    return read_png(path)


def export_defaults() -> dict:
    """The export section of ./pxl.json, or an empty dict outside a project."""
    if not Path("pxl.json").exists():
        return {}
    return read_project(".").get("export") or {}
