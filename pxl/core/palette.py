"""Palettes: JSON form, extraction, nearest-color remapping and presets."""

import json
from dataclasses import dataclass, field

from pxl.core.canvas import BYTES_PER_PIXEL
from pxl.core.color import Color
from pxl.errors import ValidationError


@dataclass
class Palette:
    name: str
    colors: list = field(default_factory=list)


def palette_to_json(palette: Palette) -> str:
    data = {
        "name": palette.name,
        "colors": [[c.r, c.g, c.b, c.a] for c in palette.colors],
    }
    return json.dumps(data, indent=2) + "\n"


def palette_from_json(text: str) -> Palette:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid palette JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("name"), str):
        raise ValidationError("Invalid palette JSON: name must be a string")
    if not isinstance(data.get("colors"), list):
        raise ValidationError("Invalid palette JSON: colors must be an array")

    colors = []
    for entry in data["colors"]:
        if not isinstance(entry, list) or len(entry) != 4:
            raise ValidationError(
                "Invalid palette JSON: each color must be an array of 4 numbers [r,g,b,a]"
            )
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in entry):
            raise ValidationError("Invalid palette JSON: color components must be numbers")
        colors.append(Color(*entry))
    return Palette(data["name"], colors)


def extract_palette(buffer) -> list[Color]:
    """Unique RGBA colors in the order they first appear."""
    seen = {}
    for i in range(0, len(buffer), BYTES_PER_PIXEL):
        key = bytes(buffer[i:i + 4])
        if key not in seen:
            seen[key] = Color(*key)
    return list(seen.values())


def _distance_sq(a: Color, b: Color) -> int:
    return (a.r - b.r) ** 2 + (a.g - b.g) ** 2 + (a.b - b.b) ** 2


def nearest_color(color: Color, colors: list[Color]) -> Color:
    """Closest palette entry by RGB distance; the first entry wins ties."""
    best = colors[0]
    best_dist = _distance_sq(color, best)
    for candidate in colors[1:]:
        dist = _distance_sq(color, candidate)
        if dist < best_dist:
            best, best_dist = candidate, dist
    return best


def remap_to_palette(buffer, colors: list[Color]) -> bytearray:
    """Copy of ``buffer`` with every pixel snapped to ``colors``, alpha preserved."""
    out = bytearray(buffer)
    if not colors:
        return out

    cache = {}
    for i in range(0, len(out), BYTES_PER_PIXEL):
        key = bytes(out[i:i + 3])
        if key not in cache:
            cache[key] = nearest_color(Color(*key, 255), colors)
        match = cache[key]
        out[i], out[i + 1], out[i + 2] = match.r, match.g, match.b
    return out


def _rgb(*triples) -> list[Color]:
    return [Color(r, g, b, 255) for r, g, b in triples]


PRESET_PALETTES = {
    "gameboy": Palette("GameBoy", _rgb(
        (15, 56, 15), (48, 98, 48), (139, 172, 15), (155, 188, 15),
    )),
    "pico8": Palette("PICO-8", _rgb(
        (0, 0, 0), (29, 43, 83), (126, 37, 83), (0, 135, 81),
        (171, 82, 54), (95, 87, 79), (194, 195, 199), (255, 241, 232),
        (255, 0, 77), (255, 163, 0), (255, 236, 39), (0, 228, 54),
        (41, 173, 255), (131, 118, 156), (255, 119, 168), (255, 204, 170),
    )),
    "nes": Palette("NES", _rgb(
        (84, 84, 84), (0, 30, 116), (8, 16, 144), (48, 0, 136),
        (68, 0, 100), (92, 0, 48), (84, 4, 0), (60, 24, 0),
        (32, 42, 0), (8, 58, 0), (0, 64, 0), (0, 60, 0),
        (0, 50, 60), (0, 0, 0), (152, 150, 152), (8, 76, 196),
        (48, 50, 236), (92, 30, 228), (136, 20, 176), (160, 20, 100),
        (152, 34, 32), (120, 60, 0), (84, 90, 0), (40, 114, 0),
        (8, 124, 0), (0, 118, 40), (0, 102, 120), (236, 238, 236),
        (76, 154, 236), (120, 124, 236), (176, 98, 236), (228, 84, 236),
        (236, 88, 180), (236, 106, 100), (212, 136, 32), (160, 170, 0),
        (116, 196, 0), (76, 208, 32), (56, 204, 108), (56, 180, 204),
        (60, 60, 60), (168, 204, 236), (188, 188, 236), (212, 178, 236),
        (236, 174, 236), (236, 174, 212), (236, 180, 176), (228, 196, 144),
        (204, 210, 120), (180, 222, 120), (168, 226, 144), (152, 226, 180),
        (160, 214, 228), (160, 162, 160),
    )),
    "endesga32": Palette("Endesga-32", _rgb(
        (190, 38, 51), (224, 111, 139), (73, 60, 43), (164, 100, 34),
        (235, 137, 49), (247, 226, 107), (47, 72, 78), (68, 137, 115),
        (163, 206, 39), (27, 38, 50), (0, 87, 132), (49, 162, 242),
        (178, 220, 239), (68, 36, 52), (133, 76, 48), (254, 174, 52),
        (254, 231, 97), (99, 199, 77), (62, 137, 72), (38, 92, 66),
        (25, 60, 62), (18, 78, 137), (0, 149, 233), (44, 232, 245),
        (255, 255, 255), (192, 203, 220), (139, 155, 180), (90, 105, 136),
        (58, 68, 102), (38, 43, 68), (24, 20, 37), (255, 0, 68),
    )),
}


def get_preset(name: str) -> Palette:
    if name not in PRESET_PALETTES:
        raise ValidationError(
            f"Unknown palette preset: {name}. Valid presets: {', '.join(PRESET_PALETTES)}"
        )
    preset = PRESET_PALETTES[name]
    return Palette(preset.name, list(preset.colors))
