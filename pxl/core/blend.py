"""Per-channel blend modes."""

import math
from enum import Enum

from pxl.errors import ValidationError


class BlendMode(str, Enum):
    NORMAL = "normal"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    OVERLAY = "overlay"
    ADD = "add"


BLEND_MODES = tuple(mode.value for mode in BlendMode)


def parse_blend_mode(value) -> BlendMode:
    if isinstance(value, BlendMode):
        return value
    try:
        return BlendMode(value)
    except ValueError:
        raise ValidationError(
            f"Invalid blend mode: {value}. Valid modes: {', '.join(BLEND_MODES)}"
        ) from None


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (Python's round() is banker's)."""
    return math.floor(value + 0.5)


def apply_blend_mode(base: int, blend: int, mode: BlendMode) -> int:
    """Blend one channel of ``blend`` onto ``base``; result stays in 0-255."""
    if mode is BlendMode.NORMAL:
        return blend
    if mode is BlendMode.MULTIPLY:
        return round_half_up(base * blend / 255)
    if mode is BlendMode.SCREEN:
        return round_half_up(255 - (255 - base) * (255 - blend) / 255)
    if mode is BlendMode.OVERLAY:
        if base < 128:
            return round_half_up(2 * base * blend / 255)
        return round_half_up(255 - 2 * (255 - base) * (255 - blend) / 255)
    if mode is BlendMode.ADD:
        return min(base + blend, 255)
    raise ValidationError(f"Invalid blend mode: {mode}")
