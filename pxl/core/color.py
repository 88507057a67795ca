"""RGBA colors and hex notation."""

from typing import NamedTuple

from pxl.errors import ValidationError


class Color(NamedTuple):
    """An RGBA color, each channel 0-255. Not clamped; callers supply valid values."""

    r: int
    g: int
    b: int
    a: int = 255

    def __str__(self):
        return to_hex(self)


TRANSPARENT = Color(0, 0, 0, 0)
HEX_DIGITS = set("0123456789abcdefABCDEF")


def parse_hex(value: str) -> Color:
    """Parse #RGB, #RRGGBB or #RRGGBBAA (leading '#' optional)."""
    digits = value[1:] if value.startswith("#") else value
    if not digits or not set(digits) <= HEX_DIGITS:
        raise ValidationError(f"Invalid hex color: {value}")

    if len(digits) == 3:
        r, g, b = (int(ch * 2, 16) for ch in digits)
        return Color(r, g, b, 255)
    if len(digits) == 6:
        return Color(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16), 255)
    if len(digits) == 8:
        return Color(int(digits[0:2], 16), int(digits[2:4], 16),
                     int(digits[4:6], 16), int(digits[6:8], 16))
    raise ValidationError(
        f"Invalid hex color: {value} (expected #RGB, #RRGGBB or #RRGGBBAA)"
    )


def to_hex(color: Color) -> str:
    """Format as #rrggbb, or #rrggbbaa when not fully opaque."""
    text = f"#{color.r:02x}{color.g:02x}{color.b:02x}"
    if color.a != 255:
        text += f"{color.a:02x}"
    return text
