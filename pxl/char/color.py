"""Color variants, color schemes and region recoloring for character parts.

Everything here is a pure transformation: recoloring always works on a copy
of the part.
"""

import math
from dataclasses import dataclass, replace

from pxl.char.parts import CharacterPart, PartSlot
from pxl.core.color import Color

SHADOW_FACTOR = 0.7
HIGHLIGHT_AMOUNT = 40

COLOR_CATEGORIES = ("skin", "hair", "eyes", "outfit-primary", "outfit-secondary")


@dataclass(frozen=True)
class ColorVariant:
    primary: Color
    shadow: Color
    highlight: Color


@dataclass(frozen=True)
class ColorScheme:
    skin: ColorVariant
    hair: ColorVariant
    eyes: Color
    outfit_primary: ColorVariant
    outfit_secondary: ColorVariant

    def for_category(self, category: str):
        """Scheme entry for a category name, or None when the name is unknown."""
        if category not in COLOR_CATEGORIES:
            return None
        return getattr(self, category.replace("-", "_"))


def shadow_color(color: Color) -> Color:
    return Color(
        max(0, math.floor(color.r * SHADOW_FACTOR)),
        max(0, math.floor(color.g * SHADOW_FACTOR)),
        max(0, math.floor(color.b * SHADOW_FACTOR)),
        color.a,
    )


def highlight_color(color: Color) -> Color:
    return Color(
        min(255, color.r + HIGHLIGHT_AMOUNT),
        min(255, color.g + HIGHLIGHT_AMOUNT),
        min(255, color.b + HIGHLIGHT_AMOUNT),
        color.a,
    )


def create_color_variant(primary: Color) -> ColorVariant:
    primary = Color(*primary)
    return ColorVariant(primary, shadow_color(primary), highlight_color(primary))


def create_color_scheme(skin: Color, hair: Color, eyes: Color,
                        outfit_primary: Color, outfit_secondary: Color) -> ColorScheme:
    return ColorScheme(
        skin=create_color_variant(skin),
        hair=create_color_variant(hair),
        eyes=Color(*eyes),
        outfit_primary=create_color_variant(outfit_primary),
        outfit_secondary=create_color_variant(outfit_secondary),
    )


def update_color_scheme(scheme: ColorScheme, skin=None, hair=None, eyes=None,
                        outfit_primary=None, outfit_secondary=None) -> ColorScheme:
    """Rebuild the variants for whichever base colors are given."""
    changes = {}
    for name, value in (("skin", skin), ("hair", hair), ("outfit_primary", outfit_primary),
                        ("outfit_secondary", outfit_secondary)):
        if value is not None:
            changes[name] = create_color_variant(value)
    if eyes is not None:
        changes["eyes"] = Color(*eyes)
    return replace(scheme, **changes)


def apply_color_to_part(part: CharacterPart, region: str, color: Color) -> CharacterPart:
    """Copy of ``part`` with every in-bounds pixel of ``region`` set to ``color``."""
    colored = part.clone()
    for x, y in colored.color_regions.get(region):
        if 0 <= x < colored.width and 0 <= y < colored.height:
            colored.canvas.set(x, y, color)
    return colored


def apply_variant(part: CharacterPart, variant: ColorVariant) -> CharacterPart:
    colored = apply_color_to_part(part, "primary", variant.primary)
    colored = apply_color_to_part(colored, "shadow", variant.shadow)
    return apply_color_to_part(colored, "highlight", variant.highlight)


def apply_color_scheme(part: CharacterPart, scheme: ColorScheme, category: str) -> CharacterPart:
    """Recolor ``part`` with the scheme entry for ``category``.

    Non-colorable parts and unknown categories come back as unchanged copies.
    A bare Color (the eyes entry) only touches the primary region.
    """
    if not part.colorable:
        return part.clone()
    entry = scheme.for_category(category)
    if entry is None:
        return part.clone()
    if isinstance(entry, ColorVariant):
        return apply_variant(part, entry)
    return apply_color_to_part(part, "primary", entry)


def slot_color_category(slot: PartSlot) -> str:
    if slot in (PartSlot.HAIR_BACK, PartSlot.HAIR_FRONT):
        return "hair"
    if slot is PartSlot.EYES:
        return "eyes"
    if slot in (PartSlot.TORSO, PartSlot.LEGS):
        return "outfit-primary"
    if slot in (PartSlot.ARMS_LEFT, PartSlot.ARMS_RIGHT,
                PartSlot.FEET_LEFT, PartSlot.FEET_RIGHT):
        return "outfit-secondary"
    return "skin"


COLOR_PRESETS = {
    "skin": {
        "pale": Color(255, 220, 177),
        "light": Color(241, 194, 125),
        "medium": Color(224, 172, 105),
        "dark": Color(198, 134, 66),
        "veryDark": Color(141, 85, 36),
    },
    "hair": {
        "black": Color(59, 48, 36),
        "brown": Color(101, 67, 33),
        "blonde": Color(218, 165, 32),
        "red": Color(165, 42, 42),
        "white": Color(245, 245, 220),
        "silver": Color(192, 192, 192),
    },
    "eyes": {
        "brown": Color(101, 67, 33),
        "blue": Color(74, 122, 188),
        "green": Color(34, 139, 34),
        "hazel": Color(139, 119, 101),
        "gray": Color(128, 128, 128),
    },
    "outfit": {
        "red": Color(204, 51, 51),
        "blue": Color(51, 102, 204),
        "green": Color(51, 153, 51),
        "purple": Color(153, 51, 204),
        "orange": Color(255, 140, 0),
        "black": Color(64, 64, 64),
        "white": Color(240, 240, 240),
        "gray": Color(160, 160, 160),
        "brown": Color(139, 115, 85),
    },
}


def default_color_scheme() -> ColorScheme:
    return create_color_scheme(
        COLOR_PRESETS["skin"]["light"],
        COLOR_PRESETS["hair"]["brown"],
        COLOR_PRESETS["eyes"]["brown"],
        COLOR_PRESETS["outfit"]["blue"],
        COLOR_PRESETS["outfit"]["white"],
    )
