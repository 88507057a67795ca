"""Characters: build, height, equipped parts and colors, plus their JSON form.

Every update returns a new Character; the original is left untouched.
"""

import json
import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from pxl.char.assembly import CharacterAssembly, assemble_character
from pxl.char.body import (BuildType, HeightType, create_base_body, parse_build_type,
                           parse_height_type)
from pxl.char.color import ColorScheme, ColorVariant, default_color_scheme, update_color_scheme
from pxl.char.parts import (CharacterPart, ColorRegions, PartSlot, parse_part_slot,
                            part_for_direction)
from pxl.char.view import ALL_VIEW_DIRECTIONS, parse_view_direction
from pxl.core.color import Color
from pxl.errors import ValidationError
from pxl.export.sheet import Frame

CHARACTER_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


@dataclass
class Character:
    id: str
    build: BuildType
    height: HeightType
    equipped_parts: dict = field(default_factory=dict)
    color_scheme: ColorScheme = field(default_factory=default_color_scheme)
    created: datetime = None
    last_modified: datetime = None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def validate_character_id(character_id: str):
    if not isinstance(character_id, str) or not CHARACTER_ID_PATTERN.match(character_id):
        raise ValidationError(
            f"Invalid character ID: {character_id}. "
            "Use only letters, numbers, hyphens and underscores"
        )


def create_character(character_id: str, build="normal", height="average") -> Character:
    validate_character_id(character_id)
    now = _now()
    return Character(
        id=character_id,
        build=parse_build_type(build),
        height=parse_height_type(height),
        equipped_parts={},
        color_scheme=default_color_scheme(),
        created=now,
        last_modified=now,
    )


def equip_part(character: Character, slot, part: CharacterPart) -> Character:
    slot = parse_part_slot(slot)
    if part.slot is not slot:
        raise ValidationError(
            f"Part slot mismatch: part {part.id} is for {part.slot.value}, not {slot.value}"
        )
    parts = dict(character.equipped_parts)
    parts[slot] = part.clone()
    return replace(character, equipped_parts=parts, last_modified=_now())


def unequip_part(character: Character, slot) -> Character:
    slot = parse_part_slot(slot)
    parts = {k: v for k, v in character.equipped_parts.items() if k is not slot}
    return replace(character, equipped_parts=parts, last_modified=_now())


def set_character_colors(character: Character, **colors) -> Character:
    """Replace any of skin, hair, eyes, outfit_primary, outfit_secondary."""
    scheme = update_color_scheme(character.color_scheme, **colors)
    return replace(character, color_scheme=scheme, last_modified=_now())


# ─── Rendering ──────────────────────────────────────────────────────────────


def render_character(character: Character, direction="front") -> CharacterAssembly:
    """Assemble the character as seen from ``direction``.

    Generated parts are redrawn for the view; custom parts are used as stored.
    """
    direction = parse_view_direction(direction)
    body = create_base_body(character.build, character.height, direction)
    parts = {
        slot: part_for_direction(part, direction)
        for slot, part in character.equipped_parts.items()
    }
    return assemble_character(body, parts, character.color_scheme, direction)


def render_turnaround(character: Character, directions=ALL_VIEW_DIRECTIONS) -> list[Frame]:
    frames = []
    for direction in directions:
        direction = parse_view_direction(direction)
        assembly = render_character(character, direction)
        frames.append(Frame(assembly.buffer, assembly.width, assembly.height,
                            f"{character.id}_{direction.value}"))
    return frames


# ─── Serialization ──────────────────────────────────────────────────────────


def _color_to_dict(color: Color) -> dict:
    return {"r": color.r, "g": color.g, "b": color.b, "a": color.a}


def _color_from_dict(data: dict) -> Color:
    return Color(int(data["r"]), int(data["g"]), int(data["b"]), int(data["a"]))


def _variant_to_dict(variant: ColorVariant) -> dict:
    return {
        "primary": _color_to_dict(variant.primary),
        "shadow": _color_to_dict(variant.shadow),
        "highlight": _color_to_dict(variant.highlight),
    }


def _variant_from_dict(data: dict) -> ColorVariant:
    return ColorVariant(
        _color_from_dict(data["primary"]),
        _color_from_dict(data["shadow"]),
        _color_from_dict(data["highlight"]),
    )


def scheme_to_dict(scheme: ColorScheme) -> dict:
    return {
        "skin": _variant_to_dict(scheme.skin),
        "hair": _variant_to_dict(scheme.hair),
        "eyes": _color_to_dict(scheme.eyes),
        "outfitPrimary": _variant_to_dict(scheme.outfit_primary),
        "outfitSecondary": _variant_to_dict(scheme.outfit_secondary),
    }


def scheme_from_dict(data: dict) -> ColorScheme:
    return ColorScheme(
        skin=_variant_from_dict(data["skin"]),
        hair=_variant_from_dict(data["hair"]),
        eyes=_color_from_dict(data["eyes"]),
        outfit_primary=_variant_from_dict(data["outfitPrimary"]),
        outfit_secondary=_variant_from_dict(data["outfitSecondary"]),
    )


def part_to_dict(part: CharacterPart) -> dict:
    regions = {
        "primary": [[x, y] for x, y in part.color_regions.primary],
        "shadow": [[x, y] for x, y in part.color_regions.shadow],
    }
    if part.color_regions.highlight is not None:
        regions["highlight"] = [[x, y] for x, y in part.color_regions.highlight]
    return {
        "id": part.id,
        "slot": part.slot.value,
        "width": part.width,
        "height": part.height,
        "buffer": list(part.buffer),
        "colorable": part.colorable,
        "colorRegions": regions,
        "compatibleBodies": list(part.compatible_bodies),
    }


def part_from_dict(data: dict) -> CharacterPart:
    regions = data["colorRegions"]
    highlight = regions.get("highlight")
    return CharacterPart(
        id=str(data["id"]),
        slot=parse_part_slot(data["slot"]),
        width=int(data["width"]),
        height=int(data["height"]),
        buffer=bytearray(data["buffer"]),
        colorable=bool(data["colorable"]),
        color_regions=ColorRegions(
            [(x, y) for x, y in regions["primary"]],
            [(x, y) for x, y in regions["shadow"]],
            None if highlight is None else [(x, y) for x, y in highlight],
        ),
        compatible_bodies=list(data.get("compatibleBodies", ["all"])),
    )


def _parse_datetime(text: str) -> datetime:
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def save_character(character: Character) -> str:
    data = {
        "id": character.id,
        "build": character.build.value,
        "height": character.height.value,
        "equippedParts": {
            slot.value: part_to_dict(part)
            for slot, part in sorted(character.equipped_parts.items(), key=lambda kv: kv[0].value)
        },
        "colorScheme": scheme_to_dict(character.color_scheme),
        "created": character.created.isoformat(),
        "lastModified": character.last_modified.isoformat(),
    }
    return json.dumps(data, indent=2) + "\n"


def load_character(text: str) -> Character:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON format: {e}") from e

    try:
        validate_character_id(data["id"])
        parts = {}
        for slot, part_data in data["equippedParts"].items():
            slot = parse_part_slot(slot)
            parts[slot] = part_from_dict(part_data)
        return Character(
            id=data["id"],
            build=parse_build_type(data["build"]),
            height=parse_height_type(data["height"]),
            equipped_parts=parts,
            color_scheme=scheme_from_dict(data["colorScheme"]),
            created=_parse_datetime(data["created"]),
            last_modified=_parse_datetime(data["lastModified"]),
        )
    except ValidationError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ValidationError(f"Invalid character data structure: {e}") from e
