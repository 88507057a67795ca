"""In-memory catalog of character parts.

Parts go in and come out as copies, so nothing outside the registry can alter
a stored part.
"""

from pxl.char.parts import (CharacterPart, EyeStyle, HairStyle, TorsoStyle, create_eye_part,
                            create_hair_part, create_torso_part, parse_part_slot)
from pxl.errors import ValidationError


class PartRegistry:
    def __init__(self):
        self._parts: dict[str, CharacterPart] = {}

    def __len__(self):
        return len(self._parts)

    def __contains__(self, part_id):
        return part_id in self._parts

    def register(self, part: CharacterPart):
        if part.id in self._parts:
            raise ValidationError(f"Part with id {part.id} already exists")
        self._parts[part.id] = part.clone()

    def unregister(self, part_id: str) -> bool:
        return self._parts.pop(part_id, None) is not None

    def get(self, part_id: str) -> CharacterPart | None:
        part = self._parts.get(part_id)
        return part.clone() if part is not None else None

    def list(self) -> list[CharacterPart]:
        """Copies of every part, sorted by id."""
        return [self._parts[key].clone() for key in sorted(self._parts)]

    def get_by_slot(self, slot) -> "list[CharacterPart]":
        slot = parse_part_slot(slot)
        return [part for part in self.list() if part.slot is slot]

    def search(self, query: str) -> "list[CharacterPart]":
        """Case-insensitive substring match on part id and slot."""
        needle = query.lower()
        return [
            part for part in self.list()
            if needle in part.id.lower() or needle in part.slot.value
        ]


def builtin_registry() -> PartRegistry:
    """Registry holding the front view of every generated part."""
    registry = PartRegistry()
    for hair in HairStyle:
        registry.register(create_hair_part(hair))
    for eyes in EyeStyle:
        registry.register(create_eye_part(eyes))
    for torso in TorsoStyle:
        registry.register(create_torso_part(torso))
    return registry
