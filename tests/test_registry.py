"""Tests for the part registry."""

from typing import get_type_hints

import pytest

from pxl.char.parts import CharacterPart, PartSlot, create_eye_part, create_hair_part, create_torso_part
from pxl.char.registry import PartRegistry, builtin_registry
from pxl.errors import ValidationError


@pytest.fixture
def registry():
    reg = PartRegistry()
    reg.register(create_torso_part("armor"))
    reg.register(create_hair_part("spiky"))
    reg.register(create_eye_part("anime"))
    return reg


class TestPartRegistry:
    """Tests for PartRegistry."""

    def test_duplicate_id(self, registry):
        with pytest.raises(ValidationError, match="Part with id torso-armor already exists"):
            registry.register(create_torso_part("armor"))

    def test_get_returns_copy(self, registry):
        part = registry.get("hair-spiky")
        part.buffer[:] = bytes(len(part.buffer))
        assert registry.get("hair-spiky").buffer == create_hair_part("spiky").buffer

    def test_get_missing(self, registry):
        assert registry.get("hair-mohawk") is None

    def test_register_stores_copy(self):
        reg = PartRegistry()
        part = create_eye_part("round")
        reg.register(part)
        part.buffer[:] = bytes([7]) * len(part.buffer)
        assert reg.get("eyes-round").buffer == create_eye_part("round").buffer

    def test_list_sorted_by_id(self, registry):
        assert [p.id for p in registry.list()] == ["eyes-anime", "hair-spiky", "torso-armor"]

    def test_get_by_slot(self, registry):
        assert [p.id for p in registry.get_by_slot("torso")] == ["torso-armor"]
        assert registry.get_by_slot(PartSlot.NOSE) == []

    def test_search(self, registry):
        assert [p.id for p in registry.search("SPIK")] == ["hair-spiky"]
        assert [p.id for p in registry.search("eyes")] == ["eyes-anime"]

    def test_query_annotations_resolve_to_builtin_list(self):
        for method in (PartRegistry.get_by_slot, PartRegistry.search):
            assert get_type_hints(method)["return"] == list[CharacterPart]

    def test_unregister(self, registry):
        assert registry.unregister("hair-spiky")
        assert not registry.unregister("hair-spiky")
        assert "hair-spiky" not in registry
        assert len(registry) == 2


class TestBuiltinRegistry:
    def test_holds_every_generated_style(self):
        registry = builtin_registry()
        assert len(registry) == 9
        assert len(registry.get_by_slot("hair-front")) == 3
