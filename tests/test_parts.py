"""Tests for the hair, eye and torso generators."""

import pytest

from pxl.char.parts import (HAIR, IRIS, PART_SIZES, CharacterPart, EyeStyle, HairStyle,
                            PartSlot, TorsoStyle, create_eye_part, create_hair_part, create_part,
                            create_torso_part, parse_hair_style, parse_part_slot,
                            part_for_direction)
from pxl.char.view import ALL_VIEW_DIRECTIONS
from pxl.errors import BufferSizeError, ValidationError

GENERATORS = (
    [(create_hair_part, style) for style in HairStyle]
    + [(create_eye_part, style) for style in EyeStyle]
    + [(create_torso_part, style) for style in TorsoStyle]
)
GENERATOR_IDS = [f"{gen.__name__}-{style.value}" for gen, style in GENERATORS]


class TestGeneratedParts:
    """Properties shared by every generator and style."""

    @pytest.mark.parametrize("generator,style", GENERATORS, ids=GENERATOR_IDS)
    def test_dimensions_do_not_depend_on_direction(self, generator, style):
        sizes = {
            (part.width, part.height)
            for part in (generator(style, d) for d in ALL_VIEW_DIRECTIONS)
        }
        assert sizes == {PART_SIZES[style]}

    @pytest.mark.parametrize("generator,style", GENERATORS, ids=GENERATOR_IDS)
    def test_front_back_left_are_distinct(self, generator, style):
        front = generator(style, "front").buffer
        back = generator(style, "back").buffer
        left = generator(style, "left").buffer
        assert front != back
        assert front != left
        assert back != left

    @pytest.mark.parametrize("generator,style", GENERATORS, ids=GENERATOR_IDS)
    def test_deterministic(self, generator, style):
        assert generator(style, "front-right").buffer == generator(style, "front-right").buffer

    @pytest.mark.parametrize("generator,style", GENERATORS, ids=GENERATOR_IDS)
    def test_front_has_primary_region(self, generator, style):
        part = generator(style, "front")
        assert part.colorable
        assert part.color_regions.primary

    def test_regions_point_at_placeholder_pixels(self):
        hair = create_hair_part("spiky")
        for x, y in hair.color_regions.primary:
            assert hair.canvas.get(x, y) == HAIR
        eyes = create_eye_part("round")
        for x, y in eyes.color_regions.primary:
            assert eyes.canvas.get(x, y) == IRIS

    def test_regions_are_row_major(self):
        regions = create_torso_part("armor").color_regions.primary
        assert regions == sorted(regions, key=lambda p: (p[1], p[0]))

    def test_ids_and_slots(self):
        assert create_hair_part("long").id == "hair-long"
        assert create_hair_part("long").slot is PartSlot.HAIR_FRONT
        assert create_eye_part("anime").slot is PartSlot.EYES
        assert create_torso_part("robe").id == "torso-robe"

    def test_eyes_hidden_from_behind(self):
        part = create_eye_part("round", "back")
        assert not part.color_regions.primary
        assert all(b == 0 for b in part.buffer)

    def test_profile_shows_one_eye(self):
        front = create_eye_part("round", "front").color_regions.primary
        side = create_eye_part("round", "left").color_regions.primary
        assert 0 < len(side) < len(front)


class TestPartParsing:
    """Tests for style and slot parsing."""

    def test_invalid_hair_style(self):
        with pytest.raises(ValidationError, match="Invalid hair style: mohawk"):
            parse_hair_style("mohawk")

    def test_invalid_eye_style(self):
        with pytest.raises(ValidationError, match="Invalid eye style: cat"):
            create_eye_part("cat")

    def test_invalid_torso_style(self):
        with pytest.raises(ValidationError, match="Invalid torso style: cape"):
            create_torso_part("cape")

    def test_invalid_slot(self):
        with pytest.raises(ValidationError, match="Invalid part slot: tail"):
            parse_part_slot("tail")

    def test_invalid_direction(self):
        with pytest.raises(ValidationError, match="Invalid view direction"):
            create_hair_part("spiky", "north")


class TestCreatePart:
    """Tests for create_part and part_for_direction."""

    def test_dispatches_by_slot(self):
        assert create_part("torso", "armor").id == "torso-armor"
        assert create_part("eyes", "small").id == "eyes-small"

    def test_hair_back_slot(self):
        part = create_part("hair-back", "long")
        assert part.slot is PartSlot.HAIR_BACK

    def test_hair_rejects_other_slots(self):
        with pytest.raises(ValidationError):
            create_hair_part("spiky", "front", PartSlot.TORSO)

    def test_unsupported_slot(self):
        with pytest.raises(ValidationError, match="not implemented for slot: nose"):
            create_part("nose", "button")

    def test_regenerates_builtin_part(self):
        front = create_hair_part("curly", "front", PartSlot.HAIR_BACK)
        back = part_for_direction(front, "back")
        assert back.buffer == create_hair_part("curly", "back").buffer
        assert back.slot is PartSlot.HAIR_BACK

    def test_custom_part_is_copied(self, simple_part):
        moved = part_for_direction(simple_part, "left")
        assert moved.buffer == simple_part.buffer
        assert moved is not simple_part

    def test_direction_checked_for_custom_parts(self, simple_part):
        with pytest.raises(ValidationError):
            part_for_direction(simple_part, "sideways")


class TestCharacterPart:
    def test_buffer_size_checked(self):
        with pytest.raises(BufferSizeError):
            CharacterPart("bad", "torso", 2, 2, bytearray(4))

    def test_clone_is_deep(self, simple_part):
        copy = simple_part.clone()
        copy.buffer[0] = 99
        copy.color_regions.primary.append((1, 0))
        assert simple_part.buffer[0] == 10
        assert simple_part.color_regions.primary == [(0, 0)]
