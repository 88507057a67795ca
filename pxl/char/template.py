"""Body templates: where each part slot attaches on a body canvas.

An anchor marks the point under the middle of a part's top edge, so a part of
width ``w`` placed on anchor (x, y) covers columns ``x - w // 2`` onward,
starting at row ``y``.
"""

from dataclasses import dataclass, field
from typing import NamedTuple

from pxl.char.parts import PartSlot, parse_part_slot
from pxl.errors import ValidationError

REQUIRED_SLOTS = (PartSlot.HAIR_FRONT, PartSlot.EYES, PartSlot.TORSO)


class AnchorPoint(NamedTuple):
    x: int
    y: int
    slot: PartSlot


@dataclass
class BodyTemplate:
    id: str
    width: int
    height: int
    style: str = "chibi"
    anchors: list = field(default_factory=list)

    def anchor_for(self, slot) -> AnchorPoint | None:
        slot = parse_part_slot(slot)
        for anchor in self.anchors:
            if anchor.slot is slot:
                return anchor
        return None

    def placement(self, slot, part_width: int) -> tuple[int, int]:
        """Top-left corner for a part of ``part_width`` on ``slot``'s anchor."""
        anchor = self.anchor_for(slot)
        if anchor is None:
            return (self.width - part_width) // 2, 0
        return anchor.x - part_width // 2, anchor.y


def build_anchors(cx: int, head_cx: int, head_cy: int, head_radius: int, torso_top: int,
                  torso_half: int, arm_width: int, legs_top: int, leg_spread: int,
                  ground: int) -> list[AnchorPoint]:
    """Anchor set for a chibi figure with the given proportions."""
    return [
        AnchorPoint(head_cx, head_cy - head_radius - 2, PartSlot.HAIR_BACK),
        AnchorPoint(head_cx, head_cy - head_radius - 2, PartSlot.HAIR_FRONT),
        AnchorPoint(head_cx, head_cy - 1, PartSlot.EYES),
        AnchorPoint(head_cx, head_cy - 2, PartSlot.EARS),
        AnchorPoint(head_cx, head_cy + 3, PartSlot.NOSE),
        AnchorPoint(head_cx, head_cy + 5, PartSlot.MOUTH),
        AnchorPoint(cx, torso_top - 1, PartSlot.TORSO),
        AnchorPoint(cx - torso_half - arm_width // 2 - 1, torso_top, PartSlot.ARMS_LEFT),
        AnchorPoint(cx + torso_half + arm_width // 2, torso_top, PartSlot.ARMS_RIGHT),
        AnchorPoint(cx, legs_top, PartSlot.LEGS),
        AnchorPoint(cx - leg_spread, ground - 1, PartSlot.FEET_LEFT),
        AnchorPoint(cx + leg_spread, ground - 1, PartSlot.FEET_RIGHT),
    ]


def create_body_template(template_id: str, width: int, height: int,
                         style: str = "chibi") -> BodyTemplate:
    """Proportional chibi template: a head about a third of the figure's height."""
    cx = width // 2
    head_radius = width // 4
    head_cy = height * 5 // 12
    anchors = build_anchors(
        cx=cx,
        head_cx=cx,
        head_cy=head_cy,
        head_radius=head_radius,
        torso_top=head_cy + head_radius,
        torso_half=width * 5 // 32,
        arm_width=max(1, width * 3 // 32),
        legs_top=height * 19 // 24,
        leg_spread=max(1, width // 8),
        ground=height - 1,
    )
    return BodyTemplate(template_id, width, height, style, anchors)


def validate_template(template: BodyTemplate):
    if template.width <= 0 or template.height <= 0:
        raise ValidationError(
            f"Template dimensions must be positive, got {template.width}x{template.height}"
        )
    for anchor in template.anchors:
        if not (0 <= anchor.x < template.width and 0 <= anchor.y < template.height):
            raise ValidationError(
                f"Anchor point outside canvas bounds: ({anchor.x}, {anchor.y}) "
                f"for {template.width}x{template.height} template"
            )
    present = {anchor.slot for anchor in template.anchors}
    for slot in REQUIRED_SLOTS:
        if slot not in present:
            raise ValidationError(f"Missing required slot: {slot.value}")


def template_to_dict(template: BodyTemplate) -> dict:
    return {
        "id": template.id,
        "width": template.width,
        "height": template.height,
        "style": template.style,
        "anchors": [{"x": a.x, "y": a.y, "slot": a.slot.value} for a in template.anchors],
    }


def template_from_dict(data: dict) -> BodyTemplate:
    try:
        anchors = [
            AnchorPoint(int(a["x"]), int(a["y"]), parse_part_slot(a["slot"]))
            for a in data["anchors"]
        ]
        template = BodyTemplate(
            str(data["id"]), int(data["width"]), int(data["height"]),
            str(data.get("style", "chibi")), anchors,
        )
    except (KeyError, TypeError) as e:
        raise ValidationError(f"Invalid template data: {e}") from e
    validate_template(template)
    return template
