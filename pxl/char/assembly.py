"""Character assembly: a base body plus equipped parts, composited in a fixed order."""

from dataclasses import dataclass, field

from pxl.char.body import BODY_HEIGHT, BODY_WIDTH, BaseBody
from pxl.char.color import ColorScheme, apply_color_scheme, slot_color_category
from pxl.char.parts import CharacterPart, PartSlot, parse_part_slot
from pxl.char.template import create_body_template
from pxl.char.view import ViewDirection, parse_view_direction
from pxl.core.blend import BlendMode
from pxl.core.canvas import Canvas
from pxl.core.composite import composite_onto

BODY_LAYER = "body"

# Back-to-front. Hair-front and the face always land above torso and body.
DRAW_ORDER = (
    PartSlot.HAIR_BACK,
    BODY_LAYER,
    PartSlot.LEGS,
    PartSlot.FEET_LEFT,
    PartSlot.FEET_RIGHT,
    PartSlot.TORSO,
    PartSlot.ARMS_LEFT,
    PartSlot.ARMS_RIGHT,
    PartSlot.HAIR_FRONT,
    PartSlot.EARS,
    PartSlot.EYES,
    PartSlot.NOSE,
    PartSlot.MOUTH,
)


@dataclass
class CharacterAssembly:
    width: int
    height: int
    buffer: bytearray = field(repr=False)
    base_body: BaseBody | None = None
    equipped_parts: dict = field(default_factory=dict)
    color_scheme: ColorScheme | None = None
    direction: ViewDirection = ViewDirection.FRONT

    @property
    def canvas(self) -> Canvas:
        return Canvas(self.width, self.height, self.buffer)


def skin_body(body: BaseBody, scheme: ColorScheme) -> Canvas:
    """Copy of the body's pixels painted with the scheme's skin tones."""
    canvas = Canvas(body.width, body.height, bytearray(body.buffer))
    regions = body.color_regions
    for region, color in (("primary", scheme.skin.primary), ("shadow", scheme.skin.shadow),
                          ("highlight", scheme.skin.highlight)):
        for x, y in regions.get(region):
            if canvas.contains(x, y):
                canvas.set(x, y, color)
    return canvas


def assemble_character(base_body: BaseBody, equipped_parts: dict, color_scheme: ColorScheme,
                       direction=ViewDirection.FRONT) -> CharacterAssembly:
    """Composite ``base_body`` and ``equipped_parts`` (slot -> part) for one view.

    Each part is recolored for its slot's category and overdrawn at the body
    template's anchor with a normal, fully opaque blend.
    """
    direction = parse_view_direction(direction)
    parts: dict[PartSlot, CharacterPart] = {
        parse_part_slot(slot): part for slot, part in equipped_parts.items() if part is not None
    }
    template = base_body.template or create_body_template("chibi-default", BODY_WIDTH, BODY_HEIGHT)

    canvas = Canvas(BODY_WIDTH, BODY_HEIGHT)
    for layer in DRAW_ORDER:
        if layer == BODY_LAYER:
            composite_onto(canvas, skin_body(base_body, color_scheme), 0, 0, 255, BlendMode.NORMAL)
            continue
        part = parts.get(layer)
        if part is None:
            continue
        colored = apply_color_scheme(part, color_scheme, slot_color_category(layer))
        x, y = template.placement(layer, colored.width)
        composite_onto(canvas, colored.canvas, x, y, 255, BlendMode.NORMAL)

    return CharacterAssembly(
        width=BODY_WIDTH,
        height=BODY_HEIGHT,
        buffer=canvas.buffer,
        base_body=base_body,
        equipped_parts=parts,
        color_scheme=color_scheme,
        direction=direction,
    )
