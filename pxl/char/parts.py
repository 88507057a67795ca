"""Character parts and the directional hair, eye and torso generators.

Every generator is deterministic: the same style and direction always give
byte-identical pixels, and a style keeps one canvas size across all eight
directions. Parts are drawn in placeholder colors; the color regions record
which pixels a color scheme later repaints.
"""

from dataclasses import dataclass, field
from enum import Enum

from pxl.char import paint
from pxl.char.view import Pose, ViewDirection, parse_view_direction, pose_for
from pxl.core.canvas import Canvas
from pxl.core.color import TRANSPARENT, Color
from pxl.errors import ValidationError


class PartSlot(str, Enum):
    HAIR_BACK = "hair-back"
    HAIR_FRONT = "hair-front"
    EYES = "eyes"
    NOSE = "nose"
    MOUTH = "mouth"
    EARS = "ears"
    TORSO = "torso"
    ARMS_LEFT = "arms-left"
    ARMS_RIGHT = "arms-right"
    LEGS = "legs"
    FEET_LEFT = "feet-left"
    FEET_RIGHT = "feet-right"


class HairStyle(str, Enum):
    SPIKY = "spiky"
    LONG = "long"
    CURLY = "curly"


class EyeStyle(str, Enum):
    ROUND = "round"
    ANIME = "anime"
    SMALL = "small"


class TorsoStyle(str, Enum):
    BASIC_SHIRT = "basic-shirt"
    ARMOR = "armor"
    ROBE = "robe"


def _parse(enum_cls, value, label: str, noun: str = "styles"):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {label}: {value}. Valid {noun}: {valid}") from None


def parse_part_slot(value) -> PartSlot:
    return _parse(PartSlot, value, "part slot", "slots")


def parse_hair_style(value) -> HairStyle:
    return _parse(HairStyle, value, "hair style")


def parse_eye_style(value) -> EyeStyle:
    return _parse(EyeStyle, value, "eye style")


def parse_torso_style(value) -> TorsoStyle:
    return _parse(TorsoStyle, value, "torso style")


@dataclass
class ColorRegions:
    primary: list = field(default_factory=list)
    shadow: list = field(default_factory=list)
    highlight: list = None

    def get(self, region: str) -> list:
        if region not in ("primary", "shadow", "highlight"):
            raise ValidationError(f"Invalid color region: {region}")
        return getattr(self, region) or []

    def clone(self) -> "ColorRegions":
        return ColorRegions(
            list(self.primary),
            list(self.shadow),
            None if self.highlight is None else list(self.highlight),
        )


@dataclass
class CharacterPart:
    id: str
    slot: PartSlot
    width: int
    height: int
    buffer: bytearray = field(repr=False)
    colorable: bool = True
    color_regions: ColorRegions = field(default_factory=ColorRegions)
    compatible_bodies: list = field(default_factory=lambda: ["all"])

    def __post_init__(self):
        self.slot = parse_part_slot(self.slot)
        # Validates the buffer length against the declared size.
        self.buffer = Canvas(self.width, self.height, self.buffer).buffer

    @property
    def canvas(self) -> Canvas:
        """A canvas view sharing this part's buffer."""
        return Canvas(self.width, self.height, self.buffer)

    def clone(self) -> "CharacterPart":
        return CharacterPart(
            self.id, self.slot, self.width, self.height, bytearray(self.buffer),
            self.colorable, self.color_regions.clone(), list(self.compatible_bodies),
        )


# ─── Placeholder colors ─────────────────────────────────────────────────────

OUTLINE = Color(42, 42, 42)

HAIR = Color(101, 67, 33)
HAIR_SHADOW = Color(80, 52, 25)
HAIR_HIGHLIGHT = Color(130, 95, 60)

EYE_WHITE = Color(250, 250, 250)
IRIS = Color(74, 122, 188)
PUPIL = Color(26, 26, 42)
IRIS_HIGHLIGHT = Color(140, 170, 220)

SHIRT = Color(204, 51, 51)
SHIRT_SHADOW = Color(170, 40, 40)
ARMOR = Color(160, 160, 160)
ARMOR_SHADOW = Color(120, 120, 120)
ARMOR_HIGHLIGHT = Color(200, 200, 200)
ROBE = Color(102, 51, 153)
ROBE_SHADOW = Color(80, 40, 120)

PART_SIZES = {
    HairStyle.SPIKY: (18, 14),
    HairStyle.LONG: (18, 22),
    HairStyle.CURLY: (20, 18),
    EyeStyle.ROUND: (12, 5),
    EyeStyle.ANIME: (14, 7),
    EyeStyle.SMALL: (10, 3),
    TorsoStyle.BASIC_SHIRT: (16, 14),
    TorsoStyle.ARMOR: (18, 14),
    TorsoStyle.ROBE: (18, 22),
}


def _build_part(part_id: str, slot: PartSlot, canvas: Canvas, primary: Color,
                shadow: Color, highlight: Color = None) -> CharacterPart:
    regions = paint.collect_regions(canvas, primary, shadow, highlight)
    return CharacterPart(
        id=part_id,
        slot=slot,
        width=canvas.width,
        height=canvas.height,
        buffer=canvas.buffer,
        colorable=True,
        color_regions=ColorRegions(
            regions["primary"],
            regions["shadow"],
            regions["highlight"] if highlight is not None else None,
        ),
    )


# ─── Hair ───────────────────────────────────────────────────────────────────


def _draw_spiky_hair(canvas: Canvas, pose: Pose):
    w, h = canvas.width, canvas.height
    cx = w // 2 + pose.turn
    left, right = cx - 7, cx + 6
    lean = pose.lean

    if pose.is_profile:
        tips, slant = [cx - 4, cx, cx + 4], -2 * lean
    elif pose.facing == "back":
        tips, slant = [cx - 6, cx - 3, cx, cx + 3, cx + 6], -lean
    else:
        tips, slant = [cx - 6, cx - 2, cx + 2, cx + 6], -lean
    for i, tip in enumerate(tips):
        paint.triangle_up(canvas, tip, i % 2, 5, HAIR, edge=HAIR_SHADOW, slant=slant)

    paint.hline(canvas, left + 1, right - 1, 4, HAIR)
    paint.box(canvas, left, 5, right, 8, HAIR)
    highlight_row = 5 if pose.shows_face else 6
    paint.hline(canvas, cx - 2 - lean, cx + 1 - lean, highlight_row, HAIR_HIGHLIGHT)

    if pose.is_profile:
        # Hair covers the back of the head only; the face side keeps a fringe row.
        back_left, back_right = (cx, right) if lean < 0 else (left, cx)
        paint.box(canvas, back_left, 9, back_right, h - 1, HAIR)
        for x in range(back_left + 1, back_right, 3):
            paint.vline(canvas, x, 10, h - 1, HAIR_SHADOW)
        front_left, front_right = (left, cx - 1) if lean < 0 else (cx + 1, right)
        paint.hline(canvas, front_left, front_right, 9, HAIR)
    elif pose.facing == "back":
        paint.box(canvas, left, 9, right, h - 1, HAIR)
        for x in range(left + 2, right, 3):
            paint.vline(canvas, x, 10, h - 1, HAIR_SHADOW)
    else:
        left_lock = 2 + (lean > 0)
        right_lock = 2 + (lean < 0)
        paint.box(canvas, left, 9, left + left_lock, 12, HAIR)
        paint.box(canvas, right - right_lock, 9, right, 12, HAIR)
        for x in (cx - 3, cx, cx + 3):
            paint.vline(canvas, x, 9, 10, HAIR_SHADOW)


def _wavy_column(canvas: Canvas, x: int, top: int, phase: int, color: Color):
    bottom = canvas.height - 2 + ((x + phase) % 3 == 0)
    paint.vline(canvas, x, top, bottom, color)


def _draw_long_hair(canvas: Canvas, pose: Pose):
    w, h = canvas.width, canvas.height
    cx = w // 2 + pose.turn
    left, right = cx - 7, cx + 7
    lean = pose.lean

    paint.hline(canvas, cx - 4, cx + 4, 0, HAIR)
    paint.hline(canvas, cx - 6, cx + 6, 1, HAIR)
    paint.box(canvas, left, 2, right, 6, HAIR)
    paint.hline(canvas, cx - 3 - lean, cx - 1 - lean, 2, HAIR_HIGHLIGHT)

    if pose.is_profile:
        if lean < 0:
            fall = range(cx - 1, right + 1)
            fringe = (left, cx - 2)
        else:
            fall = range(left, cx + 2)
            fringe = (cx + 2, right)
        for x in fall:
            _wavy_column(canvas, x, 7, lean, HAIR)
            if (x - left) % 4 == 1:
                paint.vline(canvas, x, 8, h - 3, HAIR_SHADOW)
        paint.box(canvas, fringe[0], 7, fringe[1], 8, HAIR)
    elif pose.facing == "back":
        paint.vline(canvas, cx, 0, 3, HAIR_SHADOW)
        for x in range(left, right + 1):
            _wavy_column(canvas, x, 7, lean, HAIR)
            if (x - left + lean) % 4 == 1:
                paint.vline(canvas, x, 6, h - 3, HAIR_SHADOW)
    else:
        left_width = 4 - lean
        right_width = 4 + lean
        for x in range(left, left + left_width):
            _wavy_column(canvas, x, 7, lean, HAIR)
        for x in range(right - right_width + 1, right + 1):
            _wavy_column(canvas, x, 7, lean, HAIR)
        paint.vline(canvas, left + left_width - 1, 7, h - 3, HAIR_SHADOW)
        paint.vline(canvas, right - right_width + 1, 7, h - 3, HAIR_SHADOW)
        paint.hline(canvas, left + left_width, right - right_width, 7, HAIR)
        for x in range(left + left_width, right - right_width + 1, 3):
            paint.dot(canvas, x, 8, HAIR_SHADOW)


def _curl(canvas: Canvas, x: int, y: int):
    paint.disc(canvas, x, y, 2, HAIR, rim=HAIR_SHADOW)
    paint.dot(canvas, x - 1, y - 1, HAIR_HIGHLIGHT)


def _draw_curly_hair(canvas: Canvas, pose: Pose):
    cx = canvas.width // 2 + pose.turn
    lean = pose.lean
    crown = [cx - 6, cx - 2, cx + 2, cx + 6]

    if pose.is_profile:
        back = -lean
        rows = [
            (13, [cx + 4 * back, cx + 8 * back]),
            (8, [cx + 4 * back, cx + 8 * back]),
            (7, [cx - 5 * back]),
            (3, crown),
        ]
    elif pose.facing == "back":
        rows = [
            (13, [cx - 6, cx - 2, cx + 2, cx + 6]),
            (8, [cx - 6, cx - 2, cx + 2, cx + 6]),
            (3, crown),
        ]
    else:
        rows = [(11, [cx - 7, cx + 7]), (7, [cx - 7, cx + 7]), (3, crown)]
        if lean:
            rows.insert(0, (14, [cx - 7 * lean]))

    # Lower rows first so the crown overlaps them.
    for y, xs in rows:
        for x in xs:
            _curl(canvas, x, y)


HAIR_PAINTERS = {
    HairStyle.SPIKY: _draw_spiky_hair,
    HairStyle.LONG: _draw_long_hair,
    HairStyle.CURLY: _draw_curly_hair,
}


def create_hair_part(style, direction=ViewDirection.FRONT,
                     slot=PartSlot.HAIR_FRONT) -> CharacterPart:
    style = parse_hair_style(style)
    pose = pose_for(direction)
    slot = parse_part_slot(slot)
    if slot not in (PartSlot.HAIR_FRONT, PartSlot.HAIR_BACK):
        raise ValidationError(f"Hair parts fit hair-front or hair-back, not {slot.value}")

    canvas = Canvas(*PART_SIZES[style])
    HAIR_PAINTERS[style](canvas, pose)
    return _build_part(f"hair-{style.value}", slot, canvas, HAIR, HAIR_SHADOW, HAIR_HIGHLIGHT)


# ─── Eyes ───────────────────────────────────────────────────────────────────

# style -> (eye width, left eye x, right eye x)
EYE_LAYOUT = {
    EyeStyle.ROUND: (4, 1, 7),
    EyeStyle.ANIME: (5, 1, 8),
    EyeStyle.SMALL: (3, 1, 6),
}


def _iris_x(ex: int, ew: int, iris_w: int, look: int) -> int:
    ix = ex + (ew - iris_w) // 2 + look
    return max(ex, min(ix, ex + ew - iris_w))


def _draw_eye(canvas: Canvas, style: EyeStyle, ex: int, ew: int, look: int):
    h = canvas.height
    if style is EyeStyle.ROUND:
        paint.hline(canvas, ex, ex + ew - 1, 0, OUTLINE)
        paint.box(canvas, ex, 1, ex + ew - 1, h - 2, EYE_WHITE)
        paint.hline(canvas, ex + 1, ex + ew - 2, h - 1, OUTLINE)
        ix = _iris_x(ex, ew, 2, look)
        paint.box(canvas, ix, 1, ix + 1, h - 2, IRIS)
        paint.dot(canvas, ix + 1, 2, PUPIL)
        paint.dot(canvas, ix, 1, IRIS_HIGHLIGHT)
    elif style is EyeStyle.ANIME:
        paint.hline(canvas, ex - 1, ex + ew - 1, 0, OUTLINE)
        paint.box(canvas, ex, 1, ex + ew - 1, h - 2, EYE_WHITE)
        paint.hline(canvas, ex + 1, ex + ew - 2, h - 1, OUTLINE)
        iris_w = min(3, ew)
        ix = _iris_x(ex, ew, iris_w, look)
        paint.box(canvas, ix, 1, ix + iris_w - 1, h - 2, IRIS)
        paint.vline(canvas, ix + iris_w // 2, 3, 4, PUPIL)
        paint.dot(canvas, ix, 2, IRIS_HIGHLIGHT)
        paint.dot(canvas, ix + iris_w - 1, h - 3, IRIS_HIGHLIGHT)
    else:
        paint.hline(canvas, ex, ex + ew - 1, 0, OUTLINE)
        ix = _iris_x(ex, ew, 1, look)
        paint.dot(canvas, ix, 1, IRIS)
        paint.dot(canvas, ix, 2, PUPIL)


def _draw_eyes(canvas: Canvas, style: EyeStyle, pose: Pose):
    lean = pose.lean
    if pose.facing == "back":
        if lean:
            # A glimpse of lashes at the turned-away cheek.
            edge_x = 0 if lean < 0 else canvas.width - 1
            paint.dot(canvas, edge_x, canvas.height // 2, OUTLINE)
        return

    ew, left_x, right_x = EYE_LAYOUT[style]
    if pose.is_profile:
        if lean < 0:
            _draw_eye(canvas, style, left_x, ew - 1, lean)
        else:
            _draw_eye(canvas, style, right_x + 1, ew - 1, lean)
        return

    left_w = ew - (lean < 0)
    right_w = ew - (lean > 0)
    _draw_eye(canvas, style, left_x + lean, left_w, lean)
    _draw_eye(canvas, style, right_x + lean + (lean > 0), right_w, lean)


def create_eye_part(style, direction=ViewDirection.FRONT) -> CharacterPart:
    style = parse_eye_style(style)
    pose = pose_for(direction)
    canvas = Canvas(*PART_SIZES[style])
    _draw_eyes(canvas, style, pose)
    return _build_part(f"eyes-{style.value}", PartSlot.EYES, canvas,
                       IRIS, PUPIL, IRIS_HIGHLIGHT)


# ─── Torso ──────────────────────────────────────────────────────────────────


def _shade_side(pose: Pose) -> int:
    """+1 to shade the right edge, -1 for the left."""
    if pose.lean:
        return -pose.lean
    return 1 if pose.shows_face else -1


def _draw_shirt(canvas: Canvas, pose: Pose):
    w, h = canvas.width, canvas.height
    cx = w // 2 + pose.lean
    half = 6 - abs(pose.turn)
    left, right = cx - half, cx + half - 1
    lean = pose.lean

    paint.box(canvas, left, 1, right, h - 2, SHIRT)
    if not pose.is_profile:
        paint.box(canvas, left - 2, 1, left - 1, 2 if lean < 0 else 4, SHIRT)
        paint.box(canvas, right + 1, 1, right + 2, 2 if lean > 0 else 4, SHIRT)

    side = _shade_side(pose)
    edge = right if side > 0 else left
    paint.vline(canvas, edge, 1, h - 2, SHIRT_SHADOW)
    paint.vline(canvas, edge - side, 1, h - 2, SHIRT_SHADOW)

    if pose.is_profile:
        # Near arm crossing the chest.
        paint.hline(canvas, left, right, 0, SHIRT)
        paint.box(canvas, cx - 1, 2, cx + 1, 7, SHIRT_SHADOW)
    elif pose.shows_face:
        paint.hline(canvas, left, cx - 3, 0, SHIRT)
        paint.hline(canvas, cx + 2, right, 0, SHIRT)
        paint.hline(canvas, cx - 1, cx, 1, TRANSPARENT)
        paint.dot(canvas, cx - 2, 1, OUTLINE)
        paint.dot(canvas, cx + 1, 1, OUTLINE)
        for y in (4, 7, 10):
            paint.dot(canvas, cx, y, SHIRT_SHADOW)
    else:
        paint.hline(canvas, left, right, 0, SHIRT)
        paint.hline(canvas, cx - 3, cx + 2, 0, SHIRT_SHADOW)
        paint.hline(canvas, cx - 4, cx - 3, 4, SHIRT_SHADOW)
        paint.hline(canvas, cx + 2, cx + 3, 4, SHIRT_SHADOW)

    paint.hline(canvas, left, right, h - 1, OUTLINE)


def _draw_armor(canvas: Canvas, pose: Pose):
    w, h = canvas.width, canvas.height
    cx = w // 2 + pose.lean
    half = 7 - abs(pose.turn)
    left, right = cx - half, cx + half - 1

    paint.box(canvas, left, 1, right, h - 2, ARMOR)
    spacing = 3 if pose.shows_face else 4
    for y in range(4, h - 1, spacing):
        paint.hline(canvas, left, right, y, ARMOR_SHADOW)

    side = _shade_side(pose)
    near_edge = left + 1 if side > 0 else right - 1
    paint.vline(canvas, near_edge, 1, h - 2, ARMOR_HIGHLIGHT)

    if pose.is_profile:
        paint.disc(canvas, cx, 3, 2, ARMOR, rim=ARMOR_SHADOW)
        for y in range(6, h - 1, 3):
            paint.dot(canvas, cx - pose.lean * 2, y, ARMOR_SHADOW)
    elif pose.shows_face:
        paint.disc(canvas, left, 2, 2, ARMOR, rim=ARMOR_SHADOW)
        paint.disc(canvas, right, 2, 2, ARMOR, rim=ARMOR_SHADOW)
        paint.box(canvas, cx - 1, 5, cx, 7, ARMOR_HIGHLIGHT)
    else:
        paint.disc(canvas, left, 2, 2, ARMOR, rim=ARMOR_SHADOW)
        paint.disc(canvas, right, 2, 2, ARMOR, rim=ARMOR_SHADOW)
        paint.vline(canvas, cx, 1, h - 2, ARMOR_SHADOW)
        paint.vline(canvas, cx - 1, 1, h - 2, ARMOR_HIGHLIGHT)

    paint.hline(canvas, left, right, h - 1, OUTLINE)


def _draw_robe(canvas: Canvas, pose: Pose):
    h = canvas.height
    cx = canvas.width // 2 + pose.lean
    side = _shade_side(pose)
    belt = 9 if pose.shows_face else 10

    def half_at(y):
        return 4 + y // 5 - abs(pose.turn)

    for y in range(h - 1):
        half = half_at(y)
        left, right = cx - half, cx + half - 1
        paint.hline(canvas, left, right, y, ROBE)
        edge = right if side > 0 else left
        paint.hline(canvas, edge, edge - side, y, ROBE_SHADOW)

    half = half_at(belt)
    paint.hline(canvas, cx - half, cx + half - 1, belt, ROBE_SHADOW)
    half = half_at(h - 1)
    paint.hline(canvas, cx - half, cx + half - 1, h - 1, OUTLINE)

    if pose.is_profile:
        paint.box(canvas, cx + pose.lean, belt + 1, cx + 2 * pose.lean, belt + 2, ROBE_SHADOW)
    elif pose.shows_face:
        paint.dot(canvas, cx - 1, belt + 1, ROBE_SHADOW)
        paint.dot(canvas, cx, belt + 1, ROBE_SHADOW)
        paint.vline(canvas, cx, belt + 2, h - 2, OUTLINE)
    else:
        paint.box(canvas, cx - 3, 0, cx + 2, 2, ROBE_SHADOW)


TORSO_PAINTERS = {
    TorsoStyle.BASIC_SHIRT: (_draw_shirt, SHIRT, SHIRT_SHADOW, None),
    TorsoStyle.ARMOR: (_draw_armor, ARMOR, ARMOR_SHADOW, ARMOR_HIGHLIGHT),
    TorsoStyle.ROBE: (_draw_robe, ROBE, ROBE_SHADOW, None),
}


def create_torso_part(style, direction=ViewDirection.FRONT) -> CharacterPart:
    style = parse_torso_style(style)
    pose = pose_for(direction)
    painter, primary, shadow, highlight = TORSO_PAINTERS[style]
    canvas = Canvas(*PART_SIZES[style])
    painter(canvas, pose)
    return _build_part(f"torso-{style.value}", PartSlot.TORSO, canvas,
                       primary, shadow, highlight)


# ─── Lookup ─────────────────────────────────────────────────────────────────


def create_part(slot, style, direction=ViewDirection.FRONT) -> CharacterPart:
    """Build the generated part for ``slot`` in the named style."""
    slot = parse_part_slot(slot)
    if slot in (PartSlot.HAIR_FRONT, PartSlot.HAIR_BACK):
        return create_hair_part(style, direction, slot)
    if slot is PartSlot.EYES:
        return create_eye_part(style, direction)
    if slot is PartSlot.TORSO:
        return create_torso_part(style, direction)
    raise ValidationError(f"Part creation not implemented for slot: {slot.value}")


def part_for_direction(part: CharacterPart, direction) -> CharacterPart:
    """Regenerate a generated part for another view; other parts come back as copies."""
    direction = parse_view_direction(direction)
    prefix, _, style = part.id.partition("-")
    if prefix == "hair" and style in {s.value for s in HairStyle}:
        return create_hair_part(style, direction, part.slot)
    if prefix == "eyes" and style in {s.value for s in EyeStyle}:
        return create_eye_part(style, direction)
    if prefix == "torso" and style in {s.value for s in TorsoStyle}:
        return create_torso_part(style, direction)
    return part.clone()
