"""Base body generator.

Bodies always fill a 32x48 canvas. Build widens the torso and limbs, height
stretches the torso and legs, and the view direction turns the figure. The
feet stay planted on the bottom rows whatever the proportions.
"""

from dataclasses import dataclass, field
from enum import Enum

from pxl.char import paint
from pxl.char.parts import ColorRegions
from pxl.char.template import BodyTemplate, build_anchors
from pxl.char.view import Pose, ViewDirection, parse_view_direction, pose_for
from pxl.core.blend import round_half_up
from pxl.core.canvas import Canvas
from pxl.core.color import Color
from pxl.errors import ValidationError

# ─── Configuration ──────────────────────────────────────────────────────────

BODY_WIDTH = 32
BODY_HEIGHT = 48

SKIN = Color(255, 213, 160)
SKIN_SHADOW = Color(230, 190, 140)
BODY_OUTLINE = Color(80, 60, 40)


class BuildType(str, Enum):
    SKINNY = "skinny"
    NORMAL = "normal"
    MUSCULAR = "muscular"

    @property
    def factor(self) -> float:
        return {"skinny": 0.8, "normal": 1.0, "muscular": 1.2}[self.value]


class HeightType(str, Enum):
    SHORT = "short"
    AVERAGE = "average"
    TALL = "tall"

    @property
    def factor(self) -> float:
        return {"short": 0.9, "average": 1.0, "tall": 1.1}[self.value]


def parse_build_type(value) -> BuildType:
    if isinstance(value, BuildType):
        return value
    try:
        return BuildType(value)
    except ValueError:
        valid = ", ".join(b.value for b in BuildType)
        raise ValidationError(f"Invalid build type: {value}. Valid types: {valid}") from None


def parse_height_type(value) -> HeightType:
    if isinstance(value, HeightType):
        return value
    try:
        return HeightType(value)
    except ValueError:
        valid = ", ".join(h.value for h in HeightType)
        raise ValidationError(f"Invalid height type: {value}. Valid types: {valid}") from None


@dataclass
class BodyMetrics:
    head_radius: int
    torso_half: int
    torso_length: int
    limb_width: int
    leg_length: int

    @classmethod
    def for_proportions(cls, build: BuildType, height: HeightType) -> "BodyMetrics":
        bf, hf = build.factor, height.factor
        return cls(
            head_radius=7 if build is BuildType.SKINNY else 8,
            torso_half=round_half_up(5 * bf),
            torso_length=round_half_up(10 * hf),
            limb_width=max(2, round_half_up(3 * bf)),
            leg_length=round_half_up(8 * hf),
        )


@dataclass
class BaseBody:
    build: BuildType
    height_type: HeightType
    direction: ViewDirection
    width: int
    height: int
    buffer: bytearray = field(repr=False)
    color_regions: ColorRegions = field(default_factory=ColorRegions)
    template: BodyTemplate = None

    @property
    def canvas(self) -> Canvas:
        return Canvas(self.width, self.height, self.buffer)

    def clone(self) -> "BaseBody":
        return BaseBody(self.build, self.height_type, self.direction, self.width,
                        self.height, bytearray(self.buffer), self.color_regions.clone(),
                        self.template)


def _segment(canvas: Canvas, x0: int, y0: int, x1: int, y1: int, shade_side: int = 0):
    """Outlined skin block, optionally shaded along one inner edge."""
    if x1 - x0 < 2:
        paint.box(canvas, x0, y0, x1, y1, SKIN)
        paint.hline(canvas, x0, x1, y1, BODY_OUTLINE)
        return
    paint.box(canvas, x0, y0, x1, y1, BODY_OUTLINE)
    paint.box(canvas, x0 + 1, y0 + 1, x1 - 1, y1 - 1, SKIN)
    if shade_side and x1 - x0 >= 3:
        shade_x = x1 - 1 if shade_side > 0 else x0 + 1
        paint.vline(canvas, shade_x, y0 + 1, y1 - 1, SKIN_SHADOW)


def _draw_body(canvas: Canvas, metrics: BodyMetrics, pose: Pose) -> dict:
    """Paint the figure and return the layout numbers the anchors need."""
    ground = canvas.height - 1
    legs_top = ground - 1 - metrics.leg_length
    torso_top = legs_top - metrics.torso_length
    head_radius = metrics.head_radius
    head_cy = torso_top - head_radius
    lean = pose.lean
    cx = canvas.width // 2 + lean
    head_cx = canvas.width // 2 + pose.turn
    half = max(3, metrics.torso_half - abs(pose.turn))
    limb = metrics.limb_width
    leg_w = limb + 1
    shade = -lean if lean else (1 if pose.shows_face else -1)

    # Legs and feet
    if pose.is_profile:
        legs = [cx - leg_w // 2 - lean, cx - leg_w // 2 + lean]
    else:
        gap = 0 if lean else 1
        legs = [cx - leg_w - gap + lean, cx + gap + lean]
    for i, x0 in enumerate(legs):
        _segment(canvas, x0, legs_top, x0 + leg_w - 1, ground - 2, shade_side=shade)
        if pose.is_profile:
            foot = (x0 + min(0, 2 * lean), x0 + leg_w - 1 + max(0, 2 * lean))
        elif pose.shows_face:
            outward = -1 if i == 0 else 1
            foot = (x0 + min(0, outward), x0 + leg_w - 1 + max(0, outward))
        else:
            foot = (x0, x0 + leg_w - 1)
        paint.box(canvas, foot[0], ground - 1, foot[1], ground, BODY_OUTLINE)
        paint.hline(canvas, foot[0] + 1, foot[1] - 1, ground - 1, SKIN_SHADOW)

    # Far arm sits behind the torso on turned views.
    arm_top, arm_bottom = torso_top + 1, torso_top + metrics.torso_length
    left_arm = (cx - half - limb, cx - half - 1)
    right_arm = (cx + half, cx + half + limb - 1)
    if lean and not pose.is_profile:
        far = right_arm if lean < 0 else left_arm
        near = left_arm if lean < 0 else right_arm
        pull = lean
        _segment(canvas, far[0] + pull, arm_top, far[1] + pull, arm_bottom - 2)

    _segment(canvas, cx - half, torso_top, cx + half - 1, legs_top, shade_side=shade)
    if pose.shows_face and not pose.is_profile:
        paint.dot(canvas, cx, torso_top + metrics.torso_length * 2 // 3, SKIN_SHADOW)
    elif pose.facing == "back":
        paint.vline(canvas, cx, torso_top + 2, legs_top - 2, SKIN_SHADOW)

    if pose.is_profile:
        x0 = cx - limb // 2
        _segment(canvas, x0, arm_top, x0 + limb - 1, arm_bottom, shade_side=shade)
    elif lean:
        _segment(canvas, near[0], arm_top, near[1], arm_bottom)
    else:
        _segment(canvas, left_arm[0], arm_top, left_arm[1], arm_bottom)
        _segment(canvas, right_arm[0], arm_top, right_arm[1], arm_bottom)

    # Head
    paint.disc(canvas, head_cx, head_cy, head_radius, SKIN, rim=BODY_OUTLINE)
    chin = head_cy + head_radius - 1
    if pose.is_profile:
        nose_x = head_cx + lean * (head_radius + 1)
        paint.dot(canvas, nose_x, head_cy, BODY_OUTLINE)
        paint.dot(canvas, nose_x, head_cy + 1, SKIN)
        paint.dot(canvas, nose_x, head_cy + 2, BODY_OUTLINE)
        paint.disc(canvas, head_cx - lean * 2, head_cy, 1, SKIN_SHADOW)
    elif pose.shows_face:
        paint.hline(canvas, head_cx - 2 + lean, head_cx + 1 + lean, chin, SKIN_SHADOW)
        if lean:
            paint.dot(canvas, head_cx - lean * (head_radius - 1), head_cy, SKIN_SHADOW)
    else:
        paint.hline(canvas, head_cx - head_radius + 2, head_cx + head_radius - 2,
                    chin - 1, SKIN_SHADOW)
        paint.hline(canvas, head_cx - head_radius + 3, head_cx + head_radius - 3,
                    chin, SKIN_SHADOW)
        if lean:
            paint.dot(canvas, head_cx + lean * (head_radius - 1), head_cy, SKIN_SHADOW)

    return {
        "cx": cx,
        "head_cx": head_cx,
        "head_cy": head_cy,
        "torso_top": torso_top,
        "torso_half": half,
        "legs_top": legs_top,
        "leg_spread": leg_w // 2 + 1,
        "ground": ground,
    }


def create_base_body(build="normal", height="average",
                     direction=ViewDirection.FRONT) -> BaseBody:
    build = parse_build_type(build)
    height = parse_height_type(height)
    direction = parse_view_direction(direction)
    metrics = BodyMetrics.for_proportions(build, height)

    canvas = Canvas(BODY_WIDTH, BODY_HEIGHT)
    layout = _draw_body(canvas, metrics, pose_for(direction))
    regions = paint.collect_regions(canvas, SKIN, SKIN_SHADOW)

    template = BodyTemplate(
        id=f"body-{build.value}-{height.value}-{direction.value}",
        width=BODY_WIDTH,
        height=BODY_HEIGHT,
        anchors=build_anchors(
            cx=layout["cx"],
            head_cx=layout["head_cx"],
            head_cy=layout["head_cy"],
            head_radius=metrics.head_radius,
            torso_top=layout["torso_top"],
            torso_half=layout["torso_half"],
            arm_width=metrics.limb_width,
            legs_top=layout["legs_top"],
            leg_spread=layout["leg_spread"],
            ground=layout["ground"],
        ),
    )
    return BaseBody(
        build=build,
        height_type=height,
        direction=direction,
        width=BODY_WIDTH,
        height=BODY_HEIGHT,
        buffer=canvas.buffer,
        color_regions=ColorRegions(regions["primary"], regions["shadow"]),
        template=template,
    )
