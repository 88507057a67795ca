"""The eight view directions and the pose each one implies for part drawing."""

from enum import Enum
from typing import NamedTuple

from pxl.errors import ValidationError


class ViewDirection(str, Enum):
    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"
    FRONT_LEFT = "front-left"
    FRONT_RIGHT = "front-right"
    BACK_LEFT = "back-left"
    BACK_RIGHT = "back-right"


ALL_VIEW_DIRECTIONS = tuple(ViewDirection)


class Pose(NamedTuple):
    """How a view direction turns the figure.

    ``turn`` runs from -2 (full profile facing screen-left) to 2 (full profile
    facing screen-right). ``facing`` is "front", "back" or "side".
    """

    turn: int
    facing: str

    @property
    def shows_face(self) -> bool:
        return self.facing != "back"

    @property
    def is_profile(self) -> bool:
        return self.facing == "side"

    @property
    def lean(self) -> int:
        """-1, 0 or 1: which way the figure is turned."""
        return (self.turn > 0) - (self.turn < 0)


POSES = {
    ViewDirection.FRONT: Pose(0, "front"),
    ViewDirection.BACK: Pose(0, "back"),
    ViewDirection.LEFT: Pose(-2, "side"),
    ViewDirection.RIGHT: Pose(2, "side"),
    ViewDirection.FRONT_LEFT: Pose(-1, "front"),
    ViewDirection.FRONT_RIGHT: Pose(1, "front"),
    ViewDirection.BACK_LEFT: Pose(-1, "back"),
    ViewDirection.BACK_RIGHT: Pose(1, "back"),
}


def parse_view_direction(value) -> ViewDirection:
    if isinstance(value, ViewDirection):
        return value
    try:
        return ViewDirection(value)
    except ValueError:
        valid = ", ".join(d.value for d in ALL_VIEW_DIRECTIONS)
        raise ValidationError(
            f"Invalid view direction: {value}. Valid directions: {valid}"
        ) from None


def parse_view_directions(value: str) -> list[ViewDirection]:
    """Parse "all" or a comma-separated direction list, keeping the given order."""
    text = value.strip()
    if text.lower() == "all":
        return list(ALL_VIEW_DIRECTIONS)
    names = [name.strip() for name in text.split(",") if name.strip()]
    if not names:
        raise ValidationError("No view directions given")
    return [parse_view_direction(name) for name in names]


def pose_for(direction) -> Pose:
    return POSES[parse_view_direction(direction)]
