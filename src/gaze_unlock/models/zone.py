from dataclasses import dataclass
from enum import Enum


class Corner(str, Enum):
    """Screen corners, declared in canonical classification order."""
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_RIGHT = "bottom_right"
    BOTTOM_LEFT = "bottom_left"

    @property
    def position(self) -> int:
        return CANONICAL_ORDER.index(self)


CANONICAL_ORDER: tuple[Corner, ...] = tuple(Corner)


@dataclass(slots=True, frozen=True)
class Zone:
    """Axis-aligned corner rectangle. Bounds are inclusive on all edges."""
    corner: Corner
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def contains(self, x: float, y: float) -> bool:
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max

    @property
    def center(self) -> tuple[float, float]:
        return (self.x_min + self.x_max) / 2, (self.y_min + self.y_max) / 2
