# floorplan/geometry.py
import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Sequence, Tuple

from shapely.geometry import Polygon, box

# === Canvas & Tolerance Constants ===
CANVAS_WIDTH = 1000
CANVAS_HEIGHT = 800
PADDING = 40

# Rectangles closer than this (per side) are not considered overlapping.
OVERLAP_TOLERANCE = 0.5
# Max distance between facing edges for two rooms to count as touching.
EDGE_TOUCH_TOLERANCE = 2

MIN_SCALE = 0.15
MAX_SCALE = 30
MIN_EXTENT = 1
MAX_NAME_LENGTH = 42


@dataclass(frozen=True)
class Canvas:
    width: float = CANVAS_WIDTH
    height: float = CANVAS_HEIGHT
    padding: float = PADDING

    @property
    def usable_width(self) -> float:
        return max(self.width - self.padding * 2, 1)

    @property
    def usable_height(self) -> float:
        return max(self.height - self.padding * 2, 1)

    @property
    def interior(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) of the drawable area."""
        return (self.padding, self.padding,
                self.width - self.padding, self.height - self.padding)


DEFAULT_CANVAS = Canvas()


@dataclass(frozen=True)
class Room:
    name: str
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def polygon(self) -> Polygon:
        return box(self.x, self.y, self.right, self.bottom)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def round2(value: float) -> float:
    """Rounds half up to 2 decimals (Python's round() would round half to even)."""
    scaled = value * 100
    if not math.isfinite(scaled):
        # Too large to carry 2 decimals anyway
        return value
    return math.floor(scaled + 0.5) / 100


def clamp_finite(value: float, lo: float, hi: float) -> float:
    if not math.isfinite(value):
        return 1
    return max(lo, min(hi, value))


def ranges_overlap(a_start: float, a_end: float, b_start: float, b_end: float) -> bool:
    return a_start < b_end and a_end > b_start


def intersects(a: Room, b: Room, tolerance: float = 0) -> bool:
    """Strict rectangle intersection, with b's extent shrunk by tolerance on every side."""
    return (a.x < b.right - tolerance and
            a.right > b.x + tolerance and
            a.y < b.bottom - tolerance and
            a.bottom > b.y + tolerance)


def touches_or_overlaps(a: Room, b: Room, edge_tolerance: float = EDGE_TOUCH_TOLERANCE) -> bool:
    if intersects(a, b, 0):
        return True

    horizontal_touch = (abs(a.right - b.x) <= edge_tolerance or
                        abs(b.right - a.x) <= edge_tolerance)
    vertical_touch = (abs(a.bottom - b.y) <= edge_tolerance or
                      abs(b.bottom - a.y) <= edge_tolerance)

    # Aligned edges only count when the rooms actually face each other
    y_overlap = ranges_overlap(a.y, a.bottom, b.y, b.bottom)
    x_overlap = ranges_overlap(a.x, a.right, b.x, b.right)

    return (horizontal_touch and y_overlap) or (vertical_touch and x_overlap)


def bounding_box(rooms: Sequence[Room]) -> Tuple[float, float, float, float]:
    """(min_x, min_y, max_x, max_y) over all rooms; edges may overflow to inf."""
    return (min(r.x for r in rooms), min(r.y for r in rooms),
            max(r.right for r in rooms), max(r.bottom for r in rooms))
