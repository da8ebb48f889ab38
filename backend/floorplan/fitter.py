# floorplan/fitter.py
import logging
from typing import List, Sequence

from floorplan.geometry import (
    DEFAULT_CANVAS, MAX_SCALE, MIN_EXTENT, MIN_SCALE,
    Canvas, Room, bounding_box, clamp_finite, round2,
)

logger = logging.getLogger(__name__)


def fit_rooms_to_canvas(rooms: Sequence[Room], canvas: Canvas = DEFAULT_CANVAS) -> List[Room]:
    """
    Maps the rooms' bounding box into the canvas interior with one uniform
    scale (aspect ratio preserved) and a translation to the padding corner.
    """
    if not rooms:
        return []

    min_x, min_y, max_x, max_y = bounding_box(rooms)

    source_width = max(max_x - min_x, MIN_EXTENT)
    source_height = max(max_y - min_y, MIN_EXTENT)
    scale_x = (canvas.width - canvas.padding * 2) / source_width
    scale_y = (canvas.height - canvas.padding * 2) / source_height
    scale = clamp_finite(min(scale_x, scale_y), MIN_SCALE, MAX_SCALE)
    logger.debug("Fitting %d rooms with scale %.4f", len(rooms), scale)

    return [
        Room(
            name=room.name,
            x=round2((room.x - min_x) * scale + canvas.padding),
            y=round2((room.y - min_y) * scale + canvas.padding),
            width=round2(max(room.width * scale, 1)),
            height=round2(max(room.height * scale, 1)),
        )
        for room in rooms
    ]
