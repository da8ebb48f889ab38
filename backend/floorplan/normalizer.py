# floorplan/normalizer.py
import logging
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from floorplan.compaction import compact_connected_layout
from floorplan.fitter import fit_rooms_to_canvas
from floorplan.geometry import DEFAULT_CANVAS, Canvas, Room
from floorplan.sanitizer import sanitize_rooms
from floorplan.validator import validate_rooms

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Blueprint:
    rooms: Tuple[Room, ...] = ()
    repaired: bool = False  # True when the grid fallback replaced the input positions

    def to_dict(self) -> Dict[str, Any]:
        return {"rooms": [room.to_dict() for room in self.rooms]}


def normalize_blueprint(data: Any, canvas: Canvas = DEFAULT_CANVAS) -> Blueprint:
    """
    sanitize -> fit -> validate -> (compact + refit when invalid).

    Total over its input: malformed data gives an empty blueprint, never an
    error. The compacted layout is overlap-free and connected by construction
    and is not validated again.
    """
    rooms = sanitize_rooms(data)
    if not rooms:
        return Blueprint()

    fitted = fit_rooms_to_canvas(rooms, canvas)
    ok, errors = validate_rooms(fitted)
    if ok:
        return Blueprint(rooms=tuple(fitted))

    logger.info("Layout failed validation (%s); compacting %d rooms", "; ".join(errors), len(fitted))
    compacted = fit_rooms_to_canvas(compact_connected_layout(fitted, canvas), canvas)
    return Blueprint(rooms=tuple(compacted), repaired=True)
