# floorplan/sanitizer.py
import logging
import math
from collections.abc import Mapping
from typing import Any, List, Optional

from floorplan.geometry import MAX_NAME_LENGTH, Room

logger = logging.getLogger(__name__)


def to_finite_number(value: Any) -> float:
    """Coerce generator output to a finite float, defaulting to 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        try:
            value = float(value)
        except OverflowError:
            return 0
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            parsed = float(text)
        except ValueError:
            return 0
        return parsed if math.isfinite(parsed) else 0
    return 0


def sanitize_room_name(name: Any, index: int) -> str:
    if isinstance(name, str) and name.strip():
        return name.strip()[:MAX_NAME_LENGTH]
    return f"Room {index + 1}"


def _to_room(raw: Any, index: int) -> Optional[Room]:
    if not isinstance(raw, Mapping):
        return None

    x = to_finite_number(raw.get("x"))
    y = to_finite_number(raw.get("y"))
    width = to_finite_number(raw.get("width"))
    height = to_finite_number(raw.get("height"))

    if width <= 0 or height <= 0:
        return None

    return Room(
        name=sanitize_room_name(raw.get("name"), index),
        x=float(x),
        y=float(y),
        width=float(width),
        height=float(height),
    )


def sanitize_rooms(data: Any) -> List[Room]:
    """
    Turns untrusted generator output into well-formed rooms.

    Accepts anything; only a mapping with a non-empty ``rooms`` list yields
    rooms. Entries with a non-positive (or unparseable) width or height are
    dropped, the rest keep their input order. Never raises.
    """
    source_rooms = data.get("rooms") if isinstance(data, Mapping) else None
    if not isinstance(source_rooms, (list, tuple)) or not source_rooms:
        return []

    rooms = []
    for index, raw in enumerate(source_rooms):
        room = _to_room(raw, index)
        if room is None:
            logger.debug("Dropping room entry %d: not a room with positive size", index)
            continue
        rooms.append(room)
    return rooms
