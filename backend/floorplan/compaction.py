# floorplan/compaction.py
import math
import sys
from typing import List, Sequence

from floorplan.geometry import DEFAULT_CANVAS, Canvas, Room, round2


def compact_connected_layout(rooms: Sequence[Room], canvas: Canvas = DEFAULT_CANVAS) -> List[Room]:
    """
    Re-lays rooms out as a grid of full-width rows, ignoring their positions.

    Rooms fill rows of ``ceil(sqrt(n))`` in input order. Every row has the
    same height; inside a row each room gets a width share proportional to
    its area, and the last room takes whatever is left up to the right edge
    so the row spans the whole usable width. Neighbours in a row share an
    edge and consecutive rows share a boundary, so the result has no overlap
    and forms one cluster.
    """
    if not rooms:
        return []

    columns = max(1, math.ceil(math.sqrt(len(rooms))))
    rows = math.ceil(len(rooms) / columns)
    available_width = canvas.usable_width
    available_height = canvas.usable_height
    row_height = available_height / rows

    relaid_out: List[Room] = []
    for row in range(rows):
        row_rooms = rooms[row * columns:(row + 1) * columns]
        if not row_rooms:
            continue

        # Areas of huge rooms overflow to inf; cap so the sum stays finite
        cap = sys.float_info.max / (2 * len(row_rooms))
        weights = [min(max(room.area, 1), cap) for room in row_rooms]
        weight_sum = sum(weights)
        cursor_x = canvas.padding

        for index, room in enumerate(row_rooms):
            if index == len(row_rooms) - 1:
                width = canvas.padding + available_width - cursor_x
            else:
                width = available_width * (weights[index] / weight_sum)

            relaid_out.append(Room(
                name=room.name,
                x=round2(cursor_x),
                y=round2(canvas.padding + row * row_height),
                width=round2(max(width, 1)),
                height=round2(max(row_height, 1)),
            ))
            cursor_x += width

    return relaid_out
