# floorplan/validator.py
import itertools
import math
from typing import Iterator, List, Sequence, Tuple

import networkx as nx

from floorplan.geometry import (
    EDGE_TOUCH_TOLERANCE, OVERLAP_TOLERANCE, Room, intersects, touches_or_overlaps,
)


def _overlapping_pairs(rooms: Sequence[Room], tolerance: float) -> Iterator[Tuple[int, int]]:
    for i, j in itertools.combinations(range(len(rooms)), 2):
        if intersects(rooms[i], rooms[j], tolerance):
            yield i, j


def find_overlaps(rooms: Sequence[Room], tolerance: float = OVERLAP_TOLERANCE) -> List[Tuple[int, int]]:
    """Index pairs (i, j), i < j, whose rectangles intersect beyond the tolerance."""
    return list(_overlapping_pairs(rooms, tolerance))


def has_overlap(rooms: Sequence[Room], tolerance: float = OVERLAP_TOLERANCE) -> bool:
    return any(True for _ in _overlapping_pairs(rooms, tolerance))


def adjacency_graph(rooms: Sequence[Room], edge_tolerance: float = EDGE_TOUCH_TOLERANCE) -> nx.Graph:
    """Graph over room indices; an edge means the two rooms touch or overlap."""
    graph = nx.Graph()
    graph.add_nodes_from(range(len(rooms)))
    for i, j in itertools.combinations(range(len(rooms)), 2):
        if touches_or_overlaps(rooms[i], rooms[j], edge_tolerance):
            graph.add_edge(i, j)
    return graph


def is_single_cluster(rooms: Sequence[Room], edge_tolerance: float = EDGE_TOUCH_TOLERANCE) -> bool:
    if len(rooms) <= 1:
        return True
    graph = adjacency_graph(rooms, edge_tolerance)
    # Breadth-first reachability from the first room
    return len(nx.node_connected_component(graph, 0)) == len(rooms)


def find_clusters(rooms: Sequence[Room], edge_tolerance: float = EDGE_TOUCH_TOLERANCE) -> List[List[int]]:
    graph = adjacency_graph(rooms, edge_tolerance)
    clusters = [sorted(c) for c in nx.connected_components(graph)]
    return sorted(clusters, key=lambda c: c[0])


def validate_rooms(rooms: Sequence[Room]) -> Tuple[bool, List[str]]:
    """Validates a fitted room set: finite geometry, no overlaps and a single connected cluster."""
    errors: List[str] = []

    for room in rooms:
        if not all(math.isfinite(v) for v in (room.x, room.y, room.width, room.height)):
            errors.append(f"{room.name} has non-finite geometry.")

    for i, j in find_overlaps(rooms):
        errors.append(f"{rooms[i].name} overlaps with {rooms[j].name}.")

    if not is_single_cluster(rooms):
        errors.append(f"Layout has {len(find_clusters(rooms))} disconnected clusters.")

    return (len(errors) == 0, errors)
