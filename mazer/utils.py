# utils.py
import math
from collections import deque
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Set, TypeVar

from .constants import ANGLE_OVERLAP_TOLERANCE

Node = TypeVar("Node", bound=Hashable)
NeighborFn = Callable[[Node], Iterable[Node]]


# --- Graph Utilities ---
def bfs_distances(start: Node, neighbors: NeighborFn) -> Dict[Node, int]:
    """Breadth-first hop counts from ``start`` to every node it can reach."""
    distances: Dict[Node, int] = {start: 0}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        current_distance = distances[current]
        for neighbor in neighbors(current):
            if neighbor not in distances:
                distances[neighbor] = current_distance + 1
                queue.append(neighbor)
    return distances


def get_path(
    start: Node,
    goal: Node,
    distances: Dict[Node, int],
    neighbors: NeighborFn,
) -> Optional[List[Node]]:
    """
    Walks backward from ``goal`` through neighbours one hop closer to ``start``.
    Returns the forward-ordered path, or None if ``goal`` was never reached.
    """
    if goal not in distances:
        return None

    path = [goal]
    current = goal
    while current != start:
        current_distance = distances[current]
        previous = next(
            (n for n in neighbors(current) if distances.get(n) == current_distance - 1),
            None,
        )
        if previous is None:
            return None
        path.append(previous)
        current = previous

    path.reverse()
    return path


def all_connected(start: Node, neighbors: NeighborFn) -> Set[Node]:
    """Every node reachable from ``start``, including ``start`` itself."""
    connected = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for neighbor in neighbors(current):
            if neighbor not in connected:
                connected.add(neighbor)
                queue.append(neighbor)
    return connected


def is_reachable(start: Node, goal: Node, neighbors: NeighborFn) -> bool:
    """Breadth-first search from ``start`` that stops as soon as ``goal`` is found."""
    if start == goal:
        return True
    seen = {start}
    queue = deque([start])

    while queue:
        for neighbor in neighbors(queue.popleft()):
            if neighbor == goal:
                return True
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return False


# --- Angle Helpers (polar layout) ---
def angle_dist(a1: float, a2: float) -> float:
    """Calculates the shortest distance between two angles in radians (-pi to pi)."""
    return (a2 - a1 + math.pi) % (2 * math.pi) - math.pi


def is_angle_within(
    angle: float,
    start_angle: float,
    end_angle: float,
    tolerance: float = ANGLE_OVERLAP_TOLERANCE,
) -> bool:
    """
    Checks if angle is within [start_angle, end_angle), handling wrap correctly.
    Angles are in radians. Start and end define the range counterclockwise.
    """
    angle_norm = (angle + 4 * math.pi) % (2 * math.pi)
    start_norm = (start_angle + 4 * math.pi) % (2 * math.pi)
    end_norm = (end_angle + 4 * math.pi) % (2 * math.pi)

    # Start and end coincide: the range is the full circle
    if abs(angle_dist(start_norm, end_norm)) < tolerance:
        return True

    if start_norm <= end_norm:
        return start_norm - tolerance <= angle_norm < end_norm - tolerance
    return (
        start_norm - tolerance <= angle_norm < 2 * math.pi
        or 0 <= angle_norm < end_norm - tolerance
    )
