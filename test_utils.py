"""
Tests for the generic graph utilities and angle helpers.
"""

import math

from mazer.utils import (
    all_connected,
    angle_dist,
    bfs_distances,
    get_path,
    is_angle_within,
    is_reachable,
)

# A small tree with a detached pair: a-b-c, b-d, and x-y
GRAPH = {
    "a": ["b"],
    "b": ["a", "c", "d"],
    "c": ["b"],
    "d": ["b"],
    "x": ["y"],
    "y": ["x"],
}


def neighbors(node):
    return GRAPH[node]


# =============================================================================
# Graph Utilities
# =============================================================================


class TestGraphUtilities:
    """Tests for breadth-first helpers over a neighbour function."""

    def test_bfs_distances(self) -> None:
        assert bfs_distances("a", neighbors) == {"a": 0, "b": 1, "c": 2, "d": 2}

    def test_get_path_is_forward_ordered(self) -> None:
        distances = bfs_distances("a", neighbors)
        assert get_path("a", "d", distances, neighbors) == ["a", "b", "d"]

    def test_get_path_to_self(self) -> None:
        distances = bfs_distances("c", neighbors)
        assert get_path("c", "c", distances, neighbors) == ["c"]

    def test_get_path_unreached_goal(self) -> None:
        """A goal missing from the distance map yields None."""
        distances = bfs_distances("a", neighbors)
        assert get_path("a", "x", distances, neighbors) is None

    def test_all_connected(self) -> None:
        assert all_connected("c", neighbors) == {"a", "b", "c", "d"}
        assert all_connected("x", neighbors) == {"x", "y"}

    def test_is_reachable(self) -> None:
        assert is_reachable("a", "d", neighbors)
        assert is_reachable("a", "a", neighbors)
        assert not is_reachable("a", "y", neighbors)


# =============================================================================
# Angle Helpers
# =============================================================================


class TestAngles:
    """Tests for angle wrap handling used by the polar layout."""

    def test_angle_dist_wraps(self) -> None:
        assert math.isclose(angle_dist(0.1, 2 * math.pi - 0.1), -0.2, abs_tol=1e-9)
        assert math.isclose(angle_dist(0.0, math.pi / 2), math.pi / 2)

    def test_within_simple_range(self) -> None:
        assert is_angle_within(1.0, 0.5, 1.5)
        assert not is_angle_within(2.0, 0.5, 1.5)

    def test_within_range_crossing_zero(self) -> None:
        """A range that wraps past 2*pi still contains small angles."""
        start, end = 7 * math.pi / 4, math.pi / 4
        assert is_angle_within(0.0, start, end)
        assert is_angle_within(-0.1, start, end)
        assert not is_angle_within(math.pi, start, end)

    def test_full_circle(self) -> None:
        assert is_angle_within(3.0, 0.0, 2 * math.pi)
