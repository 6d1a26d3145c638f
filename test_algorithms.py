"""
Tests for the generation algorithms and the shared generate/finalize lifecycle.
"""

import pytest

from mazer.algorithms import (
    ALGORITHMS,
    BinaryTree,
    DisjointSet,
    Ellers,
    GrowingTree,
    GrowingTreeStrategy,
    RecursiveDivision,
    ReverseDelete,
    Sidewinder,
    get_algorithm,
)
from mazer.algorithms.wilsons import _swap_remove
from mazer.errors import AlgorithmUnavailableForMazeType
from mazer.grid_core import Grid
from mazer.maze_gen import MazeGeneration
from mazer.maze_types import CellOrientation, Coordinates, Direction, MazeAlgorithm, MazeType
from mazer.request import generate

C = Coordinates

ORTHOGONAL_ONLY = {MazeAlgorithm.BINARY_TREE, MazeAlgorithm.SIDEWINDER, MazeAlgorithm.ELLERS}

SUPPORTED_PAIRS = [
    (algorithm, maze_type)
    for algorithm in MazeAlgorithm
    for maze_type in MazeType
    if get_algorithm(algorithm).supports(maze_type)
]
UNSUPPORTED_PAIRS = [
    (algorithm, maze_type)
    for algorithm in MazeAlgorithm
    for maze_type in MazeType
    if not get_algorithm(algorithm).supports(maze_type)
]

GROWING = [
    MazeAlgorithm.ALDOUS_BRODER,
    MazeAlgorithm.WILSONS,
    MazeAlgorithm.HUNT_AND_KILL,
    MazeAlgorithm.RECURSIVE_BACKTRACKER,
    MazeAlgorithm.PRIMS,
    MazeAlgorithm.KRUSKALS,
    MazeAlgorithm.GROWING_TREE,
    MazeAlgorithm.ELLERS,
    MazeAlgorithm.SIDEWINDER,
    MazeAlgorithm.BINARY_TREE,
]
CARVING_AWAY = [MazeAlgorithm.RECURSIVE_DIVISION, MazeAlgorithm.REVERSE_DELETE]


def assert_finalized_perfect_maze(grid: Grid) -> None:
    """Checks that a built grid is a spanning tree with consistent annotations."""
    assert grid.is_perfect_maze()
    distances = grid.distances(grid.start_coords)
    path = grid.get_path_to(grid.start_coords, grid.goal_coords)
    for cell in grid.all_cells():
        neighbors = set(cell.neighbors())
        for other in cell.linked:
            assert other in neighbors
            assert cell.coords in grid.get(other).linked
        assert cell.distance == distances[cell.coords]
        assert cell.on_solution_path == (cell.coords in path)
        assert set(cell.open_walls) == {
            d for d, n in cell.neighbors_by_direction.items() if n in cell.linked
        }
    on_path = [c for c in grid.all_cells() if c.on_solution_path]
    assert len(on_path) == grid.get(grid.goal_coords).distance + 1
    assert grid.active_cell().coords == grid.start_coords


def build(algorithm: MazeAlgorithm, maze_type: MazeType, width: int, height: int, **kwargs) -> Grid:
    grid = Grid(maze_type, width, height, **kwargs)
    get_algorithm(algorithm).build(grid)
    return grid


# =============================================================================
# Registry
# =============================================================================


class TestRegistry:
    """Tests for algorithm lookup and the support matrix."""

    def test_every_algorithm_is_registered(self) -> None:
        assert set(ALGORITHMS) == set(MazeAlgorithm)
        for algorithm in MazeAlgorithm:
            generator = get_algorithm(algorithm)
            assert isinstance(generator, MazeGeneration)
            assert generator.algorithm == algorithm

    def test_support_matrix(self) -> None:
        for algorithm in ORTHOGONAL_ONLY:
            assert get_algorithm(algorithm).supported_maze_types == {MazeType.ORTHOGONAL}
        assert RecursiveDivision().supported_maze_types == {MazeType.ORTHOGONAL, MazeType.RHOMBIC}
        for algorithm in set(MazeAlgorithm) - ORTHOGONAL_ONLY - {MazeAlgorithm.RECURSIVE_DIVISION}:
            assert get_algorithm(algorithm).supported_maze_types == set(MazeType)


# =============================================================================
# Universal Properties
# =============================================================================


class TestPerfectMazes:
    """Every supported pairing yields a perfect, correctly annotated maze."""

    @pytest.mark.parametrize("algorithm,maze_type", SUPPORTED_PAIRS)
    def test_build_is_perfect(self, algorithm: MazeAlgorithm, maze_type: MazeType) -> None:
        grid = build(algorithm, maze_type, 6, 6, seed=2024)
        assert_finalized_perfect_maze(grid)
        assert grid.count_edges() == grid.size() - 1

    @pytest.mark.parametrize("algorithm", list(MazeAlgorithm))
    def test_non_square_orthogonal(self, algorithm: MazeAlgorithm) -> None:
        grid = build(algorithm, MazeType.ORTHOGONAL, 9, 4, seed=11)
        assert_finalized_perfect_maze(grid)

    @pytest.mark.parametrize("algorithm", list(MazeAlgorithm))
    def test_same_seed_same_maze(self, algorithm: MazeAlgorithm) -> None:
        a = build(algorithm, MazeType.ORTHOGONAL, 7, 7, seed=99)
        b = build(algorithm, MazeType.ORTHOGONAL, 7, 7, seed=99)
        assert a.to_dict()["cells"] == b.to_dict()["cells"]

    def test_growing_tree_newest(self) -> None:
        grid = Grid(MazeType.SIGMA, 8, 8, seed=3)
        GrowingTree(GrowingTreeStrategy.NEWEST).build(grid)
        assert_finalized_perfect_maze(grid)

    def test_wilsons_on_a_large_grid(self) -> None:
        grid = build(MazeAlgorithm.WILSONS, MazeType.ORTHOGONAL, 60, 60, seed=5)
        assert_finalized_perfect_maze(grid)

    def test_wilsons_swap_remove(self) -> None:
        """Removing a cell moves the last one into its place."""
        items = [C(0, 0), C(1, 0), C(2, 0), C(3, 0)]
        slots = {coords: index for index, coords in enumerate(items)}
        _swap_remove(items, slots, C(1, 0))
        assert items == [C(0, 0), C(3, 0), C(2, 0)]
        assert slots == {C(0, 0): 0, C(3, 0): 1, C(2, 0): 2}
        _swap_remove(items, slots, C(2, 0))
        assert items == [C(0, 0), C(3, 0)]
        assert slots == {C(0, 0): 0, C(3, 0): 1}


class TestRejection:
    """Unsupported pairings fail before touching the grid."""

    @pytest.mark.parametrize("algorithm,maze_type", UNSUPPORTED_PAIRS)
    def test_unsupported_pairing(self, algorithm: MazeAlgorithm, maze_type: MazeType) -> None:
        grid = Grid(maze_type, 6, 6, seed=1)
        seed_before = grid.seed
        with pytest.raises(AlgorithmUnavailableForMazeType) as excinfo:
            get_algorithm(algorithm).generate(grid)
        assert excinfo.value.algorithm == algorithm
        assert excinfo.value.maze_type == maze_type
        assert grid.count_edges() == 0
        assert grid.seed == seed_before


# =============================================================================
# Capture Steps
# =============================================================================


class TestCaptureSteps:
    """Snapshots recorded while a maze is carved."""

    @staticmethod
    def edge_counts(grid: Grid):
        return [step.count_edges() for step in grid.generation_steps]

    @staticmethod
    def assert_snapshots_consistent(grid: Grid) -> None:
        for step in grid.generation_steps:
            for cell in step.all_cells():
                assert set(cell.open_walls) == {
                    d for d, n in cell.neighbors_by_direction.items() if n in cell.linked
                }
        assert grid.generation_steps[-1].is_perfect_maze()

    @pytest.mark.parametrize("algorithm", GROWING)
    def test_growing_algorithms_add_edges(self, algorithm: MazeAlgorithm) -> None:
        grid = build(algorithm, MazeType.ORTHOGONAL, 5, 5, capture_steps=True, seed=8)
        counts = self.edge_counts(grid)
        assert counts
        assert counts == sorted(counts)
        assert counts[-1] == 24
        self.assert_snapshots_consistent(grid)

    @pytest.mark.parametrize("algorithm", CARVING_AWAY)
    def test_carving_algorithms_remove_edges(self, algorithm: MazeAlgorithm) -> None:
        grid = build(algorithm, MazeType.ORTHOGONAL, 5, 5, capture_steps=True, seed=8)
        counts = self.edge_counts(grid)
        assert counts[0] == len(grid.unique_edges())
        assert counts == sorted(counts, reverse=True)
        assert counts[-1] == 24
        self.assert_snapshots_consistent(grid)

    def test_recursive_division_on_rhombic(self) -> None:
        grid = build(
            MazeAlgorithm.RECURSIVE_DIVISION, MazeType.RHOMBIC, 6, 4, capture_steps=True, seed=4
        )
        assert_finalized_perfect_maze(grid)
        self.assert_snapshots_consistent(grid)

    def test_capture_off_records_nothing(self) -> None:
        grid = build(MazeAlgorithm.PRIMS, MazeType.ORTHOGONAL, 5, 5, seed=8)
        assert grid.generation_steps is None

    def test_snapshots_leave_cursor_at_start(self) -> None:
        grid = build(MazeAlgorithm.KRUSKALS, MazeType.DELTA, 4, 4, capture_steps=True, seed=8)
        for step in grid.generation_steps:
            assert step.active_cell().coords == grid.start_coords


# =============================================================================
# Boundary Cases
# =============================================================================


class TestBoundaries:
    """Degenerate sizes and coincident endpoints."""

    @pytest.mark.parametrize("algorithm", list(MazeAlgorithm))
    def test_single_cell(self, algorithm: MazeAlgorithm) -> None:
        grid = build(algorithm, MazeType.ORTHOGONAL, 1, 1)
        cell = grid.get(C(0, 0))
        assert cell.distance == 0
        assert cell.is_start and cell.is_goal
        assert cell.open_walls == []
        assert cell.on_solution_path

    @pytest.mark.parametrize("algorithm", list(MazeAlgorithm))
    @pytest.mark.parametrize("width,height", [(1, 5), (5, 1)])
    def test_corridors(self, algorithm: MazeAlgorithm, width: int, height: int) -> None:
        grid = build(algorithm, MazeType.ORTHOGONAL, width, height, seed=6)
        assert grid.count_edges() == 4
        assert grid.get(grid.goal_coords).distance == 4
        assert all(cell.on_solution_path for cell in grid.all_cells())

    def test_start_equals_goal(self) -> None:
        grid = build(
            MazeAlgorithm.RECURSIVE_BACKTRACKER,
            MazeType.ORTHOGONAL,
            4,
            4,
            start=C(1, 2),
            goal=C(1, 2),
            seed=5,
        )
        on_path = [c.coords for c in grid.all_cells() if c.on_solution_path]
        assert on_path == [C(1, 2)]
        assert grid.get(C(1, 2)).distance == 0


# =============================================================================
# Algorithm-Specific Shapes
# =============================================================================


class TestAlgorithmShapes:
    """Structural signatures of the biased algorithms."""

    def test_binary_tree_open_top_row_and_right_column(self) -> None:
        grid = Grid(MazeType.ORTHOGONAL, 6, 5, seed=21)
        BinaryTree().build(grid)
        for x in range(5):
            assert grid.is_linked(C(x, 0), C(x + 1, 0))
        for y in range(1, 5):
            assert grid.is_linked(C(5, y), C(5, y - 1))

    def test_sidewinder_open_top_row(self) -> None:
        grid = Grid(MazeType.ORTHOGONAL, 6, 5, seed=21)
        Sidewinder().build(grid)
        for x in range(5):
            assert grid.is_linked(C(x, 0), C(x + 1, 0))

    def test_sidewinder_rows_have_an_exit_upward(self) -> None:
        grid = Grid(MazeType.ORTHOGONAL, 6, 5, seed=21)
        Sidewinder().build(grid)
        for y in range(1, 5):
            assert any(grid.get(C(x, y)).is_linked_direction(Direction.UP) for x in range(6))

    def test_ellers_on_a_wide_rectangle(self) -> None:
        grid = Grid(MazeType.ORTHOGONAL, 6, 5, seed=21)
        Ellers().build(grid)
        assert_finalized_perfect_maze(grid)

    def test_reverse_delete_keeps_connectivity_at_every_step(self) -> None:
        grid = Grid(MazeType.UPSILON, 5, 5, capture_steps=True, seed=13)
        ReverseDelete().build(grid)
        for step in grid.generation_steps:
            assert len(step.all_connected_cells(step.start_coords)) == step.size()


class TestDisjointSet:
    """Union-find used by Kruskal's algorithm."""

    def test_union_and_find(self) -> None:
        forest = DisjointSet("abcd")
        assert forest.union("a", "b")
        assert forest.union("c", "d")
        assert not forest.union("b", "a")
        assert forest.find("a") == forest.find("b")
        assert forest.find("a") != forest.find("c")
        assert forest.union("a", "d")
        assert len({forest.find(x) for x in "abcd"}) == 1


# =============================================================================
# End-to-End Scenarios
# =============================================================================


class TestScenarios:
    """Requests run through the public JSON entry point."""

    def test_orthogonal_recursive_backtracker(self) -> None:
        grid = generate(
            '{"maze_type":"Orthogonal","width":12,"height":12,'
            '"algorithm":"RecursiveBacktracker","start":{"x":0,"y":0},"goal":{"x":11,"y":11}}'
        )
        assert grid.is_perfect_maze()
        assert grid.count_edges() == 143
        assert grid.get(C(11, 11)).distance > 0

    def test_delta_aldous_broder(self) -> None:
        grid = generate(
            '{"maze_type":"Delta","width":16,"height":16,'
            '"algorithm":"AldousBroder","start":{"x":0,"y":0},"goal":{"x":15,"y":15}}'
        )
        assert grid.is_perfect_maze()
        assert grid.count_edges() == 255
        for y in range(16):
            expected_first = CellOrientation.NORMAL if y % 2 == 0 else CellOrientation.INVERTED
            row = grid.row(y)
            assert row[0].orientation == expected_first
            for left, right in zip(row, row[1:]):
                assert left.orientation != right.orientation

    def test_sigma_hunt_and_kill(self) -> None:
        grid = generate(
            '{"maze_type":"Sigma","width":26,"height":26,'
            '"algorithm":"HuntAndKill","start":{"x":0,"y":0},"goal":{"x":25,"y":25}}'
        )
        assert grid.is_perfect_maze()
        assert grid.count_edges() == 675
        hex_directions = set(Direction.sigma_neighbors())
        for cell in grid.all_cells():
            assert set(cell.neighbors_by_direction) <= hex_directions

    def test_delta_ellers_is_rejected(self) -> None:
        with pytest.raises(AlgorithmUnavailableForMazeType) as excinfo:
            generate('{"maze_type":"Delta","width":8,"height":8,"algorithm":"Ellers"}')
        assert excinfo.value.algorithm == MazeAlgorithm.ELLERS
        assert excinfo.value.maze_type == MazeType.DELTA

    def test_orthogonal_capture(self) -> None:
        grid = generate(
            '{"maze_type":"Orthogonal","width":4,"height":4,'
            '"algorithm":"RecursiveBacktracker","capture_steps":true}'
        )
        assert grid.generation_steps
        TestCaptureSteps.assert_snapshots_consistent(grid)

    def test_orthogonal_reverse_delete(self) -> None:
        grid = generate(
            '{"maze_type":"Orthogonal","width":3,"height":3,'
            '"algorithm":"ReverseDelete","start":{"x":0,"y":0},"goal":{"x":2,"y":2}}'
        )
        assert grid.is_perfect_maze()
        assert grid.count_edges() == 8
