from ..grid_core import Grid
from ..maze_gen import MazeGeneration
from ..maze_types import Direction, MazeAlgorithm, MazeType


class BinaryTree(MazeGeneration):
    """Links every cell either upward or rightward, chosen by a coin flip."""

    algorithm = MazeAlgorithm.BINARY_TREE
    supported_maze_types = frozenset({MazeType.ORTHOGONAL})

    def carve(self, grid: Grid):
        for cell in grid.all_cells():
            candidates = [
                cell.neighbors_by_direction[d]
                for d in (Direction.UP, Direction.RIGHT)
                if d in cell.neighbors_by_direction
            ]
            if not candidates:
                continue  # Top-right corner
            if len(candidates) == 1:
                target = candidates[0]
            else:
                target = candidates[0] if grid.random_bool() else candidates[1]
            grid.link(cell.coords, target)
            self.capture_step(grid, [cell.coords, target])
