import logging
from typing import List, Tuple

from ..grid_core import Grid
from ..maze_gen import MazeGeneration
from ..maze_types import Coordinates, MazeAlgorithm, MazeType

logger = logging.getLogger(__name__)

Region = Tuple[int, int, int, int]  # x, y, width, height


class RecursiveDivision(MazeGeneration):
    """
    Starts from a fully open grid and repeatedly splits regions with a wall
    that keeps a single passage. Works on any lattice whose x and y steps are
    both neighbour relations, which holds for Orthogonal and Rhombic grids.
    """

    algorithm = MazeAlgorithm.RECURSIVE_DIVISION
    supported_maze_types = frozenset({MazeType.ORTHOGONAL, MazeType.RHOMBIC})

    def carve(self, grid: Grid):
        touched = grid.link_all()
        self.capture_step(grid, touched)

        # Pending regions, split depth-first
        regions: List[Region] = [(0, 0, grid.width, grid.height)]
        while regions:
            x, y, width, height = regions.pop()
            if width <= 1 or height <= 1:
                continue  # A corridor is already a tree
            if height > width or (height == width and grid.random_bool()):
                regions.extend(self._split_rows(grid, x, y, width, height))
            else:
                regions.extend(self._split_columns(grid, x, y, width, height))

    def _split_rows(self, grid: Grid, x: int, y: int, width: int, height: int) -> List[Region]:
        """Walls off row wall_y from row wall_y + 1, leaving one gap."""
        wall_y = y + grid.random_index(height - 1)
        passage_x = x + grid.random_index(width)
        for cx in range(x, x + width):
            if cx == passage_x:
                continue
            above, below = Coordinates(cx, wall_y), Coordinates(cx, wall_y + 1)
            grid.unlink(above, below)
            self.capture_step(grid, [above, below])
        logger.debug("Split rows of %dx%d region at y=%d", width, height, wall_y)
        return [
            (x, y, width, wall_y - y + 1),
            (x, wall_y + 1, width, y + height - wall_y - 1),
        ]

    def _split_columns(self, grid: Grid, x: int, y: int, width: int, height: int) -> List[Region]:
        wall_x = x + grid.random_index(width - 1)
        passage_y = y + grid.random_index(height)
        for cy in range(y, y + height):
            if cy == passage_y:
                continue
            left, right = Coordinates(wall_x, cy), Coordinates(wall_x + 1, cy)
            grid.unlink(left, right)
            self.capture_step(grid, [left, right])
        logger.debug("Split columns of %dx%d region at x=%d", width, height, wall_x)
        return [
            (x, y, wall_x - x + 1, height),
            (wall_x + 1, y, x + width - wall_x - 1, height),
        ]
