import logging
from typing import List

from ..grid_core import Grid
from ..maze_gen import MazeGeneration
from ..maze_types import Coordinates, MazeAlgorithm

logger = logging.getLogger(__name__)


class RecursiveBacktracker(MazeGeneration):
    """
    Depth-first search from the start cell with an explicit stack.
    Modifies the ``linked`` sets of the cells in the grid.
    """

    algorithm = MazeAlgorithm.RECURSIVE_BACKTRACKER

    def carve(self, grid: Grid):
        start = grid.start_coords
        logger.debug("  Starting maze generation at cell: %s", start)

        # Initialize stack and starting cell
        stack: List[Coordinates] = [start]
        visited = {start}

        # Main loop
        while stack:
            current = stack[-1]
            unvisited_neighbours = [n for n in grid.get(current).neighbors() if n not in visited]

            if unvisited_neighbours:
                # Choose a random unvisited neighbour
                following = grid.choice(unvisited_neighbours)
                grid.link(current, following)
                visited.add(following)
                stack.append(following)
                self.capture_step(grid, [current, following])
            else:
                # No unvisited neighbours, backtrack
                stack.pop()

        logger.debug("  Linked %d/%d cells", len(visited), grid.size())
