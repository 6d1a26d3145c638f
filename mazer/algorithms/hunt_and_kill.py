import logging
from typing import Optional, Set

from ..grid_core import Grid
from ..maze_gen import MazeGeneration
from ..maze_types import Coordinates, MazeAlgorithm

logger = logging.getLogger(__name__)


class HuntAndKill(MazeGeneration):
    """Random walk that, when cornered, hunts row by row for a fresh cell beside the maze."""

    algorithm = MazeAlgorithm.HUNT_AND_KILL

    def carve(self, grid: Grid):
        current: Optional[Coordinates] = grid.random_cell_coords()
        visited = {current}

        while current is not None:
            unvisited = [n for n in grid.get(current).neighbors() if n not in visited]
            if unvisited:
                following = grid.choice(unvisited)
                grid.link(current, following)
                visited.add(following)
                self.capture_step(grid, [current, following])
                current = following
            else:
                current = self._hunt(grid, visited)

    def _hunt(self, grid: Grid, visited: Set[Coordinates]) -> Optional[Coordinates]:
        for cell in grid.all_cells():
            if cell.coords in visited:
                continue
            visited_neighbors = [n for n in cell.neighbors() if n in visited]
            if visited_neighbors:
                target = grid.choice(visited_neighbors)
                grid.link(cell.coords, target)
                visited.add(cell.coords)
                self.capture_step(grid, [cell.coords, target])
                logger.debug("Hunt resumed walk at %s", cell.coords)
                return cell.coords
        return None
