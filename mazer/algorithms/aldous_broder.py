from ..grid_core import Grid
from ..maze_gen import MazeGeneration
from ..maze_types import MazeAlgorithm


class AldousBroder(MazeGeneration):
    """Unbiased random walk; a passage is carved on the first entry into each cell."""

    algorithm = MazeAlgorithm.ALDOUS_BRODER

    def carve(self, grid: Grid):
        current = grid.random_cell_coords()
        visited = {current}
        total = grid.size()

        while len(visited) < total:
            neighbor = grid.choice(grid.get(current).neighbors())
            if neighbor not in visited:
                grid.link(current, neighbor)
                visited.add(neighbor)
                self.capture_step(grid, [current, neighbor])
            current = neighbor
