from ..grid_core import Grid
from ..maze_gen import MazeGeneration
from ..maze_types import MazeAlgorithm
from ..utils import is_reachable


class ReverseDelete(MazeGeneration):
    """Opens every wall, then closes walls in random order unless that would disconnect the maze."""

    algorithm = MazeAlgorithm.REVERSE_DELETE

    def carve(self, grid: Grid):
        touched = grid.link_all()
        self.capture_step(grid, touched)

        edges = grid.unique_edges()
        grid.shuffle(edges)
        for a, b in edges:
            grid.unlink(a, b)
            if is_reachable(a, b, grid.linked_neighbors):
                self.capture_step(grid, [a, b])
            else:
                grid.link(a, b)
