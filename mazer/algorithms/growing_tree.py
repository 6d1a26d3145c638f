from enum import Enum
from typing import List

from ..grid_core import Grid
from ..maze_gen import MazeGeneration
from ..maze_types import Coordinates, MazeAlgorithm


class GrowingTreeStrategy(Enum):
    RANDOM = "Random"  # Behaves like Prim's
    NEWEST = "Newest"  # Behaves like the recursive backtracker

    def __str__(self) -> str:
        return self.value


class GrowingTree(MazeGeneration):
    """
    Keeps a list of active cells. Each step picks one by ``strategy`` and
    carves to a random unvisited neighbour, or drops it when there is none.
    """

    algorithm = MazeAlgorithm.GROWING_TREE

    def __init__(self, strategy: GrowingTreeStrategy = GrowingTreeStrategy.RANDOM):
        self.strategy = strategy

    def _select(self, grid: Grid, active: List[Coordinates]) -> int:
        if self.strategy == GrowingTreeStrategy.NEWEST:
            return len(active) - 1
        return grid.random_index(len(active))

    def carve(self, grid: Grid):
        start = grid.random_cell_coords()
        visited = {start}
        active = [start]

        while active:
            index = self._select(grid, active)
            current = active[index]
            unvisited = [n for n in grid.get(current).neighbors() if n not in visited]
            if unvisited:
                following = grid.choice(unvisited)
                grid.link(current, following)
                visited.add(following)
                active.append(following)
                self.capture_step(grid, [current, following])
            else:
                # Swap-remove
                active[index] = active[-1]
                active.pop()
