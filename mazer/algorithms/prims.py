import heapq
import itertools
from typing import List, Set, Tuple

from ..grid_core import Grid
from ..maze_gen import MazeGeneration
from ..maze_types import Coordinates, MazeAlgorithm

FrontierEntry = Tuple[int, int, Coordinates]


class Prims(MazeGeneration):
    """
    Randomised Prim's: a frontier min-heap keyed by random weights. Each popped
    cell joins the maze through a randomly chosen neighbour already inside it.
    """

    algorithm = MazeAlgorithm.PRIMS

    def carve(self, grid: Grid):
        start = grid.random_cell_coords()
        visited = {start}
        frontier: List[FrontierEntry] = []
        counter = itertools.count()  # Tie-breaker so coordinates are never compared
        self._push_neighbors(grid, start, visited, frontier, counter)

        while frontier:
            _, _, coords = heapq.heappop(frontier)
            if coords in visited:
                continue
            inside = [n for n in grid.get(coords).neighbors() if n in visited]
            target = grid.choice(inside)
            grid.link(coords, target)
            visited.add(coords)
            self.capture_step(grid, [coords, target])
            self._push_neighbors(grid, coords, visited, frontier, counter)

    def _push_neighbors(
        self,
        grid: Grid,
        coords: Coordinates,
        visited: Set[Coordinates],
        frontier: List[FrontierEntry],
        counter,
    ):
        for neighbor in grid.get(coords).neighbors():
            if neighbor not in visited:
                heapq.heappush(frontier, (grid.random_weight(), next(counter), neighbor))
