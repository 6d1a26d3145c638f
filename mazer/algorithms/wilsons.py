from typing import Dict, List

from ..grid_core import Grid
from ..maze_gen import MazeGeneration
from ..maze_types import Coordinates, MazeAlgorithm


class Wilsons(MazeGeneration):
    """
    Grows the maze from the start cell with loop-erased random walks.

    Each walk begins at a random cell outside the tree and wanders until it
    touches the tree. Whenever the walk crosses itself the loop is cut away,
    so the surviving path is simple and can be carved as is.
    """

    algorithm = MazeAlgorithm.WILSONS

    def carve(self, grid: Grid):
        in_tree = {grid.start_coords}
        remaining = [c for c in grid.all_coordinates() if c not in in_tree]
        slots = {coords: index for index, coords in enumerate(remaining)}

        while remaining:
            walk = self._loop_erased_walk(grid, grid.choice(remaining), in_tree)
            for current, following in zip(walk, walk[1:]):
                grid.link(current, following)
                in_tree.add(current)
                _swap_remove(remaining, slots, current)
                self.capture_step(grid, [current, following])

    def _loop_erased_walk(self, grid: Grid, origin: Coordinates, in_tree) -> List[Coordinates]:
        walk = [origin]
        positions = {origin: 0}
        while walk[-1] not in in_tree:
            step = grid.choice(grid.get(walk[-1]).neighbors())
            if step in positions:
                # Erase the loop
                for erased in walk[positions[step] + 1:]:
                    del positions[erased]
                walk = walk[:positions[step] + 1]
            else:
                positions[step] = len(walk)
                walk.append(step)
        return walk


def _swap_remove(items: List[Coordinates], slots: Dict[Coordinates, int], coords: Coordinates):
    """Drops coords in O(1) by moving the last item into its place."""
    index = slots.pop(coords)
    last = items.pop()
    if index < len(items):
        items[index] = last
        slots[last] = index
