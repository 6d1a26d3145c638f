import itertools
from typing import Dict, List

from ..grid_core import Grid
from ..maze_gen import MazeGeneration
from ..maze_types import Coordinates, MazeAlgorithm, MazeType


class Ellers(MazeGeneration):
    """
    Builds the maze one row at a time, tracking which cells of the current row
    are already connected (share a set id).

    Within a row, neighbours from different sets are joined at random. Every
    set then sends at least one passage down into the next row. The last row
    joins whatever sets remain apart.
    """

    algorithm = MazeAlgorithm.ELLERS
    supported_maze_types = frozenset({MazeType.ORTHOGONAL})

    def carve(self, grid: Grid):
        set_for: Dict[Coordinates, int] = {}
        new_set_id = itertools.count()

        for y in range(grid.height):
            row = [Coordinates(x, y) for x in range(grid.width)]
            for coords in row:
                if coords not in set_for:
                    set_for[coords] = next(new_set_id)
            last_row = y == grid.height - 1

            # Horizontal joins
            for left, right in zip(row, row[1:]):
                if set_for[left] == set_for[right]:
                    continue
                if last_row or grid.random_bool():
                    grid.link(left, right)
                    self.capture_step(grid, [left, right])
                    self._merge(set_for, row, keep=set_for[left], drop=set_for[right])

            if last_row:
                break

            # Vertical passages, at least one per set
            members: Dict[int, List[Coordinates]] = {}
            for coords in row:
                members.setdefault(set_for[coords], []).append(coords)
            for set_id in sorted(members):
                cells = members[set_id]
                grid.shuffle(cells)
                descending = 1 + grid.random_index(len(cells))
                for coords in cells[:descending]:
                    below = Coordinates(coords.x, y + 1)
                    grid.link(coords, below)
                    self.capture_step(grid, [coords, below])
                    set_for[below] = set_id

    @staticmethod
    def _merge(set_for: Dict[Coordinates, int], row: List[Coordinates], keep: int, drop: int):
        for coords in row:
            if set_for[coords] == drop:
                set_for[coords] = keep
