from typing import List

from ..grid_core import Grid
from ..maze_gen import MazeGeneration
from ..maze_types import Coordinates, Direction, MazeAlgorithm, MazeType


class Sidewinder(MazeGeneration):
    """
    Row by row, extends a run of cells eastward and, when the run closes,
    carves one of its cells upward. The top row is a single corridor.
    """

    algorithm = MazeAlgorithm.SIDEWINDER
    supported_maze_types = frozenset({MazeType.ORTHOGONAL})

    def carve(self, grid: Grid):
        for y in range(grid.height):
            run: List[Coordinates] = []
            for x in range(grid.width):
                cell = grid.get(Coordinates(x, y))
                run.append(cell.coords)

                at_east_boundary = Direction.RIGHT not in cell.neighbors_by_direction
                at_north_boundary = Direction.UP not in cell.neighbors_by_direction
                close_run = at_east_boundary or (not at_north_boundary and grid.random_bool())

                if close_run:
                    if not at_north_boundary:
                        member = grid.get(grid.choice(run))
                        north = member.neighbors_by_direction[Direction.UP]
                        grid.link(member.coords, north)
                        self.capture_step(grid, [member.coords, north])
                    run = []
                else:
                    east = cell.neighbors_by_direction[Direction.RIGHT]
                    grid.link(cell.coords, east)
                    self.capture_step(grid, [cell.coords, east])
