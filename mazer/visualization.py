# visualization.py
from typing import Iterable, List

import numpy as np

from . import constants as const
from .grid_core import Cell, Grid
from .maze_types import Coordinates, Direction, MazeType


# --- ASCII ---
def render_ascii(grid: Grid) -> str:
    """
    Draws an Orthogonal maze with ``+---+`` corners and ``|`` walls.
    Each cell is a three-space body followed by its east wall, and each row
    is closed by a line of south walls.
    """
    if grid.maze_type != MazeType.ORTHOGONAL:
        raise ValueError(
            f"ASCII display is only applicable to the Orthogonal maze type, got {grid.maze_type}"
        )

    lines = ["+" + "---+" * grid.width]
    for y in range(grid.height):
        top = "|"
        bottom = "+"
        for cell in grid.row(y):
            top += "   " + (" " if cell.is_linked_direction(Direction.RIGHT) else "|")
            bottom += ("   " if cell.is_linked_direction(Direction.DOWN) else "---") + "+"
        lines.append(top)
        lines.append(bottom)
    return "\n".join(lines) + "\n"


# --- Heat Map ---
def shade_index(distance: int, max_distance: int) -> int:
    """Buckets a distance into one of SHADE_BUCKETS shades, 0 nearest the start."""
    if max_distance == 0:
        return 0
    index = (distance * const.SHADE_BUCKETS) // max_distance
    return min(index, const.SHADE_BUCKETS - 1)


def distance_heatmap(grid: Grid) -> np.ndarray:
    """(height, width) array of shade indices; -1 marks unreached cells."""
    heatmap = np.full((grid.height, grid.width), -1, dtype=int)
    distances = [cell.distance for cell in grid.all_cells() if cell.distance >= 0]
    max_distance = max(distances, default=0)
    for cell in grid.all_cells():
        if cell.distance >= 0:
            heatmap[cell.y, cell.x] = shade_index(cell.distance, max_distance)
    return heatmap


# --- Solution Path ---
def solution_path_order(cells: Iterable[Cell]) -> List[Coordinates]:
    """Cells still to walk on the solution path, nearest to the start first."""
    remaining = [c for c in cells if c.on_solution_path and not c.is_visited]
    remaining.sort(key=lambda c: c.distance)
    return [c.coords for c in remaining]
