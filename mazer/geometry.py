# geometry.py
import logging
import math
from typing import Iterable, List, NamedTuple, Tuple, Union

import numpy as np

from . import constants as const
from .grid_core import Grid
from .maze_types import CellOrientation, Coordinates, Direction, MazeType
from .utils import is_angle_within

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]  # Pair of indices into a cell's unit polygon

# Vertex pairs of each triangle edge, by the direction that edge faces
_DELTA_EDGES = {
    CellOrientation.NORMAL: (
        (Direction.UPPER_LEFT, (0, 1)),
        (Direction.UPPER_RIGHT, (0, 2)),
        (Direction.DOWN, (1, 2)),
    ),
    CellOrientation.INVERTED: (
        (Direction.UP, (0, 1)),
        (Direction.LOWER_LEFT, (0, 2)),
        (Direction.LOWER_RIGHT, (1, 2)),
    ),
}


class PolarBounds(NamedTuple):
    r_inner: float
    r_outer: float
    theta_start: float
    theta_end: float

    @property
    def center(self) -> Tuple[float, float]:
        r = (self.r_inner + self.r_outer) / 2.0
        theta = (self.theta_start + self.theta_end) / 2.0
        return (r * math.cos(theta), r * math.sin(theta))


# --- Unit Polygons ---
def triangle_height(cell_size: float = const.DEFAULT_CELL_SIZE) -> float:
    """Height of an equilateral triangle with side ``cell_size``."""
    return cell_size * math.sqrt(3) / 2.0


def triangle_unit_points(orientation: CellOrientation) -> np.ndarray:
    """(3, 2) vertices of a unit triangle, y growing downward."""
    h = triangle_height(1.0)
    if orientation == CellOrientation.INVERTED:
        return np.array([(0.0, 0.0), (1.0, 0.0), (0.5, h)])
    return np.array([(0.5, 0.0), (0.0, h), (1.0, h)])


def flat_top_unit_points() -> np.ndarray:
    """(6, 2) vertices of a flat-top hexagon with side 1, clockwise from the top-left."""
    h = math.sqrt(3)
    return np.array([
        (0.5, 0.0),
        (1.5, 0.0),
        (2.0, h / 2.0),
        (1.5, h),
        (0.5, h),
        (0.0, h / 2.0),
    ])


# --- Wall Segments ---
def delta_wall_segments(
    open_dirs: Iterable[Union[Direction, str]], orientation: CellOrientation
) -> List[Edge]:
    """Edges of the unit triangle to stroke: those whose direction is not open."""
    open_set = {Direction.from_str(d) for d in open_dirs}
    return [edge for direction, edge in _DELTA_EDGES[orientation] if direction not in open_set]


def sigma_wall_segments(grid: Grid, coords: Coordinates) -> List[Edge]:
    """
    Edges of the unit hexagon to stroke for the cell at ``coords``.

    A wall is drawn toward each existing neighbour that shares no passage with
    the cell. Boundaries between consecutive cells of the solution path are
    left open so the path reads as one continuous corridor. Edges on the grid
    border are not reported.
    """
    if grid.maze_type != MazeType.SIGMA:
        raise ValueError(f"Hexagonal walls need a Sigma maze, got {grid.maze_type}")

    cell = grid.get(coords)
    is_odd = cell.x % 2 == 1
    walls: List[Edge] = []
    for direction in Direction.sigma_neighbors():
        dq, dr = direction.offset_delta(is_odd)
        neighbor = grid.get_cell(Coordinates(cell.x + dq, cell.y + dr))
        if neighbor is None:
            continue
        if (
            cell.on_solution_path
            and neighbor.on_solution_path
            and abs(cell.distance - neighbor.distance) == 1
        ):
            continue
        if not (cell.is_linked(neighbor.coords) or neighbor.is_linked(cell.coords)):
            walls.append(direction.vertex_indices())
    return walls


def cell_origin(grid: Grid, coords: Coordinates, cell_size: float = const.DEFAULT_CELL_SIZE) -> np.ndarray:
    """Top-left corner of a Delta or Sigma cell's unit polygon in drawing space."""
    if grid.maze_type == MazeType.DELTA:
        # Triangles interlock, so each column advances half a side
        return np.array([coords.x * cell_size / 2.0, coords.y * triangle_height(cell_size)])
    if grid.maze_type == MazeType.SIGMA:
        h = math.sqrt(3) * cell_size
        shift = h / 2.0 if coords.x % 2 == 1 else 0.0
        return np.array([coords.x * 1.5 * cell_size, coords.y * h + shift])
    raise ValueError(f"No polygon layout for maze type {grid.maze_type}")


def extract_wall_segments(grid: Grid, cell_size: float = const.DEFAULT_CELL_SIZE) -> np.ndarray:
    """
    Interior wall lines of a Delta or Sigma maze as an (N, 2, 2) array of
    ((x1, y1), (x2, y2)) segments in drawing space.
    """
    logger.debug("--- Extracting Wall Segments (%s) ---", grid.maze_type)
    lines = []
    for cell in grid.all_cells():
        if grid.maze_type == MazeType.DELTA:
            points = triangle_unit_points(cell.orientation)
            open_dirs = cell.linked_directions()
            # Only edges facing an existing neighbour are interior
            edges = [
                edge
                for direction, edge in _DELTA_EDGES[cell.orientation]
                if direction in cell.neighbors_by_direction and direction not in open_dirs
            ]
        elif grid.maze_type == MazeType.SIGMA:
            points = flat_top_unit_points()
            edges = sigma_wall_segments(grid, cell.coords)
        else:
            raise ValueError(f"No polygon layout for maze type {grid.maze_type}")

        placed = points * cell_size + cell_origin(grid, cell.coords, cell_size)
        lines.extend((placed[i], placed[j]) for i, j in edges)

    if not lines:
        return np.empty((0, 2, 2))
    return np.array(lines)


# --- Polar Layout ---
def polar_cell_bounds(
    grid: Grid, coords: Coordinates, center_radius: float = const.POLAR_CENTER_RADIUS
) -> PolarBounds:
    """Radial and angular extent of a polar cell; rings grow outward from ``center_radius``."""
    if grid.maze_type != MazeType.POLAR:
        raise ValueError(f"Polar bounds need a Polar maze, got {grid.maze_type}")
    grid.get(coords)

    ring_radii = np.linspace(center_radius, center_radius + grid.height, grid.height + 1)
    angles = np.linspace(0, 2 * math.pi, grid.width + 1)
    return PolarBounds(
        r_inner=float(ring_radii[coords.y]),
        r_outer=float(ring_radii[coords.y + 1]),
        theta_start=float(angles[coords.x]),
        theta_end=float(angles[coords.x + 1]),
    )


def polar_cell_at_angle(grid: Grid, ring: int, angle: float) -> Coordinates:
    """Finds the sector of ``ring`` that covers ``angle`` (radians, any winding)."""
    for x in range(grid.width):
        coords = Coordinates(x, ring)
        bounds = polar_cell_bounds(grid, coords)
        if is_angle_within(angle, bounds.theta_start, bounds.theta_end):
            return coords
    # Only reachable through floating point drift at the seam
    return Coordinates(0, ring)
