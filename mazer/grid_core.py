# grid_core.py
import copy
import json
import logging
import random
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple, TypeVar, Union

from . import constants as const
from .errors import (
    EmptyList,
    FlattenedVectorDimensionsMismatch,
    GridDimensionsExceedLimitForCaptureSteps,
    InvalidCellForDeltaMaze,
    InvalidCellForNonDeltaMaze,
    InvalidCellCoordinates,
    InvalidDirection,
    MissingCoordinates,
    MoveUnavailable,
    MultipleActiveCells,
    NoActiveCells,
    NoCellAtCoordinates,
    NoValidNeighbor,
    OutOfBoundsCoordinates,
    SerializationError,
)
from .maze_types import VALID_DIRECTIONS, CellOrientation, Coordinates, Direction, MazeType
from .utils import all_connected, bfs_distances, get_path

logger = logging.getLogger(__name__)

T = TypeVar("T")
Offsets = Dict[Direction, Tuple[int, int]]


class Cell:
    """A single node of the maze graph. Neighbours and links are held by coordinates only."""

    def __init__(
        self,
        x: int,
        y: int,
        maze_type: MazeType,
        is_start: bool = False,
        is_goal: bool = False,
        orientation: CellOrientation = CellOrientation.NORMAL,
    ):
        self.coords = Coordinates(x, y)
        self.maze_type = maze_type
        self.orientation = orientation
        self.neighbors_by_direction: Dict[Direction, Coordinates] = {}
        self.linked: Set[Coordinates] = set()  # Cells connected by passages
        self.distance: int = const.UNASSIGNED_DISTANCE
        self.is_start = is_start
        self.is_goal = is_goal
        # The cursor starts on the start cell
        self.is_active = is_start
        self.is_visited = is_start
        self.has_been_visited = is_start
        self.on_solution_path = False
        self.open_walls: List[Direction] = []

    @property
    def x(self) -> int:
        return self.coords.x

    @property
    def y(self) -> int:
        return self.coords.y

    def set_neighbors(self, neighbors_by_direction: Dict[Direction, Coordinates]):
        """Replaces the neighbour map, rejecting directions invalid for this maze type."""
        valid = VALID_DIRECTIONS[self.maze_type]
        for direction in neighbors_by_direction:
            if direction not in valid:
                raise InvalidDirection(direction)
        self.neighbors_by_direction = dict(neighbors_by_direction)

    def neighbors(self) -> List[Coordinates]:
        """Neighbour coordinates in the maze type's direction order."""
        seen: List[Coordinates] = []
        for direction in VALID_DIRECTIONS[self.maze_type]:
            coords = self.neighbors_by_direction.get(direction)
            if coords is not None and coords not in seen:
                seen.append(coords)
        return seen

    def unlinked_neighbors(self) -> List[Coordinates]:
        return [n for n in self.neighbors() if n not in self.linked]

    def linked_directions(self) -> List[Direction]:
        """Directions whose neighbour is linked to this cell, in direction order."""
        return [
            direction
            for direction in VALID_DIRECTIONS[self.maze_type]
            if self.neighbors_by_direction.get(direction) in self.linked
        ]

    def is_linked(self, coords: Optional[Coordinates]) -> bool:
        return coords is not None and coords in self.linked

    def is_linked_direction(self, direction: Direction) -> bool:
        return self.is_linked(self.neighbors_by_direction.get(direction))

    def set_open_walls(self):
        self.open_walls = self.linked_directions()

    def clone(self) -> "Cell":
        twin = copy.copy(self)
        twin.neighbors_by_direction = dict(self.neighbors_by_direction)
        twin.linked = set(self.linked)
        twin.open_walls = list(self.open_walls)
        return twin

    def to_dict(self) -> Dict[str, Any]:
        return {
            "coords": self.coords.to_dict(),
            "maze_type": self.maze_type.value,
            "linked": [d.value for d in self.linked_directions()],
            "distance": self.distance,
            "is_start": self.is_start,
            "is_goal": self.is_goal,
            "is_active": self.is_active,
            "is_visited": self.is_visited,
            "has_been_visited": self.has_been_visited,
            "on_solution_path": self.on_solution_path,
            "orientation": self.orientation.value,
        }

    def __repr__(self) -> str:
        return f"Cell({self.x},{self.y})"


# --- Neighbour Offsets per Tessellation ---
_CARDINAL_OFFSETS: Offsets = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}
_DIAGONAL_OFFSETS: Offsets = {
    Direction.UPPER_RIGHT: (1, -1),
    Direction.LOWER_RIGHT: (1, 1),
    Direction.LOWER_LEFT: (-1, 1),
    Direction.UPPER_LEFT: (-1, -1),
}


def _orthogonal_offsets(cell: Cell) -> Offsets:
    return _CARDINAL_OFFSETS


def _delta_offsets(cell: Cell) -> Offsets:
    # Upright triangles face their horizontal neighbours across their slanted
    # upper edges and their row neighbour below across the flat base.
    if cell.orientation == CellOrientation.NORMAL:
        return {
            Direction.UPPER_LEFT: (-1, 0),
            Direction.UPPER_RIGHT: (1, 0),
            Direction.DOWN: (0, 1),
        }
    return {
        Direction.LOWER_LEFT: (-1, 0),
        Direction.LOWER_RIGHT: (1, 0),
        Direction.UP: (0, -1),
    }


def _sigma_offsets(cell: Cell) -> Offsets:
    is_odd = cell.x % 2 == 1
    return {d: d.offset_delta(is_odd) for d in VALID_DIRECTIONS[MazeType.SIGMA]}


def _rhombille_offsets(cell: Cell) -> Offsets:
    # Odd rows sit half a diamond to the right of even rows
    shift = cell.y % 2
    return {
        Direction.UPPER_RIGHT: (shift, -1),
        Direction.LOWER_RIGHT: (shift, 1),
        Direction.LOWER_LEFT: (shift - 1, 1),
        Direction.UPPER_LEFT: (shift - 1, -1),
    }


def _rhombic_offsets(cell: Cell) -> Offsets:
    # Squares rotated 45 degrees: the x axis runs down-right, the y axis down-left
    return {
        Direction.LOWER_RIGHT: (1, 0),
        Direction.UPPER_LEFT: (-1, 0),
        Direction.LOWER_LEFT: (0, 1),
        Direction.UPPER_RIGHT: (0, -1),
    }


def _upsilon_offsets(cell: Cell) -> Offsets:
    if is_octagon(cell.coords):
        return {**_CARDINAL_OFFSETS, **_DIAGONAL_OFFSETS}
    return _CARDINAL_OFFSETS


NEIGHBOR_OFFSETS: Dict[MazeType, Callable[[Cell], Offsets]] = {
    MazeType.ORTHOGONAL: _orthogonal_offsets,
    MazeType.POLAR: _orthogonal_offsets,  # Rings are not wrapped
    MazeType.DELTA: _delta_offsets,
    MazeType.SIGMA: _sigma_offsets,
    MazeType.RHOMBILLE: _rhombille_offsets,
    MazeType.RHOMBIC: _rhombic_offsets,
    MazeType.UPSILON: _upsilon_offsets,
}


def is_octagon(coords: Coordinates) -> bool:
    """Upsilon grids alternate octagons and squares like a checkerboard."""
    return (coords.x + coords.y) % 2 == 0


class Grid:
    """
    Owns the cells of one maze in a flat row-major list and builds the
    geometry-specific adjacency between them. Every slot holds a cell once
    construction finishes.
    """

    def __init__(
        self,
        maze_type: MazeType,
        width: int,
        height: int,
        start: Optional[Coordinates] = None,
        goal: Optional[Coordinates] = None,
        capture_steps: bool = False,
        seed: Optional[int] = None,
    ):
        if width < 1 or height < 1:
            raise OutOfBoundsCoordinates(Coordinates(width, height), width, height)
        if capture_steps and (
            width > const.CAPTURE_STEPS_MAX_WIDTH or height > const.CAPTURE_STEPS_MAX_HEIGHT
        ):
            raise GridDimensionsExceedLimitForCaptureSteps(
                width, height, const.CAPTURE_STEPS_MAX_WIDTH, const.CAPTURE_STEPS_MAX_HEIGHT
            )

        self.maze_type = maze_type
        self.width = width
        self.height = height
        self.start_coords = start if start is not None else Coordinates(0, 0)
        self.goal_coords = goal if goal is not None else Coordinates(width - 1, height - 1)
        for coords in (self.start_coords, self.goal_coords):
            if not self.in_bounds(coords):
                raise OutOfBoundsCoordinates(coords, width, height)

        self.rng = random.Random(seed)
        self.seed: int = self.rng.randint(0, width * height)
        self.capture_steps = capture_steps
        self.generation_steps: Optional[List["Grid"]] = [] if capture_steps else None
        self.cells: List[Optional[Cell]] = [None] * (width * height)

        logger.debug(
            "--- Initializing Grid (%s, %d x %d, start=%s, goal=%s) ---",
            maze_type, width, height, self.start_coords, self.goal_coords,
        )
        if maze_type == MazeType.DELTA:
            self.generate_triangle_cells()
        else:
            self.generate_non_triangle_cells()
        self._assign_neighbors()
        logger.debug("--- Grid Initialized: %d cells ---", self.size())

    # --- Construction ---
    def generate_triangle_cells(self):
        """Fills every slot with a triangle; orientation alternates along rows and between rows."""
        if self.maze_type != MazeType.DELTA:
            raise InvalidCellForNonDeltaMaze(self.maze_type)
        for y in range(self.height):
            for x in range(self.width):
                orientation = (
                    CellOrientation.NORMAL if (x + y) % 2 == 0 else CellOrientation.INVERTED
                )
                self.cells[self.index(Coordinates(x, y))] = self._new_cell(x, y, orientation)

    def generate_non_triangle_cells(self):
        if self.maze_type == MazeType.DELTA:
            raise InvalidCellForDeltaMaze(self.maze_type)
        for y in range(self.height):
            for x in range(self.width):
                self.cells[self.index(Coordinates(x, y))] = self._new_cell(x, y)

    def _new_cell(
        self, x: int, y: int, orientation: CellOrientation = CellOrientation.NORMAL
    ) -> Cell:
        coords = Coordinates(x, y)
        return Cell(
            x,
            y,
            self.maze_type,
            is_start=coords == self.start_coords,
            is_goal=coords == self.goal_coords,
            orientation=orientation,
        )

    def _assign_neighbors(self):
        offsets_for = NEIGHBOR_OFFSETS[self.maze_type]
        multi_cell = self.size() > 1
        for cell in self.all_cells():
            neighbors: Dict[Direction, Coordinates] = {}
            for direction, (dx, dy) in offsets_for(cell).items():
                x, y = cell.x + dx, cell.y + dy
                if 0 <= x < self.width and 0 <= y < self.height:
                    neighbors[direction] = Coordinates(x, y)
            if multi_cell and not neighbors:
                raise NoValidNeighbor(cell.coords)
            cell.set_neighbors(neighbors)

        # A spanning tree needs the neighbour graph itself to be connected
        # (a one-column Delta grid taller than two rows is not).
        reachable = all_connected(self.start_coords, lambda c: self.get(c).neighbors())
        if len(reachable) != self.size():
            stranded = next(c for c in self.all_coordinates() if c not in reachable)
            raise NoValidNeighbor(stranded)

    # --- Lookup ---
    def in_bounds(self, coords: Coordinates) -> bool:
        return 0 <= coords.x < self.width and 0 <= coords.y < self.height

    def index(self, coords: Coordinates) -> int:
        return coords.y * self.width + coords.x

    def get(self, coords: Coordinates) -> Cell:
        """Retrieves the cell at coords, raising if it is out of bounds or absent."""
        if not self.in_bounds(coords):
            raise OutOfBoundsCoordinates(coords, self.width, self.height)
        cell = self.cells[self.index(coords)]
        if cell is None:
            raise NoCellAtCoordinates(coords)
        return cell

    def get_cell(self, coords: Coordinates) -> Optional[Cell]:
        """Safely retrieves a cell, returning None when there is none."""
        if not self.in_bounds(coords):
            return None
        return self.cells[self.index(coords)]

    def set(self, cell: Cell):
        if not self.in_bounds(cell.coords):
            raise OutOfBoundsCoordinates(cell.coords, self.width, self.height)
        self.cells[self.index(cell.coords)] = cell

    def all_cells(self) -> Iterator[Cell]:
        """Iterates over existing cells in row-major order."""
        return (cell for cell in self.cells if cell is not None)

    def all_coordinates(self) -> List[Coordinates]:
        return [cell.coords for cell in self.all_cells()]

    def row(self, y: int) -> List[Optional[Cell]]:
        if not 0 <= y < self.height:
            return []
        return self.cells[y * self.width:(y + 1) * self.width]

    def column(self, x: int) -> List[Optional[Cell]]:
        if not 0 <= x < self.width:
            return []
        return self.cells[x::self.width]

    def size(self) -> int:
        """Returns the number of cells; every slot is filled once the grid is built."""
        return self.width * self.height

    def flatten(self) -> List[Optional[Cell]]:
        return [cell.clone() if cell is not None else None for cell in self.cells]

    def unflatten(self, flattened: Sequence[Optional[Cell]]):
        """Replaces the cell array, checking every slot holds the cell for its index."""
        if len(flattened) != self.width * self.height:
            raise FlattenedVectorDimensionsMismatch(len(flattened), self.width, self.height)
        for index, cell in enumerate(flattened):
            expected = Coordinates(index % self.width, index // self.width)
            if cell is None:
                raise MissingCoordinates(expected)
            elif cell.coords != expected:
                raise InvalidCellCoordinates(cell.coords)
        self.cells = list(flattened)

    # --- Randomness ---
    def bounded_random_usize(self, upper_bound: int) -> int:
        """Uniform integer in [0, upper_bound]; remembered as the grid seed."""
        value = self.rng.randint(0, upper_bound)
        self.seed = value
        return value

    def random_index(self, length: int) -> int:
        """Uniform index into a sequence of the given length."""
        if length <= 0:
            raise EmptyList()
        return self.bounded_random_usize(length - 1)

    def random_bool(self) -> bool:
        return self.bounded_random_usize(const.RANDOM_BOOL_RANGE) % 2 == 0

    def random_weight(self) -> int:
        return self.bounded_random_usize(const.RANDOM_WEIGHT_MAX)

    def choice(self, items: Sequence[T]) -> T:
        return items[self.random_index(len(items))]

    def shuffle(self, items: List[T]):
        """Fisher-Yates shuffle drawing from the grid's random source."""
        for i in range(len(items) - 1, 0, -1):
            j = self.bounded_random_usize(i)
            items[i], items[j] = items[j], items[i]

    def random_cell_coords(self) -> Coordinates:
        """Returns the coordinates of a uniformly chosen cell."""
        return self.choice(self.cells).coords

    # --- Links ---
    def link(self, coord1: Coordinates, coord2: Coordinates):
        """Creates a bidirectional passage between two neighbouring cells."""
        cell1, cell2 = self._neighbor_pair(coord1, coord2)
        cell1.linked.add(coord2)
        cell2.linked.add(coord1)

    def unlink(self, coord1: Coordinates, coord2: Coordinates):
        """Removes the passage between two neighbouring cells, if any."""
        cell1, cell2 = self._neighbor_pair(coord1, coord2)
        cell1.linked.discard(coord2)
        cell2.linked.discard(coord1)

    def _neighbor_pair(self, coord1: Coordinates, coord2: Coordinates) -> Tuple[Cell, Cell]:
        cell1 = self.get(coord1)
        cell2 = self.get(coord2)
        if coord2 not in cell1.neighbors_by_direction.values():
            raise NoValidNeighbor(coord2)
        return cell1, cell2

    def is_linked(self, coord1: Coordinates, coord2: Coordinates) -> bool:
        return self.get(coord1).is_linked(coord2)

    def linked_neighbors(self, coords: Coordinates) -> List[Coordinates]:
        return sorted(self.get(coords).linked)

    def count_edges(self) -> int:
        """Counts passages; each one is stored on both of its cells."""
        return sum(len(cell.linked) for cell in self.all_cells()) // 2

    def link_all(self) -> List[Coordinates]:
        """Links every cell to every neighbour, returning the cells touched."""
        for cell in self.all_cells():
            for neighbor in cell.neighbors():
                self.link(cell.coords, neighbor)
        return self.all_coordinates()

    def unique_edges(self) -> List[Tuple[Coordinates, Coordinates]]:
        """Every neighbour pair once, smaller coordinates first, in a stable order."""
        edges = set()
        for cell in self.all_cells():
            for neighbor in cell.neighbors():
                edges.add((min(cell.coords, neighbor), max(cell.coords, neighbor)))
        return sorted(edges)

    # --- Reachability ---
    def distances(self, start: Coordinates) -> Dict[Coordinates, int]:
        self.get(start)
        return bfs_distances(start, self.linked_neighbors)

    def get_path_to(self, start: Coordinates, goal: Coordinates) -> Dict[Coordinates, int]:
        """Maps each cell on the start-to-goal path to its distance from start."""
        self.get(goal)
        distances = self.distances(start)
        path = get_path(start, goal, distances, self.linked_neighbors)
        if path is None:
            return {}
        return {coords: distances[coords] for coords in path}

    def all_connected_cells(self, start: Coordinates) -> Set[Coordinates]:
        self.get(start)
        return all_connected(start, self.linked_neighbors)

    def is_perfect_maze(self) -> bool:
        """Connected and acyclic: every cell reachable and exactly cells-1 passages."""
        total_cells = self.size()
        if len(self.all_connected_cells(self.start_coords)) != total_cells:
            return False
        return self.count_edges() == total_cells - 1

    def refresh_open_walls(self):
        for cell in self.all_cells():
            cell.set_open_walls()

    # --- Interactive Cursor ---
    def active_cell(self) -> Cell:
        active = [cell for cell in self.all_cells() if cell.is_active]
        if not active:
            raise NoActiveCells()
        if len(active) > 1:
            raise MultipleActiveCells(len(active))
        return active[0]

    def make_move(self, direction: Union[Direction, str]) -> Coordinates:
        """Moves the cursor through an open wall and returns the new active coordinates."""
        direction = Direction.from_str(direction)
        current = self.active_cell()
        if direction not in current.open_walls:
            raise MoveUnavailable(direction, current.open_walls)
        target = self.get(current.neighbors_by_direction[direction])
        current.is_active = False
        target.is_active = True
        target.is_visited = True
        target.has_been_visited = True
        return target.coords

    # --- Capture Steps ---
    def snapshot(self) -> "Grid":
        """A copy with its own cells that never records steps of its own."""
        clone = copy.copy(self)
        clone.capture_steps = False
        clone.generation_steps = None
        clone.rng = random.Random(self.seed)
        clone.unflatten(self.flatten())
        return clone

    def record_step(self, changed_cells: Iterable[Coordinates]):
        if not self.capture_steps:
            return
        for coords in changed_cells:
            self.get(coords).set_open_walls()
        self.generation_steps.append(self.snapshot())

    # --- Serialization ---
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "maze_type": self.maze_type.value,
            "width": self.width,
            "height": self.height,
            "seed": self.seed,
            "start": self.start_coords.to_dict(),
            "goal": self.goal_coords.to_dict(),
            "cells": [cell.to_dict() for cell in self.all_cells()],
        }
        if self.generation_steps is not None:
            data["generation_steps"] = [step.to_dict() for step in self.generation_steps]
        return data

    def to_json(self, indent: Optional[int] = None) -> str:
        try:
            return json.dumps(self.to_dict(), indent=indent)
        except (TypeError, ValueError) as e:
            raise SerializationError(e) from e

    def __repr__(self) -> str:
        return f"Grid({self.maze_type}, {self.width}x{self.height}, cells={self.size()})"
