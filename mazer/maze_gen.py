# maze_gen.py
import logging
from abc import ABC, abstractmethod
from typing import FrozenSet, Iterable

from . import constants as const
from .errors import AlgorithmUnavailableForMazeType
from .grid_core import Grid
from .maze_types import Coordinates, MazeAlgorithm, MazeType

logger = logging.getLogger(__name__)

ALL_MAZE_TYPES: FrozenSet[MazeType] = frozenset(MazeType)


class MazeGeneration(ABC):
    """
    Common lifecycle of every maze algorithm.

    Subclasses implement ``carve`` to link cells until they form a spanning
    tree. ``generate`` guards the maze type before anything is touched, and
    ``finalize`` annotates distances, the solution path and open walls.
    """

    algorithm: MazeAlgorithm
    supported_maze_types: FrozenSet[MazeType] = ALL_MAZE_TYPES

    def supports(self, maze_type: MazeType) -> bool:
        return maze_type in self.supported_maze_types

    def generate(self, grid: Grid):
        """Links the cells of ``grid`` into a perfect maze."""
        if not self.supports(grid.maze_type):
            raise AlgorithmUnavailableForMazeType(self.algorithm, grid.maze_type)

        logger.info("--- Starting Maze Generation (%s) ---", self.algorithm)
        self.carve(grid)
        logger.info(
            "--- Maze Generation Complete: %d passages across %d cells ---",
            grid.count_edges(), grid.size(),
        )

    @abstractmethod
    def carve(self, grid: Grid):
        """Algorithm body; the maze type has already been checked."""

    def finalize(self, grid: Grid):
        """
        Writes distances from start into every cell, marks the start-to-goal
        path, derives open walls and checks that exactly one cell is active.
        """
        distances = grid.distances(grid.start_coords)
        path = grid.get_path_to(grid.start_coords, grid.goal_coords)

        for cell in grid.all_cells():
            cell.distance = distances.get(cell.coords, const.UNASSIGNED_DISTANCE)
            cell.on_solution_path = cell.coords in path
            cell.set_open_walls()

        grid.active_cell()
        logger.debug(
            "Finalized maze: goal distance %d, solution path of %d cells",
            grid.get(grid.goal_coords).distance, len(path),
        )

    def build(self, grid: Grid):
        self.generate(grid)
        self.finalize(grid)

    def capture_step(self, grid: Grid, changed_cells: Iterable[Coordinates]):
        """Appends a snapshot of ``grid`` if it was created with capture enabled."""
        grid.record_step(changed_cells)
