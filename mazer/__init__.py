"""Perfect maze generation across square, triangular, hexagonal, polar and rhombic grids."""
import logging

from .algorithms import ALGORITHMS, GrowingTree, GrowingTreeStrategy, get_algorithm
from .errors import MazeError
from .grid_core import Cell, Grid
from .maze_gen import MazeGeneration
from .maze_types import CellOrientation, Coordinates, Direction, MazeAlgorithm, MazeType
from .request import MazeRequest, build_from_request, generate, generate_json
from .visualization import render_ascii

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "ALGORITHMS",
    "Cell",
    "CellOrientation",
    "Coordinates",
    "Direction",
    "Grid",
    "GrowingTree",
    "GrowingTreeStrategy",
    "MazeAlgorithm",
    "MazeError",
    "MazeGeneration",
    "MazeRequest",
    "MazeType",
    "build_from_request",
    "generate",
    "generate_json",
    "get_algorithm",
    "render_ascii",
]
