from typing import Dict, Type

from ..maze_gen import MazeGeneration
from ..maze_types import MazeAlgorithm
from .aldous_broder import AldousBroder
from .binary_tree import BinaryTree
from .ellers import Ellers
from .growing_tree import GrowingTree, GrowingTreeStrategy
from .hunt_and_kill import HuntAndKill
from .kruskals import DisjointSet, Kruskals
from .prims import Prims
from .recursive_backtracker import RecursiveBacktracker
from .recursive_division import RecursiveDivision
from .reverse_delete import ReverseDelete
from .sidewinder import Sidewinder
from .wilsons import Wilsons

ALGORITHMS: Dict[MazeAlgorithm, Type[MazeGeneration]] = {
    MazeAlgorithm.BINARY_TREE: BinaryTree,
    MazeAlgorithm.SIDEWINDER: Sidewinder,
    MazeAlgorithm.ALDOUS_BRODER: AldousBroder,
    MazeAlgorithm.WILSONS: Wilsons,
    MazeAlgorithm.HUNT_AND_KILL: HuntAndKill,
    MazeAlgorithm.RECURSIVE_BACKTRACKER: RecursiveBacktracker,
    MazeAlgorithm.PRIMS: Prims,
    MazeAlgorithm.KRUSKALS: Kruskals,
    MazeAlgorithm.GROWING_TREE: GrowingTree,
    MazeAlgorithm.ELLERS: Ellers,
    MazeAlgorithm.RECURSIVE_DIVISION: RecursiveDivision,
    MazeAlgorithm.REVERSE_DELETE: ReverseDelete,
}


def get_algorithm(algorithm: MazeAlgorithm) -> MazeGeneration:
    """Returns a ready-to-use generator for ``algorithm`` with its default settings."""
    return ALGORITHMS[algorithm]()


__all__ = [
    "ALGORITHMS",
    "AldousBroder",
    "BinaryTree",
    "DisjointSet",
    "Ellers",
    "GrowingTree",
    "GrowingTreeStrategy",
    "HuntAndKill",
    "Kruskals",
    "Prims",
    "RecursiveBacktracker",
    "RecursiveDivision",
    "ReverseDelete",
    "Sidewinder",
    "Wilsons",
    "get_algorithm",
]
