from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from .errors import InvalidDirection


@dataclass(frozen=True, order=True)
class Coordinates:
    """Identity of a cell: column ``x`` and row ``y``, both non-negative."""

    x: int = 0
    y: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y}

    def __str__(self) -> str:
        return f'{{"x":{self.x},"y":{self.y}}}'


class MazeType(Enum):
    ORTHOGONAL = "Orthogonal"
    DELTA = "Delta"
    SIGMA = "Sigma"
    POLAR = "Polar"
    RHOMBILLE = "Rhombille"
    UPSILON = "Upsilon"
    RHOMBIC = "Rhombic"

    def __str__(self) -> str:
        return self.value


class CellOrientation(Enum):
    NORMAL = "Normal"  # Triangle points up
    INVERTED = "Inverted"  # Triangle points down

    def __str__(self) -> str:
        return self.value


class Direction(Enum):
    UP = "Up"
    RIGHT = "Right"
    DOWN = "Down"
    LEFT = "Left"
    UPPER_RIGHT = "UpperRight"
    LOWER_RIGHT = "LowerRight"
    LOWER_LEFT = "LowerLeft"
    UPPER_LEFT = "UpperLeft"

    def __str__(self) -> str:
        return self.value

    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def offset_delta(self, is_odd_column: bool) -> Tuple[int, int]:
        """(dq, dr) step toward this neighbour in an odd-q flat-top hex layout."""
        table = _SIGMA_ODD_OFFSETS if is_odd_column else _SIGMA_EVEN_OFFSETS
        try:
            return table[self]
        except KeyError:
            raise ValueError(f"Direction {self} has no hexagonal offset") from None

    def vertex_indices(self) -> Tuple[int, int]:
        """Indices into the flat-top unit hexagon of the edge facing this direction."""
        try:
            return _SIGMA_EDGE_VERTICES[self]
        except KeyError:
            raise ValueError(f"Direction {self} has no hexagonal edge") from None

    @classmethod
    def from_str(cls, name: str) -> "Direction":
        """Parses a direction name, accepting compass and polar aliases."""
        if isinstance(name, cls):
            return name
        key = str(name).strip()
        for direction in cls:
            if direction.value == key:
                return direction
        if key in _ALIASES:
            return _ALIASES[key]
        raise InvalidDirection(name)

    @classmethod
    def sigma_neighbors(cls) -> List["Direction"]:
        return list(VALID_DIRECTIONS[MazeType.SIGMA])


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.RIGHT: Direction.LEFT,
    Direction.LEFT: Direction.RIGHT,
    Direction.UPPER_RIGHT: Direction.LOWER_LEFT,
    Direction.LOWER_LEFT: Direction.UPPER_RIGHT,
    Direction.LOWER_RIGHT: Direction.UPPER_LEFT,
    Direction.UPPER_LEFT: Direction.LOWER_RIGHT,
}

# Odd columns are shoved down half a cell
_SIGMA_EVEN_OFFSETS = {
    Direction.UP: (0, -1),
    Direction.UPPER_RIGHT: (1, -1),
    Direction.LOWER_RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LOWER_LEFT: (-1, 0),
    Direction.UPPER_LEFT: (-1, -1),
}
_SIGMA_ODD_OFFSETS = {
    Direction.UP: (0, -1),
    Direction.UPPER_RIGHT: (1, 0),
    Direction.LOWER_RIGHT: (1, 1),
    Direction.DOWN: (0, 1),
    Direction.LOWER_LEFT: (-1, 1),
    Direction.UPPER_LEFT: (-1, 0),
}

_SIGMA_EDGE_VERTICES = {
    Direction.UP: (0, 1),
    Direction.UPPER_RIGHT: (1, 2),
    Direction.LOWER_RIGHT: (2, 3),
    Direction.DOWN: (3, 4),
    Direction.LOWER_LEFT: (4, 5),
    Direction.UPPER_LEFT: (5, 0),
}

_ALIASES = {
    "North": Direction.UP,
    "East": Direction.RIGHT,
    "South": Direction.DOWN,
    "West": Direction.LEFT,
    "Northeast": Direction.UPPER_RIGHT,
    "Southeast": Direction.LOWER_RIGHT,
    "Southwest": Direction.LOWER_LEFT,
    "Northwest": Direction.UPPER_LEFT,
    "Inward": Direction.UP,
    "Outward": Direction.DOWN,
    "Clockwise": Direction.RIGHT,
    "CounterClockwise": Direction.LEFT,
}

_CARDINALS = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)
_INTERCARDINALS = (
    Direction.UPPER_RIGHT,
    Direction.LOWER_RIGHT,
    Direction.LOWER_LEFT,
    Direction.UPPER_LEFT,
)

# Also the order in which open walls are listed
VALID_DIRECTIONS: Dict[MazeType, Tuple[Direction, ...]] = {
    MazeType.ORTHOGONAL: _CARDINALS,
    MazeType.POLAR: _CARDINALS,
    MazeType.DELTA: (
        Direction.UP,
        Direction.UPPER_RIGHT,
        Direction.LOWER_RIGHT,
        Direction.DOWN,
        Direction.LOWER_LEFT,
        Direction.UPPER_LEFT,
    ),
    MazeType.SIGMA: (
        Direction.UP,
        Direction.UPPER_RIGHT,
        Direction.LOWER_RIGHT,
        Direction.DOWN,
        Direction.LOWER_LEFT,
        Direction.UPPER_LEFT,
    ),
    MazeType.RHOMBILLE: _INTERCARDINALS,
    MazeType.RHOMBIC: _INTERCARDINALS,
    MazeType.UPSILON: (
        Direction.UP,
        Direction.UPPER_RIGHT,
        Direction.RIGHT,
        Direction.LOWER_RIGHT,
        Direction.DOWN,
        Direction.LOWER_LEFT,
        Direction.LEFT,
        Direction.UPPER_LEFT,
    ),
}


class MazeAlgorithm(Enum):
    BINARY_TREE = "BinaryTree"
    SIDEWINDER = "Sidewinder"
    ALDOUS_BRODER = "AldousBroder"
    WILSONS = "Wilsons"
    HUNT_AND_KILL = "HuntAndKill"
    RECURSIVE_BACKTRACKER = "RecursiveBacktracker"
    PRIMS = "Prims"
    KRUSKALS = "Kruskals"
    GROWING_TREE = "GrowingTree"
    ELLERS = "Ellers"
    RECURSIVE_DIVISION = "RecursiveDivision"
    REVERSE_DELETE = "ReverseDelete"

    def __str__(self) -> str:
        return self.value
