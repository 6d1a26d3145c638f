# request.py
"""
JSON maze requests.

A request names the tessellation, its size, the algorithm and optionally the
start and goal cells, whether to record generation steps, and a random seed::

    {"maze_type": "Orthogonal", "width": 12, "height": 12,
     "algorithm": "RecursiveBacktracker",
     "start": {"x": 0, "y": 0}, "goal": {"x": 11, "y": 11}}
"""
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

from .algorithms import get_algorithm
from .errors import SerializationError
from .grid_core import Grid
from .maze_types import Coordinates, MazeAlgorithm, MazeType

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def _invalid(message: str) -> SerializationError:
    return SerializationError(ValueError(message))


def _require(data: Dict[str, Any], field: str) -> Any:
    if field not in data:
        raise _invalid(f"missing field `{field}`")
    return data[field]


def _parse_enum(enum_cls: Type[E], value: Any, field: str) -> E:
    for member in enum_cls:
        if member.value == value:
            return member
    choices = ", ".join(m.value for m in enum_cls)
    raise _invalid(f"unknown variant {value!r} for `{field}`, expected one of {choices}")


def _parse_dimension(value: Any, field: str) -> int:
    # bool is a subclass of int but never a valid size
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise _invalid(f"`{field}` must be a positive integer, got {value!r}")
    return value


def _parse_coordinates(value: Any, field: str) -> Optional[Coordinates]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise _invalid(f"`{field}` must be an object with `x` and `y`")
    axes = []
    for axis in ("x", "y"):
        n = _require(value, axis)
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise _invalid(f"`{field}.{axis}` must be a non-negative integer, got {n!r}")
        axes.append(n)
    return Coordinates(*axes)


@dataclass
class MazeRequest:
    maze_type: MazeType
    width: int
    height: int
    algorithm: MazeAlgorithm
    start: Optional[Coordinates] = None
    goal: Optional[Coordinates] = None
    capture_steps: bool = False
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MazeRequest":
        if not isinstance(data, dict):
            raise _invalid("request must be a JSON object")

        capture_steps = data.get("capture_steps", False)
        if not isinstance(capture_steps, bool):
            raise _invalid(f"`capture_steps` must be a boolean, got {capture_steps!r}")
        seed = data.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise _invalid(f"`seed` must be an integer, got {seed!r}")

        return cls(
            maze_type=_parse_enum(MazeType, _require(data, "maze_type"), "maze_type"),
            width=_parse_dimension(_require(data, "width"), "width"),
            height=_parse_dimension(_require(data, "height"), "height"),
            algorithm=_parse_enum(MazeAlgorithm, _require(data, "algorithm"), "algorithm"),
            start=_parse_coordinates(data.get("start"), "start"),
            goal=_parse_coordinates(data.get("goal"), "goal"),
            capture_steps=capture_steps,
            seed=seed,
        )

    @classmethod
    def from_json(cls, text: str) -> "MazeRequest":
        try:
            data = json.loads(text)
        except (TypeError, ValueError, RecursionError) as e:
            raise SerializationError(e) from e
        return cls.from_dict(data)

    def to_grid(self) -> Grid:
        return Grid(
            self.maze_type,
            self.width,
            self.height,
            start=self.start,
            goal=self.goal,
            capture_steps=self.capture_steps,
            seed=self.seed,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "maze_type": self.maze_type.value,
            "width": self.width,
            "height": self.height,
            "algorithm": self.algorithm.value,
            "capture_steps": self.capture_steps,
        }
        if self.start is not None:
            data["start"] = self.start.to_dict()
        if self.goal is not None:
            data["goal"] = self.goal.to_dict()
        if self.seed is not None:
            data["seed"] = self.seed
        return data


def build_from_request(request: MazeRequest) -> Grid:
    """Constructs the grid, then generates and finalizes it with the requested algorithm."""
    logger.info(
        "Building %s maze %dx%d with %s",
        request.maze_type, request.width, request.height, request.algorithm,
    )
    grid = request.to_grid()
    get_algorithm(request.algorithm).build(grid)
    return grid


def generate(json_text: str) -> Grid:
    """Parses a JSON request and returns the finished maze."""
    return build_from_request(MazeRequest.from_json(json_text))


def generate_json(json_text: str) -> str:
    return generate(json_text).to_json()
