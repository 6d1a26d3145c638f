# ffi.py
"""
C-ABI shaped boundary for foreign callers (e.g. a Swift front-end loading the
library through a bridge).

Every function takes and returns plain ``ctypes`` values. Grids are exposed as
opaque integer handles; ``None`` stands in for a null pointer. Arrays and
strings handed out stay alive in an allocation table until the caller passes
them back to their paired free function. Freeing twice, or freeing something
this module never handed out, does nothing.

Errors never cross the boundary: they are logged and reported as ``None``.
"""
import ctypes
import itertools
import logging
from typing import Any, Dict, List, Optional, Union

from . import constants as const
from .errors import MazeError, SerializationError
from .geometry import delta_wall_segments, sigma_wall_segments
from .grid_core import Grid
from .maze_types import CellOrientation, Coordinates, Direction
from .request import generate
from .visualization import shade_index, solution_path_order

logger = logging.getLogger(__name__)

CString = Union[bytes, str, None]

# Integer codes used where directions and orientations cross as numbers
DIRECTION_CODES: Dict[int, Direction] = dict(enumerate(Direction))
ORIENTATION_CODES: Dict[int, CellOrientation] = {
    0: CellOrientation.NORMAL,
    1: CellOrientation.INVERTED,
}


class FFICoordinates(ctypes.Structure):
    _fields_ = [
        ("x", ctypes.c_size_t),
        ("y", ctypes.c_size_t),
    ]


class FFICell(ctypes.Structure):
    _fields_ = [
        ("x", ctypes.c_size_t),
        ("y", ctypes.c_size_t),
        ("maze_type", ctypes.c_char_p),
        ("linked", ctypes.POINTER(ctypes.c_char_p)),  # Open-wall direction names
        ("linked_len", ctypes.c_size_t),
        ("distance", ctypes.c_int32),
        ("is_start", ctypes.c_bool),
        ("is_goal", ctypes.c_bool),
        ("is_active", ctypes.c_bool),
        ("is_visited", ctypes.c_bool),
        ("has_been_visited", ctypes.c_bool),
        ("on_solution_path", ctypes.c_bool),
        ("orientation", ctypes.c_char_p),
    ]

    @property
    def coords(self) -> Coordinates:
        return Coordinates(self.x, self.y)

    def linked_names(self) -> List[str]:
        return [self.linked[i].decode("utf-8") for i in range(self.linked_len)]


class EdgePair(ctypes.Structure):
    _fields_ = [
        ("first", ctypes.c_size_t),
        ("second", ctypes.c_size_t),
    ]


class EdgePairs(ctypes.Structure):
    _fields_ = [
        ("ptr", ctypes.POINTER(EdgePair)),
        ("len", ctypes.c_size_t),
    ]


# --- Ownership Tables ---
_grids: Dict[int, Grid] = {}
_handles = itertools.count(1)
_allocations: Dict[int, Any] = {}  # address -> object kept alive until freed


def _register(obj: Any) -> Any:
    _allocations[ctypes.addressof(obj)] = obj
    return obj


def _release(obj: Any):
    """Drops the allocation ``obj`` points at; accepts the array itself or a pointer to it."""
    if obj is None:
        return
    try:
        address = ctypes.cast(obj, ctypes.c_void_p).value
    except (ctypes.ArgumentError, TypeError):
        return
    _allocations.pop(address, None)


def live_allocations() -> int:
    """Number of arrays and strings handed out and not yet freed."""
    return len(_allocations)


def _decode(value: CString) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SerializationError(e) from e
    return value


def _encode(text: str) -> bytes:
    return text.encode("utf-8")


def _lookup(handle: Optional[int]) -> Optional[Grid]:
    if not handle:
        return None
    return _grids.get(handle)


# --- Grid Lifecycle ---
def mazer_generate_maze(request_json: CString) -> Optional[int]:
    """Builds a maze from a JSON request and returns its handle."""
    if request_json is None:
        logger.warning("mazer_generate_maze: request_json is null")
        return None
    try:
        grid = generate(_decode(request_json))
    except MazeError as e:
        logger.warning("mazer_generate_maze failed: %s", e)
        return None
    handle = next(_handles)
    _grids[handle] = grid
    return handle


def mazer_destroy(handle: Optional[int]):
    if handle:
        _grids.pop(handle, None)


def mazer_get_cells(handle: Optional[int], out_length: Optional[ctypes.c_size_t]):
    """
    Exports every cell of the maze as an array of ``FFICell`` and writes its
    length into ``out_length``. Release with ``mazer_free_cells``.
    """
    grid = _lookup(handle)
    if grid is None or out_length is None:
        return None

    cells = list(grid.all_cells())
    array = (FFICell * len(cells))()
    for slot, cell in zip(array, cells):
        names = [_encode(d.value) for d in cell.open_walls]
        slot.x = cell.x
        slot.y = cell.y
        slot.maze_type = _encode(cell.maze_type.value)
        slot.linked = (ctypes.c_char_p * len(names))(*names) if names else None
        slot.linked_len = len(names)
        slot.distance = cell.distance
        slot.is_start = cell.is_start
        slot.is_goal = cell.is_goal
        slot.is_active = cell.is_active
        slot.is_visited = cell.is_visited
        slot.has_been_visited = cell.has_been_visited
        slot.on_solution_path = cell.on_solution_path
        slot.orientation = _encode(cell.orientation.value)

    out_length.value = len(cells)
    return _register(array)


def mazer_free_cells(cells, length: int):
    # The inner strings belong to the array and go with it
    _release(cells)


def mazer_make_move(handle: Optional[int], direction: CString) -> Optional[int]:
    """Moves the cursor; returns the same handle on success and None otherwise."""
    grid = _lookup(handle)
    if grid is None or direction is None:
        return None
    try:
        grid.make_move(Direction.from_str(_decode(direction)))
    except MazeError as e:
        logger.warning("mazer_make_move failed on %r: %s", direction, e)
        return None
    return handle


# --- JSON ---
def mazer_generate_maze_json(request_json: CString):
    """Builds a maze and returns it as a NUL-terminated UTF-8 buffer."""
    if request_json is None:
        return None
    try:
        payload = generate(_decode(request_json)).to_json()
    except MazeError as e:
        logger.warning("mazer_generate_maze_json failed: %s", e)
        return None
    return _register(ctypes.create_string_buffer(_encode(payload)))


def mazer_free_string(buffer):
    _release(buffer)


def mazer_ffi_integration_test() -> int:
    return const.FFI_INTEGRATION_TEST_VALUE


# --- Rendering Helpers ---
def mazer_solution_path_order(handle: Optional[int], out_length: Optional[ctypes.c_size_t]):
    grid = _lookup(handle)
    if grid is None or out_length is None:
        return None
    path = solution_path_order(grid.all_cells())
    array = (FFICoordinates * len(path))(*[FFICoordinates(c.x, c.y) for c in path])
    out_length.value = len(path)
    return _register(array)


def mazer_free_coordinates(coordinates, length: int):
    _release(coordinates)


def _edge_pairs(edges) -> EdgePairs:
    if not edges:
        return EdgePairs(None, 0)
    array = _register((EdgePair * len(edges))(*[EdgePair(a, b) for a, b in edges]))
    return EdgePairs(ctypes.cast(array, ctypes.POINTER(EdgePair)), len(edges))


def mazer_delta_wall_segments(linked_dirs, linked_len: int, orientation_code: int) -> EdgePairs:
    """
    ``linked_dirs`` holds integer direction codes (see ``DIRECTION_CODES``);
    unknown codes are ignored and unknown orientation codes mean Normal.
    """
    codes = [linked_dirs[i] for i in range(linked_len)] if linked_dirs is not None else []
    open_dirs = [DIRECTION_CODES[code] for code in codes if code in DIRECTION_CODES]
    orientation = ORIENTATION_CODES.get(orientation_code, CellOrientation.NORMAL)
    return _edge_pairs(delta_wall_segments(open_dirs, orientation))


def mazer_sigma_wall_segments(handle: Optional[int], cell_coords: FFICoordinates) -> EdgePairs:
    grid = _lookup(handle)
    if grid is None:
        return EdgePairs(None, 0)
    try:
        edges = sigma_wall_segments(grid, Coordinates(cell_coords.x, cell_coords.y))
    except (MazeError, ValueError) as e:
        logger.warning("mazer_sigma_wall_segments failed: %s", e)
        return EdgePairs(None, 0)
    return _edge_pairs(edges)


def mazer_free_edge_pairs(pairs: EdgePairs):
    if pairs is None or not pairs.ptr:
        return
    _release(pairs.ptr)
    pairs.ptr = None
    pairs.len = 0


def mazer_shade_index(distance: int, max_distance: int) -> int:
    return shade_index(distance, max_distance)
