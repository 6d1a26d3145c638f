"""Error kinds raised by the maze engine.

Every failure the library surfaces is a subclass of ``MazeError`` so callers
can catch the whole family at once, or a single kind when they need to.
"""


class MazeError(Exception):
    """Base class for all maze engine errors."""


class InvalidCellForDeltaMaze(MazeError):
    def __init__(self, cell_maze_type):
        self.cell_maze_type = cell_maze_type
        super().__init__(
            f"Cannot generate non-triangle cells for Delta maze_type {cell_maze_type}"
        )


class InvalidCellForNonDeltaMaze(MazeError):
    def __init__(self, cell_maze_type):
        self.cell_maze_type = cell_maze_type
        super().__init__(
            f"Cannot generate triangle cells for non-Delta maze_type {cell_maze_type}"
        )


class AlgorithmUnavailableForMazeType(MazeError):
    def __init__(self, algorithm, maze_type):
        self.algorithm = algorithm
        self.maze_type = maze_type
        super().__init__(
            f"MazeAlgorithm {algorithm} is unavailable for MazeType {maze_type}"
        )


class OutOfBoundsCoordinates(MazeError):
    def __init__(self, coordinates, maze_width: int, maze_height: int):
        self.coordinates = coordinates
        self.maze_width = maze_width
        self.maze_height = maze_height
        super().__init__(
            f"Out of bounds coordinates: coordinates {coordinates} exceed maze "
            f"dimensions {maze_width} x {maze_height}"
        )


class MissingCoordinates(MazeError):
    def __init__(self, coordinates):
        self.coordinates = coordinates
        super().__init__(f"Missing coordinates: {coordinates}")


class NoCellAtCoordinates(MazeError):
    def __init__(self, coordinates):
        self.coordinates = coordinates
        super().__init__(f"No cell exists at coordinates {coordinates}")


class InvalidCellCoordinates(MazeError):
    def __init__(self, coordinates):
        self.coordinates = coordinates
        super().__init__(f"Invalid cell coordinates: {coordinates}")


class FlattenedVectorDimensionsMismatch(MazeError):
    def __init__(self, vector_size: int, maze_width: int, maze_height: int):
        self.vector_size = vector_size
        self.maze_width = maze_width
        self.maze_height = maze_height
        super().__init__(
            f"Flattened vector size mismatch: expected size {maze_width * maze_height} "
            f"({maze_width} x {maze_height}), but got {vector_size}"
        )


class NoValidNeighbor(MazeError):
    def __init__(self, coordinates):
        self.coordinates = coordinates
        super().__init__(f"No valid neighbors: {coordinates}")


class EmptyList(MazeError):
    def __init__(self):
        super().__init__("Attempted operation on an empty list")


class MultipleActiveCells(MazeError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"{count} active cells, there should only ever be exactly 1 active cell"
        )


class NoActiveCells(MazeError):
    def __init__(self):
        super().__init__("No active cells, there should always be exactly 1 active cell")


class InvalidDirection(MazeError):
    def __init__(self, direction):
        self.direction = direction
        super().__init__(f"Invalid direction: {direction!r}")


class MoveUnavailable(MazeError):
    def __init__(self, attempted, available):
        self.attempted = attempted
        self.available = list(available)
        names = ", ".join(str(d) for d in self.available) or "none"
        super().__init__(
            f"Move {attempted} unavailable from the active cell; available: {names}"
        )


class GridDimensionsExceedLimitForCaptureSteps(MazeError):
    def __init__(self, width: int, height: int, max_width: int, max_height: int):
        self.width = width
        self.height = height
        self.max_width = max_width
        self.max_height = max_height
        super().__init__(
            f"Capture steps is limited to grids of at most {max_width} x {max_height}, "
            f"got {width} x {height}"
        )


class SerializationError(MazeError):
    def __init__(self, inner: Exception):
        self.inner = inner
        super().__init__(f"Serialization error: {inner}")
