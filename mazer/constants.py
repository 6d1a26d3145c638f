# --- Capture Steps ---
CAPTURE_STEPS_MAX_WIDTH = 100  # Snapshots clone the whole grid per edge
CAPTURE_STEPS_MAX_HEIGHT = 100

# --- Cell Defaults ---
UNASSIGNED_DISTANCE = -1

# --- Randomness ---
RANDOM_BOOL_RANGE = 1_000_000  # bool = even draw in [0, RANDOM_BOOL_RANGE]
RANDOM_WEIGHT_MAX = 2**32 - 1  # Upper bound for Prim's frontier weights

# --- Heat Map ---
SHADE_BUCKETS = 10

# --- Geometry ---
GEOMETRY_TOLERANCE = 1e-9  # For floating point comparisons
ANGLE_OVERLAP_TOLERANCE = 1e-9
DEFAULT_CELL_SIZE = 1.0
POLAR_CENTER_RADIUS = 1.0  # Radius of the open center, in ring widths

# --- FFI ---
FFI_INTEGRATION_TEST_VALUE = 42

# --- Logging ---
LOG_FORMAT = "%(levelname)s: %(message)s"
