GRID_ROWS = 10
GRID_COLS = 6
# Rows pre-filled with random symbols at the start of every run.
SEED_ROWS = 3
# Falling blocks appear in the top row, column (cols - 1) // 2.
SPAWN_ROW = 0

# Drop cadence in milliseconds. Each landing that clears at least once divides the
# interval by SPEEDUP_FACTOR; the result never goes below MIN_DROP_INTERVAL_MS.
BASE_DROP_INTERVAL_MS = 400.0
SPEEDUP_FACTOR = 1.05
MIN_DROP_INTERVAL_MS = 80.0

# A run is MIN_RUN_LENGTH or more equal symbols in one row or column.
MIN_RUN_LENGTH = 3
POINTS_PER_RUN = 10

BOTTOM_MARGIN = 90
TOP_MARGIN = 70

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.80
BOARD_MAX_HEIGHT_PCT = 0.95

# On-screen arrow buttons below the board (left/right move).
ARROW_BUTTON_SIZE = 56
ARROW_BUTTON_GAP = 24
