from __future__ import annotations

from typing import Dict, Tuple

from ecs.constants import (
    GRID_COLS, GRID_ROWS, BOTTOM_MARGIN, TOP_MARGIN,
    BOARD_MAX_WIDTH_PCT, BOARD_MAX_HEIGHT_PCT,
    ARROW_BUTTON_SIZE, ARROW_BUTTON_GAP,
)

Rect = Tuple[float, float, float, float]  # left, bottom, width, height


def compute_board_geometry(window_width: int, window_height: int, rows: int = GRID_ROWS, cols: int = GRID_COLS):
    """Return (tile_size, start_x, start_y) for the board's bottom-left corner.

    Shared by RenderSystem and InputSystem so clicks land where tiles are drawn.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - TOP_MARGIN) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w / cols, max_board_h / rows))
    if tile_size < 20:
        tile_size = 20
    total_width = cols * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_rect(row: int, col: int, tile_size: float, start_x: float, start_y: float, rows: int = GRID_ROWS) -> Rect:
    # Row 0 is the top of the well; screen y grows upward.
    left = start_x + col * tile_size
    bottom = start_y + (rows - 1 - row) * tile_size
    return left, bottom, tile_size, tile_size


def compute_arrow_buttons(window_width: int, window_height: int) -> Dict[int, Rect]:
    """Rects for the on-screen move buttons keyed by direction (-1 left, 1 right)."""
    size = ARROW_BUTTON_SIZE
    bottom = (BOTTOM_MARGIN - size) / 2
    center_x = window_width / 2
    return {
        -1: (center_x - ARROW_BUTTON_GAP / 2 - size, bottom, size, size),
        1: (center_x + ARROW_BUTTON_GAP / 2, bottom, size, size),
    }


def compute_start_button(window_width: int, window_height: int) -> Rect:
    width, height = 220, 56
    return (window_width - width) / 2, window_height / 2 - height * 2, width, height


def point_in_rect(x: float, y: float, rect: Rect) -> bool:
    left, bottom, width, height = rect
    return left <= x <= left + width and bottom <= y <= bottom + height
