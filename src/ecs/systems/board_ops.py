from __future__ import annotations

import random
from collections import Counter
from typing import Dict, Iterable, Optional, Sequence, Tuple

from ecs.components.board import Board, Cells
from ecs.components.symbol import SYMBOLS, Symbol

Position = Tuple[int, int]


def empty_cells(rows: int, cols: int) -> Cells:
    return [[None] * cols for _ in range(rows)]


def copy_cells(cells: Sequence[Sequence[Optional[Symbol]]]) -> Cells:
    return [list(row) for row in cells]


def random_symbol(rng: random.Random) -> Symbol:
    return rng.choice(SYMBOLS)


def seed_bottom_rows(cells: Cells, count: int, rng: random.Random) -> Cells:
    """Fill the bottom ``count`` rows with independently drawn symbols.

    Returns a new grid; rows above the seeded band are copied unchanged.
    """
    seeded = copy_cells(cells)
    rows = len(seeded)
    for row in range(max(0, rows - count), rows):
        seeded[row] = [random_symbol(rng) for _ in seeded[row]]
    return seeded


def is_inside(board: Board, row: int, col: int) -> bool:
    return 0 <= row < board.rows and 0 <= col < board.cols


def is_empty(board: Board, row: int, col: int) -> bool:
    """True when (row, col) is on the board and holds no symbol."""
    return is_inside(board, row, col) and board.cells[row][col] is None


def tally_symbols(cells: Sequence[Sequence[Optional[Symbol]]], positions: Iterable[Position]) -> Dict[Symbol, int]:
    """Count the symbols found at ``positions``; empty cells are skipped."""
    counts: Counter[Symbol] = Counter()
    for row, col in positions:
        value = cells[row][col]
        if value is not None:
            counts[value] += 1
    return dict(counts)
