"""Match detection, clearing and gravity for a settled board.

Everything here is a pure function of a grid (a sequence of rows holding a
Symbol or None). Inputs are never mutated; every step returns a new grid.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Set, Tuple

from ecs.components.board import Cells
from ecs.components.symbol import Symbol
from ecs.constants import MIN_RUN_LENGTH
from ecs.systems.board_ops import Position, copy_cells, tally_symbols

Grid = Sequence[Sequence[Optional[Symbol]]]


@dataclass(frozen=True, slots=True)
class ClearRound:
    """One detect/clear/compact pass within a single landing."""
    round: int
    cleared: frozenset[Position]
    symbol_counts: Mapping[Symbol, int] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return len(self.cleared)


@dataclass(frozen=True, slots=True)
class Resolution:
    board: Cells
    rounds: Tuple[ClearRound, ...] = ()

    @property
    def matched(self) -> bool:
        return bool(self.rounds)

    @property
    def depth(self) -> int:
        return len(self.rounds)


def grid_dimensions(cells: Grid) -> Tuple[int, int]:
    rows = len(cells)
    cols = len(cells[0]) if rows else 0
    for line in cells:
        if len(line) != cols:
            raise ValueError("Board rows must all have the same length")
    return rows, cols


def find_runs(cells: Grid) -> List[List[Position]]:
    """Return every maximal horizontal or vertical run of MIN_RUN_LENGTH+ equal symbols."""
    rows, cols = grid_dimensions(cells)
    runs: List[List[Position]] = []
    # Horizontal runs
    for r in range(rows):
        run: List[Position] = []
        last = None
        for c in range(cols):
            value = cells[r][c]
            if value is not None and value == last:
                run.append((r, c))
            else:
                if len(run) >= MIN_RUN_LENGTH:
                    runs.append(run)
                run = [(r, c)] if value is not None else []
                last = value
        if len(run) >= MIN_RUN_LENGTH:
            runs.append(run)
    # Vertical runs
    for c in range(cols):
        run = []
        last = None
        for r in range(rows):
            value = cells[r][c]
            if value is not None and value == last:
                run.append((r, c))
            else:
                if len(run) >= MIN_RUN_LENGTH:
                    runs.append(run)
                run = [(r, c)] if value is not None else []
                last = value
        if len(run) >= MIN_RUN_LENGTH:
            runs.append(run)
    return runs


def find_matches(cells: Grid) -> Set[Position]:
    """Union of all cells that sit in a run; overlapping runs count each cell once."""
    return {pos for run in find_runs(cells) for pos in run}


def clear_cells(cells: Grid, positions: Set[Position] | frozenset[Position]) -> Cells:
    cleared = copy_cells(cells)
    for row, col in positions:
        cleared[row][col] = None
    return cleared


def compact_columns(cells: Grid) -> Cells:
    """Let every column settle: symbols sink, keep their order, empties rise."""
    rows, cols = grid_dimensions(cells)
    compacted: Cells = [[None] * cols for _ in range(rows)]
    for col in range(cols):
        write_row = rows - 1
        for row in range(rows - 1, -1, -1):
            value = cells[row][col]
            if value is not None:
                compacted[write_row][col] = value
                write_row -= 1
    return compacted


def resolve(cells: Grid) -> Resolution:
    """Clear runs and apply gravity until the board is stable.

    Each round tallies symbols from the board as it was before that round's
    clear. A board without runs comes back unchanged with no rounds.
    """
    board = copy_cells(cells)
    grid_dimensions(board)
    rounds: List[ClearRound] = []
    matches = find_matches(board)
    while matches:
        rounds.append(
            ClearRound(
                round=len(rounds) + 1,
                cleared=frozenset(matches),
                symbol_counts=tally_symbols(board, matches),
            )
        )
        board = compact_columns(clear_cells(board, matches))
        matches = find_matches(board)
    return Resolution(board=board, rounds=tuple(rounds))
