from __future__ import annotations

import random
from itertools import cycle
from typing import Iterable, Sequence

from esper import World

from ecs.components.board import Board, Cells
from ecs.components.falling_block import FallingBlock
from ecs.components.symbol import Symbol

GLYPHS = {symbol.glyph: symbol for symbol in Symbol}
# One-letter aliases keep board layouts in tests aligned.
GLYPHS.update({
    "H": Symbol.HAPPINESS,
    "S": Symbol.SADNESS,
    "A": Symbol.ANGER,
    "F": Symbol.FEAR,
    "D": Symbol.DISGUST,
    "U": Symbol.SURPRISE,
    "C": Symbol.CONTEMPT,
})
EMPTY = "."


class SequenceRandom(random.Random):
    """Random source whose ``choice`` walks a fixed cycle of symbols."""

    def __init__(self, *, symbols: Iterable[Symbol] = (Symbol.HAPPINESS,)):
        super().__init__(0)
        self._symbols = cycle(list(symbols))

    def choice(self, seq):
        return next(self._symbols)


class DummyWindow:
    def __init__(self, width=480, height=760):
        self.width = width
        self.height = height


def make_cells(lines: Sequence[str]) -> Cells:
    """Build a grid from rows of glyphs or letter aliases; '.' marks an empty cell."""
    cells: Cells = []
    for line in lines:
        row = []
        for char in line:
            if char == EMPTY:
                row.append(None)
            elif char in GLYPHS:
                row.append(GLYPHS[char])
            else:
                raise ValueError(f"Unknown glyph {char!r}")
        cells.append(row)
    return cells


def pad_rows(lines: Sequence[str], rows: int = 10, cols: int = 6) -> list[str]:
    """Prefix empty rows so ``lines`` sit at the bottom of a rows x cols board."""
    return [EMPTY * cols] * (rows - len(lines)) + list(lines)


def set_board(world: World, board_entity: int, lines: Sequence[str]) -> Board:
    board = world.component_for_entity(board_entity, Board)
    board.cells = make_cells(pad_rows(lines, board.rows, board.cols))
    return board


def set_block_symbol(world: World, block_entity: int, symbol: Symbol) -> FallingBlock:
    block = world.component_for_entity(block_entity, FallingBlock)
    block.symbol = symbol
    return block


def drop_until_landed(engine, max_steps: int = 50) -> None:
    """Advance the engine until the current block lands (or the run ends)."""
    start = engine.block_entity
    for _ in range(max_steps):
        if engine.is_over or engine.block_entity != start:
            return
        engine.advance()
    raise AssertionError("Block never landed")


def has_run(cells: Sequence[Sequence[Symbol | None]]) -> bool:
    rows = len(cells)
    cols = len(cells[0]) if rows else 0
    for r in range(rows):
        for c in range(cols):
            value = cells[r][c]
            if value is None:
                continue
            if c + 2 < cols and cells[r][c + 1] == value and cells[r][c + 2] == value:
                return True
            if r + 2 < rows and cells[r + 1][c] == value and cells[r + 2][c] == value:
                return True
    return False
