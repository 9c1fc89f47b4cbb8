from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Dict, Optional

from esper import World

from ecs.components.board import Board, Cells
from ecs.components.falling_block import FallingBlock
from ecs.components.game_state import GameMode
from ecs.components.run_state import RunState
from ecs.components.symbol import Symbol
from ecs.constants import BASE_DROP_INTERVAL_MS, GRID_COLS, GRID_ROWS, SEED_ROWS, SPAWN_ROW
from ecs.events.bus import (
    EventBus,
    EVENT_BLOCK_DESCENDED,
    EVENT_BLOCK_LANDED,
    EVENT_BLOCK_MOVE_REQUEST,
    EVENT_BLOCK_MOVED,
    EVENT_BLOCK_SPAWNED,
    EVENT_CASCADE_COMPLETE,
    EVENT_DROP_TICK,
    EVENT_GAME_OVER,
    EVENT_GAME_START_REQUEST,
    EVENT_GAME_STARTED,
    EVENT_MATCH_CLEARED,
    EVENT_RUN_STATE_CHANGED,
)
from ecs.systems.board_ops import copy_cells, empty_cells, is_empty, random_symbol, seed_bottom_rows
from ecs.systems.match_resolution import Resolution, resolve
from ecs.systems.scoring import apply_resolution, most_cleared_symbol, points_for_round, round_multiplier
from ecs.utils.game_state import set_game_mode

logger = logging.getLogger(__name__)


class GridEngine:
    """Owns the well, the falling block and the run state.

    Driven by two stimuli: ``advance`` on the drop cadence and
    ``move_horizontal`` from the player. Both are also reachable through the
    event bus (EVENT_DROP_TICK, EVENT_BLOCK_MOVE_REQUEST) so input and timer
    collaborators never hold a reference to the engine.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        *,
        rng: random.Random | None = None,
    ):
        if rows < 1 or cols < 1:
            raise ValueError(f"Board dimensions must be positive, got {rows}x{cols}")
        self.world = world
        self.event_bus = event_bus
        candidate_rng = rng or getattr(world, "random", None)
        self.rng = candidate_rng if isinstance(candidate_rng, random.Random) else random.Random()
        self.spawn_col = (cols - 1) // 2
        self.board_entity = self.world.create_entity(Board(rows=rows, cols=cols))
        self.run_entity = self.world.create_entity(RunState())
        self.block_entity: int | None = None
        self.event_bus.subscribe(EVENT_GAME_START_REQUEST, self.on_start_request)
        self.event_bus.subscribe(EVENT_BLOCK_MOVE_REQUEST, self.on_move_request)
        self.event_bus.subscribe(EVENT_DROP_TICK, self.on_drop_tick)

    # ------------------------------------------------------------------
    # Bus handlers
    # ------------------------------------------------------------------
    def on_start_request(self, sender, **kwargs):
        self.start_game()

    def on_move_request(self, sender, **kwargs):
        direction = kwargs.get('direction')
        if direction not in (-1, 1):
            return
        self.move_horizontal(direction)

    def on_drop_tick(self, sender, **kwargs):
        self.advance()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def start_game(self) -> None:
        board = self._board()
        board.cells = seed_bottom_rows(empty_cells(board.rows, board.cols), SEED_ROWS, self.rng)
        self._set_run_state(RunState(drop_interval_ms=BASE_DROP_INTERVAL_MS))
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        logger.info("Run started on a %dx%d board", board.rows, board.cols)
        self.event_bus.emit(EVENT_GAME_STARTED, rows=board.rows, cols=board.cols)
        self.spawn()

    def spawn(self) -> None:
        """Put a fresh random block at the top of the spawn column, replacing any active one."""
        if self.is_over:
            return
        self._clear_block()
        block = FallingBlock(symbol=random_symbol(self.rng), row=SPAWN_ROW, col=self.spawn_col)
        self.block_entity = self.world.create_entity(block)
        self.event_bus.emit(EVENT_BLOCK_SPAWNED, symbol=block.symbol, row=block.row, col=block.col)

    def move_horizontal(self, direction: int) -> None:
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or 1, got {direction!r}")
        block = self._block()
        if block is None or self.is_over:
            return
        new_col = block.col + direction
        if not is_empty(self._board(), block.row, new_col):
            return
        block.col = new_col
        self.event_bus.emit(EVENT_BLOCK_MOVED, symbol=block.symbol, row=block.row, col=block.col, direction=direction)

    def advance(self) -> None:
        block = self._block()
        if block is None or self.is_over:
            return
        board = self._board()
        next_row = block.row + 1
        if is_empty(board, next_row, block.col):
            block.row = next_row
            self.event_bus.emit(EVENT_BLOCK_DESCENDED, symbol=block.symbol, row=block.row, col=block.col)
            return
        self._land(block, board)

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------
    @property
    def board(self) -> Cells:
        return copy_cells(self._board().cells)

    @property
    def rows(self) -> int:
        return self._board().rows

    @property
    def cols(self) -> int:
        return self._board().cols

    @property
    def falling_block(self) -> FallingBlock | None:
        block = self._block()
        if block is None:
            return None
        return FallingBlock(symbol=block.symbol, row=block.row, col=block.col)

    @property
    def run_state(self) -> RunState:
        return self.world.component_for_entity(self.run_entity, RunState)

    @property
    def score(self) -> int:
        return self.run_state.score

    @property
    def combo_multiplier(self) -> int:
        return self.run_state.combo_multiplier

    @property
    def drop_interval_ms(self) -> float:
        return self.run_state.drop_interval_ms

    @property
    def is_over(self) -> bool:
        return self.run_state.is_over

    @property
    def symbol_clear_counts(self) -> Dict[Symbol, int]:
        return dict(self.run_state.symbol_clear_counts)

    def most_cleared_symbol(self) -> Symbol | None:
        return most_cleared_symbol(self.run_state.symbol_clear_counts)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _land(self, block: FallingBlock, board: Board) -> None:
        row, col, symbol = block.row, block.col, block.symbol
        if row == 0:
            # Blocked before it could fall once: the well is full.
            if board.cells[row][col] is None:
                cells = copy_cells(board.cells)
                cells[row][col] = symbol
                board.cells = cells
                self.event_bus.emit(EVENT_BLOCK_LANDED, symbol=symbol, row=row, col=col)
            self._clear_block()
            self._finish_run()
            return
        cells = copy_cells(board.cells)
        cells[row][col] = symbol
        self.event_bus.emit(EVENT_BLOCK_LANDED, symbol=symbol, row=row, col=col)
        resolution = resolve(cells)
        board.cells = resolution.board
        self._clear_block()
        self._apply_resolution(resolution)
        self.spawn()

    def _apply_resolution(self, resolution: Resolution) -> None:
        total = 0
        for clear_round in resolution.rounds:
            points = points_for_round(clear_round)
            total += points
            self.event_bus.emit(
                EVENT_MATCH_CLEARED,
                round=clear_round.round,
                positions=sorted(clear_round.cleared),
                counts=dict(clear_round.symbol_counts),
                points=points,
                multiplier=round_multiplier(clear_round.round),
            )
        new_state = apply_resolution(self.run_state, resolution.rounds)
        self._set_run_state(new_state)
        if resolution.matched:
            logger.debug(
                "Landing cleared %d rounds for %d points (combo x%d, interval %.1fms)",
                resolution.depth,
                total,
                new_state.combo_multiplier,
                new_state.drop_interval_ms,
            )
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=resolution.depth, points=total)

    def _finish_run(self) -> None:
        final = self.run_state
        self._set_run_state(replace(final, is_over=True))
        set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
        favourite = self.most_cleared_symbol()
        logger.info("Run over with score %d", final.score)
        self.event_bus.emit(EVENT_GAME_OVER, score=final.score, most_cleared=favourite)

    def _set_run_state(self, state: RunState) -> None:
        # add_component replaces the existing RunState on the entity wholesale.
        self.world.add_component(self.run_entity, state)
        self.event_bus.emit(EVENT_RUN_STATE_CHANGED, state=state)

    def _board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    def _block(self) -> Optional[FallingBlock]:
        if self.block_entity is None:
            return None
        return self.world.try_component(self.block_entity, FallingBlock)

    def _clear_block(self) -> None:
        if self.block_entity is None:
            return
        self.world.delete_entity(self.block_entity, immediate=True)
        self.block_entity = None
