from __future__ import annotations

from typing import Any

from esper import World

from ecs.components.board import Board
from ecs.components.falling_block import FallingBlock
from ecs.components.game_state import GameMode
from ecs.components.run_state import RunState
from ecs.components.symbol import SYMBOL_COLORS
from ecs.events.bus import EventBus, EVENT_TICK, EVENT_MATCH_CLEARED, EVENT_GAME_STARTED
from ecs.systems.scoring import most_cleared_symbol
from ecs.ui.layout import cell_rect, compute_arrow_buttons, compute_board_geometry, compute_start_button
from ecs.utils.game_state import get_game_state

PADDING = 3
# Seconds a "+points" popup stays on screen after a clear.
CLEAR_POPUP_SECONDS = 0.8

EMPTY_CELL_COLOR = (245, 245, 250)
HIGHLIGHT_COLOR = (254, 243, 199)
BORDER_COLOR = (196, 181, 253)
TEXT_COLOR = (88, 28, 135)
COMBO_COLOR = (249, 115, 22)
GAME_OVER_COLOR = (220, 38, 38)
BUTTON_COLOR = (124, 58, 237)


class RenderSystem:
    """Draws the well, the falling block and the run summary.

    Reads Board, FallingBlock, RunState and GameState straight from the world;
    it never mutates them. Layout is computed even without a window so input
    hit-testing and tests can inspect ``cell_layout``.
    """

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_MATCH_CLEARED, self.on_match_cleared)
        self.event_bus.subscribe(EVENT_GAME_STARTED, self.on_game_started)
        self.cell_layout: dict[tuple[int, int], tuple[float, float, float, float]] = {}
        self.highlight: tuple[int, int] | None = None
        self._popup: dict[str, Any] | None = None

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        if self._popup is None:
            return
        try:
            self._popup['remaining'] -= float(dt)
        except (TypeError, ValueError):
            self._popup['remaining'] -= 1/60
        if self._popup['remaining'] <= 0:
            self._popup = None

    def on_match_cleared(self, sender, **kwargs):
        points = kwargs.get('points', 0)
        multiplier = kwargs.get('multiplier', 1)
        total = points
        if self._popup is not None:
            total += self._popup.get('points', 0)
        self._popup = {'points': total, 'multiplier': multiplier, 'remaining': CLEAR_POPUP_SECONDS}

    def on_game_started(self, sender, **kwargs):
        self._popup = None

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True

        board = self._board()
        block = self._block()
        run_state = self._run_state()
        state = get_game_state(self.world)
        mode = state.mode if state is not None else GameMode.MENU

        self._build_layout(board)
        self.highlight = (block.row, block.col) if block is not None else None
        if headless:
            return

        if mode == GameMode.MENU:
            self._draw_menu(arcade)
            return
        if board is not None:
            self._draw_board(arcade, board, block)
        if run_state is not None:
            self._draw_status(arcade, run_state)
        if mode == GameMode.PLAYING:
            self._draw_arrow_buttons(arcade)
        elif mode == GameMode.GAME_OVER and run_state is not None:
            self._draw_game_over(arcade, run_state)

    def _build_layout(self, board: Board | None) -> None:
        self.cell_layout = {}
        if board is None:
            return
        tile_size, start_x, start_y = compute_board_geometry(
            self.window.width, self.window.height, board.rows, board.cols
        )
        for row in range(board.rows):
            for col in range(board.cols):
                self.cell_layout[(row, col)] = cell_rect(row, col, tile_size, start_x, start_y, board.rows)

    def _draw_board(self, arcade, board: Board, block: FallingBlock | None) -> None:
        for (row, col), (left, bottom, width, height) in self.cell_layout.items():
            symbol = board.cells[row][col]
            falling = block is not None and block.row == row and block.col == col
            if falling:
                symbol = block.symbol
                fill = HIGHLIGHT_COLOR
            elif symbol is not None:
                fill = SYMBOL_COLORS[symbol]
            else:
                fill = EMPTY_CELL_COLOR
            arcade.draw_lbwh_rectangle_filled(
                left + PADDING, bottom + PADDING, width - 2 * PADDING, height - 2 * PADDING, fill
            )
            if falling:
                arcade.draw_lbwh_rectangle_outline(left + 1, bottom + 1, width - 2, height - 2, COMBO_COLOR, border_width=3)
            if symbol is not None:
                arcade.draw_text(
                    symbol.glyph,
                    left + width / 2,
                    bottom + height / 2,
                    (20, 20, 20),
                    int(width * 0.45),
                    anchor_x="center",
                    anchor_y="center",
                )
        if self.cell_layout:
            left, bottom = self.cell_layout[(board.rows - 1, 0)][:2]
            tile = self.cell_layout[(0, 0)][2]
            arcade.draw_lbwh_rectangle_outline(left, bottom, tile * board.cols, tile * board.rows, BORDER_COLOR, border_width=4)

    def _draw_status(self, arcade, run_state: RunState) -> None:
        top = self.window.height - 36
        arcade.draw_text(f"Score: {run_state.score}", 24, top, TEXT_COLOR, 20, bold=True)
        if run_state.combo_multiplier > 1:
            arcade.draw_text(
                f"x{run_state.combo_multiplier} COMBO!",
                self.window.width - 24,
                top,
                COMBO_COLOR,
                20,
                anchor_x="right",
                bold=True,
            )
        if self._popup is not None:
            arcade.draw_text(
                f"+{self._popup['points']}",
                self.window.width / 2,
                top,
                COMBO_COLOR,
                18,
                anchor_x="center",
            )

    def _draw_arrow_buttons(self, arcade) -> None:
        for direction, (left, bottom, width, height) in compute_arrow_buttons(self.window.width, self.window.height).items():
            arcade.draw_lbwh_rectangle_filled(left, bottom, width, height, (59, 130, 246))
            arcade.draw_text(
                "<" if direction < 0 else ">",
                left + width / 2,
                bottom + height / 2,
                (255, 255, 255),
                24,
                anchor_x="center",
                anchor_y="center",
                bold=True,
            )

    def _draw_menu(self, arcade) -> None:
        center_x = self.window.width / 2
        arcade.draw_text(
            "Emotion Match-3", center_x, self.window.height * 0.7, TEXT_COLOR, 36,
            anchor_x="center", anchor_y="center", bold=True,
        )
        arcade.draw_text(
            "Match 3 emotions in a row or column!", center_x, self.window.height * 0.6, (75, 85, 99), 16,
            anchor_x="center", anchor_y="center",
        )
        self._draw_start_button(arcade, "Start Game")

    def _draw_game_over(self, arcade, run_state: RunState) -> None:
        arcade.draw_lrbt_rectangle_filled(0, self.window.width, 0, self.window.height, (255, 255, 255, 200))
        center_x = self.window.width / 2
        arcade.draw_text(
            "Game Over!", center_x, self.window.height * 0.7, GAME_OVER_COLOR, 32,
            anchor_x="center", anchor_y="center", bold=True,
        )
        arcade.draw_text(
            f"Final Score: {run_state.score}", center_x, self.window.height * 0.62, TEXT_COLOR, 22,
            anchor_x="center", anchor_y="center",
        )
        favourite = most_cleared_symbol(run_state.symbol_clear_counts)
        if favourite is not None:
            arcade.draw_text(
                f"Most Cancelled: {favourite.display_name} {favourite.glyph}",
                center_x, self.window.height * 0.55, (67, 56, 202), 18,
                anchor_x="center", anchor_y="center",
            )
        self._draw_start_button(arcade, "Play Again")

    def _draw_start_button(self, arcade, label: str) -> None:
        left, bottom, width, height = compute_start_button(self.window.width, self.window.height)
        arcade.draw_lbwh_rectangle_filled(left, bottom, width, height, BUTTON_COLOR)
        arcade.draw_text(
            label, left + width / 2, bottom + height / 2, (255, 255, 255), 20,
            anchor_x="center", anchor_y="center", bold=True,
        )

    def _board(self) -> Board | None:
        for _, board in self.world.get_component(Board):
            return board
        return None

    def _block(self) -> FallingBlock | None:
        for _, block in self.world.get_component(FallingBlock):
            return block
        return None

    def _run_state(self) -> RunState | None:
        for _, run_state in self.world.get_component(RunState):
            return run_state
        return None
