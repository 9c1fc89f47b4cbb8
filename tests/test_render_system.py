from ecs.events.bus import EVENT_MATCH_CLEARED, EVENT_TICK
from ecs.systems.render import CLEAR_POPUP_SECONDS, RenderSystem
from ecs.ui.layout import cell_rect, compute_board_geometry, point_in_rect
from tests.helpers import DummyWindow, set_board


def test_headless_process_builds_layout_and_highlight(world, bus, engine):
    engine.start_game()
    render = RenderSystem(world, bus, DummyWindow())
    render.process()
    assert len(render.cell_layout) == 60
    assert render.highlight == (0, 2)
    engine.move_horizontal(1)
    render.process()
    assert render.highlight == (0, 3)


def test_highlight_cleared_after_game_over(world, bus, engine):
    engine.start_game()
    set_board(world, engine.board_entity, [".." + s + "..." for s in ["H", "S"] * 5])
    engine.advance()
    render = RenderSystem(world, bus, DummyWindow())
    render.process()
    assert render.highlight is None


def test_clear_popup_expires(world, bus):
    render = RenderSystem(world, bus, DummyWindow())
    bus.emit(EVENT_MATCH_CLEARED, round=1, positions=[], counts={}, points=10, multiplier=1)
    bus.emit(EVENT_MATCH_CLEARED, round=2, positions=[], counts={}, points=20, multiplier=2)
    assert render._popup['points'] == 30
    bus.emit(EVENT_TICK, dt=CLEAR_POPUP_SECONDS + 0.1)
    assert render._popup is None


def test_top_row_is_drawn_above_bottom_row():
    window = DummyWindow()
    tile, start_x, start_y = compute_board_geometry(window.width, window.height, 10, 6)
    top = cell_rect(0, 0, tile, start_x, start_y, 10)
    bottom = cell_rect(9, 0, tile, start_x, start_y, 10)
    assert top[1] > bottom[1]
    assert bottom[1] == start_y
    assert start_x + 6 * tile <= window.width
    assert point_in_rect(top[0] + 1, top[1] + 1, top)
    assert not point_in_rect(top[0] - 1, top[1] + 1, top)
