from ecs.events.bus import (
    EventBus,
    EVENT_KEY_PRESS,
    EVENT_MOUSE_PRESS,
    EVENT_BLOCK_MOVE_REQUEST,
    EVENT_GAME_START_REQUEST,
)
from ecs.components.game_state import GameMode
from ecs.ui.layout import compute_arrow_buttons, compute_start_button, point_in_rect
from ecs.utils.game_state import get_game_state

# Raw arcade.key codes; we avoid importing arcade here to keep input headless.
KEY_LEFT = 65361
KEY_RIGHT = 65363
KEY_A = 97
KEY_D = 100
KEY_ENTER = 65293
KEY_RETURN = 13
KEY_SPACE = 32

KEY_DIRECTIONS = {
    KEY_LEFT: -1,
    KEY_A: -1,
    KEY_RIGHT: 1,
    KEY_D: 1,
}
START_KEYS = (KEY_ENTER, KEY_RETURN, KEY_SPACE)

MOUSE_BUTTON_LEFT = 1


class InputSystem:
    """Translates key presses and button clicks into engine command events."""

    def __init__(self, event_bus: EventBus, window, world=None):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        if symbol is None:
            return
        if self._playing():
            direction = KEY_DIRECTIONS.get(symbol)
            if direction is not None:
                self.event_bus.emit(EVENT_BLOCK_MOVE_REQUEST, direction=direction)
            return
        if symbol in START_KEYS:
            self.event_bus.emit(EVENT_GAME_START_REQUEST)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None or button != MOUSE_BUTTON_LEFT:
            return
        if self._playing():
            for direction, rect in compute_arrow_buttons(self.window.width, self.window.height).items():
                if point_in_rect(x, y, rect):
                    self.event_bus.emit(EVENT_BLOCK_MOVE_REQUEST, direction=direction)
                    return
            return
        if point_in_rect(x, y, compute_start_button(self.window.width, self.window.height)):
            self.event_bus.emit(EVENT_GAME_START_REQUEST)

    def _playing(self) -> bool:
        if self.world is None:
            return False
        state = get_game_state(self.world)
        return state is not None and state.mode == GameMode.PLAYING
