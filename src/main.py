"""Entry point for the Emotion Match-3 falling-block game.

Sets up ECS world, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color, color
from ecs.world import create_world
from ecs.constants import GRID_ROWS, GRID_COLS
from ecs.events.bus import EVENT_TICK, EventBus, EVENT_KEY_PRESS, EVENT_MOUSE_PRESS
from ecs.components.game_state import GameMode
from ecs.systems.drop_timer import DropTimerSystem
from ecs.systems.grid_engine import GridEngine
from ecs.systems.input import InputSystem
from ecs.systems.render import RenderSystem


class EmotionDropWindow(Window):
    def __init__(self):
        super().__init__(480, 760, "Emotion Match-3")
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, initial_mode=GameMode.MENU)

        # Engine
        self.grid_engine = GridEngine(self.world, self.event_bus, rows=GRID_ROWS, cols=GRID_COLS)

        # Collaborators: cadence, input, presentation
        self.drop_timer_system = DropTimerSystem(self.world, self.event_bus)
        self.input_system = InputSystem(self.event_bus, self, self.world)
        self.render_system = RenderSystem(self.world, self.event_bus, self)

        set_background_color(color.LAVENDER_BLUSH)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    window = EmotionDropWindow()
    run()

if __name__ == "__main__":
    main()
