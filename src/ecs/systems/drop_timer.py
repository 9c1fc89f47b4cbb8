from __future__ import annotations

from esper import World

from ecs.components.game_state import GameMode
from ecs.components.run_state import RunState
from ecs.events.bus import EventBus, EVENT_TICK, EVENT_DROP_TICK, EVENT_BLOCK_SPAWNED, EVENT_GAME_STARTED
from ecs.utils.game_state import get_game_state

# Upper bound on catch-up drops after a long frame (window drag, breakpoint).
MAX_DROPS_PER_TICK = 3


class DropTimerSystem:
    """Turns frame ticks into EVENT_DROP_TICK at the run's current drop interval.

    The interval is re-read after every drop because a clearing landing shortens
    it. The countdown restarts whenever a block spawns so each new block gets a
    full interval at the top of the well.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.elapsed_ms = 0.0
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_BLOCK_SPAWNED, self.on_reset)
        self.event_bus.subscribe(EVENT_GAME_STARTED, self.on_reset)

    def on_reset(self, sender, **kwargs):
        self.elapsed_ms = 0.0

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 0.0)
        try:
            dt_ms = float(dt) * 1000.0
        except (TypeError, ValueError):
            return
        if not self._playing():
            self.elapsed_ms = 0.0
            return
        self.elapsed_ms += max(0.0, dt_ms)
        drops = 0
        while drops < MAX_DROPS_PER_TICK and self._playing():
            interval = self._interval()
            if interval is None or self.elapsed_ms < interval:
                break
            self.elapsed_ms -= interval
            drops += 1
            self.event_bus.emit(EVENT_DROP_TICK)
        if drops == MAX_DROPS_PER_TICK:
            # Drop the backlog; the next step waits a full interval.
            self.elapsed_ms = 0.0

    def _playing(self) -> bool:
        state = get_game_state(self.world)
        return state is not None and state.mode == GameMode.PLAYING

    def _interval(self) -> float | None:
        for _, run_state in self.world.get_component(RunState):
            if run_state.is_over:
                return None
            return run_state.drop_interval_ms
        return None
