import random

from esper import World
from .events.bus import EventBus
from ecs.components.game_state import GameState, GameMode


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.MENU,
    *,
    rng: random.Random | None = None,
) -> World:
    """Build the ECS world shared by the engine and its collaborators.

    The random source for symbol draws is attached as ``world.random`` so
    systems created later pick up the same (possibly seeded) generator.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    # Register the global game state resource.
    world.create_entity(GameState(mode=initial_mode))
    return world
