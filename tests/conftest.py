import sys, os

import pytest

# Ensure src (and the repo root, for tests.helpers) is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
for path in (SRC, ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

from ecs.events.bus import EventBus
from ecs.world import create_world
from ecs.systems.grid_engine import GridEngine
from tests.helpers import SequenceRandom, DummyWindow


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def world(bus):
    return create_world(bus)


@pytest.fixture
def engine(world, bus):
    """Engine whose every random draw is Happiness unless a test re-seeds it."""
    return GridEngine(world, bus, rng=SequenceRandom())


__all__ = [
    "SequenceRandom",
    "DummyWindow",
]
