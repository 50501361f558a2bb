import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from lane_dodge.clock import ManualClock
from lane_dodge.config import GameConfig
from lane_dodge.engine import SimulationEngine
from lane_dodge.rng import ScriptedRandom


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def engine(config, clock):
    """Engine on a manual clock whose spawner never fires (every roll is 0.99)."""
    engine = SimulationEngine(
        config=config,
        rng=ScriptedRandom([0.99] * 1000),
        sim_ticker=clock.ticker(),
        spawn_ticker=clock.ticker(),
    )
    engine.start()
    return engine
