"""Tests for the gymnasium environment."""

import threading

import gymnasium as gym
import numpy as np
import pytest

import lane_dodge  # noqa: F401  (registers LaneDodge-v0)
from lane_dodge.env import LaneDodgeEnv
from lane_dodge.persistence import MemoryBestScoreStore
from lane_dodge.state import Obstacle


@pytest.fixture
def env():
    env = LaneDodgeEnv(seed=0)
    yield env
    env.close()


def test_spaces_and_reset(env) -> None:
    obs, info = env.reset(seed=1)
    assert obs.shape == (env.HEIGHT, env.WIDTH, 3)
    assert obs.dtype == np.uint8
    assert env.observation_space.contains(obs)
    assert info == {"score": 0, "best_score": 0, "speed": env.config.initial_speed, "steps": 0}


def test_validate_implementation(env) -> None:
    env.validate_implementation()


def test_step_moves_vehicle(env) -> None:
    env.reset(seed=1)
    start = env.engine.vehicle_x
    env.step([4, 0, 0])
    assert env.engine.vehicle_x == start + env.config.lane_step
    env.step([3, 0, 0])
    env.step([3, 0, 0])
    assert env.engine.vehicle_x == start - env.config.lane_step


def test_step_advances_one_tick(env) -> None:
    env.reset(seed=1)
    env.engine.state.obstacles = [Obstacle(99, 0, 0, 40, 40)]
    env.step([0, 0, 0])
    assert env.engine.obstacles[0].y == pytest.approx(env.config.initial_speed)
    assert env.clock.now == env.config.tick_ms


def test_survival_reward(env) -> None:
    env.reset(seed=1)
    env.engine.state.obstacles = [Obstacle(99, 0, env.config.height - 1, 40, 40)]
    _, reward, terminated, truncated, info = env.step([0, 0, 0])
    assert reward == 1.0
    assert not terminated
    assert not truncated
    assert info["score"] == 1
    assert info["best_score"] == 1


def test_crash_terminates_and_freezes(env) -> None:
    env.reset(seed=1)
    car_x = env.engine.vehicle_x
    env.engine.state.obstacles = [Obstacle(99, car_x, env.config.vehicle_y, 40, 40)]
    _, reward, terminated, _, _ = env.step([0, 0, 0])
    assert terminated
    assert reward == -10.0

    _, reward, terminated, _, info = env.step([4, 0, 0])
    assert terminated
    assert reward == 0.0
    assert env.engine.vehicle_x == car_x


def test_reset_keeps_best_score(env) -> None:
    env.reset(seed=1)
    env.engine.state.obstacles = [Obstacle(99, 0, env.config.height - 1, 40, 40)]
    env.step([0, 0, 0])
    _, info = env.reset()
    assert info["score"] == 0
    assert info["best_score"] == 1


def test_same_seed_same_round() -> None:
    def play(seed):
        env = LaneDodgeEnv()
        env.reset(seed=seed)
        for _ in range(200):
            env.step([0, 0, 0])
        snapshot = env.engine.snapshot()
        env.close()
        return snapshot

    assert play(5) == play(5)


def test_best_score_store_is_loaded_and_written() -> None:
    store = MemoryBestScoreStore(3)
    env = LaneDodgeEnv(seed=0, best_score_store=store)
    try:
        _, info = env.reset(seed=0)
        assert info["best_score"] == 3
        env.engine.state.score = 3
        env.engine.state.obstacles = [Obstacle(99, 0, env.config.height - 1, 40, 40)]
        env.step([0, 0, 0])
    finally:
        env.close()
    # close() waits for pending saves
    assert store.value == 4


class SlowStore(MemoryBestScoreStore):
    """Store whose save blocks until released."""

    def __init__(self):
        super().__init__()
        self.started = threading.Event()
        self.release = threading.Event()

    def save(self, value):
        self.started.set()
        self.release.wait(timeout=10)
        super().save(value)


def test_blocking_store_does_not_stall_step() -> None:
    store = SlowStore()
    env = LaneDodgeEnv(seed=0, best_score_store=store)
    try:
        env.reset(seed=0)
        env.engine.state.obstacles = [Obstacle(99, 0, env.config.height - 1, 40, 40)]
        _, reward, _, _, info = env.step([0, 0, 0])
        assert reward == 1.0
        assert info["best_score"] == 1

        # The save is in flight and the round keeps ticking meanwhile
        assert store.started.wait(timeout=5)
        for _ in range(5):
            env.step([0, 0, 0])
        assert env.steps == 6
        assert store.value is None
    finally:
        store.release.set()
        env.close()
    assert store.value == 1


def test_registered_with_gymnasium() -> None:
    env = gym.make("LaneDodge-v0")
    try:
        obs, _ = env.reset(seed=0)
        assert obs.shape == env.observation_space.shape
    finally:
        env.close()
