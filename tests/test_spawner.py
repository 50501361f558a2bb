"""Tests for spawn probability and obstacle geometry."""

import numpy as np
import pytest

from lane_dodge.config import GameConfig
from lane_dodge.rng import ScriptedRandom
from lane_dodge.spawner import Spawner, spawn_probability


class TestSpawnProbability:

    def test_starts_at_thirty_percent(self, config) -> None:
        assert spawn_probability(0, config) == 0.3

    def test_grows_two_points_per_score(self, config) -> None:
        assert spawn_probability(10, config) == 0.5

    def test_capped_at_eighty_percent(self, config) -> None:
        assert spawn_probability(25, config) == pytest.approx(0.8)
        assert spawn_probability(30, config) == 0.8
        assert spawn_probability(500, config) == 0.8


class TestSpawnerDecide:

    def test_no_spawn_when_roll_at_or_above_chance(self, config) -> None:
        rng = ScriptedRandom([0.3])
        assert Spawner(config).decide(0, rng) is None
        assert rng.calls == 1

    def test_spawn_uses_roll_then_geometry(self, config) -> None:
        rng = ScriptedRandom([0.1, 0.5, 0.0, 1.0])
        obstacle = Spawner(config).decide(0, rng, obstacle_id=7)

        assert obstacle is not None
        assert obstacle.id == 7
        assert obstacle.y == 0
        assert obstacle.x == pytest.approx((config.width - config.obstacle_max_width) * 0.5)
        assert obstacle.width == config.obstacle_min_width
        assert obstacle.height == config.obstacle_max_height
        assert rng.calls == 4

    def test_higher_score_spawns_on_higher_roll(self, config) -> None:
        spawner = Spawner(config)
        assert spawner.decide(0, ScriptedRandom([0.45])) is None
        assert spawner.decide(10, ScriptedRandom([0.45, 0.0, 0.0, 0.0])) is not None

    def test_out_of_range_samples_are_clamped(self, config) -> None:
        obstacle = Spawner(config).decide(0, ScriptedRandom([-1.0, 2.0, -3.0, 5.0]))
        assert obstacle.x == config.width - config.obstacle_max_width
        assert obstacle.width == config.obstacle_min_width
        assert obstacle.height == config.obstacle_max_height

    def test_obstacles_stay_inside_ranges(self) -> None:
        config = GameConfig()
        spawner = Spawner(config)
        rng = np.random.default_rng(1234)
        obstacles = [spawner.decide(30, rng) for _ in range(500)]
        obstacles = [o for o in obstacles if o is not None]

        assert obstacles
        for o in obstacles:
            assert 0 <= o.x <= config.width - config.obstacle_max_width
            assert o.x + o.width <= config.width
            assert config.obstacle_min_width <= o.width <= config.obstacle_max_width
            assert config.obstacle_min_height <= o.height <= config.obstacle_max_height
