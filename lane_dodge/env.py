import logging
import os
from concurrent.futures import ThreadPoolExecutor

import gymnasium as gym
from gymnasium.spaces import Box, MultiDiscrete
import numpy as np
import pygame

from lane_dodge.clock import ManualClock
from lane_dodge.config import GameConfig
from lane_dodge.engine import SimulationEngine
from lane_dodge.persistence import BestScoreWriter, load_best_score
from lane_dodge.render import Renderer, to_array

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

logger = logging.getLogger(__name__)


class LaneDodgeEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"]}

    user_guide = "Controls: ← and → to change lane. Other action components are ignored."

    game_description = (
        "Steer a car left and right to dodge blocks falling down the road. "
        "Every block that passes scores a point and makes the next ones faster."
    )

    auto_advance = True

    REWARD_SURVIVE = 1.0
    REWARD_CRASH = -10.0

    def __init__(self, render_mode="rgb_array", seed=None, config=None, best_score_store=None):
        super().__init__()
        self.render_mode = render_mode
        self.config = config or GameConfig()
        self.np_random = np.random.default_rng(seed)

        self.WIDTH, self.HEIGHT = self.config.width, self.config.height

        self.observation_space = Box(low=0, high=255, shape=(self.HEIGHT, self.WIDTH, 3), dtype=np.uint8)
        self.action_space = MultiDiscrete([5, 2, 2])

        pygame.init()
        self.renderer = Renderer(self.config)
        self.screen = self.renderer.new_surface()

        self.clock = ManualClock()
        best_score = load_best_score(best_score_store) if best_score_store is not None else 0
        self.engine = SimulationEngine(
            config=self.config,
            rng=self.np_random,
            best_score=best_score,
            sim_ticker=self.clock.ticker(),
            spawn_ticker=self.clock.ticker(),
        )
        self.writer = None
        if best_score_store is not None:
            self.writer = BestScoreWriter(best_score_store, executor=ThreadPoolExecutor(max_workers=1))
            self.engine.add_best_score_listener(self.writer)

        self.steps = 0

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        # Share the reseeded generator with the engine's spawner
        self.engine.rng = self.np_random
        self.engine.new_round()
        self.steps = 0
        return self._get_observation(), self._get_info()

    def step(self, action):
        if self.engine.snapshot().game_over:
            return self._get_observation(), 0.0, True, False, self._get_info()

        movement = action[0]
        if movement == 3:
            self.engine.move_left()
        elif movement == 4:
            self.engine.move_right()

        score_before = self.engine.score
        self.clock.advance(self.config.tick_ms)
        self.steps += 1

        snapshot = self.engine.snapshot()
        reward = (snapshot.score - score_before) * self.REWARD_SURVIVE
        terminated = snapshot.game_over
        if terminated:
            reward += self.REWARD_CRASH

        return self._get_observation(), float(reward), terminated, False, self._get_info()

    def render(self):
        return self._get_observation()

    def _get_observation(self):
        self.renderer.draw(self.screen, self.engine.snapshot())
        return to_array(self.screen)

    def _get_info(self):
        snapshot = self.engine.snapshot()
        return {
            "score": snapshot.score,
            "best_score": snapshot.best_score,
            "speed": snapshot.speed,
            "steps": self.steps,
        }

    def close(self):
        self.engine.stop()
        if self.writer is not None:
            self.writer.close()
        pygame.quit()

    def validate_implementation(self):
        assert self.action_space.shape == (3,)
        assert self.action_space.nvec.tolist() == [5, 2, 2]

        obs, info = self.reset()
        assert obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert obs.dtype == np.uint8
        assert isinstance(info, dict)

        obs, reward, term, trunc, info = self.step(self.action_space.sample())
        assert obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert isinstance(reward, float)
        assert isinstance(term, bool)
        assert not trunc
        assert isinstance(info, dict)

        logger.info("Implementation validated successfully")
