import gymnasium as gym

from lane_dodge.config import GameConfig
from lane_dodge.engine import SimulationEngine
from lane_dodge.geometry import Box, intersects
from lane_dodge.state import Mode, Snapshot

gym.register(id="LaneDodge-v0", entry_point="lane_dodge.env:LaneDodgeEnv")

__all__ = ["Box", "GameConfig", "Mode", "SimulationEngine", "Snapshot", "intersects"]
