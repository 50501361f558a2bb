import logging

from lane_dodge.state import Obstacle

logger = logging.getLogger(__name__)


def spawn_probability(score, config):
    """Chance that a spawn tick creates an obstacle: grows with score, capped."""
    return min(config.spawn_base_chance + score * config.spawn_chance_per_point, config.spawn_max_chance)


def _scale(sample, low, high):
    sample = min(max(sample, 0.0), 1.0)
    return low + sample * (high - low)


class Spawner:

    def __init__(self, config):
        self.config = config

    def decide(self, score, rng, obstacle_id=0):
        """Roll once for a spawn; return the new Obstacle or None.

        Samples are drawn in a fixed order: the spawn roll, then x, width and
        height. Obstacles enter at the top edge (y = 0).
        """
        if rng.random() >= spawn_probability(score, self.config):
            return None

        cfg = self.config
        x = _scale(rng.random(), 0, cfg.width - cfg.obstacle_max_width)
        width = _scale(rng.random(), cfg.obstacle_min_width, cfg.obstacle_max_width)
        height = _scale(rng.random(), cfg.obstacle_min_height, cfg.obstacle_max_height)
        obstacle = Obstacle(id=obstacle_id, x=x, y=0.0, width=width, height=height)
        logger.debug(f"Spawned obstacle {obstacle_id} at x={x:.1f} ({width:.0f}x{height:.0f})")
        return obstacle
