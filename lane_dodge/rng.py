import numpy as np


def default_rng(seed=None):
    """Random source used by the game: anything with ``random() -> float`` in [0, 1)."""
    return np.random.default_rng(seed)


class ScriptedRandom:
    """Replays a fixed list of samples, for reproducible spawn tests."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        if self.calls >= len(self.values):
            raise IndexError(f"ScriptedRandom exhausted after {self.calls} samples")
        value = self.values[self.calls]
        self.calls += 1
        return value
