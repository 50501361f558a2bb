"""Best score storage, kept out of the engine behind a small port."""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_HIGHSCORE_FILE = Path.home() / ".lane_dodge" / "highscore.txt"


class BestScoreStore(ABC):

    @abstractmethod
    def load(self):
        """Return the stored best score, or None if nothing was saved yet."""

    @abstractmethod
    def save(self, value):
        """Persist ``value``. May raise on I/O failure."""


class FileBestScoreStore(BestScoreStore):
    """Stores the best score as a decimal integer in a text file."""

    def __init__(self, path=DEFAULT_HIGHSCORE_FILE):
        self.path = Path(path)

    def load(self):
        if not self.path.exists():
            return None
        text = self.path.read_text(encoding="utf-8").strip()
        if not text:
            return None
        return int(text)

    def save(self, value):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(str(int(value)), encoding="utf-8")
        os.replace(tmp_path, self.path)


class MemoryBestScoreStore(BestScoreStore):

    def __init__(self, value=None):
        self.value = value

    def load(self):
        return self.value

    def save(self, value):
        self.value = int(value)


def load_best_score(store):
    """Load the best score once at startup. Missing or unreadable means 0."""
    try:
        value = store.load()
    except Exception as e:
        logger.warning(f"Failed to load best score: {e}")
        return 0
    if value is None:
        return 0
    return max(int(value), 0)


class BestScoreWriter:
    """Engine listener that saves each new best score without blocking the tick.

    With an executor the save is submitted and forgotten; without one it runs
    inline. Either way a failed save is logged and gameplay carries on.
    """

    def __init__(self, store, executor=None):
        self.store = store
        self.executor = executor

    def __call__(self, value):
        if self.executor is None:
            self._write(value)
        else:
            self.executor.submit(self._write, value)

    def _write(self, value):
        try:
            self.store.save(value)
        except Exception as e:
            logger.warning(f"Failed to save best score {value}: {e}")
            return False
        logger.debug(f"Saved best score {value}")
        return True

    def close(self):
        if self.executor is not None:
            self.executor.shutdown(wait=True)
