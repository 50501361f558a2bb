"""Authoritative game state and the Playing / GameOver state machine."""

import dataclasses
import logging
import threading
from collections import namedtuple

from lane_dodge.config import GameConfig
from lane_dodge.geometry import first_hit
from lane_dodge.rng import default_rng
from lane_dodge.spawner import Spawner
from lane_dodge.state import Mode, RoundState, Snapshot

logger = logging.getLogger(__name__)

TickResult = namedtuple("TickResult", ["state", "exited", "collided"])

LEFT, RIGHT = -1, 1


def advance(state, config):
    """One simulation tick as a pure transition.

    Obstacles move first, then the ones past the bottom edge are scored and
    removed, then the vehicle is tested against what is left. An obstacle that
    leaves the playfield on the tick it would have hit is a survival.
    """
    moved = [dataclasses.replace(o, y=o.y + state.speed) for o in state.obstacles]

    remaining = []
    exited = []
    for obstacle in moved:
        if obstacle.y > config.height:
            exited.append(obstacle)
        else:
            remaining.append(obstacle)

    score = state.score + len(exited)
    speed = state.speed + len(exited) * config.speed_increment

    collided = first_hit(state.vehicle.box(), remaining) is not None
    mode = Mode.GAME_OVER if collided else state.mode

    new_state = dataclasses.replace(state, mode=mode, score=score, speed=speed, obstacles=remaining)
    return TickResult(new_state, exited, collided)


class SimulationEngine:
    """Owns the round state and applies ticks and player commands to it.

    Ticks arrive from two ``Ticker`` objects (simulation and spawn) when they
    are supplied; without them the caller drives ``tick`` and ``spawn_tick``
    directly. Every mutation holds one lock, so tickers and commands may come
    from different threads.
    """

    def __init__(self, config=None, rng=None, spawner=None, best_score=0, sim_ticker=None, spawn_ticker=None):
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else default_rng()
        self.spawner = spawner or Spawner(self.config)
        self.best_score = best_score
        self.sim_ticker = sim_ticker
        self.spawn_ticker = spawn_ticker

        self._listeners = []
        self._lock = threading.RLock()
        self.state = RoundState.fresh(self.config)

    # --- Read model ---

    @property
    def mode(self):
        return self.state.mode

    @property
    def score(self):
        return self.state.score

    @property
    def speed(self):
        return self.state.speed

    @property
    def obstacles(self):
        return list(self.state.obstacles)

    @property
    def vehicle_x(self):
        return self.state.vehicle.x

    def snapshot(self):
        with self._lock:
            state = self.state
            return Snapshot(
                mode=state.mode,
                vehicle=state.vehicle.box(),
                obstacles=tuple(o.box() for o in state.obstacles),
                score=state.score,
                best_score=self.best_score,
                speed=state.speed,
            )

    def add_best_score_listener(self, callback):
        """``callback(best_score)`` runs whenever the best score goes up."""
        self._listeners.append(callback)

    # --- Triggers ---

    def start(self):
        if self.sim_ticker is not None:
            self.sim_ticker.start(self.tick, self.config.tick_ms)
        if self.spawn_ticker is not None:
            self.spawn_ticker.start(self.spawn_tick, self.config.spawn_ms)
        logger.info(f"Round started (best score {self.best_score})")

    def stop(self):
        if self.sim_ticker is not None:
            self.sim_ticker.stop()
        if self.spawn_ticker is not None:
            self.spawn_ticker.stop()

    def tick(self):
        with self._lock:
            if self.state.mode is not Mode.PLAYING:
                return
            before = self.state.score
            result = advance(self.state, self.config)
            self.state = result.state

            for score in range(before + 1, result.state.score + 1):
                if score > self.best_score:
                    self.best_score = score
                    self._notify_best_score(score)

            if result.collided:
                self.stop()
                logger.info(f"Round over: score {self.state.score}, best {self.best_score}")

    def spawn_tick(self):
        with self._lock:
            if self.state.mode is not Mode.PLAYING:
                return
            obstacle = self.spawner.decide(self.state.score, self.rng, obstacle_id=self.state.next_id)
            if obstacle is None:
                return
            self.state = dataclasses.replace(
                self.state,
                obstacles=self.state.obstacles + [obstacle],
                next_id=self.state.next_id + 1,
            )

    def _notify_best_score(self, score):
        logger.debug(f"New best score {score}")
        for callback in self._listeners:
            try:
                callback(score)
            except Exception:
                logger.exception(f"Best score listener {callback!r} failed")

    # --- Commands ---

    def move(self, direction):
        with self._lock:
            if self.state.mode is not Mode.PLAYING:
                return
            vehicle = self.state.vehicle
            x = vehicle.x + direction * self.config.lane_step
            x = min(max(x, 0), self.config.vehicle_max_x)
            self.state = dataclasses.replace(self.state, vehicle=dataclasses.replace(vehicle, x=x))

    def move_left(self):
        self.move(LEFT)

    def move_right(self):
        self.move(RIGHT)

    def reset(self):
        """Start a new round. Only accepted once the current round is over."""
        with self._lock:
            if self.state.mode is not Mode.GAME_OVER:
                return
            self.new_round()

    def new_round(self):
        with self._lock:
            self.state = RoundState.fresh(self.config)
            self.start()
