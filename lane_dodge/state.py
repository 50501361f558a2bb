from dataclasses import dataclass, field
from enum import Enum

from lane_dodge.geometry import Box


class Mode(Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class Vehicle:
    x: float
    y: float
    width: float
    height: float

    def box(self):
        return Box(self.x, self.y, self.width, self.height)


@dataclass
class Obstacle:
    id: int
    x: float
    y: float
    width: float
    height: float

    def box(self):
        return Box(self.x, self.y, self.width, self.height)


@dataclass
class RoundState:
    """Everything that changes during one round. Owned by the engine."""

    mode: Mode
    score: int
    speed: float
    vehicle: Vehicle
    obstacles: list = field(default_factory=list)
    next_id: int = 0

    @classmethod
    def fresh(cls, config):
        vehicle = Vehicle(
            x=config.vehicle_start_x,
            y=config.vehicle_y,
            width=config.vehicle_width,
            height=config.vehicle_height,
        )
        return cls(mode=Mode.PLAYING, score=0, speed=config.initial_speed, vehicle=vehicle)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to renderers and agents."""

    mode: Mode
    vehicle: Box
    obstacles: tuple
    score: int
    best_score: int
    speed: float

    @property
    def game_over(self):
        return self.mode is Mode.GAME_OVER
