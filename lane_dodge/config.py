import dataclasses
from dataclasses import dataclass

# Playfield
WIDTH, HEIGHT = 360, 650

# Vehicle
VEHICLE_WIDTH = 60
VEHICLE_HEIGHT = 100
VEHICLE_BOTTOM_OFFSET = 150
LANE_STEP = 60

# Difficulty
INITIAL_SPEED = 6.0
SPEED_INCREMENT = 0.3

# Timing (milliseconds)
TICK_MS = 30
SPAWN_MS = 400

# Spawning
SPAWN_BASE_CHANCE = 0.3
SPAWN_CHANCE_PER_POINT = 0.02
SPAWN_MAX_CHANCE = 0.8
OBSTACLE_MIN_WIDTH, OBSTACLE_MAX_WIDTH = 40, 100
OBSTACLE_MIN_HEIGHT, OBSTACLE_MAX_HEIGHT = 30, 80

# Input
SWIPE_THRESHOLD = 50


@dataclass(frozen=True)
class GameConfig:
    """Every tunable number of a round, in playfield pixels and milliseconds."""

    width: int = WIDTH
    height: int = HEIGHT
    vehicle_width: int = VEHICLE_WIDTH
    vehicle_height: int = VEHICLE_HEIGHT
    vehicle_bottom_offset: int = VEHICLE_BOTTOM_OFFSET
    lane_step: int = LANE_STEP
    initial_speed: float = INITIAL_SPEED
    speed_increment: float = SPEED_INCREMENT
    tick_ms: int = TICK_MS
    spawn_ms: int = SPAWN_MS
    spawn_base_chance: float = SPAWN_BASE_CHANCE
    spawn_chance_per_point: float = SPAWN_CHANCE_PER_POINT
    spawn_max_chance: float = SPAWN_MAX_CHANCE
    obstacle_min_width: int = OBSTACLE_MIN_WIDTH
    obstacle_max_width: int = OBSTACLE_MAX_WIDTH
    obstacle_min_height: int = OBSTACLE_MIN_HEIGHT
    obstacle_max_height: int = OBSTACLE_MAX_HEIGHT
    swipe_threshold: int = SWIPE_THRESHOLD

    def __post_init__(self):
        if self.width < self.vehicle_width or self.width < self.obstacle_max_width:
            raise ValueError(
                f"Playfield width {self.width} cannot hold the vehicle "
                f"({self.vehicle_width}) and the widest obstacle ({self.obstacle_max_width})"
            )
        if self.vehicle_bottom_offset <= 0 or self.vehicle_bottom_offset > self.height:
            raise ValueError(f"Vehicle offset {self.vehicle_bottom_offset} is outside the playfield")
        if self.tick_ms <= 0 or self.spawn_ms <= 0:
            raise ValueError("Tick periods must be positive")
        if self.obstacle_min_width > self.obstacle_max_width or self.obstacle_min_height > self.obstacle_max_height:
            raise ValueError("Obstacle size ranges are inverted")

    @property
    def vehicle_y(self):
        return self.height - self.vehicle_bottom_offset

    @property
    def vehicle_start_x(self):
        return self.width / 2 - self.vehicle_width / 2

    @property
    def vehicle_max_x(self):
        return self.width - self.vehicle_width

    def with_overrides(self, **overrides):
        """Return a copy with the given fields replaced.

        Keys that are ``None`` are skipped so parsed CLI arguments can be
        passed straight through.
        """
        known = {f.name for f in dataclasses.fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)
