"""Tests for GameConfig defaults and overrides."""

import pytest

from lane_dodge.config import GameConfig


def test_derived_positions() -> None:
    config = GameConfig()
    assert config.vehicle_y == config.height - 150
    assert config.vehicle_start_x == config.width / 2 - 30
    assert config.vehicle_max_x == config.width - 60


def test_overrides_skip_none() -> None:
    config = GameConfig().with_overrides(width=480, height=None)
    assert config.width == 480
    assert config.height == GameConfig().height


def test_unknown_override_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown config keys"):
        GameConfig().with_overrides(colour="red")


@pytest.mark.parametrize(
    "overrides",
    [
        {"width": 50},
        {"tick_ms": 0},
        {"spawn_ms": -5},
        {"vehicle_bottom_offset": 0},
        {"obstacle_min_width": 120},
    ],
)
def test_invalid_values_rejected(overrides) -> None:
    with pytest.raises(ValueError):
        GameConfig(**overrides)
