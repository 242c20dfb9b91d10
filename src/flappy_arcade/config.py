"""
config.py: Per-session tuning, defaulted from constants.py.
"""

from dataclasses import dataclass, replace
from typing import Tuple

from . import constants as C


class ConfigError(ValueError):
    """Raised when a GameConfig cannot produce a playable session."""


@dataclass(frozen=True)
class GameConfig:
    """Immutable bundle of every constant the simulation reads."""
    playfield_width: int = C.PLAYFIELD_WIDTH
    playfield_height: int = C.PLAYFIELD_HEIGHT

    bird_x: float = C.BIRD_X
    bird_size: float = C.BIRD_SIZE
    initial_bird_y: float = C.INITIAL_BIRD_Y
    initial_bird_velocity: float = C.INITIAL_BIRD_VELOCITY

    gravity: float = C.GRAVITY
    jump_force: float = C.JUMP_FORCE

    pipe_width: float = C.PIPE_WIDTH
    gap_size: float = C.GAP_SIZE
    base_pipe_speed: float = C.BASE_PIPE_SPEED
    pipe_spawn_x: float = C.PIPE_SPAWN_X
    prune_margin: float = C.PRUNE_MARGIN
    min_gap_height_margin: float = C.MIN_GAP_HEIGHT_MARGIN

    physics_tick_ms: int = C.PHYSICS_TICK_MS
    obstacle_tick_ms: int = C.OBSTACLE_TICK_MS
    spawn_interval_ms: int = C.SPAWN_INTERVAL_MS
    advanced_spawn_interval_ms: int = C.ADVANCED_SPAWN_INTERVAL_MS
    warmup_ms: int = C.WARMUP_MS

    points_per_pipe: int = C.POINTS_PER_PIPE
    points_for_level_up: int = C.POINTS_FOR_LEVEL_UP
    speed_increase_per_level: float = C.SPEED_INCREASE_PER_LEVEL
    major_boost_interval: int = C.MAJOR_BOOST_INTERVAL
    major_boost_amount: float = C.MAJOR_BOOST_AMOUNT
    advanced_mode_level: int = C.ADVANCED_MODE_LEVEL

    advanced_speed_factor: float = C.ADVANCED_SPEED_FACTOR
    advanced_pipe_spawn_x: float = C.ADVANCED_PIPE_SPAWN_X
    advanced_gap_margin: float = C.ADVANCED_GAP_MARGIN
    advanced_max_pipes: int = C.ADVANCED_MAX_PIPES
    double_spawn_probability: float = C.DOUBLE_SPAWN_PROBABILITY
    double_spawn_offset: float = C.DOUBLE_SPAWN_OFFSET

    def __post_init__(self):
        for name in ("playfield_width", "playfield_height", "bird_size", "pipe_width",
                     "gap_size", "physics_tick_ms", "obstacle_tick_ms",
                     "spawn_interval_ms", "advanced_spawn_interval_ms",
                     "points_for_level_up", "major_boost_interval", "advanced_max_pipes"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.warmup_ms < 0:
            raise ConfigError(f"warmup_ms must not be negative, got {self.warmup_ms!r}")
        if not 0.0 <= self.double_spawn_probability <= 1.0:
            raise ConfigError("double_spawn_probability must be within [0, 1]")

        low, high = self.gap_range(advanced=False)
        if low > high:
            raise ConfigError(f"empty gap range [{low}, {high}]; gap_size too large for playfield")
        low, high = self.gap_range(advanced=True)
        if low > high:
            raise ConfigError(f"empty advanced gap range [{low}, {high}]")

    def gap_range(self, advanced: bool) -> Tuple[float, float]:
        """Allowed [low, high] for a pipe's gap top."""
        margin = self.advanced_gap_margin if advanced else self.min_gap_height_margin
        return margin, self.playfield_height - self.gap_size - margin

    def pipe_speed(self, speed_multiplier: float, advanced: bool) -> float:
        """Horizontal pixels a pipe travels per obstacle tick."""
        speed = self.base_pipe_speed * speed_multiplier
        if advanced:
            speed *= self.advanced_speed_factor
        return speed

    def with_overrides(self, **changes) -> "GameConfig":
        return replace(self, **changes)


DEFAULT_CONFIG = GameConfig()
