"""
physics_core.py: Deterministic bird kinematics and collision tests.
"""

from typing import Iterable, List

from .config import GameConfig, DEFAULT_CONFIG
from .data_models import BirdState, Obstacle


class PhysicsCore:
    """
    Pure physics shared by the session: every method returns new values and
    never touches session state.
    """

    def __init__(self, config: GameConfig = DEFAULT_CONFIG):
        self.config = config

    def initial_bird(self) -> BirdState:
        return BirdState(y=self.config.initial_bird_y,
                         velocity=self.config.initial_bird_velocity)

    def apply_gravity_step(self, bird: BirdState) -> BirdState:
        """Gravity first, then move by the new velocity."""
        velocity = bird.velocity + self.config.gravity
        return BirdState(y=bird.y + velocity, velocity=velocity)

    def apply_jump_impulse(self, bird: BirdState) -> BirdState:
        """Overwrites velocity; repeated jumps never accumulate."""
        return BirdState(y=bird.y, velocity=self.config.jump_force)

    def is_out_of_bounds(self, y: float) -> bool:
        """Floor/ceiling collision. Touching either edge counts."""
        return y <= 0 or y >= self.config.playfield_height

    def collides(self, bird: BirdState, obstacle: Obstacle) -> bool:
        """Axis-aligned box test of the bird against both halves of a pipe."""
        cfg = self.config
        bird_left = cfg.bird_x
        bird_right = bird_left + cfg.bird_size
        bird_top = bird.y
        bird_bottom = bird.y + cfg.bird_size

        pipe_left = obstacle.x
        pipe_right = obstacle.x + cfg.pipe_width

        if not (bird_right > pipe_left and bird_left < pipe_right):
            return False

        gap_top = obstacle.gap_y
        gap_bottom = obstacle.gap_y + cfg.gap_size
        return bird_top < gap_top or bird_bottom > gap_bottom

    def colliding_obstacles(self, bird: BirdState, obstacles: Iterable[Obstacle]) -> List[Obstacle]:
        """Every obstacle the bird overlaps; the whole stream is always checked."""
        return [o for o in obstacles if self.collides(bird, o)]
