"""
progression.py: Score accumulation and the level state machine.
"""

import logging
from typing import Iterable, List

from .config import GameConfig, DEFAULT_CONFIG
from .data_models import Obstacle, ProgressionState

logger = logging.getLogger(__name__)


class Progression:
    """Mutates a ProgressionState in place; owned by a single session."""

    def __init__(self, config: GameConfig = DEFAULT_CONFIG):
        self.config = config
        self.state = ProgressionState()

    def reset(self):
        self.state = ProgressionState()

    def has_passed(self, obstacle: Obstacle) -> bool:
        """True once the pipe's leading edge is left of the bird."""
        return obstacle.x < self.config.bird_x

    def on_obstacle_passed(self, obstacle: Obstacle) -> bool:
        """Awards points for a pipe at most once. Returns whether it scored."""
        if obstacle.scored:
            return False
        obstacle.scored = True
        self.state.score += self.config.points_per_pipe
        return True

    def score_passed(self, obstacles: Iterable[Obstacle]) -> List[Obstacle]:
        """Scores every pipe the bird has newly passed this tick."""
        return [o for o in obstacles
                if self.has_passed(o) and self.on_obstacle_passed(o)]

    def check_level_up(self) -> bool:
        """
        Fires at most one level-up per call, even if the score jumped past
        several thresholds; the rest are picked up on later ticks.
        """
        cfg = self.config
        state = self.state
        if state.score - state.score_at_last_level_up < cfg.points_for_level_up:
            return False

        state.level += 1
        state.score_at_last_level_up = state.score
        state.speed_multiplier += cfg.speed_increase_per_level
        if state.level % cfg.major_boost_interval == 0:
            state.speed_multiplier += cfg.major_boost_amount

        if state.level == cfg.advanced_mode_level and not state.advanced_mode:
            state.advanced_mode = True
            logger.info("Advanced mode unlocked at level %d", state.level)

        logger.info("Level up: level=%d score=%d speed=%.3f",
                    state.level, state.score, state.speed_multiplier)
        return True
