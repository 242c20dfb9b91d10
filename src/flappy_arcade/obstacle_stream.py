"""
obstacle_stream.py: The ordered stream of pipes and the policy that spawns them.
"""

import logging
import random
from typing import List, Optional

from .config import GameConfig, DEFAULT_CONFIG
from .data_models import Obstacle

logger = logging.getLogger(__name__)


class ObstacleStream:
    """
    Owns every live pipe, oldest first. Pipes are only created by spawn()
    and only destroyed by advance().
    """

    def __init__(self, config: GameConfig = DEFAULT_CONFIG, rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng or random.Random()
        self.obstacles: List[Obstacle] = []

    def __len__(self):
        return len(self.obstacles)

    def __iter__(self):
        return iter(self.obstacles)

    def clear(self):
        self.obstacles = []

    def advance(self, speed: float) -> int:
        """Moves every pipe left by `speed`, then prunes. Returns how many were pruned."""
        for obstacle in self.obstacles:
            obstacle.x -= speed

        limit = -self.config.prune_margin
        kept = [o for o in self.obstacles if o.x >= limit]
        pruned = len(self.obstacles) - len(kept)
        if pruned:
            logger.debug("Pruned %d pipe(s) past x=%s", pruned, limit)
        self.obstacles = kept
        return pruned

    def _sample_gap(self, advanced: bool) -> float:
        low, high = self.config.gap_range(advanced=False)
        gap_y = self.rng.uniform(low, high)
        if advanced:
            band_low, band_high = self.config.gap_range(advanced=True)
            gap_y = min(max(gap_y, band_low), band_high)
        return gap_y

    def _append(self, x: float, advanced: bool) -> Obstacle:
        obstacle = Obstacle(x=float(x), gap_y=self._sample_gap(advanced))
        self.obstacles.append(obstacle)
        return obstacle

    def spawn(self, advanced: bool) -> List[Obstacle]:
        """
        Runs the spawn policy once and returns the pipes it created.

        Normal mode always adds one pipe. Advanced mode adds nothing when the
        stream is at capacity, otherwise one pipe further out with a clamped
        gap, and sometimes a second one behind it under the same rules.
        """
        cfg = self.config
        if not advanced:
            spawned = [self._append(cfg.pipe_spawn_x, advanced=False)]
            logger.debug("Spawned pipe gap_y=%.1f", spawned[0].gap_y)
            return spawned

        if len(self.obstacles) >= cfg.advanced_max_pipes:
            logger.debug("Spawn skipped: %d pipes live (cap %d)",
                         len(self.obstacles), cfg.advanced_max_pipes)
            return []

        spawned = [self._append(cfg.advanced_pipe_spawn_x, advanced=True)]
        if (self.rng.random() < cfg.double_spawn_probability
                and len(self.obstacles) < cfg.advanced_max_pipes):
            spawned.append(self._append(
                cfg.advanced_pipe_spawn_x + cfg.double_spawn_offset, advanced=True))

        logger.debug("Spawned %d advanced pipe(s): %s", len(spawned),
                     ", ".join(f"gap_y={o.gap_y:.1f}" for o in spawned))
        return spawned
