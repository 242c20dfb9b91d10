"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import List

from .constants import INITIAL_BIRD_Y, INITIAL_BIRD_VELOCITY


class SessionState(Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    GAME_OVER = "game_over"


class GameEvent(Enum):
    """Discrete events delivered to the audio sink."""
    STARTED = "started"
    COLLISION = "collision"
    GAME_OVER = "game_over"
    LEVEL_UP = "level_up"


@dataclass(frozen=True)
class BirdState:
    """Top-left Y of the bird's box and its velocity in pixels per tick."""
    y: float = INITIAL_BIRD_Y
    velocity: float = INITIAL_BIRD_VELOCITY

    def to_client_state(self):
        return {"y": round(self.y, 2), "v": round(self.velocity, 2)}


@dataclass
class Obstacle:
    """A pipe pair: leading edge X and the Y of the top of its gap."""
    x: float
    gap_y: float
    scored: bool = False

    def to_client_state(self):
        return {"x": round(self.x, 2), "gap_y": round(self.gap_y, 2), "scored": self.scored}


@dataclass
class ProgressionState:
    score: int = 0
    level: int = 1
    speed_multiplier: float = 1.0
    advanced_mode: bool = False
    score_at_last_level_up: int = 0

    def to_client_state(self):
        return {
            "score": self.score,
            "level": self.level,
            "speed": round(self.speed_multiplier, 4),
            "advanced": self.advanced_mode,
        }


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view handed to the presentation sink after every tick."""
    bird: BirdState
    obstacles: List[Obstacle]
    progression: ProgressionState
    state: SessionState
    warming_up: bool = False
    best_score: int = 0
    generation: int = 0

    @classmethod
    def capture(cls, bird, obstacles, progression, state, warming_up=False,
                best_score=0, generation=0):
        """Copies mutable parts so consumers can't reach back into the session."""
        return cls(
            bird=bird,
            obstacles=[replace(o) for o in obstacles],
            progression=replace(progression),
            state=state,
            warming_up=warming_up,
            best_score=best_score,
            generation=generation,
        )

    def to_client_state(self):
        return {
            "state": self.state.value,
            "bird": self.bird.to_client_state(),
            "pipes": [o.to_client_state() for o in self.obstacles],
            "progression": self.progression.to_client_state(),
            "warming_up": self.warming_up,
            "best": self.best_score,
        }
