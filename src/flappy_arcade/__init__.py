"""
flappy_arcade: Flappy Bird simulation core with levels, plus a pygame host.
"""

from .config import ConfigError, DEFAULT_CONFIG, GameConfig
from .data_models import BirdState, GameEvent, GameSnapshot, Obstacle, ProgressionState, SessionState
from .driver import PeriodicTask, SessionDriver
from .game_session import GameSession
from .obstacle_stream import ObstacleStream
from .physics_core import PhysicsCore
from .progression import Progression

__version__ = "0.2.0"
