"""
game_session.py: The authoritative game session and its state machine.

The host drives a session through five entry points only:
on_start(), on_jump(), on_physics_tick(), on_obstacle_tick() and
on_spawn_tick(), plus on_warmup_elapsed() for the one-shot grace timer.
Calls that arrive in a state where they make no sense are dropped.
"""

import logging
import random
from typing import List, Optional

from .config import GameConfig, DEFAULT_CONFIG
from .data_models import BirdState, GameEvent, GameSnapshot, Obstacle, ProgressionState, SessionState
from .obstacle_stream import ObstacleStream
from .physics_core import PhysicsCore
from .progression import Progression
from .sinks import AudioSink, LoggingAudioSink, NullPresentationSink, PresentationSink

logger = logging.getLogger(__name__)


class GameSession:

    def __init__(
        self,
        config: GameConfig = DEFAULT_CONFIG,
        presentation: Optional[PresentationSink] = None,
        audio: Optional[AudioSink] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.presentation = presentation or NullPresentationSink()
        self.audio = audio or LoggingAudioSink()

        self.physics = PhysicsCore(config)
        self.stream = ObstacleStream(config, rng)
        self.progress = Progression(config)

        self.state = SessionState.NOT_STARTED
        self.bird: BirdState = self.physics.initial_bird()
        self.warming_up = False
        self.generation = 0
        self.best_score = 0

    # -------- Read-only views --------

    @property
    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE

    @property
    def obstacles(self) -> List[Obstacle]:
        return self.stream.obstacles

    @property
    def progression(self) -> ProgressionState:
        return self.progress.state

    @property
    def spawn_interval_ms(self) -> int:
        if self.progression.advanced_mode:
            return self.config.advanced_spawn_interval_ms
        return self.config.spawn_interval_ms

    @property
    def pipe_speed(self) -> float:
        return self.config.pipe_speed(self.progression.speed_multiplier,
                                      self.progression.advanced_mode)

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot.capture(
            self.bird, self.obstacles, self.progression, self.state,
            warming_up=self.warming_up, best_score=self.best_score,
            generation=self.generation,
        )

    # -------- Commands --------

    def on_start(self) -> bool:
        """Starts a fresh session, or restarts after game over."""
        if self.state is SessionState.ACTIVE:
            logger.debug("Start ignored: session already active")
            return False

        restarting = self.state is SessionState.GAME_OVER
        self.bird = self.physics.initial_bird()
        self.stream.clear()
        self.progress.reset()
        self.generation += 1
        self.warming_up = self.config.warmup_ms > 0
        self.state = SessionState.ACTIVE

        logger.info("%s session #%d (warm-up %d ms)",
                    "Restarted" if restarting else "Started",
                    self.generation, self.config.warmup_ms)
        self._emit(GameEvent.STARTED)
        self._present()
        return True

    def on_warmup_elapsed(self, generation: int) -> bool:
        """Ends the grace period, unless the timer belongs to an older session."""
        if generation != self.generation or not self.is_active or not self.warming_up:
            logger.debug("Dropped stale warm-up timer for session #%d", generation)
            return False
        self.warming_up = False
        logger.info("Warm-up over for session #%d", self.generation)
        self._present()
        return True

    def on_jump(self) -> bool:
        if not self.is_active or self.warming_up:
            return False
        self.bird = self.physics.apply_jump_impulse(self.bird)
        return True

    # -------- Ticks --------

    def on_physics_tick(self):
        # The bird holds its start position until warm-up is over.
        if not self.is_active or self.warming_up:
            return

        moved = self.physics.apply_gravity_step(self.bird)
        if self.physics.is_out_of_bounds(moved.y):
            # Keep the last in-bounds position.
            self.bird = BirdState(y=self.bird.y, velocity=moved.velocity)
            logger.info("Bird left the playfield at y=%.2f", moved.y)
            self._game_over()
        else:
            self.bird = moved
        self._present()

    def on_obstacle_tick(self):
        if not self.is_active or self.warming_up:
            return

        self.stream.advance(self.pipe_speed)

        hits = self.physics.colliding_obstacles(self.bird, self.obstacles)
        # Pipes passed on the fatal tick still count.
        self.progress.score_passed(self.obstacles)
        if hits:
            logger.info("Bird hit %d pipe(s) at y=%.2f", len(hits), self.bird.y)
            self._game_over()
            self._present()
            return

        if self.progress.check_level_up():
            self._emit(GameEvent.LEVEL_UP)
        self._present()

    def on_spawn_tick(self):
        if not self.is_active or self.warming_up:
            return
        if self.stream.spawn(self.progression.advanced_mode):
            self._present()

    # -------- Internals --------

    def _game_over(self):
        self.state = SessionState.GAME_OVER
        self.warming_up = False
        self.best_score = max(self.best_score, self.progression.score)
        logger.info("Game over: score=%d level=%d best=%d",
                    self.progression.score, self.progression.level, self.best_score)
        self._emit(GameEvent.COLLISION)
        self._emit(GameEvent.GAME_OVER)

    def _emit(self, event: GameEvent):
        try:
            self.audio.on_event(event, self.progression)
        except Exception:
            logger.exception("Audio sink failed on %s", event.value)

    def _present(self):
        try:
            self.presentation.present(self.snapshot())
        except Exception:
            logger.exception("Presentation sink failed")
