"""
driver.py: Fixed-step host scheduler for a GameSession.

Three periodic tasks (bird physics, pipe movement/scoring, spawning) and a
one-shot warm-up timer share one virtual clock. advance() runs whatever
came due, one callback at a time, so session state is never touched by
two callbacks at once.
"""

import logging
from typing import Callable, List, Optional, Tuple, Union

from .game_session import GameSession

logger = logging.getLogger(__name__)

Interval = Union[int, float, Callable[[], float]]


class PeriodicTask:
    """A repeating callback. `interval` may be a callable, re-read after each run."""

    def __init__(self, name: str, callback: Callable[[], None], interval: Interval,
                 next_due: float, priority: int):
        self.name = name
        self.callback = callback
        self.interval = interval
        self.next_due = next_due
        self.priority = priority
        self.runs = 0

    def interval_ms(self) -> float:
        return self.interval() if callable(self.interval) else self.interval

    def run(self):
        self.callback()
        self.runs += 1
        self.next_due += self.interval_ms()

    def __repr__(self):
        return f"PeriodicTask({self.name!r}, next_due={self.next_due})"


class SessionDriver:
    PHYSICS, OBSTACLE, SPAWN = 0, 1, 2

    def __init__(self, session: GameSession, now_ms: float = 0.0):
        self.session = session
        self.now_ms = float(now_ms)
        self.tasks: List[PeriodicTask] = []
        self.warmup: Optional[Tuple[float, int]] = None   # (due, generation)

    @property
    def running(self) -> bool:
        return bool(self.tasks) or self.warmup is not None

    def task(self, name: str) -> Optional[PeriodicTask]:
        for t in self.tasks:
            if t.name == name:
                return t
        return None

    # -------- Input --------

    def start(self) -> bool:
        """Start or restart. Any timers from the previous session are dropped first."""
        if self.session.is_active:
            return False
        self.cancel()
        if not self.session.on_start():
            return False

        cfg = self.session.config
        self.tasks.append(PeriodicTask("physics", self.session.on_physics_tick,
                                       cfg.physics_tick_ms,
                                       self.now_ms + cfg.physics_tick_ms, self.PHYSICS))
        if self.session.warming_up:
            self.warmup = (self.now_ms + cfg.warmup_ms, self.session.generation)
        else:
            self._schedule_pipe_tasks()
        return True

    def jump(self) -> bool:
        return self.session.on_jump()

    def cancel(self):
        if self.running:
            logger.debug("Cancelling %d task(s)%s", len(self.tasks),
                         " and warm-up timer" if self.warmup else "")
        self.tasks = []
        self.warmup = None

    # -------- Clock --------

    def advance(self, elapsed_ms: float) -> int:
        """Moves the clock forward and runs every due callback in time order."""
        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must not be negative, got {elapsed_ms!r}")

        target = self.now_ms + elapsed_ms
        ran = 0
        if not self.session.is_active:
            self.cancel()
        while self.running:
            due = self._next_due(target)
            if due is None:
                break
            when, item = due
            self.now_ms = when
            if item is None:
                self._fire_warmup()
            else:
                item.run()
            ran += 1

            if not self.session.is_active:
                self.cancel()
                break

        self.now_ms = target
        return ran

    # -------- Internals --------

    def _next_due(self, target: float):
        best = None
        best_key = None
        if self.warmup is not None and self.warmup[0] <= target:
            best, best_key = (self.warmup[0], None), (self.warmup[0], -1)
        for t in self.tasks:
            if t.next_due <= target:
                key = (t.next_due, t.priority)
                if best_key is None or key < best_key:
                    best, best_key = (t.next_due, t), key
        return best

    def _fire_warmup(self):
        _, generation = self.warmup
        self.warmup = None
        if self.session.on_warmup_elapsed(generation):
            self._schedule_pipe_tasks()

    def _schedule_pipe_tasks(self):
        cfg = self.session.config
        self.tasks.append(PeriodicTask("obstacle", self.session.on_obstacle_tick,
                                       cfg.obstacle_tick_ms,
                                       self.now_ms + cfg.obstacle_tick_ms, self.OBSTACLE))
        self.tasks.append(PeriodicTask("spawn", self.session.on_spawn_tick,
                                       lambda: self.session.spawn_interval_ms,
                                       self.now_ms + self.session.spawn_interval_ms, self.SPAWN))
