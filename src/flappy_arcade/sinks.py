"""
sinks.py: Interfaces for the collaborators the session reports to.
"""

import logging
from typing import List, Protocol

from .data_models import GameEvent, GameSnapshot, ProgressionState

logger = logging.getLogger(__name__)


class PresentationSink(Protocol):
    def present(self, snapshot: GameSnapshot) -> None:
        ...


class AudioSink(Protocol):
    def on_event(self, event: GameEvent, progression: ProgressionState) -> None:
        ...


class NullPresentationSink:
    def present(self, snapshot: GameSnapshot) -> None:
        pass


class LoggingAudioSink:
    """Stands in for real audio: writes each event to the log."""

    def on_event(self, event: GameEvent, progression: ProgressionState) -> None:
        logger.info("Audio event %s (score=%d level=%d)",
                    event.value, progression.score, progression.level)


class RecordingSink:
    """Keeps everything it receives. Used by headless runs and tests."""

    def __init__(self):
        self.snapshots: List[GameSnapshot] = []
        self.events: List[GameEvent] = []

    def present(self, snapshot: GameSnapshot) -> None:
        self.snapshots.append(snapshot)

    def on_event(self, event: GameEvent, progression: ProgressionState) -> None:
        self.events.append(event)

    @property
    def last(self) -> GameSnapshot:
        return self.snapshots[-1]
