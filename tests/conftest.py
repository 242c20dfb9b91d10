import random

import pytest

from flappy_arcade.config import GameConfig
from flappy_arcade.game_session import GameSession
from flappy_arcade.sinks import RecordingSink


@pytest.fixture
def config():
    return GameConfig(warmup_ms=0)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def session(config, sink, rng):
    return GameSession(config, presentation=sink, audio=sink, rng=rng)


@pytest.fixture
def started(session):
    session.on_start()
    return session
