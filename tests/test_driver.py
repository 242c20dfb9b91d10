import pytest

from flappy_arcade.config import DEFAULT_CONFIG, GameConfig
from flappy_arcade.data_models import SessionState
from flappy_arcade.driver import PeriodicTask, SessionDriver
from flappy_arcade.game_session import GameSession


@pytest.fixture
def floating(config, rng, sink):
    """A session whose bird never falls."""
    return GameSession(config.with_overrides(gravity=0.0), presentation=sink, audio=sink, rng=rng)


def test_periodic_task_rereads_interval():
    intervals = iter([10, 30])
    task = PeriodicTask("t", lambda: None, lambda: next(intervals), next_due=5, priority=0)
    task.run()
    assert task.next_due == 15
    task.run()
    assert task.next_due == 45
    assert task.runs == 2


def test_nothing_runs_before_start(session):
    driver = SessionDriver(session)
    assert driver.advance(5000) == 0
    assert session.state is SessionState.NOT_STARTED


def test_physics_and_obstacle_rates(session):
    driver = SessionDriver(session)
    assert driver.start()
    driver.advance(200)
    assert driver.task("physics").runs == 10
    assert driver.task("obstacle").runs == 12
    assert session.bird.velocity == 5.0
    assert session.bird.y == 277.5


def test_ticks_run_in_time_order(floating):
    calls = []
    physics, obstacle = floating.on_physics_tick, floating.on_obstacle_tick
    floating.on_physics_tick = lambda: (calls.append("physics"), physics())
    floating.on_obstacle_tick = lambda: (calls.append("obstacle"), obstacle())

    driver = SessionDriver(floating)
    driver.start()
    driver.advance(80)
    assert calls == ["obstacle", "physics", "obstacle", "physics", "obstacle",
                     "physics", "obstacle", "physics", "obstacle"]


def test_spawn_interval(floating):
    driver = SessionDriver(floating)
    driver.start()
    driver.advance(1999)
    assert floating.obstacles == []
    driver.advance(1)
    assert [o.x for o in floating.obstacles] == [800]


def test_spawn_interval_shrinks_in_advanced_mode(floating):
    driver = SessionDriver(floating)
    driver.start()
    floating.progression.advanced_mode = True
    driver.advance(2000)
    assert driver.task("spawn").next_due == 3800


def test_game_over_cancels_all_tasks(session):
    driver = SessionDriver(session)
    driver.start()
    driver.advance(1000)
    assert session.state is SessionState.GAME_OVER
    assert not driver.running
    assert driver.advance(10_000) == 0


def test_restart_after_game_over(session):
    driver = SessionDriver(session)
    driver.start()
    driver.advance(1000)
    assert driver.start() is True
    assert session.state is SessionState.ACTIVE
    assert session.generation == 2
    assert driver.task("physics").next_due == driver.now_ms + 20


def test_start_while_active_is_ignored(session):
    driver = SessionDriver(session)
    driver.start()
    driver.advance(100)
    assert driver.start() is False
    assert session.generation == 1


def test_warmup_delays_pipe_tasks(config, rng):
    session = GameSession(config.with_overrides(gravity=0.0, warmup_ms=1000), rng=rng)
    driver = SessionDriver(session)
    driver.start()
    driver.advance(999)
    assert driver.task("obstacle") is None
    assert driver.task("spawn") is None
    assert session.warming_up

    driver.advance(1)
    assert not session.warming_up
    assert driver.task("obstacle").next_due == 1016
    assert driver.task("spawn").next_due == 3000


def test_bird_survives_warmup_without_flapping(rng):
    session = GameSession(DEFAULT_CONFIG, rng=rng)
    driver = SessionDriver(session)
    driver.start()
    driver.advance(DEFAULT_CONFIG.warmup_ms - 1)
    assert session.state is SessionState.ACTIVE
    assert session.warming_up
    assert session.bird.y == DEFAULT_CONFIG.initial_bird_y
    assert driver.jump() is False

    # The physics tick due at the same ms runs right after warm-up ends
    driver.advance(1)
    assert not session.warming_up
    assert session.bird.velocity == DEFAULT_CONFIG.gravity
    assert driver.jump() is True


def test_restart_drops_old_warmup_timer(config, rng):
    session = GameSession(config.with_overrides(warmup_ms=1000), rng=rng)
    driver = SessionDriver(session)
    driver.start()
    driver.advance(1000)
    driver.advance(1000)
    assert session.state is SessionState.GAME_OVER
    assert driver.warmup is None

    driver.start()
    assert driver.warmup == (driver.now_ms + 1000, 2)


def test_negative_elapsed_rejected(session):
    with pytest.raises(ValueError):
        SessionDriver(session).advance(-1)


def test_jump_goes_through_session(session):
    driver = SessionDriver(session)
    assert driver.jump() is False
    driver.start()
    assert driver.jump() is True
    assert session.bird.velocity == -8.0


def test_long_run_with_wide_gaps(rng, sink):
    config = GameConfig(warmup_ms=0, gravity=0.0, gap_size=400,
                        min_gap_height_margin=50, advanced_gap_margin=50)
    session = GameSession(config, presentation=sink, audio=sink, rng=rng)
    driver = SessionDriver(session)
    driver.start()
    driver.advance(120_000)

    assert session.state is SessionState.ACTIVE
    prog = session.progression
    assert prog.level >= 5
    assert prog.advanced_mode

    last = sink.snapshots[0].progression
    seen_advanced = False
    for snap in sink.snapshots[1:]:
        p = snap.progression
        assert p.score >= last.score
        assert p.level >= last.level
        assert p.speed_multiplier >= last.speed_multiplier
        assert p.score % 10 == 0
        if seen_advanced:
            assert p.advanced_mode
        seen_advanced = seen_advanced or p.advanced_mode
        last = p
