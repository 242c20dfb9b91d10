import pytest

from flappy_arcade.data_models import BirdState, Obstacle
from flappy_arcade.physics_core import PhysicsCore


@pytest.fixture
def physics(config):
    return PhysicsCore(config)


def test_gravity_adds_exactly_gravity_each_step(physics):
    bird = physics.initial_bird()
    for _ in range(25):
        after = physics.apply_gravity_step(bird)
        assert after.velocity - bird.velocity == 0.5
        assert after.y == bird.y + after.velocity
        bird = after


def test_ten_gravity_steps_from_rest(physics):
    bird = BirdState(y=250, velocity=0.0)
    for _ in range(10):
        bird = physics.apply_gravity_step(bird)
    assert bird.velocity == 5.0
    assert bird.y == 250 + 27.5


@pytest.mark.parametrize("velocity", [-20.0, -8.0, 0.0, 3.25, 12.0])
def test_jump_overwrites_velocity(physics, velocity):
    bird = physics.apply_jump_impulse(BirdState(y=100, velocity=velocity))
    assert bird.velocity == -8.0
    assert bird.y == 100


def test_repeated_jumps_do_not_accumulate(physics):
    bird = BirdState(y=100, velocity=4.0)
    for _ in range(3):
        bird = physics.apply_jump_impulse(bird)
    assert bird.velocity == -8.0


@pytest.mark.parametrize("y,expected", [
    (-1.0, True),
    (0.0, True),
    (0.01, False),
    (250.0, False),
    (499.99, False),
    (500.0, True),
    (612.0, True),
])
def test_out_of_bounds(physics, y, expected):
    assert physics.is_out_of_bounds(y) is expected


def overlapping(gap_y):
    # Bird spans x 50..90; this pipe spans 50..110
    return Obstacle(x=50, gap_y=gap_y)


@pytest.mark.parametrize("gap_y,expected", [
    (200, False),   # gap 200..373 holds bird 300..340
    (250, False),   # gap 250..423
    (300, False),   # bird top on the gap top
    (301, True),    # bird top above the gap
    (167, False),   # bird bottom on the gap bottom (340)
    (166, True),    # bird bottom below the gap bottom (339)
    (0, True),
])
def test_vertical_collision_cases(physics, gap_y, expected):
    bird = BirdState(y=300, velocity=0.0)
    assert physics.collides(bird, overlapping(gap_y)) is expected


@pytest.mark.parametrize("x,expected", [
    (90, False),    # pipe starts at bird's right edge
    (89, True),
    (-10, False),   # pipe ends at bird's left edge
    (-9, True),
    (400, False),
])
def test_horizontal_overlap_required(physics, x, expected):
    bird = BirdState(y=300, velocity=0.0)
    assert physics.collides(bird, Obstacle(x=x, gap_y=0)) is expected


def test_colliding_obstacles_checks_every_pipe(physics):
    bird = BirdState(y=300, velocity=0.0)
    pipes = [Obstacle(x=60, gap_y=0), Obstacle(x=400, gap_y=0), Obstacle(x=40, gap_y=400)]
    assert physics.colliding_obstacles(bird, pipes) == [pipes[0], pipes[2]]
