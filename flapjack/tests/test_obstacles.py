import random

from flapjack.game.config import PIPE_GAP, PIPE_MARGIN, PIPE_SPEED, PIPE_WIDTH
from flapjack.game.obstacles import Obstacle, ObstacleSet, gap_top_bounds, should_spawn


def test_spawn_gap_within_bounds():
    width, height = 1280, 800
    obs = ObstacleSet(seed=7)
    for _ in range(500):
        o = obs.spawn(width, height)
        assert PIPE_MARGIN <= o.top <= height - PIPE_GAP - PIPE_MARGIN
        assert o.bottom == o.top + PIPE_GAP
        assert o.x == width
        assert not o.passed


def test_gap_bounds_collapse_on_short_screen():
    lo, hi = gap_top_bounds(400)
    assert lo == hi == PIPE_MARGIN
    o = ObstacleSet(seed=1).spawn(640, 400)
    assert o.top == PIPE_MARGIN


def test_spawn_cadence():
    frames = [f for f in range(1, 601) if should_spawn(f)]
    assert frames == [120, 240, 360, 480, 600]
    assert not should_spawn(0)


def test_advance_and_prune_keep_order():
    obs = ObstacleSet(seed=3)
    obs.obstacles = [
        Obstacle(x=-PIPE_WIDTH + 3, top=100, bottom=100 + PIPE_GAP),
        Obstacle(x=50, top=150, bottom=150 + PIPE_GAP),
        Obstacle(x=400, top=200, bottom=200 + PIPE_GAP),
    ]
    obs.advance()
    obs.prune()
    assert [o.x for o in obs] == [50 - PIPE_SPEED, 400 - PIPE_SPEED]


def test_update_over_many_frames():
    obs = ObstacleSet(seed=11)
    for frame in range(1, 601):
        obs.update(frame, 1280, 800)
        xs = [o.x for o in obs]
        assert xs == sorted(xs)
        assert len(set(xs)) == len(xs)
        assert all(o.right > 0 for o in obs)
    # spawned at 360, 480 and 600 are still on screen; 120 and 240 scrolled off
    assert len(obs) == 3
    assert [o.x for o in obs] == [1280 - PIPE_SPEED * 241, 1280 - PIPE_SPEED * 121, 1280 - PIPE_SPEED]


def test_same_seed_same_layout():
    a, b = ObstacleSet(seed=5), ObstacleSet(seed=5)
    assert [a.spawn(1280, 800).top for _ in range(10)] == [b.spawn(1280, 800).top for _ in range(10)]
    c = ObstacleSet(rng=random.Random(5))
    assert c.spawn(1280, 800).top == ObstacleSet(seed=5).spawn(1280, 800).top


def test_next_ahead():
    obs = ObstacleSet()
    obs.obstacles = [Obstacle(x=-200, top=100, bottom=450), Obstacle(x=500, top=120, bottom=470)]
    assert obs.next_ahead(320).x == 500
    assert obs.next_ahead(50).x == -200
    assert obs.next_ahead(900) is None
