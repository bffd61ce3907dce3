from typing import List, Tuple

import numpy as np
from gymnasium.utils.env_checker import check_env

from flapjack.env.flap_env import FlapEnv, DEATH_REWARD
from flapjack.env.observations import build_observation
from flapjack.game.config import PIPE_GAP, PIPE_WIDTH
from flapjack.game.obstacles import Obstacle
from flapjack.game.sim import new_game_state


def test_api_check():
    env = FlapEnv(frame_skip=4)
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()


def test_smoke_random_rollout():
    env = FlapEnv(frame_skip=4)
    rng = np.random.RandomState(0)
    try:
        obs, info = env.reset(seed=123)
        assert env.observation_space.contains(obs)
        assert info["seed"] == 123
        for t in range(300):
            obs, r, term, trunc, info = env.step(int(rng.random_sample() < 0.1))
            assert isinstance(r, float)
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term or trunc:
                break
    finally:
        env.close()


def test_noop_falls_to_the_floor():
    # from rest at mid-screen the bird reaches the bottom edge on frame 37
    env = FlapEnv(frame_skip=4)
    env.reset(seed=1)
    rewards = []
    term = False
    while not term:
        _, r, term, trunc, info = env.step(0)
        rewards.append(r)
        assert not trunc
    assert info["frame_count"] == 37
    assert len(rewards) == 10
    assert rewards[-1] == DEATH_REWARD
    env.close()


def test_determinism():
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = FlapEnv(frame_skip=2)
        traj = []
        try:
            env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.random_sample() < 0.12) for _ in range(400)]
    t1 = rollout(7, action_seq)
    t2 = rollout(7, action_seq)
    assert len(t1) == len(t2)
    for (o1, r1, te1, tr1), (o2, r2, te2, tr2) in zip(t1, t2):
        assert np.allclose(o1, o2)
        assert (r1, te1, tr1) == (r2, te2, tr2)


def test_time_limit_truncates():
    env = FlapEnv(frame_skip=1, time_limit_seconds=0.05)   # 3 decisions
    env.reset(seed=0)
    results = [env.step(0) for _ in range(3)]
    assert [res[3] for res in results] == [False, False, True]
    env.close()


def test_observation_layout():
    state = new_game_state(1280, 800, seed=0)
    obs = build_observation(state)
    assert obs.dtype == np.float32 and obs.shape == (5,)
    assert np.allclose(obs, [0.5, 0.0, 1.0, 0.0, 1.0])

    state.obstacles.obstacles = [Obstacle(x=600, top=200, bottom=200 + PIPE_GAP)]
    state.actor.vy = -10.0
    obs = build_observation(state)
    assert np.isclose(obs[1], -0.5)
    assert np.isclose(obs[3], 200 / 800)
    assert np.isclose(obs[4], (200 + PIPE_GAP) / 800)
    assert np.isclose(obs[2], (600 + PIPE_WIDTH - 320) / (1280 + PIPE_WIDTH))


def test_rgb_array_render():
    env = FlapEnv(render_mode="rgb_array", width=640, height=480)
    env.reset(seed=3)
    frame = env.render()
    assert frame.shape == (480, 640, 3)
    assert frame.dtype == np.uint8
    env.close()


def test_render_after_human_env_closed():
    # closing a human env shuts pygame down; later envs and renders must rebuild their fonts
    first = FlapEnv(render_mode="human", width=640, height=480)
    first.reset(seed=0)
    first.close()

    second = FlapEnv(render_mode="human", width=640, height=480)
    second.reset(seed=0)
    second.step(0)
    second.close()

    frames = FlapEnv(render_mode="rgb_array", width=640, height=480)
    frames.reset(seed=1)
    assert frames.render().shape == (480, 640, 3)
    frames.close()


def test_same_env_renders_again_after_close():
    env = FlapEnv(render_mode="human", width=640, height=480)
    env.reset(seed=0)
    env.close()
    env.reset(seed=0)
    env.step(1)
    env.close()
