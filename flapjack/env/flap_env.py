# flapjack/env/flap_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from flapjack.game.config import WIDTH, HEIGHT, FPS
from flapjack.game.render import Renderer
from flapjack.game.score import MemoryHighScoreStore, ScoreTracker
from flapjack.game.sim import GameState, Inputs, new_game_state, step
from flapjack.env.observations import build_observation, OBS_SIZE

ALIVE_REWARD = 0.1
PIPE_REWARD = 1.0
DEATH_REWARD = -1.0


class FlapEnv(gym.Env):
    """
    Flapjack Gymnasium environment (vector observations).
    - One sim frame per internal step, exactly like the playable game.
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec at 60 fps.
    - Observation: shape (5,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 30.0,
                 width: int = WIDTH,
                 height: int = HEIGHT):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.width = int(width)
        self.height = int(height)

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)
        low = np.array([0.0, -1.0, 0.0, 0.0, 0.0], dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.state: Optional[GameState] = None
        self.scores = ScoreTracker(MemoryHighScoreStore())
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.renderer = Renderer()
        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # Pipe layout seed: the given one, or one drawn from the env RNG
        level_seed = int(seed) if seed is not None else int(self.np_random.integers(0, 2**31 - 1))
        self.state = new_game_state(self.width, self.height, seed=level_seed)
        self.current_seed = level_seed
        self.timestep = 0

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), self._info()

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.state is not None, "Call reset() before step()"

        run = self.state.run
        score_before = run.score
        inputs = Inputs(flap=int(action) == 1)

        for _ in range(self.frame_skip):
            step(self.state, inputs, self.scores)
            inputs = None   # the flap only applies to the first frame
            if run.ended:
                break

        passed = run.score - score_before
        if run.ended:
            reward = DEATH_REWARD + PIPE_REWARD * passed
        else:
            reward = ALIVE_REWARD + PIPE_REWARD * passed

        self.timestep += 1
        terminated = run.ended
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, self._info()

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.state is not None
        return build_observation(self.state)

    def _info(self) -> Dict[str, Any]:
        assert self.state is not None
        run = self.state.run
        return {
            "seed": self.current_seed,
            "score": run.score,
            "high_score": self.scores.high_score,
            "frame_count": run.frame_count,
            "timestep": self.timestep,
            "pipes": len(self.state.obstacles),
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.state is None:
            return None

        if self.render_mode == "human":
            if self.screen is None:
                pygame.init()
                self.screen = pygame.display.set_mode((self.width, self.height))
                pygame.display.set_caption("Flapjack — Gym Env")
                self.clock = pygame.time.Clock()
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
        elif self.screen is None:
            self.screen = pygame.Surface((self.width, self.height))

        self.renderer.draw_frame(self.screen, self.state, self.scores.high_score)

        if self.render_mode == "human":
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None and self.render_mode == "human":
            pygame.display.quit()
            pygame.quit()
        self.renderer.reset_fonts()
        self.screen = None
        self.clock = None
