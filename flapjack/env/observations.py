# flapjack/env/observations.py
from __future__ import annotations
import numpy as np

from flapjack.game.config import FLAP_STRENGTH, PIPE_WIDTH
from flapjack.game.sim import GameState

OBS_SIZE = 5
# vy is clipped to ±this before scaling; a free fall from rest reaches it in ~40 frames
VY_SCALE: float = 2.0 * abs(FLAP_STRENGTH)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _norm_vy(vy: float, vy_max: float = VY_SCALE) -> float:
    """Clip vy to [-vy_max, vy_max] and scale to [-1,1]."""
    vv = max(-vy_max, min(vy, vy_max))
    return vv / vy_max


def build_observation(state: GameState) -> np.ndarray:
    """
    Returns a fixed (5,) float32 vector:
      [ y_norm, vy_norm, next_dx_norm, gap_top_norm, gap_bottom_norm ]
    - y_norm          bird centre / screen height, in [0,1]
    - vy_norm         in [-1,1]
    - next_dx_norm    (next pipe right edge - bird x) / (screen width + PIPE_WIDTH), in [0,1]
    - gap_*_norm      gap edges of that pipe / screen height
    With no pipe ahead: dx=1.0 and the gap sentinel spans the whole screen (0.0, 1.0).
    """
    a = state.actor
    w = float(max(1, state.width))
    h = float(max(1, state.height))

    nxt = state.obstacles.next_ahead(a.x)
    if nxt is None:
        dx_norm, top_norm, bot_norm = 1.0, 0.0, 1.0
    else:
        dx_norm = _clamp01((nxt.right - a.x) / (w + PIPE_WIDTH))
        top_norm = _clamp01(nxt.top / h)
        bot_norm = _clamp01(nxt.bottom / h)

    feats = [_clamp01(a.y / h), _norm_vy(a.vy), dx_norm, top_norm, bot_norm]
    return np.asarray(feats, dtype=np.float32)
