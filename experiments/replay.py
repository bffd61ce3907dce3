# experiments/replay.py
"""
Replay a recorded FlapEnv episode in a window.

# Typical usage (run from REPO ROOT)

# Replay a HEURISTIC episode by seed (uses experiments/runs/traces/heuristic/<seed>_actions.npy)
python -m experiments.replay --policy heuristic --seed 105

# Replay by pointing directly to a specific actions file
python -m experiments.replay --trace experiments/runs/traces/random/112_actions.npy --frame-skip 4

# Controls during replay
SPACE = pause/resume
R     = restart episode
ESC   = quit

Deterministic: given the same seed, frame_skip and action sequence, replay matches the original run.
"""

from __future__ import annotations
import argparse
from pathlib import Path

import numpy as np
import pygame

from flapjack.env.flap_env import FlapEnv

DEFAULT_OUT_DIR = "experiments/runs"


def _find_trace(out_dir: Path, policy: str, seed: int) -> Path:
    p = out_dir / "traces" / policy / f"{seed}_actions.npy"
    if not p.exists():
        raise FileNotFoundError(f"Trace not found: {p}")
    return p

def _read_meta(out_dir: Path, policy: str, seed: int) -> dict:
    meta_path = out_dir / "traces" / policy / f"{seed}_meta.txt"
    meta = {}
    if meta_path.exists():
        for line in meta_path.read_text(encoding="utf-8").splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                meta[k.strip()] = v.strip()
    return meta

def replay_episode(seed: int, actions: np.ndarray, frame_skip: int):
    env = FlapEnv(render_mode="human", frame_skip=frame_skip, time_limit_seconds=None)
    env.reset(seed=seed)

    paused = False
    step_idx = 0
    try:
        running = True
        while running and step_idx < len(actions):
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        paused = not paused
                    elif event.key == pygame.K_r:
                        env.reset(seed=seed)
                        step_idx = 0
                        paused = False

            if paused:
                env.render()
                continue

            _, _, term, trunc, info = env.step(int(actions[step_idx]))
            step_idx += 1
            if term or trunc:
                print(f"Episode over at step {step_idx}: score={info['score']}")
                pygame.time.delay(600)
                break
    finally:
        env.close()

def main(argv=None):
    ap = argparse.ArgumentParser(description="Replay a recorded FlapEnv episode.")
    ap.add_argument("--seed", type=int, help="Episode seed")
    ap.add_argument("--policy", type=str, default="random",
                    help="Trace subfolder name, e.g. random / heuristic")
    ap.add_argument("--trace", type=str, default="",
                    help="Optional explicit path to a .npy action file")
    ap.add_argument("--out-dir", type=str, default=DEFAULT_OUT_DIR,
                    help="Base directory where traces live")
    ap.add_argument("--frame-skip", type=int, default=-1,
                    help="Override frame_skip. If <0, use meta or default=4")
    args = ap.parse_args(argv)

    out_dir = Path(args.out_dir)

    if args.trace:
        trace_path = Path(args.trace)
        if not trace_path.exists():
            raise FileNotFoundError(f"Trace file not found: {trace_path}")
        if args.seed is None:
            stem = trace_path.stem.split("_")[0]
            if not stem.isdigit():
                raise SystemExit("Cannot infer the seed from the trace name; pass --seed")
            args.seed = int(stem)
    else:
        if args.seed is None:
            raise SystemExit("Please provide --seed or --trace")
        trace_path = _find_trace(out_dir, args.policy, args.seed)

    actions = np.load(trace_path)
    if actions.ndim != 1:
        raise ValueError(f"Expected 1D action array, got shape {actions.shape}")

    fs = args.frame_skip
    if fs < 0:
        meta = {} if args.trace else _read_meta(out_dir, args.policy, args.seed)
        fs = int(meta.get("frame_skip", 4))

    print(f"Replaying seed={args.seed}  policy={args.policy}  steps={len(actions)}  frame_skip={fs}")
    print("Controls: SPACE pause/resume | R restart | ESC quit")
    replay_episode(seed=args.seed, actions=actions, frame_skip=fs)

if __name__ == "__main__":
    main()
