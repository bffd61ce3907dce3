# experiments/sanity_rollout.py
"""
Plays FlapEnv with a random and a gap-chasing policy over fixed seeds and
writes one CSV row per episode (score, length, return). With --save-traces
the action sequence is kept as <out-dir>/traces/<policy>/<seed>_actions.npy
so experiments/replay.py can show the episode again.

  python -m experiments.sanity_rollout
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222 --save-traces
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import Dict, List

import numpy as np

from flapjack.env.flap_env import FlapEnv

CSV_FIELDS = ["policy", "seed", "frame_skip", "decisions", "return", "score", "terminated", "flap_ratio"]


def random_policy(action_seed: int, flap_prob: float = 0.08):
    rng = np.random.RandomState(action_seed)
    return lambda _obs: int(rng.random_sample() < flap_prob)


def gap_policy(aim: float = 0.65):
    """Flap while falling once the bird sinks past `aim` of the way down the next gap."""
    def act(obs: np.ndarray) -> int:
        y, vy, _dx, gap_top, gap_bot = (float(v) for v in obs)
        return int(vy >= 0.0 and y > gap_top + aim * (gap_bot - gap_top))
    return act


POLICIES = {
    "random": lambda seed: random_policy(10_000 + seed),
    "heuristic": lambda seed: gap_policy(),
}


def play(policy_name: str, seed: int, frame_skip: int, max_decisions: int) -> Dict:
    """One episode; returns the CSV row with the action list under "actions"."""
    policy = POLICIES[policy_name](seed)
    env = FlapEnv(frame_skip=frame_skip)
    actions: List[int] = []
    total = 0.0
    term = False
    try:
        obs, info = env.reset(seed=seed)
        while len(actions) < max_decisions:
            a = policy(obs)
            actions.append(a)
            obs, r, term, trunc, info = env.step(a)
            total += r
            if term or trunc:
                break
    finally:
        env.close()

    return {
        "policy": policy_name, "seed": seed, "frame_skip": frame_skip,
        "decisions": len(actions), "return": round(total, 2), "score": info["score"],
        "terminated": int(term), "flap_ratio": round(sum(actions) / max(1, len(actions)), 3),
        "actions": actions,
    }


def main(argv=None):
    ap = argparse.ArgumentParser(description="Random / heuristic rollouts of FlapEnv.")
    ap.add_argument("--policies", default="both", choices=["random", "heuristic", "both"])
    ap.add_argument("--seeds", default="", help="Comma-separated seeds (default 101..120)")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--steps", type=int, default=10_000, help="Cap on decisions per episode")
    ap.add_argument("--out-dir", default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true", help="Keep action sequences for replay")
    args = ap.parse_args(argv)

    seeds = [int(s) for s in args.seeds.split(",") if s.strip()] or list(range(101, 121))
    policies = list(POLICIES) if args.policies == "both" else [args.policies]
    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    csv_path = out_dir / "episodes.csv"

    with csv_path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for name in policies:
            for seed in seeds:
                row = play(name, seed, args.frame_skip, args.steps)
                writer.writerow(row)
                if args.save_traces:
                    trace_dir = out_dir / "traces" / name
                    trace_dir.mkdir(parents=True, exist_ok=True)
                    np.save(trace_dir / f"{seed}_actions.npy", np.asarray(row["actions"], dtype=np.int8))
                    (trace_dir / f"{seed}_meta.txt").write_text(
                        f"seed={seed}\nframe_skip={args.frame_skip}\npolicy={name}\n", encoding="utf-8")
                print(f"[{name}] seed={seed} score={row['score']} decisions={row['decisions']} "
                      f"return={row['return']}")

    print(f"Wrote {csv_path}")


if __name__ == "__main__":
    main()
