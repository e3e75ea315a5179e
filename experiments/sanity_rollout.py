# /experiments/sanity_rollout.py
"""
Sanity rollouts for AscenderEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds
- Writes an episodes CSV for notebook analysis
- Optionally saves per-episode action sequences

Usage examples (from repo root):
  # Run both policies over 20 default seeds, frame_skip=2:
  python -m experiments.sanity_rollout --policies both

  # Only heuristic, custom seeds, save actions:
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222,333 --save-traces

  # Quick random-only smoke with fewer steps:
  python -m experiments.sanity_rollout --policies random --steps 300 --out-dir /tmp/sanity
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import List, Tuple, Optional

import numpy as np

from ascender.env.ascender_env import AscenderEnv, NOOP, LEFT, RIGHT
from ascender.env.observations import N_PLATFORMS


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.randint(0, 3))
    return act

def tiny_heuristic_policy_init(dead_zone: float = 0.05):
    """
    Steer toward the closest platform below the ball (first platform block with dy > 0).
    Platform blocks start at index 3: (dx, dy, width, kind).
    """
    def act(obs: np.ndarray) -> int:
        for i in range(N_PLATFORMS):
            dx, dy, width = obs[3 + 4*i], obs[4 + 4*i], obs[5 + 4*i]
            if dy > 0.0 and width > 0.0:
                if dx > dead_zone:
                    return RIGHT
                if dx < -dead_zone:
                    return LEFT
                return NOOP
        return NOOP
    return act


# ------------------------ Rollout core ------------------------

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    seed: int,
                    frame_skip: int,
                    steps_limit: int,
                    save_traces: bool,
                    out_dir: Path) -> Tuple[int, float, int, int, Optional[str]]:
    """Returns: (ep_len, ret_sum, score, coins, end_cause)."""
    env = AscenderEnv(frame_skip=frame_skip, max_decisions=steps_limit)

    if policy_name == "random":
        policy = random_policy_init(10_000 + seed)
    elif policy_name == "heuristic":
        policy = tiny_heuristic_policy_init()
    else:
        raise ValueError(f"Unknown policy {policy_name!r}")

    actions: List[int] = []
    ret_sum = 0.0
    ep_len = 0
    info = {}
    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps_limit):
            a = policy(obs)
            actions.append(int(a))
            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
            ep_len += 1
            if term or trunc:
                break
    finally:
        env.close()

    if save_traces:
        trace_dir = out_dir / "traces" / policy_name
        trace_dir.mkdir(parents=True, exist_ok=True)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))

    return ep_len, ret_sum, int(info.get("score", 0)), int(info.get("coins", 0)), info.get("end_cause")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"])
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--frame-skip", type=int, default=2, help="Sim ticks per decision step")
    ap.add_argument("--steps", type=int, default=3000, help="Hard cap on decision steps")
    ap.add_argument("--out-dir", type=str, default="experiments/runs",
                    help="Directory to store episodes.csv and traces/")
    ap.add_argument("--save-traces", action="store_true", help="Save action sequences")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))

    episodes_csv = out_dir / "episodes.csv"
    header = ["policy_name", "seed", "frame_skip", "episode_len_decisions",
              "return_sum", "score", "coins", "end_cause"]

    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]
    print(f"Running policies={to_run} on {len(seeds)} seeds (frame_skip={args.frame_skip})")
    print(f"Writing summaries to {episodes_csv}")

    for policy_name in to_run:
        for seed in seeds:
            ep_len, ret_sum, score, coins, cause = run_one_episode(
                policy_name=policy_name,
                seed=seed,
                frame_skip=args.frame_skip,
                steps_limit=args.steps,
                save_traces=args.save_traces,
                out_dir=out_dir,
            )
            write_episode_row(episodes_csv, header, [
                policy_name, seed, args.frame_skip, ep_len,
                f"{ret_sum:.1f}", score, coins, cause or "",
            ])
            print(f"[{policy_name}] seed={seed}  len={ep_len}  score={score}  "
                  f"coins={coins}  ret={ret_sum:.1f}  cause={cause}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
