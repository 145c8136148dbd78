from __future__ import annotations

import argparse
import random

import gymnasium as gym
import numpy as np

import tetris_search.env  # noqa: F401  ensure registration


def run_random(steps: int = 200, seed: int | None = None) -> float:
    env = gym.make("TetrisPlacement-v0")
    rng = random.Random(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    for _ in range(steps):
        # Only legal placements; the mask always has at least the current piece's moves
        action = rng.choice(np.flatnonzero(info["action_mask"]).tolist())
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
    env.close()
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser(description="Random legal-move baseline")
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()
    total = run_random(args.steps, args.seed)
    print(f"Random agent total reward: {total:.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
