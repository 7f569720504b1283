from __future__ import annotations

import argparse
from typing import Optional

import gymnasium as gym

import bubble_swerve.env  # noqa: F401  ensure registration


def run_random(steps: int = 500, seed: Optional[int] = None) -> float:
    env = gym.make("BubbleSwerve-v0")
    obs, info = env.reset(seed=seed)
    if seed is not None:
        env.action_space.seed(seed)
    total_reward = 0.0
    games = 1
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
            games += 1
    env.close()
    print(f"Random play: {games} game(s), total reward {total_reward:.0f}")
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=500)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
