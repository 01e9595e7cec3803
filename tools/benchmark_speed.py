"""
Performance Benchmark
=====================

Measures simulation tick throughput.

Usage:
    python -m tools.benchmark_speed [--steps S] [--quick]
"""

from __future__ import annotations

import argparse
import sys
import time
import numpy as np

from asteroid_field.asteroids_core.config_loader import load_config
from asteroid_field.asteroids_core.entities import Keys
from asteroid_field.asteroids_core.env_gym import AsteroidsEnv
from asteroid_field.asteroids_core.game import CoreGame


def benchmark_core_game(
    num_steps: int = 1000,
    seed: int = 42
) -> dict:
    """
    Benchmark raw CoreGame ticks without Gym overhead.

    Args:
        num_steps: Number of ticks.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    game = CoreGame(config=config, seed=seed)
    rng = np.random.default_rng(seed)

    game.step(Keys(), confirm=True)
    start = time.perf_counter()

    for _ in range(num_steps):
        flags = rng.integers(0, 2, size=4)
        keys = Keys(left=bool(flags[0]), right=bool(flags[1]), up=bool(flags[2]), space=bool(flags[3]))
        # Restart as soon as a round ends so every tick is a full simulation step
        result = game.step(keys, confirm=game.is_over)
        result.scene.to_json()

    elapsed = time.perf_counter() - start

    return {
        "mode": "core_game",
        "num_steps": num_steps,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def benchmark_env(
    num_steps: int = 1000,
    seed: int = 42
) -> dict:
    """
    Benchmark Gymnasium environment steps.

    Args:
        num_steps: Number of steps.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    env = AsteroidsEnv()
    env.action_space.seed(seed)

    obs, _ = env.reset(seed=seed)
    start = time.perf_counter()

    for _ in range(num_steps):
        obs, _, terminated, truncated, _ = env.step(env.action_space.sample())
        if terminated or truncated:
            obs, _ = env.reset()

    elapsed = time.perf_counter() - start
    env.close()

    return {
        "mode": "gym_env",
        "num_steps": num_steps,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def run_all_benchmarks(steps: int = 1000) -> list:
    """Run all benchmarks."""
    results = []

    print("=" * 60)
    print("ASTEROIDS SIMULATION PERFORMANCE BENCHMARK")
    print("=" * 60)
    print()

    for label, bench in (("CoreGame (raw)", benchmark_core_game), ("AsteroidsEnv", benchmark_env)):
        print(f"Benchmarking {label}...")
        result = bench(num_steps=steps)
        results.append(result)
        print(f"  Steps/sec: {result['steps_per_second']:.1f}")
        print(f"  ms/step:   {result['ms_per_step']:.3f}")
        print()

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark asteroid simulation performance")
    parser.add_argument("--steps", type=int, default=1000, help="Ticks per benchmark")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer steps)")

    args = parser.parse_args()

    steps = 100 if args.quick else args.steps
    run_all_benchmarks(steps=steps)

    return 0


if __name__ == "__main__":
    sys.exit(main())
