"""
Crossing-Time Benchmark
=======================

Runs headless rounds at each selectable speed with a manual clock and
reports how long the ball takes to reach an end at several frame rates,
plus raw tick throughput.

Usage:
    python -m tools.benchmark_speed [--fps 30 60 120] [--rounds N]
"""

from __future__ import annotations

import argparse
import sys
import time

import numpy as np

from seesaw.tilt_core.clock import ManualClock
from seesaw.tilt_core.config_loader import load_config
from seesaw.tilt_core.game import CoreGame


def measure_crossing(
    speed: float,
    fps: float,
    jitter: float = 0.0,
    seed: int = 42
) -> dict:
    """
    Play one untouched round and time it.

    Args:
        speed: Seconds from centre to edge.
        fps: Nominal frame rate.
        jitter: Relative frame-time jitter (0.1 = +/-10%).
        seed: Random seed for jitter and particles.

    Returns:
        Dict with simulated elapsed time and tick count.
    """
    config = load_config()
    clock = ManualClock()
    game = CoreGame(config=config, clock=clock, seed=seed)
    rng = np.random.default_rng(seed)

    game.start(speed)
    game.tick()

    frame = 1.0 / fps
    elapsed = 0.0
    ticks = 0
    winner = None
    while game.is_playing:
        dt = frame * (1.0 + rng.uniform(-jitter, jitter)) if jitter else frame
        clock.advance(dt)
        elapsed += dt
        ticks += 1
        result = game.tick()
        if result.game_over is not None:
            winner = result.game_over.winner

    return {
        "speed": speed,
        "fps": fps,
        "elapsed_seconds": elapsed,
        "error_seconds": elapsed - speed,
        "ticks": ticks,
        "winner": winner,
    }


def benchmark_ticks(num_rounds: int = 50, fps: float = 60.0, seed: int = 42) -> dict:
    """
    Measure wall-clock tick throughput over complete rounds and bursts.
    """
    config = load_config()
    clock = ManualClock()
    game = CoreGame(config=config, clock=clock, seed=seed)
    frame = 1.0 / fps

    total_ticks = 0
    start = time.perf_counter()
    for _ in range(num_rounds):
        game.start(config.speeds.options[0])
        game.tick()
        while game.needs_redraw:
            clock.advance(frame)
            game.tick()
            total_ticks += 1
    elapsed = time.perf_counter() - start

    return {
        "rounds": num_rounds,
        "ticks": total_ticks,
        "elapsed_seconds": elapsed,
        "ticks_per_second": total_ticks / elapsed if elapsed > 0 else float("inf"),
    }


def run_all_benchmarks(fps_values: list = [30, 60, 120], rounds: int = 50) -> list:
    """Run crossing measurements for every speed and frame rate."""
    config = load_config()
    results = []

    print("=" * 60)
    print("SEESAW CROSSING-TIME BENCHMARK")
    print("=" * 60)
    print()
    print(f"{'Speed':>6} {'FPS':>6} {'Elapsed':>10} {'Error':>10} {'Ticks':>7}")
    print("-" * 45)

    for speed in config.speeds.options:
        for fps in fps_values:
            r = measure_crossing(speed, fps, jitter=0.1)
            results.append(r)
            print(
                f"{speed:>6g} {fps:>6g} {r['elapsed_seconds']:>10.4f} "
                f"{r['error_seconds']:>+10.4f} {r['ticks']:>7}"
            )

    print()
    print("Benchmarking tick throughput...")
    throughput = benchmark_ticks(num_rounds=rounds)
    print(f"  Ticks/sec: {throughput['ticks_per_second']:.1f}")
    print(f"  Rounds:    {throughput['rounds']}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark seesaw crossing times")
    parser.add_argument("--fps", type=float, nargs="+", default=[30, 60, 120],
                        help="Frame rates to test")
    parser.add_argument("--rounds", type=int, default=50, help="Rounds for throughput test")

    args = parser.parse_args()

    run_all_benchmarks(fps_values=args.fps, rounds=args.rounds)
    return 0


if __name__ == "__main__":
    sys.exit(main())
