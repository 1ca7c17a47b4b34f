#!/usr/bin/env python3
"""Benchmark tile collapse solver performance on a pipe tile set."""

from __future__ import annotations

import argparse
import json
import random
import time
from pathlib import Path

from tilecollapse import (
    CollapseConstraints,
    Prototype,
    TileCollapseSolver,
    solve_with_retries,
)

GRID_SIZES: tuple[tuple[int, int], ...] = (
    (10, 10),
    (20, 20),
    (40, 30),
    (60, 60),
)


def _sides(left: str, top: str, right: str, bottom: str) -> dict[str, str]:
    return {"left": left, "top": top, "right": right, "bottom": bottom}


def create_pipe_prototypes() -> list[Prototype]:
    """Blank, end, line, corner, tee and cross pipes with all rotations."""
    prototypes = [
        Prototype("blank", _sides("0s", "0s", "0s", "0s"), weight=4.0),
        Prototype("cross", _sides("1s", "1s", "1s", "1s"), weight=0.5),
    ]
    for base in (
        Prototype("end", _sides("1s", "0s", "0s", "0s")),
        Prototype("line", _sides("1s", "0s", "1s", "0s"), weight=2.0),
        Prototype("corner", _sides("1s", "1s", "0s", "0s"), weight=2.0),
        Prototype("tee", _sides("1s", "1s", "1s", "0s")),
    ):
        prototypes.extend(base.rotate_360())
    return prototypes


class SolverBenchmark:
    """Benchmark runner timing full solves per grid size."""

    def __init__(self, iterations: int, ring: bool) -> None:
        self.iterations = iterations
        self.constraints = CollapseConstraints(ring=["blank"]) if ring else None
        self.prototypes = create_pipe_prototypes()
        self.results: dict[str, dict[str, float]] = {}

    def _run_case(self, width: int, height: int) -> tuple[float, float]:
        """Return (average solve ms, average attempts) for one grid size."""
        elapsed_total = 0.0
        attempts_total = 0

        for i in range(self.iterations):
            rng = random.Random((width * 1_000_000) + (height * 1_000) + i)
            solver = TileCollapseSolver(width, height, rng=rng)
            solver.add_prototypes(*self.prototypes)

            start = time.perf_counter()
            outcome = solve_with_retries(solver, self.constraints)
            elapsed_total += time.perf_counter() - start
            attempts_total += outcome.attempts

        return (
            (elapsed_total / self.iterations) * 1000.0,
            attempts_total / self.iterations,
        )

    def run(self) -> None:
        """Run all configured grid-size benchmarks."""
        print("Tile Collapse Benchmark")
        print("=" * 42)
        print(f"Iterations per size: {self.iterations}")
        print()
        print(f"{'Size':>12} {'Solve (ms)':>14} {'Attempts':>10}")
        print("-" * 42)

        for width, height in GRID_SIZES:
            solve_ms, attempts = self._run_case(width, height)

            size_key = f"{width}x{height}"
            self.results[size_key] = {
                "solve_ms": solve_ms,
                "attempts": attempts,
            }

            print(f"{size_key:>12} {solve_ms:14.2f} {attempts:10.2f}")

    def save_results(self, filename: str) -> None:
        """Save benchmark output to a JSON file."""
        with Path(filename).open("w") as f:
            json.dump(self.results, f, indent=2)
        print(f"\nSaved benchmark results to {filename}")

    def compare_with_baseline(self, baseline_file: str) -> None:
        """Compare current run with a saved baseline JSON file."""
        try:
            with Path(baseline_file).open() as f:
                baseline: dict[str, dict[str, float]] = json.load(f)
        except FileNotFoundError:
            print(f"\nBaseline file not found: {baseline_file}")
            return

        print(f"\nComparison vs baseline: {baseline_file}")
        print("=" * 64)

        for size_key, current in self.results.items():
            if size_key not in baseline:
                continue

            old_ms = baseline[size_key].get("solve_ms", 0.0)
            new_ms = current["solve_ms"]
            if old_ms <= 0:
                continue

            delta_pct = ((new_ms - old_ms) / old_ms) * 100.0
            speed_ratio = old_ms / new_ms if new_ms > 0 else 0.0
            trend = "faster" if speed_ratio > 1.0 else "slower"

            print(
                f"{size_key:>12}: {new_ms:8.2f}ms "
                f"vs {old_ms:8.2f}ms | {speed_ratio:5.2f}x {trend} "
                f"({delta_pct:+6.1f}%)"
            )


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark the tile collapse solver")
    parser.add_argument(
        "--iterations",
        type=_positive_int,
        default=3,
        help="Number of runs per grid size (default: 3)",
    )
    parser.add_argument(
        "--ring",
        action="store_true",
        help="Constrain the grid border to blank tiles before solving",
    )
    parser.add_argument("--save", type=str, help="Save current results to JSON")
    parser.add_argument(
        "--compare",
        type=str,
        help="Compare current results against baseline JSON",
    )
    args = parser.parse_args(argv)

    benchmark = SolverBenchmark(iterations=args.iterations, ring=args.ring)
    benchmark.run()

    if args.save:
        benchmark.save_results(args.save)

    if args.compare:
        benchmark.compare_with_baseline(args.compare)


if __name__ == "__main__":
    main()
