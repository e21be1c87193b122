"""Benchmark read-heavy intensity workloads with and without the query cache."""

from __future__ import annotations

import argparse
import random
import statistics
import time
from dataclasses import dataclass
from typing import Iterable, Sequence

from intensity_segments import IntensitySegments, StoreOptions


@dataclass(slots=True)
class BenchmarkResult:
    """Statistical summary for a benchmark series."""

    label: str
    durations: list[float]
    queries_per_run: int

    @property
    def mean(self) -> float:
        return statistics.fmean(self.durations)

    @property
    def pstdev(self) -> float:
        if len(self.durations) <= 1:
            return 0.0
        return statistics.pstdev(self.durations)

    @property
    def runs(self) -> int:
        return len(self.durations)


def _build_updates(count: int, *, span: int, seed: int) -> list[tuple[str, int, int, int]]:
    rng = random.Random(seed)
    updates: list[tuple[str, int, int, int]] = []
    for _ in range(count):
        start = rng.randrange(0, span)
        end = start + rng.randrange(1, max(span // 10, 2))
        operation = "set" if rng.random() < 0.2 else "add"
        updates.append((operation, start, end, rng.randrange(-3, 4)))
    return updates


def _run_pass(
    updates: Sequence[tuple[str, int, int, int]],
    *,
    options: StoreOptions,
    reads_per_update: int,
) -> tuple[float, str]:
    segments = IntensitySegments(options=options)
    start = time.perf_counter()
    for operation, begin, end, amount in updates:
        getattr(segments, operation)(begin, end, amount)
        for _ in range(reads_per_update):
            segments.query()
    elapsed = time.perf_counter() - start
    return elapsed, segments.to_json()


def _measure_series(
    updates: Sequence[tuple[str, int, int, int]],
    *,
    options: StoreOptions,
    repeats: int,
    reads_per_update: int,
) -> tuple[list[float], str]:
    durations: list[float] = []
    snapshot = "[]"
    for _ in range(max(repeats, 1)):
        elapsed, snapshot = _run_pass(
            updates, options=options, reads_per_update=reads_per_update
        )
        durations.append(elapsed)
    return durations, snapshot


def _summarise(label: str, durations: Iterable[float], *, queries_per_run: int) -> BenchmarkResult:
    return BenchmarkResult(label=label, durations=list(durations), queries_per_run=queries_per_run)


def _format_result(result: BenchmarkResult) -> str:
    throughput = result.queries_per_run / result.mean if result.mean else float("nan")
    return (
        f"{result.label}: {result.mean:.6f}s ± {result.pstdev:.6f}s over {result.runs} runs "
        f"({throughput:.1f} queries/s)"
    )


def _print_summary(cached: BenchmarkResult, uncached: BenchmarkResult) -> None:
    print(_format_result(uncached))
    print(_format_result(cached))
    if cached.mean > 0.0:
        speedup = uncached.mean / cached.mean
    else:
        speedup = float("nan")
    delta = uncached.mean - cached.mean
    print(f"Speed-up: ×{speedup:.2f} ({delta:.6f}s saved per run)")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--updates",
        type=int,
        default=500,
        help="Number of add/set updates applied per run.",
    )
    parser.add_argument(
        "--reads-per-update",
        type=int,
        default=20,
        help="Number of query() calls issued after every update.",
    )
    parser.add_argument(
        "--span",
        type=int,
        default=10_000,
        help="Upper bound for generated range coordinates.",
    )
    parser.add_argument(
        "--repeats",
        type=int,
        default=3,
        help="Number of measured runs per scenario.",
    )
    parser.add_argument("--seed", type=int, default=7, help="Random seed.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    updates = _build_updates(max(args.updates, 1), span=max(args.span, 10), seed=args.seed)
    reads = max(args.reads_per_update, 1)
    queries_per_run = len(updates) * reads

    uncached_durations, uncached_snapshot = _measure_series(
        updates,
        options=StoreOptions(cache_enabled=False),
        repeats=args.repeats,
        reads_per_update=reads,
    )
    cached_durations, cached_snapshot = _measure_series(
        updates,
        options=StoreOptions(cache_enabled=True),
        repeats=args.repeats,
        reads_per_update=reads,
    )

    _print_summary(
        _summarise("Cached query", cached_durations, queries_per_run=queries_per_run),
        _summarise("Uncached query", uncached_durations, queries_per_run=queries_per_run),
    )
    if cached_snapshot != uncached_snapshot:
        raise SystemExit("Cached and uncached stores diverged")


if __name__ == "__main__":
    main()
