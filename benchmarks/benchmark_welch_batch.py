#!/usr/bin/env python
"""Benchmark: Batch Welch's T-Test Performance.

welchstats batch kernels vs scipy.stats.ttest_ind_from_stats on many
independent summary pairs (e.g. one row per A/B experiment).

Scenarios tested:
1. Paired rows (welch_ttest_batch) at growing batch sizes
2. One reference vs many targets (welch_ttest_vs_reference)
3. Single-test latency (compute)

Usage:
    python benchmarks/benchmark_welch_batch.py
    python benchmarks/benchmark_welch_batch.py --scenario batch
    python benchmarks/benchmark_welch_batch.py --quick
"""

import argparse
import time
import warnings
from typing import Callable, Tuple, Dict, Any
import numpy as np

warnings.filterwarnings('ignore')

# Check dependencies
try:
    from scipy import stats
    SCIPY_AVAILABLE = True
except ImportError:
    SCIPY_AVAILABLE = False

try:
    from welchstats import (
        GroupSummary, compute, welch_ttest_batch, welch_ttest_vs_reference,
    )
    WELCHSTATS_AVAILABLE = True
except ImportError:
    WELCHSTATS_AVAILABLE = False


# =============================================================================
# Utilities
# =============================================================================

def timeit(func: Callable, n_runs: int = 5, warmup: int = 1) -> Tuple[float, Any]:
    """Time a function and return (avg_time, last_result)."""
    result = None
    for _ in range(warmup):
        result = func()

    start = time.perf_counter()
    for _ in range(n_runs):
        result = func()
    elapsed = time.perf_counter() - start

    return elapsed / n_runs, result


def create_summaries(n_rows: int, seed: int = 42) -> Tuple[np.ndarray, ...]:
    """Random, valid summary pairs as parallel arrays."""
    rng = np.random.default_rng(seed)
    return (
        rng.normal(0.0, 2.0, n_rows),
        rng.uniform(0.5, 20.0, n_rows),
        rng.integers(2, 100000, n_rows),
        rng.normal(0.0, 2.0, n_rows),
        rng.uniform(0.5, 20.0, n_rows),
        rng.integers(2, 100000, n_rows),
    )


def format_time(seconds: float) -> str:
    """Format time with appropriate unit."""
    if seconds < 0.001:
        return f"{seconds*1e6:.1f}μs"
    elif seconds < 1:
        return f"{seconds*1e3:.2f}ms"
    else:
        return f"{seconds:.2f}s"


def scipy_welch(m1, v1, n1, m2, v2, n2):
    res = stats.ttest_ind_from_stats(m1, np.sqrt(v1), n1, m2, np.sqrt(v2), n2, equal_var=False)
    return res.statistic, res.pvalue


# =============================================================================
# Benchmarks
# =============================================================================

def run_batch(n_rows: int, n_runs: int = 5) -> Dict[str, Any]:
    """Paired rows: welch_ttest_batch vs scipy."""
    cols = create_summaries(n_rows)

    scipy_time, (scipy_t, scipy_p) = timeit(lambda: scipy_welch(*cols), n_runs)
    ws_time, ws_result = timeit(lambda: welch_ttest_batch(*cols), n_runs)

    max_rel_err = float(np.max(
        np.abs(ws_result.p_values - scipy_p) / np.maximum(np.abs(scipy_p), 1e-300)
    ))

    return {
        "scenario": "batch",
        "n_rows": n_rows,
        "scipy_time": scipy_time,
        "welchstats_time": ws_time,
        "speedup": scipy_time / ws_time if ws_time > 0 else 0,
        "max_rel_err": max_rel_err,
    }


def run_vs_reference(n_targets: int, n_runs: int = 5) -> Dict[str, Any]:
    """One reference vs many targets."""
    m, v, n, _, _, _ = create_summaries(n_targets)
    reference = GroupSummary(0.0, 4.0, 50000)
    targets = [GroupSummary(m[i], v[i], n[i]) for i in range(n_targets)]

    ref_cols = (
        np.full(n_targets, reference.mean),
        np.full(n_targets, reference.variance),
        np.full(n_targets, reference.n),
    )
    scipy_time, _ = timeit(lambda: scipy_welch(m, v, n, *ref_cols), n_runs)
    ws_time, _ = timeit(lambda: welch_ttest_vs_reference(reference, targets), n_runs)

    return {
        "scenario": "reference",
        "n_rows": n_targets,
        "scipy_time": scipy_time,
        "welchstats_time": ws_time,
        "speedup": scipy_time / ws_time if ws_time > 0 else 0,
    }


def run_single(n_runs: int = 10000) -> Dict[str, Any]:
    """Latency of one compute() call."""
    a = GroupSummary(17.1474, 14.4299, 19)
    b = GroupSummary(24.3923, 33.5238, 13)

    scipy_time, _ = timeit(
        lambda: stats.ttest_ind_from_stats(
            a.mean, np.sqrt(a.variance), a.n, b.mean, np.sqrt(b.variance), b.n,
            equal_var=False,
        ),
        n_runs,
    )
    ws_time, _ = timeit(lambda: compute([a, b]), n_runs)

    return {
        "scenario": "single",
        "n_rows": 1,
        "scipy_time": scipy_time,
        "welchstats_time": ws_time,
        "speedup": scipy_time / ws_time if ws_time > 0 else 0,
    }


# =============================================================================
# Suite
# =============================================================================

def run_scaling_benchmark(scenario: str, quick: bool = False):
    """Run scaling benchmarks for one scenario."""
    print(f"\n{'='*72}")
    print(f"SCALING BENCHMARK: {scenario.upper()}")
    print(f"{'='*72}")

    sizes = [1000, 100000] if quick else [1000, 10000, 100000, 1000000, 10000000]

    results = []
    print(f"{'Rows':<12} {'scipy':<12} {'welchstats':<12} {'Speedup':<10}")
    print("-" * 72)

    if scenario == "single":
        results.append(run_single(1000 if quick else 10000))
    else:
        runner = run_batch if scenario == "batch" else run_vs_reference
        if scenario == "reference":
            sizes = [s for s in sizes if s <= 100000]
        for size in sizes:
            results.append(runner(size))

    for result in results:
        print(f"{result['n_rows']:<12} "
              f"{format_time(result['scipy_time']):<12} "
              f"{format_time(result['welchstats_time']):<12} "
              f"{result['speedup']:<10.2f}x")
        if "max_rel_err" in result:
            print(f"{'':<12} max relative p-value error vs scipy: {result['max_rel_err']:.2e}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Batch Welch's t-test benchmarks")
    parser.add_argument("--scenario", choices=["batch", "reference", "single", "all"], default="all",
                        help="Which scenario to benchmark")
    parser.add_argument("--quick", action="store_true", help="Quick mode with smaller batches")
    args = parser.parse_args()

    print("="*72)
    print("WELCH T-TEST BENCHMARK")
    print("="*72)
    print(f"scipy available: {SCIPY_AVAILABLE}")
    print(f"welchstats available: {WELCHSTATS_AVAILABLE}")

    if not SCIPY_AVAILABLE:
        print("ERROR: scipy is required")
        return

    if not WELCHSTATS_AVAILABLE:
        print("ERROR: welchstats is required")
        return

    scenarios = ["batch", "reference", "single"] if args.scenario == "all" else [args.scenario]
    for scenario in scenarios:
        run_scaling_benchmark(scenario, args.quick)


if __name__ == "__main__":
    main()
