"""
Benchmark script for column-major GEMM kernels.
Tests the pure Python raw-buffer and matrix-object kernels, Numba and the NumPy reference.
"""

import os
import time
from pathlib import Path

import numpy as np
import pandas as pd

from gemmlab.kernels.gemm_baseline import gemm, multiply
from gemmlab.kernels.gemm_numba import gemm_numba
from gemmlab.kernels.gemm_numpy import gemm_numpy, multiply_numpy
from gemmlab.matrix import Matrix

# Pure Python kernels are only timed below this many multiply-adds
BASELINE_LIMIT = 1_000_000

# BLAS reads these when NumPy is first imported, so they must be exported before launch
THREAD_ENV_VARS = ("OMP_NUM_THREADS", "MKL_NUM_THREADS", "OPENBLAS_NUM_THREADS", "NUMEXPR_NUM_THREADS")


def runs_for_problem(problem_size, num_runs):
    """More runs for small problems (high variance), fewer for very large ones."""
    if problem_size < 1_000_000:
        return max(num_runs, 100)
    if problem_size < 100_000_000:
        return max(num_runs, 30)
    if problem_size < 1_000_000_000:
        return num_runs
    return max(5, num_runs // 2)


def time_kernel(fn, num_warmup, num_runs):
    """Return an array of wall-clock timings (seconds) for fn()."""
    for _ in range(num_warmup):
        fn()

    times = []
    for _ in range(num_runs):
        t_start = time.perf_counter()
        fn()
        t_end = time.perf_counter()
        times.append(t_end - t_start)
    return np.array(times)


def summarize(kernel, M, K, N, times, itemsize):
    flops = 2 * M * K * N
    median = np.median(times)
    return {
        'kernel': kernel,
        'M': M, 'K': K, 'N': N,
        'flops': flops,
        'bytes_moved': (M * K + K * N + M * N) * itemsize,
        'latency_ms': median * 1000,
        'latency_p50_ms': np.percentile(times, 50) * 1000,
        'latency_p95_ms': np.percentile(times, 95) * 1000,
        'latency_p99_ms': np.percentile(times, 99) * 1000,
        'throughput_gflops': (flops / 1e9) / median if median > 0 else float('nan'),
    }


def benchmark_gemm(configs, num_warmup=3, num_runs=10, adaptive_runs=True, skip_baseline=True):
    """
    Benchmark GEMM kernels on column-major float64 buffers.

    Args:
        configs: List of tuples (M, K, N) representing matrix dimensions
        num_warmup: Number of warmup runs (covers Numba JIT compilation)
        num_runs: Number of timed runs
        adaptive_runs: Scale the number of runs with problem size
        skip_baseline: Skip pure Python kernels above BASELINE_LIMIT multiply-adds

    Returns:
        DataFrame with one row per (kernel, config)
    """
    results = []

    for M, K, N in configs:
        print(f"\nBenchmarking GEMM: M={M}, K={K}, N={N}")
        problem_size = M * K * N
        actual_runs = runs_for_problem(problem_size, num_runs) if adaptive_runs else num_runs

        rng = np.random.default_rng(42)
        A = Matrix.from_array(rng.standard_normal((M, K)))
        B = Matrix.from_array(rng.standard_normal((K, N)))
        C_ref = multiply_numpy(A, B)

        kernels = [
            ('numpy', gemm_numpy),
            ('numba', gemm_numba),
        ]
        if not skip_baseline or problem_size < BASELINE_LIMIT:
            kernels.insert(0, ('baseline', gemm))
        else:
            print("  Skipping baseline kernels (problem too large)")

        for name, kernel in kernels:
            print(f"  Testing {name}...")
            C = Matrix(M, N)
            times = time_kernel(
                lambda: kernel(M, N, K, A.data, B.data, C.data), num_warmup, actual_runs
            )
            if not C.allclose(C_ref, rtol=1e-9, atol=1e-9):
                raise AssertionError(f"{name} correctness check failed")
            results.append(summarize(name, M, K, N, times, A.dtype.itemsize))

        if not skip_baseline or problem_size < BASELINE_LIMIT:
            print("  Testing matrix (pure Python accessor)...")
            holder = {}

            def run_multiply():
                holder['C'] = multiply(A, B)

            times = time_kernel(run_multiply, num_warmup, actual_runs)
            if not holder['C'].allclose(C_ref, rtol=1e-9, atol=1e-9):
                raise AssertionError("matrix correctness check failed")
            results.append(summarize('matrix', M, K, N, times, A.dtype.itemsize))

    return pd.DataFrame(results)


DEFAULT_CONFIGS = [
    (32, 64, 32),       # Small
    (64, 128, 64),      # Medium-small
    (128, 256, 128),    # Medium
    (256, 512, 256),    # Medium-large
    (512, 1024, 512),   # Large
]


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description='Benchmark GEMM kernels')
    parser.add_argument('--num-warmup', type=int, default=3)
    parser.add_argument('--num-runs', type=int, default=10)
    parser.add_argument('--threads', type=int, default=1,
                        help='Numba thread count (default 1 for single-threaded comparison)')
    parser.add_argument('--all-baseline', action='store_true',
                        help='Time the pure Python kernels on every size')
    parser.add_argument('--output-dir', type=Path,
                        default=Path.cwd() / "results",
                        help='Directory for gemm_results.csv')
    args = parser.parse_args(argv)

    print("=" * 70)
    print("GEMM Benchmark Suite")
    print("=" * 70)
    for var in THREAD_ENV_VARS:
        print(f"  - {var}={os.environ.get(var, '<unset>')}")
    if any(var not in os.environ for var in THREAD_ENV_VARS):
        print("  Warning: export the variables above as 1 for a single-threaded BLAS comparison")
    print(f"  - Numba threads: {args.threads} (set via set_num_threads)")
    print("=" * 70)

    from numba import set_num_threads
    set_num_threads(args.threads)

    df = benchmark_gemm(DEFAULT_CONFIGS, num_warmup=args.num_warmup, num_runs=args.num_runs,
                        skip_baseline=not args.all_baseline)
    df['threads'] = args.threads

    args.output_dir.mkdir(parents=True, exist_ok=True)
    output_path = args.output_dir / "gemm_results.csv"
    df.to_csv(output_path, index=False)
    print(f"\nResults saved to: {output_path}")

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print(df.to_string(index=False))
    return df


if __name__ == "__main__":
    main()
