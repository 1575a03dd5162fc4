"""
Profiling script for the pure Python GEMM kernels.
Uses cProfile to identify bottlenecks in the raw-buffer and matrix-object loops.
"""

import cProfile
import pstats

import numpy as np

from gemmlab.kernels.gemm_baseline import gemm, multiply
from gemmlab.matrix import Matrix


def _operands(M, K, N):
    rng = np.random.default_rng(42)
    A = Matrix.from_array(rng.standard_normal((M, K)))
    B = Matrix.from_array(rng.standard_normal((K, N)))
    return A, B


def _report(profiler, limit):
    stats = pstats.Stats(profiler)
    stats.sort_stats('cumulative')
    print(f"\nTop {limit} functions by cumulative time:")
    stats.print_stats(limit)
    return stats


def profile_gemm(M=32, K=64, N=32, limit=10):
    """Profile the raw-buffer kernel."""
    print("Profiling baseline gemm...")
    A, B = _operands(M, K, N)
    C = Matrix(M, N)

    profiler = cProfile.Profile()
    profiler.enable()
    gemm(M, N, K, A.data, B.data, C.data)
    profiler.disable()

    return _report(profiler, limit)


def profile_multiply(M=32, K=64, N=32, limit=10):
    """Profile the matrix-object kernel (dominated by accessor calls)."""
    print("\nProfiling baseline multiply...")
    A, B = _operands(M, K, N)

    profiler = cProfile.Profile()
    profiler.enable()
    multiply(A, B)
    profiler.disable()

    return _report(profiler, limit)


if __name__ == "__main__":
    print("=" * 60)
    print("Baseline Kernel Profiling")
    print("=" * 60)

    profile_gemm()
    profile_multiply()

    print("\n" + "=" * 60)
    print("Profiling complete!")
    print("=" * 60)
