"""
Utility script to plot GEMM benchmark results from CSV files.
Usage: python -m gemmlab.bench.plot_results [results_dir]
"""

import sys
from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import pandas as pd

MARKERS = {'baseline': 'o', 'matrix': 'v', 'numpy': 's', 'numba': '^'}


def plot_gemm_results(results_dir):
    """
    Plot latency and throughput for every kernel in gemm_results.csv.

    Returns:
        Path of the saved plot, or None if there are no results
    """
    results_dir = Path(results_dir)
    csv_path = results_dir / "gemm_results.csv"
    if not csv_path.exists():
        print(f"Results file not found: {csv_path}")
        return None

    df = pd.read_csv(csv_path)
    if df.empty:
        print(f"No results in: {csv_path}")
        return None

    plots_dir = results_dir / "plots"
    plots_dir.mkdir(parents=True, exist_ok=True)

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    for kernel, data in df.groupby('kernel'):
        data = data.sort_values('M')
        marker = MARKERS.get(kernel, 'o')
        axes[0].semilogy(data['M'], data['latency_ms'], '-', label=kernel, marker=marker)
        axes[1].plot(data['M'], data['throughput_gflops'], '-', label=kernel, marker=marker)

    axes[0].set_xlabel('Matrix Dimension (M)')
    axes[0].set_ylabel('Latency (ms)')
    axes[0].set_title('GEMM Latency Comparison')
    axes[1].set_xlabel('Matrix Dimension (M)')
    axes[1].set_ylabel('Throughput (GFLOPS)')
    axes[1].set_title('GEMM Throughput Comparison')
    for ax in axes:
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plot_path = plots_dir / "gemm_results.png"
    plt.savefig(plot_path, dpi=150)
    plt.close(fig)
    print(f"Saved plot: {plot_path}")
    return plot_path


if __name__ == "__main__":
    matplotlib.use("Agg")
    results_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd() / "results"
    print("Generating plots...")
    plot_gemm_results(results_dir)
