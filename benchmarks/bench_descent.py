"""Benchmark descent runs on random convex quadratics."""

import time
from typing import Dict

import numpy as np

from gradopt import GradientAlgorithm, LineSearchConfig, Optimizer


def benchmark_descent(
    n: int,
    gradient_algorithm: GradientAlgorithm,
    line_search_config: LineSearchConfig,
    cond: float = 100.0,
    repeats: int = 5,
    seed: int = 0,
) -> Dict[str, float]:
    """Benchmark a full minimization of ``0.5 x^T A x - b^T x``.

    Args:
        n: Problem dimension.
        gradient_algorithm: Direction rule to run.
        line_search_config: Line-search refinement to run.
        cond: Condition number of ``A``.
        repeats: Number of timed runs.
        seed: Seed for the random problem.

    Returns:
        Dictionary with timing and evaluation counts.
    """
    rng = np.random.default_rng(seed)
    q, _ = np.linalg.qr(rng.standard_normal((n, n)))
    A = q @ np.diag(np.linspace(1.0, cond, n)) @ q.T
    b = rng.uniform(-1.0, 1.0, size=n)

    def f(x):
        return float(0.5 * x @ (A @ x) - b @ x)

    def df(x):
        return A @ x - b

    opt = Optimizer(tol=1e-8)
    x0 = np.zeros(n)

    # Warmup
    _, perf = opt.minimize(f, df, x0, gradient_algorithm, line_search_config, report_perf=True)

    start = time.perf_counter()
    for _ in range(repeats):
        opt.minimize(f, df, x0, gradient_algorithm, line_search_config)
    end = time.perf_counter()

    total_time = end - start
    return {
        "n": n,
        "status": perf.status.value,
        "num_steps": perf.num_steps,
        "num_eval_f": perf.num_eval_f,
        "num_eval_df": perf.num_eval_df,
        "time_per_run_sec": total_time / repeats,
    }


if __name__ == "__main__":
    print("Benchmarking descent runs...")

    for n in (10, 50):
        for algorithm in GradientAlgorithm:
            for config in LineSearchConfig:
                results = benchmark_descent(n, algorithm, config)
                print(f"{algorithm.value} + {config.value} (n={n}, cond=100):")
                print(f"  Status: {results['status']} after {results['num_steps']} iterates")
                print(f"  Evaluations: {results['num_eval_f']} f, {results['num_eval_df']} df")
                print(f"  Time per run: {results['time_per_run_sec']*1e3:.2f} ms")
