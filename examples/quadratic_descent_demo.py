"""
Example: Steepest descent versus conjugate gradient on a convex quadratic

Builds a random symmetric positive-definite matrix ``A`` and vector ``b``
and minimizes ``0.5 x^T A x - b^T x`` with every algorithm and line search
combination. Each minimizer is compared against ``np.linalg.solve(A, b)``.
"""

import numpy as np

from gradopt import GradientAlgorithm, LineSearchConfig, Optimizer


def make_problem(n: int, seed: int = 0):
    rng = np.random.default_rng(seed)
    m = rng.uniform(-1.0, 1.0, size=(n, n))
    A = m @ m.T + n * np.eye(n)
    b = rng.uniform(-1.0, 1.0, size=n)

    def f(x):
        return float(0.5 * x @ (A @ x) - b @ x)

    def df(x):
        return A @ x - b

    return A, b, f, df


def main():
    n = 10
    A, b, f, df = make_problem(n)
    expected = np.linalg.solve(A, b)
    opt = Optimizer(tol=1e-8)

    print("=" * 60)
    print(f"Random SPD quadratic, n = {n}, cond(A) = {np.linalg.cond(A):.2f}")
    print("=" * 60)
    for algorithm in GradientAlgorithm:
        for config in LineSearchConfig:
            xstar, perf = opt.minimize(
                f,
                df,
                np.zeros(n),
                gradient_algorithm=algorithm,
                line_search_config=config,
                report_perf=True,
            )
            label = f"{algorithm.value} + {config.value}"
            if xstar is None:
                print(f"{label}: {perf.status.value} after {perf.num_steps} iterates")
                continue
            error = np.linalg.norm(xstar - expected)
            print(
                f"{label}: iterates = {perf.num_steps}, f evals = {perf.num_eval_f}, "
                f"df evals = {perf.num_eval_df}, |x* - A^-1 b| = {error:.2e}"
            )
    print()
    print("Quadratic demo complete")


if __name__ == "__main__":
    main()
