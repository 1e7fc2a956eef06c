"""
Example: Steepest descent on an oscillating scalar objective

Minimizes ``f(x) = x^4 cos(1/x) + 2 x^4`` from a sweep of starting points.
The function has a global minimum at zero surrounded by infinitely many
shallow local minima, so the reported point depends on where the run
starts.
"""

import math

import numpy as np

from gradopt import GradientAlgorithm, LineSearchConfig, Optimizer


def f(x: float) -> float:
    if x == 0.0:
        return 0.0
    return x**4 * math.cos(1.0 / x) + 2.0 * x**4


def df(x: float) -> float:
    if x == 0.0:
        return 0.0
    return 4.0 * x**3 * math.cos(1.0 / x) + x**2 * math.sin(1.0 / x) + 8.0 * x**3


def starting_points():
    magnitudes = [5.0, 1.0, 0.1, 1e-2, 1e-3, 1e-4, 1e-5]
    for m in magnitudes:
        yield m
        yield -m


def main():
    opt = Optimizer()
    print("=" * 60)
    print("Steepest descent + cubic interpolation on x^4 cos(1/x) + 2 x^4")
    print("=" * 60)
    for x0 in starting_points():
        xstar, perf = opt.minimize_scalar(
            f,
            df,
            x0,
            gradient_algorithm=GradientAlgorithm.STEEPEST_DESCENT,
            line_search_config=LineSearchConfig.CUBIC_INTERPOLATION,
            report_perf=True,
        )
        if xstar is None:
            print(f"x0 = {x0:+.0e}: {perf.status.value} after {perf.num_steps} iterates")
            continue
        x = float(np.asarray(xstar)[0])
        print(
            f"x0 = {x0:+.0e}: x* = {x:+.6e}, f(x*) = {f(x):+.6e}, "
            f"iterates = {perf.num_steps}, f evals = {perf.num_eval_f}, "
            f"df evals = {perf.num_eval_df}"
        )
    print()
    print("Scalar demo complete")


if __name__ == "__main__":
    main()
