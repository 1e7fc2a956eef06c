"""Iteration driver tying direction rules and the line search together."""

from __future__ import annotations

import math
from functools import partial
from itertools import islice
from typing import Optional

import numpy as np

from ..logging import get_logger
from .core import (
    DEFAULT_MAX_STEPS,
    DEFAULT_TOL,
    Array,
    Gradient,
    GradientAlgorithm,
    LineSearchConfig,
    Objective,
    Problem,
    ScalarFunction,
    Status,
    check_convergence,
    coerce_algorithm,
    coerce_line_search,
)
from .counter import CountedFunction
from .diagnostics import IterateRecord, PerfDiagnostics
from .directions import conjugate_gradient_iterates, steepest_descent_iterates
from .line_search import choose_step_size
from .utils import as_point, finite_difference_gradient

logger = get_logger(__name__)

MinimizeResult = tuple[Optional[Array], Optional[PerfDiagnostics]]

_ITERATE_SEQUENCES = {
    GradientAlgorithm.STEEPEST_DESCENT: steepest_descent_iterates,
    GradientAlgorithm.CONJUGATE_GRADIENT: conjugate_gradient_iterates,
}


def _validate_config(max_steps: int, tol: float) -> None:
    if isinstance(max_steps, bool) or not isinstance(max_steps, (int, np.integer)) or max_steps <= 0:
        raise ValueError(f"max_steps must be a positive integer, got {max_steps!r}")
    if not (isinstance(tol, (int, float)) and math.isfinite(tol) and tol > 0):
        raise ValueError(f"tol must be a positive finite number, got {tol!r}")


def vectorize_scalar(f: ScalarFunction, df: ScalarFunction) -> tuple[Objective, Gradient]:
    """Lift a real function and its derivative to functions of 1-vectors.

    The lifted functions raise ``ValueError`` for inputs of any other size.
    """

    def vec_f(v: Array) -> float:
        v = np.asarray(v, dtype=float)
        if v.size != 1:
            raise ValueError(f"vectorized f expected dimension 1 input but got {v.size}")
        return float(f(float(v.reshape(-1)[0])))

    def vec_df(v: Array) -> Array:
        v = np.asarray(v, dtype=float)
        if v.size != 1:
            raise ValueError(f"vectorized df expected dimension 1 input but got {v.size}")
        return np.array([float(df(float(v.reshape(-1)[0])))])

    return vec_f, vec_df


class Optimizer:
    """
    Gradient-based minimizer for differentiable objectives.

    Parameters
    ----------
    max_steps:
        Maximum number of iterates produced before giving up.
    tol:
        The run converges at the first iterate whose gradient norm is
        strictly below ``tol``.

    Notes
    -----
    The bracketing phase compares objective values only. Near a minimizer
    the decrease ``f(x + alpha p) - f(x)`` eventually falls below the
    rounding error of ``f``, at which point no bracket can be certified and
    the run ends with :attr:`Status.STEP_SEARCH_FAILED`. On badly
    conditioned problems this floor can sit above a very small ``tol``;
    the trace then still holds the best point reached.

    Example
    -------
    >>> opt = Optimizer()
    >>> xstar, _ = opt.minimize_scalar(lambda x: x * x, lambda x: 2 * x, 5.0,
    ...                                line_search_config=LineSearchConfig.EXACT)
    >>> abs(float(xstar[0])) < 1e-6
    True
    """

    def __init__(self, max_steps: int = DEFAULT_MAX_STEPS, tol: float = DEFAULT_TOL) -> None:
        _validate_config(max_steps, tol)
        self.max_steps = int(max_steps)
        self.tol = float(tol)

    def __repr__(self) -> str:
        return f"Optimizer(max_steps={self.max_steps}, tol={self.tol})"

    def minimize(
        self,
        f: Objective,
        df: Optional[Gradient],
        x0: Array,
        gradient_algorithm: GradientAlgorithm | str = GradientAlgorithm.STEEPEST_DESCENT,
        line_search_config: LineSearchConfig | str = LineSearchConfig.CUBIC_INTERPOLATION,
        report_perf: bool = False,
        initial_step: float = 1.0,
    ) -> MinimizeResult:
        """
        Minimize ``f`` with gradient ``df`` starting from ``x0``.

        When ``df`` is None a central finite-difference gradient of ``f`` is
        used. Its objective calls go through the same counter as ``f``, so
        ``num_eval_f`` includes them.

        Returns
        -------
        tuple
            ``(xstar, perf)``. ``xstar`` is set only when the run converged.
            ``perf`` is a :class:`PerfDiagnostics` when ``report_perf`` is
            true, otherwise None and no trace is kept.
        """
        _validate_config(self.max_steps, self.tol)
        algorithm = coerce_algorithm(gradient_algorithm)
        config = coerce_line_search(line_search_config)

        # Fresh counters per call so runs never share state.
        f_cnt = CountedFunction(f)
        if df is None:
            df = finite_difference_gradient(f_cnt)
        df_cnt = CountedFunction(df)

        line_search = partial(
            choose_step_size, line_search_config=config, initial_step=initial_step
        )
        iterates = _ITERATE_SEQUENCES[algorithm](f_cnt, df_cnt, as_point(x0), line_search)

        trace: list[IterateRecord] = []
        num_steps = 0
        xstar: Optional[Array] = None
        for record in islice(iterates, self.max_steps):
            num_steps += 1
            if report_perf:
                trace.append(record)
            logger.debug("iterate %d: grad_norm=%.6e", num_steps, record.grad_norm)
            if check_convergence(record.grad_norm, self.tol):
                xstar = record.x
                break
        iterates.close()

        if xstar is not None:
            status = Status.CONVERGED
        elif num_steps >= self.max_steps:
            status = Status.EXHAUSTED
        else:
            status = Status.STEP_SEARCH_FAILED

        logger.info(
            "%s + %s: %s after %d iterates (%d f evals, %d df evals)",
            algorithm.value,
            config.value,
            status.value,
            num_steps,
            f_cnt.num_calls,
            df_cnt.num_calls,
        )

        if not report_perf:
            return xstar, None
        perf = PerfDiagnostics(
            x_trace=tuple(trace),
            num_eval_f=f_cnt.num_calls,
            num_eval_df=df_cnt.num_calls,
            status=status,
        )
        return xstar, perf

    def minimize_scalar(
        self,
        f: ScalarFunction,
        df: ScalarFunction,
        x0: float,
        gradient_algorithm: GradientAlgorithm | str = GradientAlgorithm.STEEPEST_DESCENT,
        line_search_config: LineSearchConfig | str = LineSearchConfig.CUBIC_INTERPOLATION,
        report_perf: bool = False,
        initial_step: float = 1.0,
    ) -> MinimizeResult:
        """Minimize a function of one real variable.

        ``f`` and ``df`` are lifted to functions of length-1 vectors; the
        returned point is a length-1 array.
        """
        vec_f, vec_df = vectorize_scalar(f, df)
        return self.minimize(
            vec_f,
            vec_df,
            np.array([float(x0)]),
            gradient_algorithm=gradient_algorithm,
            line_search_config=line_search_config,
            report_perf=report_perf,
            initial_step=initial_step,
        )


def minimize(
    problem: Problem,
    x0: Array,
    gradient_algorithm: GradientAlgorithm | str = GradientAlgorithm.STEEPEST_DESCENT,
    line_search_config: LineSearchConfig | str = LineSearchConfig.CUBIC_INTERPOLATION,
    max_steps: int = DEFAULT_MAX_STEPS,
    tol: float = DEFAULT_TOL,
    report_perf: bool = False,
) -> MinimizeResult:
    """Functional entry point taking a :class:`Problem`.

    Falls back to central finite differences when ``problem.grad`` is None.
    """
    x0 = as_point(x0)
    if problem.dim is not None and x0.size != problem.dim:
        raise ValueError(f"x0 has dimension {x0.size} but problem expects {problem.dim}")
    return Optimizer(max_steps=max_steps, tol=tol).minimize(
        problem.fun,
        problem.grad,
        x0,
        gradient_algorithm=gradient_algorithm,
        line_search_config=line_search_config,
        report_perf=report_perf,
    )


__all__ = ["MinimizeResult", "Optimizer", "minimize", "vectorize_scalar"]
