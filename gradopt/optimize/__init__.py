"""Derivative-based descent methods with a bracketing line search.

Example
-------
>>> import numpy as np
>>> from gradopt.optimize import GradientAlgorithm, LineSearchConfig, Optimizer
>>> A = np.array([[3.0, 1.0], [1.0, 2.0]])
>>> b = np.array([1.0, 1.0])
>>> xstar, perf = Optimizer().minimize(
...     lambda x: 0.5 * x @ A @ x - b @ x,
...     lambda x: A @ x - b,
...     np.zeros(2),
...     GradientAlgorithm.CONJUGATE_GRADIENT,
...     LineSearchConfig.EXACT,
...     report_perf=True,
... )
>>> perf.status.value
'converged'
"""

from .bracket import BracketInterval, bracket_minimum
from .core import (
    DEFAULT_MAX_STEPS,
    DEFAULT_TOL,
    GradientAlgorithm,
    LineSearchConfig,
    Problem,
    Status,
    check_convergence,
)
from .counter import CountedFunction
from .diagnostics import IterateRecord, PerfDiagnostics
from .directions import (
    conjugate_gradient_direction,
    conjugate_gradient_iterates,
    fletcher_reeves_beta,
    steepest_descent_direction,
    steepest_descent_iterates,
)
from .line_search import choose_step_size, cubic_minimizer
from .optimizer import Optimizer, minimize
from .utils import approx_grad, finite_difference_gradient

__all__ = [
    "BracketInterval",
    "CountedFunction",
    "DEFAULT_MAX_STEPS",
    "DEFAULT_TOL",
    "GradientAlgorithm",
    "IterateRecord",
    "LineSearchConfig",
    "Optimizer",
    "PerfDiagnostics",
    "Problem",
    "Status",
    "approx_grad",
    "bracket_minimum",
    "check_convergence",
    "choose_step_size",
    "conjugate_gradient_direction",
    "conjugate_gradient_iterates",
    "cubic_minimizer",
    "finite_difference_gradient",
    "fletcher_reeves_beta",
    "minimize",
    "steepest_descent_direction",
    "steepest_descent_iterates",
]
