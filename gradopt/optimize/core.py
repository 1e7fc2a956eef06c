"""Core interfaces shared across the descent algorithms."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import numpy as np

Array = np.ndarray
Objective = Callable[[Array], float]
Gradient = Callable[[Array], Array]
ScalarFunction = Callable[[float], float]

DEFAULT_MAX_STEPS = 25_000
DEFAULT_TOL = 1e-6


class GradientAlgorithm(Enum):
    """Rule used to pick the next search direction."""

    STEEPEST_DESCENT = "Steepest Descent"
    CONJUGATE_GRADIENT = "Conjugate Gradient"


class LineSearchConfig(Enum):
    """Refinement applied to a bracket once the line search has found one."""

    CUBIC_INTERPOLATION = "Cubic Interpolation"
    EXACT = "Exact Line Search"


class Status(Enum):
    """Terminal state of a minimization run."""

    CONVERGED = "converged"
    EXHAUSTED = "exhausted"
    STEP_SEARCH_FAILED = "step_search_failed"


@dataclass(frozen=True)
class Problem:
    """Container describing an unconstrained minimization problem.

    ``grad`` may be omitted, in which case a central finite-difference
    approximation is used. ``dim``, when given, is checked against the
    initial point.
    """

    fun: Objective
    grad: Optional[Gradient] = None
    dim: Optional[int] = None


def coerce_algorithm(value: GradientAlgorithm | str) -> GradientAlgorithm:
    """Return the :class:`GradientAlgorithm` named by ``value``."""
    if isinstance(value, GradientAlgorithm):
        return value
    try:
        return GradientAlgorithm(value)
    except ValueError:
        valid = ", ".join(repr(member.value) for member in GradientAlgorithm)
        raise ValueError(f"Unknown gradient algorithm {value!r}; expected one of {valid}.") from None


def coerce_line_search(value: LineSearchConfig | str) -> LineSearchConfig:
    """Return the :class:`LineSearchConfig` named by ``value``."""
    if isinstance(value, LineSearchConfig):
        return value
    try:
        return LineSearchConfig(value)
    except ValueError:
        valid = ", ".join(repr(member.value) for member in LineSearchConfig)
        raise ValueError(f"Unknown line search config {value!r}; expected one of {valid}.") from None


def check_convergence(grad_norm: float, tol: float) -> bool:
    """Return True if the gradient norm is strictly below tolerance."""
    return grad_norm < tol


__all__ = [
    "Array",
    "Objective",
    "Gradient",
    "ScalarFunction",
    "DEFAULT_MAX_STEPS",
    "DEFAULT_TOL",
    "GradientAlgorithm",
    "LineSearchConfig",
    "Status",
    "Problem",
    "coerce_algorithm",
    "coerce_line_search",
    "check_convergence",
]
