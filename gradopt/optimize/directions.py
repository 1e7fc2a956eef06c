"""Descent-direction rules and the lazy iterate sequences built on them.

Both sequences are unbounded generators: each ``next()`` runs one line
search and yields the point it reached. Nothing past the yielded record is
evaluated until the consumer asks for more, so a caller that stops pulling
also stops spending objective and gradient evaluations.
"""

from __future__ import annotations

from typing import Callable, Iterator, NamedTuple, Optional

import numpy as np

from .core import Array, Gradient, Objective
from .diagnostics import IterateRecord
from .utils import as_point, vector_norm

LineSearch = Callable[[Objective, Gradient, Array, Array], Optional[float]]


class ConjugateGradientState(NamedTuple):
    """Point, gradient and search direction carried between CG iterations."""

    x: Array
    grad: Array
    direction: Array


def steepest_descent_direction(grad: Array) -> Array:
    return -np.asarray(grad, dtype=float)


def fletcher_reeves_beta(grad_new: Array, grad_prev: Array) -> Optional[float]:
    """Return ``|g_new|^2 / |g_prev|^2``, or None when ``g_prev`` is zero."""
    denom = float(np.dot(grad_prev, grad_prev))
    if denom == 0.0:
        return None
    return float(np.dot(grad_new, grad_new)) / denom


def conjugate_gradient_direction(
    grad_new: Array, grad_prev: Array, direction_prev: Array
) -> Optional[Array]:
    """Fletcher-Reeves update ``-g_new + beta * p_prev``.

    Returns None when the previous gradient vanished, i.e. the previous point
    was already stationary.
    """
    beta = fletcher_reeves_beta(grad_new, grad_prev)
    if beta is None:
        return None
    return -np.asarray(grad_new, dtype=float) + beta * np.asarray(direction_prev, dtype=float)


def initial_conjugate_gradient_state(df: Gradient, x0: Array) -> ConjugateGradientState:
    x = as_point(x0)
    grad = np.asarray(df(x), dtype=float)
    return ConjugateGradientState(x, grad, steepest_descent_direction(grad))


def next_conjugate_gradient_state(
    state: ConjugateGradientState, x_new: Array, grad_new: Array
) -> Optional[ConjugateGradientState]:
    direction = conjugate_gradient_direction(grad_new, state.grad, state.direction)
    if direction is None:
        return None
    return ConjugateGradientState(x_new, grad_new, direction)


def steepest_descent_iterates(
    f: Objective, df: Gradient, x0: Array, line_search: LineSearch
) -> Iterator[IterateRecord]:
    """Yield iterates of steepest descent starting from ``x0``.

    The sequence ends after the point at which the line search fails.
    """
    x = as_point(x0)
    while True:
        grad = np.asarray(df(x), dtype=float)
        yield IterateRecord(x.copy(), vector_norm(grad))
        p = steepest_descent_direction(grad)
        alpha = line_search(f, df, x, p)
        if alpha is None:
            return
        x = x + alpha * p


def conjugate_gradient_iterates(
    f: Objective, df: Gradient, x0: Array, line_search: LineSearch
) -> Iterator[IterateRecord]:
    """Yield iterates of Fletcher-Reeves conjugate gradient from ``x0``.

    The first direction is the steepest-descent direction. The sequence ends
    after the point at which the line search fails, or when the update would
    divide by a zero gradient norm.
    """
    state: Optional[ConjugateGradientState] = initial_conjugate_gradient_state(df, x0)
    while state is not None:
        yield IterateRecord(state.x.copy(), vector_norm(state.grad))
        alpha = line_search(f, df, state.x, state.direction)
        if alpha is None:
            return
        x_new = state.x + alpha * state.direction
        grad_new = np.asarray(df(x_new), dtype=float)
        state = next_conjugate_gradient_state(state, x_new, grad_new)


__all__ = [
    "ConjugateGradientState",
    "LineSearch",
    "conjugate_gradient_direction",
    "conjugate_gradient_iterates",
    "fletcher_reeves_beta",
    "initial_conjugate_gradient_state",
    "next_conjugate_gradient_state",
    "steepest_descent_direction",
    "steepest_descent_iterates",
]
