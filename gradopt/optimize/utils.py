"""Point coercion, norms and finite-difference gradients.

The finite-difference helpers stand in for an analytic gradient when a
:class:`~gradopt.optimize.core.Problem` is built without one.
"""

from __future__ import annotations

import numpy as np

from .core import Array, Gradient, Objective


def as_point(x: Array | float) -> Array:
    """Return a fresh 1-D float copy of ``x``; scalars become length-1 vectors."""
    point = np.atleast_1d(np.asarray(x, dtype=float))
    if point.ndim != 1:
        raise ValueError(f"Expected a 1-D point, got shape {point.shape}")
    return point.copy()


def vector_norm(v: Array) -> float:
    return float(np.linalg.norm(v))


def approx_grad(
    fun: Objective, x: Array, eps: float = 1e-6, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Central-difference estimate of the gradient of ``fun`` at ``x``.

    Each coordinate costs two objective calls, so a point of dimension ``n``
    costs ``2n`` calls in total. With ``return_evals`` the call count is
    returned next to the estimate.
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")
    point = as_point(x)
    steps = eps * np.eye(point.size)
    grad = np.array(
        [(float(fun(point + step)) - float(fun(point - step))) / (2.0 * eps) for step in steps]
    )
    if return_evals:
        return grad, 2 * point.size
    return grad


def finite_difference_gradient(fun: Objective, eps: float = 1e-6) -> Gradient:
    """Build a gradient callable for ``fun`` from central differences."""
    if eps <= 0:
        raise ValueError("eps must be positive")

    def grad(x: Array) -> Array:
        return approx_grad(fun, x, eps=eps)

    return grad


__all__ = [
    "as_point",
    "vector_norm",
    "approx_grad",
    "finite_difference_gradient",
]
