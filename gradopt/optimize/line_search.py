"""Bracketing line search with cubic-interpolation or exact refinement.

The search works on ``phi(alpha) = f(x + alpha * p)``. A certified bracket is
found first (see :mod:`gradopt.optimize.bracket`), then narrowed down to a
single step. Every refinement keeps the bracket invariant, so the returned
step never does worse than the bracket midpoint, which in turn is strictly
better than ``phi(0)``.
"""

from __future__ import annotations

import math
from typing import Callable, Optional

import numpy as np

from ..logging import get_logger
from .bracket import BracketInterval, BracketValues, bracket_minimum
from .core import Array, Gradient, LineSearchConfig, Objective, coerce_line_search

logger = get_logger(__name__)

CUBIC_MAX_ITER = 100
CUBIC_SLOPE_TOL = 1e-8
CUBIC_WIDTH_TOL = 1e-12
CUBIC_SAFEGUARD = 1e-3

EXACT_MAX_ITER = 200
EXACT_TOL = 1e-14

ScalarFn = Callable[[float], float]


def _as_value(value: float) -> float:
    value = float(value)
    return value if math.isfinite(value) else math.inf


def cubic_minimizer(
    a: float, fa: float, da: float, b: float, fb: float, db: float
) -> Optional[float]:
    """
    Minimizer of the cubic matching values and slopes at ``a`` and ``b``.

    Uses the closed form from Nocedal & Wright, eq. (3.59). Returns None when
    the fit is degenerate: non-finite input, negative discriminant or a
    vanishing denominator.
    """
    if not all(math.isfinite(v) for v in (a, fa, da, b, fb, db)) or a == b:
        return None
    d1 = da + db - 3.0 * (fa - fb) / (a - b)
    disc = d1 * d1 - da * db
    if disc < 0.0:
        return None
    d2 = math.copysign(math.sqrt(disc), b - a)
    denom = db - da + 2.0 * d2
    scale = abs(db) + abs(da) + abs(d2)
    if denom == 0.0 or abs(denom) <= 1e-14 * scale:
        return None
    t = b - (b - a) * (db + d2 - d1) / denom
    return t if math.isfinite(t) else None


def refine_cubic(
    phi: ScalarFn,
    dphi: ScalarFn,
    bracket: BracketInterval,
    values: BracketValues,
    dphi0: float,
    max_iter: int = CUBIC_MAX_ITER,
) -> float:
    """
    Narrow a certified bracket with safeguarded cubic interpolation.

    The slope at the midpoint tells which half of the bracket holds the
    minimum; a Hermite cubic is fitted on that half and its minimizer is
    probed. A degenerate fit, or a minimizer outside the half, falls back to
    bisection of the half.
    """
    lo, mid, hi = bracket.lower, bracket.mid, bracket.upper
    f_lo, f_mid, f_hi = values
    d_lo: Optional[float] = dphi0 if lo == 0.0 else None
    d_hi: Optional[float] = None
    d_mid: Optional[float] = None
    slope_tol = CUBIC_SLOPE_TOL * abs(dphi0)

    for _ in range(max_iter):
        if hi - lo <= CUBIC_WIDTH_TOL * max(1.0, mid):
            break
        if d_mid is None:
            d_mid = float(dphi(mid))
        if not math.isfinite(d_mid) or abs(d_mid) <= slope_tol:
            break

        if d_mid < 0.0:
            if d_hi is None:
                d_hi = float(dphi(hi))
            u, fu, du, v, fv, dv = mid, f_mid, d_mid, hi, f_hi, d_hi
        else:
            if d_lo is None:
                d_lo = float(dphi(lo))
            u, fu, du, v, fv, dv = lo, f_lo, d_lo, mid, f_mid, d_mid

        t = cubic_minimizer(u, fu, du, v, fv, dv)
        if t is None or not (u < t < v):
            t = 0.5 * (u + v)
        else:
            margin = CUBIC_SAFEGUARD * (v - u)
            t = min(max(t, u + margin), v - margin)
        if not (u < t < v):
            break

        f_t = _as_value(phi(t))
        if f_t < f_mid:
            if t > mid:
                lo, f_lo, d_lo = mid, f_mid, d_mid
            else:
                hi, f_hi, d_hi = mid, f_mid, d_mid
            mid, f_mid, d_mid = t, f_t, None
        elif f_t > f_mid:
            if t > mid:
                hi, f_hi, d_hi = t, f_t, None
            else:
                lo, f_lo, d_lo = t, f_t, None
        else:
            # Tie with the midpoint: the bracket cannot be certified further.
            break
    return mid


def refine_exact(
    phi: ScalarFn,
    dphi: ScalarFn,
    bracket: BracketInterval,
    values: BracketValues,
    dphi0: float,
    max_iter: int = EXACT_MAX_ITER,
) -> float:
    """
    Locate the stationary point inside a bracket to a tight tolerance.

    Bisects on the sign of the directional derivative, starting from the half
    of the bracket that the midpoint slope points into. The result replaces
    the midpoint only if it has a strictly lower value.
    """
    _, f_mid, _ = values
    mid = bracket.mid
    d_mid = float(dphi(mid))
    if d_mid == 0.0 or not math.isfinite(d_mid):
        return mid
    if d_mid < 0.0:
        left, right = mid, bracket.upper
    else:
        left, right = bracket.lower, mid

    for _ in range(max_iter):
        if right - left <= EXACT_TOL * max(1.0, abs(right)):
            break
        c = 0.5 * (left + right)
        d_c = float(dphi(c))
        if d_c < 0.0:
            left = c
        elif d_c > 0.0 or not math.isfinite(d_c):
            right = c
        else:
            left = right = c
            break

    alpha = 0.5 * (left + right)
    if alpha <= 0.0:
        return mid
    return alpha if _as_value(phi(alpha)) < f_mid else mid


_REFINEMENTS = {
    LineSearchConfig.CUBIC_INTERPOLATION: refine_cubic,
    LineSearchConfig.EXACT: refine_exact,
}


def choose_step_size(
    f: Objective,
    df: Gradient,
    x: Array,
    p: Array,
    line_search_config: LineSearchConfig | str = LineSearchConfig.CUBIC_INTERPOLATION,
    initial_step: float = 1.0,
) -> Optional[float]:
    """
    Choose a step length along ``p`` from ``x``.

    Parameters
    ----------
    f, df:
        Objective and its gradient.
    x:
        Current point.
    p:
        Search direction; must satisfy ``df(x) @ p < 0``.
    line_search_config:
        Refinement applied once a bracket is found.
    initial_step:
        First trial step of the bracketing phase.

    Returns
    -------
    float or None
        A step ``alpha > 0`` with ``f(x + alpha * p) < f(x)``, or None when
        ``p`` is not a descent direction or no bracket could be certified.
    """
    refine = _REFINEMENTS[coerce_line_search(line_search_config)]
    x = np.asarray(x, dtype=float)
    p = np.asarray(p, dtype=float)

    phi0 = float(f(x))
    dphi0 = float(np.dot(np.asarray(df(x), dtype=float), p))
    if not math.isfinite(dphi0) or dphi0 >= 0.0:
        logger.debug("Direction is not a descent direction (dphi0=%r).", dphi0)
        return None

    def phi(alpha: float) -> float:
        return float(f(x + alpha * p))

    def dphi(alpha: float) -> float:
        return float(np.dot(np.asarray(df(x + alpha * p), dtype=float), p))

    found = bracket_minimum(phi, phi0, initial_step=initial_step)
    if found is None:
        logger.debug("Failed to bracket a minimum along the search direction.")
        return None
    bracket, values = found
    return refine(phi, dphi, bracket, values, dphi0)


__all__ = [
    "choose_step_size",
    "cubic_minimizer",
    "refine_cubic",
    "refine_exact",
]
