"""Bracketing of a one-dimensional minimum along a search direction."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional

BracketValues = tuple[float, float, float]

MAX_SHRINK_STEPS = 64
MAX_GROW_STEPS = 64
GROWTH_FACTOR = 2.0


@dataclass(frozen=True)
class BracketInterval:
    """
    Step lengths ``lower <= mid <= upper`` along a line.

    A bracket is certified when ``phi(mid)`` is strictly smaller than both
    ``phi(lower)`` and ``phi(upper)``, which guarantees a local minimum of
    ``phi`` inside ``[lower, upper]``.
    """

    lower: float
    mid: float
    upper: float

    def __post_init__(self) -> None:
        if not (self.lower <= self.mid <= self.upper):
            raise ValueError(
                "Bracket requires lower <= mid <= upper, got "
                f"({self.lower}, {self.mid}, {self.upper})"
            )

    def contains(self, alpha: float) -> bool:
        return self.lower <= alpha <= self.upper

    @property
    def size(self) -> float:
        return self.upper - self.lower

    @staticmethod
    def is_certified(f_lower: float, f_mid: float, f_upper: float) -> bool:
        """Return True if the midpoint value is below both end values."""
        return f_mid < f_lower and f_mid < f_upper


def _as_value(value: float) -> float:
    # NaN and overflow count as "worse than anything seen so far".
    value = float(value)
    return value if math.isfinite(value) else math.inf


def bracket_minimum(
    phi: Callable[[float], float],
    phi0: float,
    initial_step: float = 1.0,
    max_shrink: int = MAX_SHRINK_STEPS,
    max_grow: int = MAX_GROW_STEPS,
) -> Optional[tuple[BracketInterval, BracketValues]]:
    """
    Find a certified bracket for ``phi`` starting from ``alpha = 0``.

    The trial step ``initial_step`` is halved toward zero while it fails to
    improve on ``phi0``; otherwise the bracket is pushed outward by doubling
    until the function turns back up.

    Parameters
    ----------
    phi:
        Restriction of the objective to the search line.
    phi0:
        Value of ``phi`` at zero, already known to the caller.
    initial_step:
        First trial step length, must be positive.
    max_shrink, max_grow:
        Evaluation budgets for the two probing phases.

    Returns
    -------
    tuple or None
        The bracket together with ``(phi(lower), phi(mid), phi(upper))``, or
        None when no bracket can be certified within budget (for example
        when ``phi`` is unbounded below or flat along the line).

    Example
    -------
    >>> bracket, values = bracket_minimum(lambda a: (a - 3.0) ** 2, 9.0)
    >>> bracket
    BracketInterval(lower=2.0, mid=3.0, upper=4.0)
    """
    if not (initial_step > 0 and math.isfinite(initial_step)):
        raise ValueError(f"initial_step must be positive and finite, got {initial_step}")
    phi0 = _as_value(phi0)

    step = float(initial_step)
    f_step = _as_value(phi(step))

    if f_step >= phi0:
        # Overshot: the minimum sits between zero and the trial step.
        upper, f_upper = step, f_step
        for _ in range(max_shrink):
            mid = 0.5 * upper
            f_mid = _as_value(phi(mid))
            if BracketInterval.is_certified(phi0, f_mid, f_upper):
                return BracketInterval(0.0, mid, upper), (phi0, f_mid, f_upper)
            upper, f_upper = mid, f_mid
        return None

    lower, f_lower = 0.0, phi0
    mid, f_mid = step, f_step
    for _ in range(max_grow):
        upper = GROWTH_FACTOR * mid
        f_upper = _as_value(phi(upper))
        if BracketInterval.is_certified(f_lower, f_mid, f_upper):
            return BracketInterval(lower, mid, upper), (f_lower, f_mid, f_upper)
        if f_upper == f_mid:
            # Equal values on both sides of a dip: split the gap once.
            probe = 0.5 * (mid + upper)
            f_probe = _as_value(phi(probe))
            if BracketInterval.is_certified(f_mid, f_probe, f_upper):
                return BracketInterval(mid, probe, upper), (f_mid, f_probe, f_upper)
            return None
        lower, f_lower = mid, f_mid
        mid, f_mid = upper, f_upper
    return None


__all__ = ["BracketInterval", "BracketValues", "bracket_minimum"]
