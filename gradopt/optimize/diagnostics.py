"""Trace and evaluation-count records produced by the optimizer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from .core import Status


class IterateRecord(NamedTuple):
    """A visited point together with the norm of the gradient there."""

    x: np.ndarray
    grad_norm: float


@dataclass(frozen=True)
class PerfDiagnostics:
    """
    Performance diagnostics for a single ``minimize`` call.

    Attributes:
        x_trace: Visited iterates in iteration order, ending with the
            converged, exhausted or failed iterate.
        num_eval_f: Number of objective evaluations consumed.
        num_eval_df: Number of gradient evaluations consumed.
        status: How the run terminated.
    """

    x_trace: tuple[IterateRecord, ...]
    num_eval_f: int
    num_eval_df: int
    status: Status

    def __post_init__(self) -> None:
        # Freeze the trace even when a list was handed in.
        object.__setattr__(self, "x_trace", tuple(self.x_trace))
        if self.num_eval_f < 0 or self.num_eval_df < 0:
            raise ValueError("Evaluation counts must be non-negative.")

    @property
    def num_steps(self) -> int:
        return len(self.x_trace)

    @property
    def points(self) -> np.ndarray:
        """Trace points stacked into an array of shape (num_steps, dim)."""
        if not self.x_trace:
            return np.empty((0, 0))
        return np.stack([record.x for record in self.x_trace])

    @property
    def grad_norms(self) -> np.ndarray:
        return np.array([record.grad_norm for record in self.x_trace], dtype=float)


__all__ = ["IterateRecord", "PerfDiagnostics"]
