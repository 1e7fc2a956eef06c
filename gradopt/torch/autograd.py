"""Autograd-backed objective and gradient adapters."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np
import torch

from gradopt.optimize.core import Array, Gradient, Objective

TorchObjective = Callable[[torch.Tensor], torch.Tensor]


def as_float_tensor(
    x: Array,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
    requires_grad: bool = False,
) -> torch.Tensor:
    """
    Convert a point to a fresh 1D floating-point tensor.

    Parameters
    ----------
    x:
        Point as a numpy array, sequence or scalar.
    dtype:
        Floating-point dtype of the result.
    device:
        Optional device; defaults to CPU.
    requires_grad:
        Whether the returned tensor is a leaf tracked by autograd.

    Returns
    -------
    torch.Tensor
        Tensor with shape (dim,).
    """
    values = np.atleast_1d(np.asarray(x, dtype=float))
    if values.ndim != 1:
        raise ValueError(f"Expected a 1D point, got shape {values.shape}")
    return torch.tensor(values, dtype=dtype, device=device, requires_grad=requires_grad)


def _check_scalar(out: torch.Tensor) -> torch.Tensor:
    if not isinstance(out, torch.Tensor):
        out = torch.as_tensor(out)
    if out.numel() != 1:
        raise ValueError(f"Objective must return a scalar tensor, got shape {tuple(out.shape)}")
    return out.reshape(())


def from_torch(
    fun: TorchObjective,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> tuple[Objective, Gradient]:
    """
    Turn a torch objective into numpy ``(objective, gradient)`` callables.

    The gradient is obtained with ``torch.autograd.grad`` on a new leaf
    tensor for every call, so successive calls share no graph or state.

    Parameters
    ----------
    fun:
        Callable mapping a 1D tensor to a scalar tensor.
    dtype:
        Floating-point dtype used for evaluation.
    device:
        Optional device used for evaluation.

    Returns
    -------
    tuple
        ``(objective, gradient)`` accepting and returning numpy values.
    """

    def objective(x: Array) -> float:
        t = as_float_tensor(x, dtype=dtype, device=device)
        with torch.no_grad():
            out = _check_scalar(fun(t))
        return float(out.item())

    def gradient(x: Array) -> Array:
        t = as_float_tensor(x, dtype=dtype, device=device, requires_grad=True)
        out = _check_scalar(fun(t))
        if not out.requires_grad:
            return np.zeros(t.shape[0], dtype=float)
        (grad,) = torch.autograd.grad(out, t, allow_unused=True)
        if grad is None:
            return np.zeros(t.shape[0], dtype=float)
        return grad.detach().cpu().numpy().astype(float)

    return objective, gradient


__all__ = ["TorchObjective", "as_float_tensor", "from_torch"]
