"""PyTorch integration for gradopt.

Objectives written with torch operations can be handed to the optimizer
after converting them into plain numpy callables:

    >>> import torch
    >>> from gradopt.torch import from_torch
    >>> f, df = from_torch(lambda t: (t ** 2).sum())
    >>> df([1.0, -2.0]).tolist()
    [2.0, -4.0]
"""

from gradopt.torch.autograd import as_float_tensor, from_torch

__all__ = [
    "as_float_tensor",
    "from_torch",
]
