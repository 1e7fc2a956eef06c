"""Call-counting wrapper used to instrument objectives and gradients."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class CountedFunction(Generic[T, U]):
    """Bundle a function with the number of times it has been called.

    Each instance owns its counter; the optimizer builds a new pair for every
    ``minimize`` call, so counts are never shared between runs. Results and
    exceptions of the wrapped function pass through unchanged.

    Example
    -------
    >>> square = CountedFunction(lambda v: v * v)
    >>> square(3)
    9
    >>> square.num_calls
    1
    """

    __slots__ = ("func", "num_calls")

    def __init__(self, func: Callable[[T], U]) -> None:
        if not callable(func):
            raise TypeError(f"Expected a callable, got {type(func).__name__}")
        self.func = func
        self.num_calls = 0

    def apply(self, arg: T) -> U:
        self.num_calls += 1
        return self.func(arg)

    __call__ = apply

    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", type(self.func).__name__)
        return f"CountedFunction({name}, num_calls={self.num_calls})"


__all__ = ["CountedFunction"]
