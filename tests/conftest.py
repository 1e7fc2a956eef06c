"""Pytest configuration and shared fixtures for gradopt tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Random convex quadratic objectives with analytic gradients
"""

import os

import numpy as np
import pytest
import torch


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic CPU torch RNG for tests."""
    generator = torch.Generator()
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


def make_spd_quadratic(rng: np.random.Generator, n: int, cond: float = 10.0):
    """Random ``0.5 x^T A x - b^T x`` with eigenvalues spread over ``[1, cond]``."""
    q, _ = np.linalg.qr(rng.standard_normal((n, n)))
    eigvals = np.linspace(1.0, cond, n)
    A = q @ np.diag(eigvals) @ q.T
    A = 0.5 * (A + A.T)
    b = rng.uniform(-1.0, 1.0, size=n)

    def fun(x: np.ndarray) -> float:
        return float(0.5 * x @ (A @ x) - b @ x)

    def grad(x: np.ndarray) -> np.ndarray:
        return A @ x - b

    return A, b, fun, grad


@pytest.fixture
def spd_quadratic(rng):
    return make_spd_quadratic(rng, 4)


@pytest.fixture
def spd_quadratic_factory(rng):
    def factory(n: int, cond: float = 10.0):
        return make_spd_quadratic(rng, n, cond)

    return factory
