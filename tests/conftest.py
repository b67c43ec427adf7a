"""Pytest configuration and shared fixtures for optlib tests.

This module provides:
- Deterministic RNG fixtures for numpy
- Toy objectives (quadratic form, residual norm, Rosenbrock) used across tests
- A fixture capturing optlib log output
"""

import io
import logging
import os
from typing import Callable, Iterator

import numpy as np
import pytest

from optlib.logging import configure_logging


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


def spd_matrix(rng: np.random.Generator, dim: int, low: float, high: float) -> np.ndarray:
    """Random symmetric positive definite matrix with spectrum in [low, high]."""
    q, _ = np.linalg.qr(rng.standard_normal((dim, dim)))
    eigvals = np.linspace(low, high, dim)
    return (q * eigvals) @ q.T


class Quadratic:
    """f(x) = 0.5 x^T A x - b^T x, minimized at A^{-1} b."""

    def __init__(self, A: np.ndarray, b: np.ndarray):
        self.A = A
        self.b = b
        self.dim = b.size

    @property
    def solution(self) -> np.ndarray:
        return np.linalg.solve(self.A, self.b)

    def value(self, x: np.ndarray) -> float:
        return float(0.5 * x @ (self.A @ x) - self.b @ x)

    def gradient(self, x: np.ndarray, grad: np.ndarray) -> float:
        grad[...] = self.A @ x - self.b
        return self.value(x)


class ResidualNorm(Quadratic):
    """f(x) = ||A x - b|| paired with the residual A x - b as descent gradient.

    The residual is the gradient of the quadratic form above, which shares the
    minimizer A^{-1} b with the norm.
    """

    def value(self, x: np.ndarray) -> float:
        return float(np.linalg.norm(self.A @ x - self.b))


class Rosenbrock:
    """f(x, y) = (1 - x)^2 + 100 (y - x^2)^2."""

    dim = 2

    def value(self, x: np.ndarray) -> float:
        a = 1.0 - x[0]
        b = x[1] - x[0] * x[0]
        return float(a * a + 100.0 * b * b)

    def gradient(self, x: np.ndarray, grad: np.ndarray) -> float:
        grad[0] = -2.0 * (1.0 - x[0]) - 400.0 * x[0] * (x[1] - x[0] ** 2)
        grad[1] = 200.0 * (x[1] - x[0] ** 2)
        return self.value(x)


@pytest.fixture
def make_quadratic(rng: np.random.Generator) -> Callable[..., Quadratic]:
    def factory(dim: int, low: float = 1.0, high: float = 2.0) -> Quadratic:
        return Quadratic(spd_matrix(rng, dim, low, high), rng.standard_normal(dim))

    return factory


@pytest.fixture
def make_residual_norm(rng: np.random.Generator) -> Callable[..., ResidualNorm]:
    def factory(dim: int, low: float = 1.0, high: float = 2.0) -> ResidualNorm:
        return ResidualNorm(spd_matrix(rng, dim, low, high), rng.standard_normal(dim))

    return factory


@pytest.fixture
def rosenbrock() -> Rosenbrock:
    return Rosenbrock()


@pytest.fixture
def log_stream() -> Iterator[io.StringIO]:
    """Route optlib log records at WARNING and above into a buffer."""
    stream = io.StringIO()
    configure_logging(level=logging.WARNING, stream=stream)
    yield stream
    configure_logging()
