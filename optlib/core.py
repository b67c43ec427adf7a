"""Core interfaces shared across the line searches and solvers.

An objective is anything exposing ``value(x)`` and ``gradient(x, grad)``.
:class:`Problem` adapts plain callables to that contract, the same way the
solvers consume hand-written objective classes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Protocol, runtime_checkable

import numpy as np

from .utils import approx_grad

Array = np.ndarray
Function = Callable[[Array], float]
Gradient = Callable[[Array], Array]


@runtime_checkable
class Objective(Protocol):
    """Differentiable scalar objective over points of a fixed extent."""

    def value(self, x: Array) -> float:
        """Objective value at ``x``."""
        ...

    def gradient(self, x: Array, grad: Array) -> float:
        """Write the gradient at ``x`` into ``grad`` and return the value at ``x``."""
        ...


@dataclass(frozen=True)
class Problem:
    """Objective built from plain callables.

    When ``grad`` is omitted the gradient is approximated with central
    finite differences. ``dim`` fixes the extent of admissible points;
    ``None`` leaves it to be resolved from the starting point.
    """

    fun: Function
    grad: Optional[Gradient] = None
    dim: Optional[int] = None

    def value(self, x: Array) -> float:
        return float(self.fun(x))

    def gradient(self, x: Array, grad: Array) -> float:
        if self.grad is not None:
            grad[...] = self.grad(x)
        else:
            grad[...] = approx_grad(self.fun, x)
        return self.value(x)


class CountingObjective:
    """Forward to an objective while counting value and gradient calls."""

    def __init__(self, objective: Objective):
        self.objective = objective
        self.nfev = 0
        self.njev = 0

    def value(self, x: Array) -> float:
        self.nfev += 1
        return self.objective.value(x)

    def gradient(self, x: Array, grad: Array) -> float:
        self.njev += 1
        return self.objective.gradient(x, grad)


class Status(Enum):
    """Exit status of a solver run."""

    CONVERGED = "converged"
    MAX_ITER = "max_iter"
    CURVATURE_BREAKDOWN = "curvature_breakdown"
    LINE_SEARCH_FAILED = "line_search_failed"
    NUMERICAL_ERROR = "numerical_error"


MESSAGES = {
    Status.CONVERGED: "Tolerance satisfied.",
    Status.MAX_ITER: "Maximum iterations reached.",
    Status.CURVATURE_BREAKDOWN: "Gradient difference vanished; history cannot be extended.",
    Status.LINE_SEARCH_FAILED: "Line search found no step with sufficient decrease.",
    Status.NUMERICAL_ERROR: "Objective returned a non-finite value or gradient.",
}


@dataclass
class OptimizeResult:
    """Result object returned by every solver.

    ``x`` is the caller's point array, updated in place.
    """

    x: Array
    fun: float
    nit: int
    status: Status
    message: str
    grad_norm: float
    nfev: int
    njev: int
    restarts: int = 0
    history: List[Array] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status is Status.CONVERGED


def as_point(x: Array, dim: Optional[int] = None) -> Array:
    """Validate a starting point and return it as a float64 vector.

    The returned array is ``x`` itself whenever ``x`` is already a 1-D
    float64 array, so solvers can update it in place.
    """
    arr = np.asarray(x)
    if arr.ndim != 1:
        raise ValueError(f"Point must be a 1-D vector, got shape {arr.shape}")
    if arr.dtype != np.float64:
        raise ValueError(f"Point must have dtype float64, got {arr.dtype}")
    if dim is not None and arr.shape[0] != dim:
        raise ValueError(f"Point has dimension {arr.shape[0]}, expected {dim}")
    if not np.all(np.isfinite(arr)):
        raise ValueError("Point contains non-finite entries")
    return arr


def objective_dim(objective: Objective) -> Optional[int]:
    """Return the fixed extent declared by ``objective``, if any."""
    return getattr(objective, "dim", None)


def inf_norm(v: Array) -> float:
    return float(np.max(np.abs(v))) if v.size else 0.0


def check_convergence(grad_norm: float, tol: float) -> bool:
    """Return True if the gradient infinity-norm satisfies ``tol``."""
    return grad_norm <= tol


__all__ = [
    "Array",
    "CountingObjective",
    "Function",
    "Gradient",
    "MESSAGES",
    "Objective",
    "OptimizeResult",
    "Problem",
    "Status",
    "as_point",
    "check_convergence",
    "inf_norm",
    "objective_dim",
]
