"""Backtracking line searches enforcing the Armijo sufficient-decrease test.

Both searches evaluate the objective and its gradient once at ``x`` and then
try step lengths along ``p`` until

    f(x + alpha p) <= f(x) + decrease * alpha * grad(x) . p

holds or the trial cap is reached. They differ only in how a rejected step
is refined: :func:`backtracking` shrinks geometrically, while
:func:`backtracking_curvature` interpolates a quadratic, then cubic, model of
the objective along ``p``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from .core import Array, Objective
from .logging import get_logger
from .utils import clamp, cubic_step, quadratic_step

logger = get_logger(__name__)

FAILED_STEP = -1.0


@dataclass(frozen=True)
class LineSearchResult:
    """Outcome of a line search.

    Attributes:
        alpha: Accepted step length, or ``FAILED_STEP`` when no trial passed.
        success: Whether ``alpha`` satisfies the sufficient-decrease test.
        nfev: Number of objective values computed at trial points.
        fun: Objective value at the accepted point (``f(x)`` on failure).
        steps: Trial step lengths in the order they were evaluated.
    """

    alpha: float
    success: bool
    nfev: int
    fun: float
    steps: tuple[float, ...] = ()


class LineSearch(Protocol):
    def __call__(
        self,
        objective: Objective,
        x: Array,
        p: Array,
        alpha0: float = 1.0,
        decrease: float = 1e-4,
        max_iters: int = 100,
    ) -> LineSearchResult: ...


def _validate(alpha0: float, decrease: float, max_iters: int) -> None:
    if not (0 < decrease < 1):
        raise ValueError("Armijo constant decrease must lie in (0, 1)")
    if alpha0 <= 0:
        raise ValueError("Initial step alpha0 must be positive")
    if max_iters < 1:
        raise ValueError("max_iters must be at least 1")


def _origin(objective: Objective, x: Array, p: Array) -> tuple[float, float]:
    grad = np.zeros_like(x)
    fx0 = float(objective.gradient(x, grad))
    return fx0, float(np.dot(grad, p))


def _exhausted(name: str, max_iters: int, fx0: float, steps: list[float]) -> LineSearchResult:
    logger.warning("%s reached max_iters=%d without sufficient decrease", name, max_iters)
    return LineSearchResult(
        alpha=FAILED_STEP, success=False, nfev=len(steps), fun=fx0, steps=tuple(steps)
    )


def backtracking(
    objective: Objective,
    x: Array,
    p: Array,
    alpha0: float = 1.0,
    decrease: float = 1e-4,
    max_iters: int = 100,
    tau: float = 0.7,
) -> LineSearchResult:
    """Classic Armijo backtracking with geometric shrink factor ``tau``."""
    _validate(alpha0, decrease, max_iters)
    if not (0 < tau < 1):
        raise ValueError("tau must lie in (0, 1)")
    fx0, gtp = _origin(objective, x, p)
    alpha = float(alpha0)
    steps: list[float] = []
    for _ in range(max_iters):
        fxa = float(objective.value(x + alpha * p))
        steps.append(alpha)
        if fxa <= fx0 + alpha * decrease * gtp:
            return LineSearchResult(
                alpha=alpha, success=True, nfev=len(steps), fun=fxa, steps=tuple(steps)
            )
        alpha *= tau
    return _exhausted("backtracking", max_iters, fx0, steps)


def backtracking_curvature(
    objective: Objective,
    x: Array,
    p: Array,
    alpha0: float = 1.0,
    decrease: float = 1e-4,
    max_iters: int = 100,
) -> LineSearchResult:
    """Armijo backtracking refined by quadratic and cubic interpolation.

    The first rejected trial is refined with the quadratic through ``f(x)``,
    the slope ``grad . p`` and the trial value; later ones with the cubic
    through the two latest trials. Each candidate is clamped into
    ``[0.1 alpha, 0.5 alpha]`` of the step it replaces.
    """
    _validate(alpha0, decrease, max_iters)
    fx0, gtp = _origin(objective, x, p)
    alpha = float(alpha0)
    fxp = fx0
    alphap = alpha
    steps: list[float] = []
    for iteration in range(max_iters):
        fxa = float(objective.value(x + alpha * p))
        steps.append(alpha)
        if fxa <= fx0 + alpha * decrease * gtp:
            return LineSearchResult(
                alpha=alpha, success=True, nfev=len(steps), fun=fxa, steps=tuple(steps)
            )
        if iteration == 0:
            candidate = quadratic_step(fx0, gtp, fxa, alpha)
        else:
            candidate = cubic_step(fx0, gtp, fxa, alpha, fxp, alphap)
        fxp = fxa
        alphap = alpha
        alpha = clamp(candidate, 0.1 * alpha, 0.5 * alpha)
    return _exhausted("backtracking_curvature", max_iters, fx0, steps)


__all__ = [
    "FAILED_STEP",
    "LineSearch",
    "LineSearchResult",
    "backtracking",
    "backtracking_curvature",
]
